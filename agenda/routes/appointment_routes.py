from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agenda.auth.dependencies import get_current_user, require_admin
from agenda.core.exceptions import AgendaError, AppointmentNotFound, InvalidTimeFormat
from agenda.models.user import User
from agenda.schemas.appointment import AppointmentCreate, AppointmentEdit, AppointmentRead
from agenda.services.appointment_mutations import AppointmentMutationService, MutationResult
from agenda.services.appointment_queries import AppointmentQueryService
from agenda.services.providers import get_mutation_service, get_query_service

router = APIRouter(tags=['appointments'])


def raise_for_failure(error: AgendaError) -> None:
    if isinstance(error, InvalidTimeFormat):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)) from error

    if isinstance(error, AppointmentNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Appointment not found.') from error

    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail='Database unavailable. Verify DATABASE_URL and database credentials.',
    ) from error


def unwrap(result: MutationResult) -> AppointmentRead:
    if not result.ok:
        raise_for_failure(result.error)
    return result.appointment


@router.get('', response_model=list[AppointmentRead])
async def list_appointments(
    professional_id: int = Query(..., gt=0),
    start: date = Query(...),
    end: date = Query(...),
    current_user: User = Depends(get_current_user),
    service: AppointmentQueryService = Depends(get_query_service),
):
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Range start must be on or before range end.',
        )

    return await service.list_by_professional_and_range(professional_id, start, end)


@router.get('/professionals/{professional_id}', response_model=list[AppointmentRead])
async def list_professional_appointments(
    professional_id: int,
    current_user: User = Depends(get_current_user),
    service: AppointmentQueryService = Depends(get_query_service),
):
    return await service.list_by_professional(professional_id)


@router.post('', response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    data: AppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: AppointmentMutationService = Depends(get_mutation_service),
):
    return unwrap(await service.create(data, created_by=current_user.id))


@router.patch('/{appointment_id}', response_model=AppointmentRead)
async def edit_appointment(
    appointment_id: int,
    data: AppointmentEdit,
    current_user: User = Depends(get_current_user),
    service: AppointmentMutationService = Depends(get_mutation_service),
):
    return unwrap(await service.edit(appointment_id, data))


@router.post('/{appointment_id}/cancel', response_model=AppointmentRead)
async def cancel_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: AppointmentMutationService = Depends(get_mutation_service),
):
    return unwrap(await service.cancel(appointment_id))


@router.delete('/cache', status_code=status.HTTP_204_NO_CONTENT)
async def clear_appointment_cache(
    admin: User = Depends(require_admin),
    service: AppointmentQueryService = Depends(get_query_service),
):
    service.invalidate_all()


@router.delete('/cache/{professional_id}', status_code=status.HTTP_204_NO_CONTENT)
async def clear_professional_cache(
    professional_id: int,
    admin: User = Depends(require_admin),
    service: AppointmentQueryService = Depends(get_query_service),
):
    service.invalidate_professional(professional_id)
