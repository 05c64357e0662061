"""Create, edit and cancel appointments.

Every operation writes to the store first and only evicts the affected
professional's cache entries once the store has confirmed the write. A failed
write leaves the cache exactly as it was and comes back as a failed
``MutationResult`` instead of an exception.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from agenda.core import config
from agenda.core.exceptions import AgendaError
from agenda.schemas.appointment import AppointmentCreate, AppointmentEdit, AppointmentRead
from agenda.services.appointment_cache import AppointmentCache
from agenda.services.appointment_store import AppointmentStore
from agenda.services.time_normalizer import normalize_appointment_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    appointment: AppointmentRead | None = None
    error: AgendaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.appointment is not None


class AppointmentMutationService:

    def __init__(
        self,
        store: AppointmentStore,
        cache: AppointmentCache,
        utc_offset: str = config.APPOINTMENT_UTC_OFFSET,
        default_color: str = config.DEFAULT_APPOINTMENT_COLOR,
    ):
        self.store = store
        self.cache = cache
        self.utc_offset = utc_offset
        self.default_color = default_color

    async def create(self, data: AppointmentCreate, created_by: int | None = None) -> MutationResult:
        try:
            row = {
                'professional_id': data.professional_id,
                'client_id': data.client_id,
                'date': data.date,
                'start_time': normalize_appointment_time(data.start_time, self.utc_offset),
                'end_time': normalize_appointment_time(data.end_time, self.utc_offset),
                'title': data.title,
                'description': data.description or None,
                'color': data.color or self.default_color,
                'cancelled': False,
                'user_id': created_by,
            }
            appointment = await self.store.insert(row)
        except AgendaError as exc:
            logger.exception('Failed to create appointment for professional %s', data.professional_id)
            return MutationResult(error=exc)

        logger.info(
            'Created appointment %s for professional %s on %s %s-%s',
            appointment.id,
            appointment.professional_id,
            appointment.date,
            appointment.start_time,
            appointment.end_time,
        )
        self.cache.invalidate_by_professional(data.professional_id)
        return MutationResult(appointment=appointment)

    async def edit(self, appointment_id: int, data: AppointmentEdit) -> MutationResult:
        # An omitted description keeps the stored one; an explicit null clears it.
        patch = data.model_dump(include={'title', 'description', 'color'}, exclude_unset=True)
        return await self._update(appointment_id, patch, action='edit')

    async def cancel(self, appointment_id: int) -> MutationResult:
        patch = {
            'cancelled': True,
            'cancelled_at': datetime.now(timezone.utc),
        }
        return await self._update(appointment_id, patch, action='cancel')

    async def _update(self, appointment_id: int, patch: dict, action: str) -> MutationResult:
        try:
            appointment = await self.store.update(appointment_id, patch)
        except AgendaError as exc:
            logger.exception('Failed to %s appointment %s', action, appointment_id)
            return MutationResult(error=exc)

        logger.info('Appointment %s: %s succeeded', appointment_id, action)
        self.cache.invalidate_by_professional(appointment.professional_id)
        return MutationResult(appointment=appointment)
