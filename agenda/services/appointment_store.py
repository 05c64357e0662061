"""SQLAlchemy access to the ``appointments`` table.

Each call opens its own session and runs in FastAPI's threadpool so the event
loop is free while the database works. Rows leave this module as frozen
``AppointmentRead`` snapshots; ORM instances never escape a session.
"""

from datetime import date

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from agenda.core.exceptions import AppointmentNotFound, BackingStoreError
from agenda.database import SessionLocal
from agenda.models.appointment import Appointment
from agenda.schemas.appointment import AppointmentRead


IMMUTABLE_FIELDS = frozenset({'id', 'professional_id'})


class AppointmentStore:

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    async def select(
        self,
        professional_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[AppointmentRead]:
        return await run_in_threadpool(self._select, professional_id, start, end)

    async def insert(self, row: dict) -> AppointmentRead:
        return await run_in_threadpool(self._insert, row)

    async def update(self, appointment_id: int, patch: dict) -> AppointmentRead:
        forbidden = IMMUTABLE_FIELDS.intersection(patch)
        if forbidden:
            raise ValueError(f'Fields cannot be updated: {", ".join(sorted(forbidden))}')
        return await run_in_threadpool(self._update, appointment_id, patch)

    def _select(self, professional_id: int, start: date | None, end: date | None) -> list[AppointmentRead]:
        db = self.session_factory()
        try:
            query = db.query(Appointment).filter(
                Appointment.professional_id == professional_id,
                Appointment.cancelled.is_(False),
            )
            if start is not None:
                query = query.filter(Appointment.date >= start)
            if end is not None:
                query = query.filter(Appointment.date <= end)

            appointments = query.order_by(Appointment.date.asc(), Appointment.start_time.asc()).all()
            return [AppointmentRead.model_validate(appointment) for appointment in appointments]
        except SQLAlchemyError as exc:
            raise BackingStoreError('Failed to load appointments.') from exc
        finally:
            db.close()

    def _insert(self, row: dict) -> AppointmentRead:
        db = self.session_factory()
        try:
            appointment = Appointment(**row)
            db.add(appointment)
            db.commit()
            db.refresh(appointment)
            return AppointmentRead.model_validate(appointment)
        except SQLAlchemyError as exc:
            db.rollback()
            raise BackingStoreError('Failed to insert appointment.') from exc
        finally:
            db.close()

    def _update(self, appointment_id: int, patch: dict) -> AppointmentRead:
        db = self.session_factory()
        try:
            appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
            if appointment is None:
                raise AppointmentNotFound(appointment_id)

            for field, value in patch.items():
                setattr(appointment, field, value)

            db.commit()
            db.refresh(appointment)
            return AppointmentRead.model_validate(appointment)
        except SQLAlchemyError as exc:
            db.rollback()
            raise BackingStoreError(f'Failed to update appointment {appointment_id}.') from exc
        finally:
            db.close()
