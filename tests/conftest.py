import os
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from agenda.database import Base  # noqa: E402
from agenda.models.appointment import Appointment  # noqa: E402
from agenda.models.user import User  # noqa: E402
from agenda.services.appointment_cache import AppointmentCache  # noqa: E402
from agenda.services.appointment_mutations import AppointmentMutationService  # noqa: E402
from agenda.services.appointment_queries import AppointmentQueryService  # noqa: E402
from agenda.services.appointment_store import AppointmentStore  # noqa: E402


class CountingStore:
    """Delegates to a real store and counts how often each call reaches it."""

    def __init__(self, store: AppointmentStore):
        self.store = store
        self.select_calls = 0
        self.insert_calls = 0
        self.update_calls = 0

    async def select(self, professional_id, start=None, end=None):
        self.select_calls += 1
        return await self.store.select(professional_id, start=start, end=end)

    async def insert(self, row):
        self.insert_calls += 1
        return await self.store.insert(row)

    async def update(self, appointment_id, patch):
        self.update_calls += 1
        return await self.store.update(appointment_id, patch)


@pytest.fixture
def appointment_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, Appointment.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[Appointment.__table__, User.__table__])
        engine.dispose()


@pytest.fixture
def session_factory(appointment_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=appointment_engine)


@pytest.fixture
def store(session_factory):
    return CountingStore(AppointmentStore(session_factory))


@pytest.fixture
def cache():
    return AppointmentCache()


@pytest.fixture
def query_service(store, cache):
    return AppointmentQueryService(store, cache)


@pytest.fixture
def mutation_service(store, cache):
    return AppointmentMutationService(store, cache, utc_offset='-03:00', default_color='#DBE9FE')


@pytest.fixture
def add_appointment(session_factory):
    def _add(**overrides) -> int:
        values = {
            'professional_id': 1,
            'client_id': 10,
            'date': date(2024, 1, 1),
            'start_time': '09:00:00-03:00',
            'end_time': '10:00:00-03:00',
            'title': 'Consulta',
            'color': '#DBE9FE',
            'cancelled': False,
        }
        values.update(overrides)

        db = session_factory()
        try:
            appointment = Appointment(**values)
            db.add(appointment)
            db.commit()
            db.refresh(appointment)
            return appointment.id
        finally:
            db.close()

    return _add


@pytest.fixture
def load_appointment(session_factory):
    def _load(appointment_id: int) -> Appointment | None:
        db = session_factory()
        try:
            return db.query(Appointment).filter(Appointment.id == appointment_id).first()
        finally:
            db.close()

    return _load
