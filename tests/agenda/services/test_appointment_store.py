import asyncio
from datetime import date

import pytest

from agenda.core.exceptions import AppointmentNotFound, BackingStoreError
from agenda.database import Base
from agenda.services.appointment_store import AppointmentStore


@pytest.fixture
def appointment_store(session_factory):
    return AppointmentStore(session_factory)


def test_select_filters_cancelled_and_orders_by_date_then_start(appointment_store, add_appointment) -> None:
    late = add_appointment(date=date(2024, 1, 2), start_time='15:00:00-03:00')
    early = add_appointment(date=date(2024, 1, 2), start_time='08:00:00-03:00')
    first_day = add_appointment(date=date(2024, 1, 1), start_time='17:00:00-03:00')
    add_appointment(date=date(2024, 1, 1), cancelled=True)
    add_appointment(professional_id=2, date=date(2024, 1, 1))

    appointments = asyncio.run(appointment_store.select(1))

    assert [appointment.id for appointment in appointments] == [first_day, early, late]


def test_select_applies_inclusive_date_range(appointment_store, add_appointment) -> None:
    add_appointment(date=date(2023, 12, 31))
    first = add_appointment(date=date(2024, 1, 1))
    last = add_appointment(date=date(2024, 1, 5))
    add_appointment(date=date(2024, 1, 6))

    appointments = asyncio.run(appointment_store.select(1, start=date(2024, 1, 1), end=date(2024, 1, 5)))

    assert [appointment.id for appointment in appointments] == [first, last]


def test_insert_returns_row_with_assigned_id(appointment_store) -> None:
    created = asyncio.run(
        appointment_store.insert(
            {
                'professional_id': 3,
                'client_id': 30,
                'date': date(2024, 3, 1),
                'start_time': '09:00:00-03:00',
                'end_time': '09:30:00-03:00',
                'title': 'Retorno',
                'color': '#DBE9FE',
                'cancelled': False,
            }
        )
    )

    assert created.id is not None
    assert created.professional_id == 3
    assert created.cancelled is False


def test_update_patches_only_given_fields(appointment_store, add_appointment) -> None:
    appointment_id = add_appointment(title='Old', description='keep?')

    updated = asyncio.run(appointment_store.update(appointment_id, {'title': 'New'}))

    assert updated.title == 'New'
    assert updated.description == 'keep?'
    assert updated.start_time == '09:00:00-03:00'


def test_update_missing_row_raises_not_found(appointment_store) -> None:
    with pytest.raises(AppointmentNotFound) as exception_info:
        asyncio.run(appointment_store.update(999, {'title': 'x'}))

    assert exception_info.value.appointment_id == 999


def test_update_refuses_to_move_appointment_to_another_professional(appointment_store, add_appointment) -> None:
    appointment_id = add_appointment()

    with pytest.raises(ValueError):
        asyncio.run(appointment_store.update(appointment_id, {'professional_id': 2}))


def test_database_errors_surface_as_backing_store_error(appointment_store, appointment_engine) -> None:
    Base.metadata.drop_all(bind=appointment_engine)

    with pytest.raises(BackingStoreError):
        asyncio.run(appointment_store.select(1))
