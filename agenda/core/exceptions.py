"""Errors raised by the appointment data-access layer."""


class AgendaError(Exception):
    """Base class for appointment errors."""


class BackingStoreError(AgendaError):
    """The appointments table could not be read or written."""


class AppointmentNotFound(BackingStoreError):
    """A mutation targeted an appointment id that does not exist."""

    def __init__(self, appointment_id: int):
        super().__init__(f"Appointment {appointment_id} not found.")
        self.appointment_id = appointment_id


class InvalidTimeFormat(AgendaError, ValueError):
    """A time of day was not given as HH:MM or HH:MM:SS."""

    def __init__(self, value: str):
        super().__init__(f"Invalid time of day: {value!r}. Expected HH:MM or HH:MM:SS.")
        self.value = value
