"""Process-wide service instances, exposed as FastAPI dependencies.

The cache is created once per process on first use. Override these in
``app.dependency_overrides`` (or call the services directly) to run against
another store or a fresh cache.
"""

from functools import lru_cache

from agenda.services.appointment_cache import AppointmentCache
from agenda.services.appointment_mutations import AppointmentMutationService
from agenda.services.appointment_queries import AppointmentQueryService
from agenda.services.appointment_store import AppointmentStore


@lru_cache
def get_appointment_cache() -> AppointmentCache:
    return AppointmentCache()


@lru_cache
def get_appointment_store() -> AppointmentStore:
    return AppointmentStore()


@lru_cache
def get_query_service() -> AppointmentQueryService:
    return AppointmentQueryService(get_appointment_store(), get_appointment_cache())


@lru_cache
def get_mutation_service() -> AppointmentMutationService:
    return AppointmentMutationService(get_appointment_store(), get_appointment_cache())
