import logging
from datetime import date

from agenda.core.exceptions import BackingStoreError
from agenda.schemas.appointment import AppointmentRead
from agenda.services.appointment_cache import AppointmentCache, build_cache_key
from agenda.services.appointment_store import AppointmentStore

logger = logging.getLogger(__name__)


def validate_range_query(professional_id: int, start: date, end: date) -> None:
    if professional_id <= 0:
        raise ValueError('Professional id must be a positive integer.')
    if start > end:
        raise ValueError('Range start must be on or before range end.')


class AppointmentQueryService:
    """Reads a professional's active appointments.

    Range queries are served from the cache when possible. Backing store
    failures are logged, kept in ``last_error`` and answered with an empty
    list so a schedule view shows no appointments instead of failing.

    ``last_error`` lives on the process-wide instance, so it is best-effort:
    it reflects the most recent read from any caller, not a given request.
    """

    def __init__(self, store: AppointmentStore, cache: AppointmentCache):
        self.store = store
        self.cache = cache
        self.last_error: BackingStoreError | None = None

    async def list_by_professional_and_range(
        self,
        professional_id: int,
        start: date,
        end: date,
    ) -> list[AppointmentRead]:
        validate_range_query(professional_id, start, end)

        key = build_cache_key(professional_id, start, end)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        generation = self.cache.generation(professional_id)
        try:
            appointments = await self.store.select(professional_id, start=start, end=end)
        except BackingStoreError as exc:
            self.last_error = exc
            logger.exception('Failed to load appointments for professional %s (%s to %s)', professional_id, start, end)
            return []

        self.last_error = None
        self.cache.put(key, appointments, generation=generation)
        return list(appointments)

    async def list_by_professional(self, professional_id: int) -> list[AppointmentRead]:
        """Every active appointment of a professional. Always reads the store, never the cache."""
        try:
            appointments = await self.store.select(professional_id)
        except BackingStoreError as exc:
            self.last_error = exc
            logger.exception('Failed to load appointments for professional %s', professional_id)
            return []

        self.last_error = None
        return appointments

    def invalidate_professional(self, professional_id: int) -> int:
        return self.cache.invalidate_by_professional(professional_id)

    def invalidate_all(self) -> None:
        self.cache.clear_all()
