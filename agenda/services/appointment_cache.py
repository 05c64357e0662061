"""In-process cache of range query results, keyed by professional and date range.

One ``AppointmentCache`` lives for the whole process (see
``agenda.services.providers``). Entries never expire on their own: they are
evicted when a mutation for their professional succeeds or when the whole cache
is cleared.

Each professional carries a generation counter that invalidation bumps, and
``clear_all`` bumps a global epoch. A query captures ``generation()`` before it
awaits the backing store and hands the token back to ``put``; if an
invalidation happened in between, the fetched rows may predate the mutation and
the write is dropped.
"""

import logging
from collections.abc import Iterable
from datetime import date

logger = logging.getLogger(__name__)

KEY_DELIMITER = ':'

Generation = tuple[int, int]


def build_cache_key(professional_id: int, start: date, end: date) -> str:
    return KEY_DELIMITER.join((str(professional_id), start.isoformat(), end.isoformat()))


def professional_id_from_key(key: str) -> int:
    return int(key.split(KEY_DELIMITER, 1)[0])


class AppointmentCache:

    def __init__(self):
        self._entries: dict[str, tuple] = {}
        self._generations: dict[int, int] = {}
        self._epoch = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        return list(self._entries)

    def generation(self, professional_id: int) -> Generation:
        return self._epoch, self._generations.get(professional_id, 0)

    def get(self, key: str) -> list | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug('Appointment cache miss: %s', key)
            return None
        logger.debug('Appointment cache hit: %s', key)
        return list(entry)

    def put(self, key: str, appointments: Iterable, generation: Generation | None = None) -> bool:
        """Store ``appointments`` under ``key``.

        Returns ``False`` without storing when ``generation`` is stale.
        """
        if generation is not None and generation != self.generation(professional_id_from_key(key)):
            logger.debug('Discarding stale appointment cache write: %s', key)
            return False

        entry = tuple(appointments)
        self._entries[key] = entry
        logger.debug('Appointment cache stored: %s (%d appointments)', key, len(entry))
        return True

    def invalidate_by_professional(self, professional_id: int) -> int:
        prefix = f'{professional_id}{KEY_DELIMITER}'
        stale_keys = [key for key in self._entries if key.startswith(prefix)]
        for key in stale_keys:
            del self._entries[key]

        self._generations[professional_id] = self._generations.get(professional_id, 0) + 1
        logger.debug('Appointment cache cleared for professional %s (%d entries)', professional_id, len(stale_keys))
        return len(stale_keys)

    def clear_all(self) -> None:
        self._entries.clear()
        self._epoch += 1
        logger.debug('Appointment cache cleared')
