import re

from agenda.core import config
from agenda.core.exceptions import InvalidTimeFormat

_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?(?P<offset>[+-]\d{2}:\d{2})?$')


def normalize_appointment_time(value: str, utc_offset: str = config.APPOINTMENT_UTC_OFFSET) -> str:
    """Turn ``HH:MM`` or ``HH:MM:SS`` into ``HH:MM:SS`` plus the fixed UTC offset.

    Values already qualified with ``utc_offset`` come back unchanged. Any other
    offset is rejected rather than silently reinterpreted.
    """
    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidTimeFormat(value)

    hours, minutes, seconds, offset = match.group(1), match.group(2), match.group(3), match.group('offset')
    if offset is not None and offset != utc_offset:
        raise InvalidTimeFormat(value)

    return f'{hours}:{minutes}:{seconds or "00"}{utc_offset}'
