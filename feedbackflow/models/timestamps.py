"""Lenient timestamp parsing shared by the platform input models."""

import logging
from datetime import datetime, timezone
from typing import Annotated, Any

from dateutil.parser import parse as parse_date
from pydantic import BeforeValidator

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Fills date parts missing from a string, e.g. "10:30"
_PARSE_DEFAULT = datetime(1970, 1, 1)


def parse_timestamp(value: Any) -> datetime:
    """
    Coerce a platform timestamp into an aware UTC datetime.

    Accepts datetimes, unix seconds and date strings. Anything that cannot
    be interpreted falls back to the Unix epoch so a single bad field never
    rejects the surrounding record.

    Args:
        value: Raw timestamp value from the source platform

    Returns:
        Timezone-aware datetime
    """
    if value is None or value == "":
        return EPOCH

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return EPOCH
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug(f"Unix timestamp out of range: {value}")
            return EPOCH
    elif isinstance(value, str):
        try:
            parsed = parse_date(value, default=_PARSE_DEFAULT)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Unparseable timestamp {value!r}: {str(e)}")
            return EPOCH
    else:
        return EPOCH

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


Timestamp = Annotated[datetime, BeforeValidator(parse_timestamp)]
