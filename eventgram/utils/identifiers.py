"""
Opaque identifier generation for events, posts and users.

Identifiers are the milliseconds since EPOCH_MS shifted left 16 bits, with
16 random bits in the low end, rendered as lower-case hex. They sort
roughly by creation time but carry no other meaning.
"""

import uuid
from datetime import datetime

from eventgram.exceptions import IdentifierGenerationError
from eventgram.utils.clock import utc_now

# Jan 1 2015 midnight UTC
EPOCH_MS = 1420070400000
RANDOM_BITS = 16


def _random_suffix() -> int:
    try:
        random = uuid.uuid4()
    except (NotImplementedError, OSError) as exc:
        raise IdentifierGenerationError() from exc
    return random.int % (1 << RANDOM_BITS)


def new_uid(now: datetime | None = None) -> str:
    """
    Generate a new opaque identifier.

    Args:
        now: Creation time (defaults to current UTC time)

    Returns:
        Hexadecimal identifier string

    Raises:
        IdentifierGenerationError: If the random source is unavailable
    """
    now = now or utc_now()
    millis = int(now.timestamp() * 1000) - EPOCH_MS

    uid = max(millis, 0) << RANDOM_BITS
    uid |= _random_suffix()

    return format(uid, "x")
