"""Identifier conventions for records created while the hosted database is unreachable.

Locally synthesized records carry ``<prefix>_<epoch millis>`` ids, e.g.
``speaker_1718000000000``. Remote ids are UUIDs and never match this shape,
so a later sync job can pick out provisional records by id alone.
"""

import re

LOCAL_ID_PATTERN = re.compile(r"^[a-z]+_\d+$")


def make_local_id(prefix: str, epoch_ms: int) -> str:
    """Build a synthetic record id from a role tag and a millisecond timestamp."""
    return f"{prefix}_{epoch_ms}"


def is_local_record_id(record_id: str | None) -> bool:
    """True when ``record_id`` was synthesized locally rather than assigned remotely."""
    return bool(record_id) and LOCAL_ID_PATTERN.match(record_id) is not None
