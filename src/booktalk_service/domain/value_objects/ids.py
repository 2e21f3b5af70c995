from __future__ import annotations

from uuid import UUID


def parse_id(raw: object) -> UUID | None:
    """Parse an opaque identity reference, ``None`` if it is not a valid UUID."""
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return UUID(raw.strip())
    except ValueError:
        return None
