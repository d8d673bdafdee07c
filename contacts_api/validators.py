"""
Contacts API — Input Validators
=================================

Pure predicates run by the services before any storage call. None of them
perform I/O or raise; callers turn a False result into a ValidationError.
"""

from typing import Any, Mapping

from bson import ObjectId

CONTACT_FIELDS = ("firstName", "lastName", "email", "favoriteColor", "birthday")

# Keys a client may not set on a user document
RESERVED_KEYS = frozenset({"_id", "id"})


def is_valid_id(raw: Any) -> bool:
    """True iff ``raw`` is the 24-character hexadecimal form of an ObjectId."""
    return isinstance(raw, str) and len(raw) == 24 and ObjectId.is_valid(raw)


def is_complete_contact(payload: Any) -> bool:
    """
    True iff every required contact field is present and non-empty.

    Empty string, None and a missing key are all treated as missing.
    """
    if not isinstance(payload, Mapping):
        return False
    return all(payload.get(field) for field in CONTACT_FIELDS)


def is_nonempty_payload(payload: Any) -> bool:
    """True iff ``payload`` is a mapping with at least one non-reserved key."""
    if not isinstance(payload, Mapping):
        return False
    return any(key not in RESERVED_KEYS for key in payload)


def has_storable_keys(payload: Mapping[str, Any]) -> bool:
    """
    True iff no top-level key starts with ``$`` or contains a ``.``.

    Such keys read as update operators or dotted paths to the server, so a
    document carrying them cannot be stored as a plain replacement.
    """
    return not any(
        isinstance(key, str) and (key.startswith("$") or "." in key)
        for key in payload
    )
