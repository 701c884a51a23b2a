"""Parsing of string identifiers into UUIDs.

Identifiers arrive from clients as free-form strings. They are parsed here,
before any query is built, so a malformed ID is reported as client input
(InvalidIdentifierError) rather than as a storage failure.
"""

from uuid import UUID

from georef.exceptions import InvalidIdentifierError


def parse_identifier(value: str | UUID, field: str = "id") -> UUID:
    """Parse ``value`` into a UUID or raise InvalidIdentifierError."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidIdentifierError(field, value) from exc


def parse_optional_identifier(value: str | UUID | None, field: str = "id") -> UUID | None:
    """Like parse_identifier, but ``None`` stays ``None``."""
    if value is None:
        return None
    return parse_identifier(value, field)


def is_valid_uuid(value: str) -> bool:
    try:
        UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True
