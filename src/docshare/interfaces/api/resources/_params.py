"""Path parameter parsing shared by resources."""

from uuid import UUID

from docshare.domain.exceptions import ValidationError


def parse_uuid(value: str, name: str = "id") -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}") from e
