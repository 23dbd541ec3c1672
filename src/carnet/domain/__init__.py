"""Domain layer: entities, form rules and errors. No dependencies on outer layers."""

from carnet.domain.entities import (
    EMAIL_PATTERN,
    FORM_FIELDS,
    IMPORT_REQUIRED_FIELDS,
    Contact,
    ContactInput,
    FormCheck,
    check_form,
    is_valid_email,
)
from carnet.domain.errors import (
    CarnetError,
    ImportFormatError,
    StorageReadError,
    ValidationError,
)

__all__ = [
    "EMAIL_PATTERN",
    "FORM_FIELDS",
    "IMPORT_REQUIRED_FIELDS",
    "CarnetError",
    "Contact",
    "ContactInput",
    "FormCheck",
    "ImportFormatError",
    "StorageReadError",
    "ValidationError",
    "check_form",
    "is_valid_email",
]
