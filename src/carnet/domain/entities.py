"""Domain entities: Contact and the add-form input it is built from."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from carnet.domain.errors import ValidationError

# Boundary contract of the add form: two parts around "@", a dot in the domain.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FORM_FIELDS = ("nom", "prenom", "email", "telephone")
# Import does not require telephone.
IMPORT_REQUIRED_FIELDS = ("nom", "prenom", "email")

_KNOWN_KEYS = frozenset(("id", "createdAt", *FORM_FIELDS))


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value or "") is not None


def is_filled(value: Any) -> bool:
    """True for a string that is non-empty once trimmed."""
    return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True)
class ContactInput:
    """Values typed in the add form, trimmed. No id or timestamp yet."""

    nom: str = ""
    prenom: str = ""
    email: str = ""
    telephone: str = ""

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "ContactInput":
        values = {}
        for name in FORM_FIELDS:
            raw = data.get(name)
            values[name] = str(raw).strip() if raw is not None else ""
        return cls(**values)


@dataclass(frozen=True)
class Contact:
    """
    One stored contact. Immutable once created.
    Unknown keys from imported records are kept in `extra` so snapshots round-trip.
    """

    id: int
    created_at: str
    nom: str
    prenom: str
    email: str
    telephone: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        for name in IMPORT_REQUIRED_FIELDS:
            if not is_filled(getattr(self, name)):
                raise ValidationError(f"Contact {name} must be non-empty.")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "nom": self.nom,
            "prenom": self.prenom,
            "email": self.email,
        }
        if self.telephone is not None:
            out["telephone"] = self.telephone
        out["id"] = self.id
        out["createdAt"] = self.created_at
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contact":
        """Build from a wire record. Raises ValidationError on a missing or bad field."""
        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValidationError("Contact id must be an integer.")
        created_at = data.get("createdAt")
        if not isinstance(created_at, str):
            raise ValidationError("Contact createdAt must be a string.")
        telephone = data.get("telephone")
        if telephone is not None and not isinstance(telephone, str):
            raise ValidationError("Contact telephone must be a string.")
        return cls(
            id=raw_id,
            created_at=created_at,
            nom=data.get("nom"),
            prenom=data.get("prenom"),
            email=data.get("email"),
            telephone=telephone,
            # An explicit null telephone rides in extra so it is written back as null.
            extra={
                k: v
                for k, v in data.items()
                if k not in _KNOWN_KEYS or (k == "telephone" and v is None)
            },
        )


@dataclass(frozen=True)
class FormCheck:
    """Result of checking the add form. Submit is enabled only when can_submit."""

    missing: tuple[str, ...]
    email_valid: bool

    @property
    def can_submit(self) -> bool:
        return not self.missing and self.email_valid


def check_form(contact: ContactInput) -> FormCheck:
    """All four fields must be filled and the email must have the local@domain.tld shape."""
    missing = tuple(name for name in FORM_FIELDS if not is_filled(getattr(contact, name)))
    return FormCheck(missing=missing, email_valid=is_valid_email(contact.email.strip()))
