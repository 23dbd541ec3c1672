"""Result types handed to the host: render model and user notices."""

from dataclasses import dataclass

EMPTY_PLACEHOLDER = "Aucun contact enregistré. Cliquez sur + pour ajouter un contact."

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class ContactRow:
    """One table row. Every cell is already HTML-escaped."""

    nom: str
    prenom: str
    email: str
    telephone: str


@dataclass(frozen=True)
class ContactTable:
    """Render model for the contact table. `rows` is empty when there is nothing to show."""

    columns: tuple[str, ...]
    rows: tuple[ContactRow, ...]
    placeholder: str = EMPTY_PLACEHOLDER

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class Notice:
    """Transient, dismissible message shown after an action."""

    message: str
    level: str = SUCCESS
