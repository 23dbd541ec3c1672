"""Pure rendering of the contact collection: escaped rows and table-body markup."""

import html
from collections.abc import Callable, Iterable

from carnet.application.dto import ContactRow, ContactTable
from carnet.domain import Contact

COLUMNS = ("Nom", "Prénom", "Email", "Téléphone")


def escape(text: str | None) -> str:
    """HTML-escape user text. Every cell goes through here before reaching markup."""
    return html.escape(text or "", quote=True)


def render_table(
    contacts: Iterable[Contact],
    *,
    format_phone: Callable[[str], str] | None = None,
) -> ContactTable:
    rows = []
    for contact in contacts:
        telephone = contact.telephone or ""
        if telephone and format_phone is not None:
            telephone = format_phone(telephone)
        rows.append(
            ContactRow(
                nom=escape(contact.nom),
                prenom=escape(contact.prenom),
                email=escape(contact.email),
                telephone=escape(telephone),
            )
        )
    return ContactTable(columns=COLUMNS, rows=tuple(rows))


def render_html(table: ContactTable) -> str:
    """Return the <tbody> markup. Cells are taken as already escaped."""
    if table.is_empty:
        return (
            "<tbody>\n"
            f'<tr><td colspan="{len(table.columns)}" class="empty">'
            f"{escape(table.placeholder)}</td></tr>\n"
            "</tbody>"
        )
    labels = [escape(c) for c in table.columns]
    lines = ["<tbody>"]
    for row in table.rows:
        cells = (row.nom, row.prenom, row.email, row.telephone)
        tds = "".join(
            f'<td data-label="{label}">{cell}</td>' for label, cell in zip(labels, cells)
        )
        lines.append(f"<tr>{tds}</tr>")
    lines.append("</tbody>")
    return "\n".join(lines)
