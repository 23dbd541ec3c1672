"""Phone number parsing with phonenumbers, for display in the contact table."""

import phonenumbers


def _parse(raw: str, default_region: str | None) -> phonenumbers.PhoneNumber | None:
    if not raw or not str(raw).strip():
        return None
    try:
        parsed = phonenumbers.parse(str(raw).strip(), default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return parsed


def display_phone(raw: str, default_region: str | None = None) -> str:
    """International format when the number parses, the raw text otherwise."""
    parsed = _parse(raw, default_region)
    if parsed is None:
        return raw
    return phonenumbers.format_number(
        parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL
    )


def phone_formatter(default_region: str | None):
    """Bind a default region, for render_table(format_phone=...)."""

    def _format(raw: str) -> str:
        return display_phone(raw, default_region)

    return _format
