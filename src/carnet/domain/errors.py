"""Error types raised by the contact store and its adapters."""


class CarnetError(Exception):
    """Base class for carnet errors."""


class ValidationError(CarnetError, ValueError):
    """A required contact field is missing or empty."""


class ImportFormatError(ValidationError):
    """
    Imported content is not a list of contacts, or one element is invalid.
    `index` is the 1-based position of the offending element, when there is one.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class StorageReadError(CarnetError):
    """The persisted snapshot could not be decoded. Recovered by the store, never surfaced."""
