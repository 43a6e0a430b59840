"""Exceptions raised by the sales performance pipeline."""


class SalesPipelineError(Exception):
    """Base class for every pipeline failure."""


class ValidationError(SalesPipelineError):
    """Input dataset or options rejected before any computation."""

    def __init__(self, message: str, location: str | None = None):
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ShapeError(ValidationError):
    """Dataset or options is not a well-formed object."""


class EmptyCollectionError(ValidationError):
    """sellers, products or purchase_records is empty."""


class MissingStrategyError(ValidationError):
    """A required calculation function was not supplied."""


class InvalidRecordError(ValidationError):
    """A seller, product, purchase record or line item failed a field check."""


class FieldTypeError(ValidationError, TypeError):
    """A field is present but holds the wrong kind of value."""


class BonusIndexError(SalesPipelineError, IndexError):
    """Bonus strategy called with a rank outside [0, total)."""
