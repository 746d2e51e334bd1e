"""Custom exceptions for the migration context."""

from typing import Optional


class GalleyError(Exception):
    """Base class for errors raised by the editor core."""

    pass


class InvalidDocumentError(GalleyError, ValueError):
    """
    Exception raised when stored or imported data is not a document at all.

    Raised for structurally invalid input only (a root that is not a JSON
    object, or text that is not JSON). Missing or mistyped fields inside an
    object are defaulted by the migration chain instead.

    Attributes:
        message: Error description
        reason: Short machine-readable cause ("not_an_object", "malformed_json")
        value_type: Python type name of the offending value, if known
    """

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        value_type: Optional[str] = None,
    ):
        self.message = message
        self.reason = reason
        self.value_type = value_type

        parts = [message]
        if self.value_type:
            parts.append(f"(got {self.value_type})")

        super().__init__(" ".join(parts))
