"""Domain errors raised by the booking engine.

Services raise these; a single exception handler in ``canteen.main`` turns
them into ``{"success": false, "message": ...}`` responses with the status
code carried by the class.
"""

from typing import Optional


class CanteenError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(CanteenError):
    """Bad input shape. ``field`` names the offending field."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class NotBookable(CanteenError):
    """Cutoff passed or no active menu item for the requested slot."""

    status_code = 422


class ConfigurationError(NotBookable):
    """A meal type has no configured cutoff. Fails closed."""

    status_code = 500


class NotFound(CanteenError):
    status_code = 404


class Conflict(CanteenError):
    status_code = 409


class InvalidState(Conflict):
    """A coupon status transition outside the transition table."""


class TransactionFailure(CanteenError):
    """The store aborted a write; nothing from the operation was committed."""

    status_code = 500
