# services/exceptions.py
"""
Domain exceptions for the billing services.

Services raise these; main.py registers handlers that turn them into
JSON error responses.
"""


class BillingServiceError(Exception):
     """Base exception for all billing service errors."""
     pass


class BillValidationError(BillingServiceError):
     """
     Raised when a bill draft breaks one or more domain rules.

     errors maps a field path (e.g. "electricity.end_meter") to a message.
     """

     def __init__(self, errors: dict[str, str]):
          self.errors = errors
          super().__init__("Validation failed: " + "; ".join(f"{k}: {v}" for k, v in errors.items()))


class ParameterError(BillingServiceError):
     """Raised when report parameters (month, year) are missing or out of range."""
     pass


class NotFoundError(BillingServiceError):
     """Raised when a referenced apartment, room, owner or bill does not exist."""
     pass


class OwnerInUseError(BillingServiceError):
     """Raised when deleting an owner that is still linked to apartments."""
     pass


class ApartmentInUseError(BillingServiceError):
     """Raised when deleting an apartment that still has rooms or bills."""
     pass


class DuplicateTaxIdError(BillingServiceError):
     """Raised when an owner tax ID is already registered."""
     pass


class RoomInUseError(BillingServiceError):
     """Raised when deleting a room that bills still reference."""
     pass
