"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly.  Every class carries a
stable machine-readable ``code``; the human message is the exception text.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "VALIDATION_ERROR"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class ProductNotFoundError(EntityNotFoundError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product #{product_id} not found")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):
    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class CartLineNotFoundError(EntityNotFoundError):
    def __init__(self, line_id: int) -> None:
        super().__init__(f"Cart line #{line_id} not found")
        self.line_id = line_id


class UserNotFoundError(EntityNotFoundError):
    """A user referenced by id or email does not exist."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the product's available stock."""

    code = "INSUFFICIENT_STOCK"


class ConflictError(DomainException):
    """A concurrent transaction won the race for the same rows."""

    code = "CONFLICT"


class StockConflictError(InsufficientStockError, ConflictError):
    """Stock passed the check but was depleted before the guarded update."""

    code = "STOCK_CONFLICT"


class PermissionDeniedError(DomainException):
    """The acting user may not touch the requested resource."""

    code = "PERMISSION_DENIED"


class InvalidStatusTransitionError(DomainException):
    """The order cannot move from its current status to the requested one."""

    code = "INVALID_STATUS_TRANSITION"


class AuthenticationError(DomainException):
    """Credentials or token could not be verified."""

    code = "AUTHENTICATION_FAILED"


class StorageError(DomainException):
    """Unexpected failure of the backing store; the transaction was rolled back."""

    code = "INTERNAL_ERROR"
