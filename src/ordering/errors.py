"""Error taxonomy for the Ordering domain.

Every error carries a caller-facing message, the HTTP status it maps to and
optional structured details that are merged into the response body.
"""


class OrderingError(Exception):
    status_code = 500

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        return {"message": self.message, **self.details}


class UnauthenticatedError(OrderingError):
    status_code = 401


class UnauthorizedError(OrderingError):
    status_code = 403


class InvalidInputError(OrderingError):
    status_code = 400


class InvalidTransitionError(OrderingError):
    """Raised when the requested status is not reachable from the current one."""

    status_code = 400

    def __init__(self, current_status, requested_status, valid_next_statuses):
        if valid_next_statuses:
            message = (
                f'Cannot change order status from "{current_status}" to "{requested_status}". '
                f"Valid next statuses: {', '.join(valid_next_statuses)}."
            )
        else:
            message = f'Order is already "{current_status}" and can no longer be updated.'
        super().__init__(
            message,
            current_status=current_status,
            requested_status=requested_status,
            valid_next_statuses=list(valid_next_statuses),
        )


class NotFoundError(OrderingError):
    status_code = 404


class ProductNotFoundError(NotFoundError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class InsufficientStockError(OrderingError):
    status_code = 400

    def __init__(self, message, remaining=0, **details):
        super().__init__(message, remaining=remaining, **details)
        self.remaining = remaining


class InternalFailureError(OrderingError):
    status_code = 500
