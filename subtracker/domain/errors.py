"""
Subscription error taxonomy.

Raised by the repository and the use cases, translated to HTTP
status codes by the exception handlers in ``subtracker.main``.
"""


class SubscriptionError(Exception):
    pass


class SubscriptionValidationError(SubscriptionError, ValueError):
    pass


class InvalidPeriodFormat(SubscriptionValidationError):
    """Period string does not look like MM-YYYY."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"invalid period {value!r}: expected MM-YYYY")


class SubscriptionNotFound(SubscriptionError, LookupError):
    def __init__(self, subscription_id: int):
        self.subscription_id = subscription_id
        super().__init__(f"subscription with ID {subscription_id} not found")


class StorageError(SubscriptionError):
    """Database failure (connectivity, constraint, timeout)."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"failed to {operation}: {message}")
