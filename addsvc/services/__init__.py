"""Service layer — business rules for sum and concat."""


class ServiceError(Exception):
    """Base service exception."""


class TwoZeroesError(ServiceError):
    """Both sum operands are zero (-> HTTP 400)."""

    def __init__(self) -> None:
        super().__init__("both arguments cannot be zero")


class IntOverflowError(ServiceError):
    """Sum does not fit in a signed 32-bit integer (-> HTTP 400)."""

    def __init__(self) -> None:
        super().__init__("integer overflow")


class MaxSizeExceededError(ServiceError):
    """Concatenated string is longer than allowed (-> HTTP 400)."""

    def __init__(self) -> None:
        super().__init__("result exceeds maximum size")
