
class BookingValidationError(ValueError):
    """Raised when a booking is confirmed while required fields are still empty."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class InvalidFieldError(ValueError):
    """Raised when a field value falls outside its enumerated domain or format."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {reason}")


class SubmissionInProgressError(RuntimeError):
    """Raised when a booking is confirmed while a previous submission cycle is still active."""
    pass


class SubmissionTransportError(RuntimeError):
    """Raised when the remote booking webhook is unreachable or answers with an error status."""
    pass
