"""Error codes and exceptions raised by the generators."""
from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes surfaced by the library."""

    INVALID_RANGE = "INVALID_RANGE"
    INVALID_WEIGHTS = "INVALID_WEIGHTS"
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_CHECKPOINT = "INVALID_CHECKPOINT"
    ENTROPY_UNAVAILABLE = "ENTROPY_UNAVAILABLE"


# Whether retrying the same call can succeed
ERROR_RECOVERABLE: dict[ErrorCode, bool] = {
    ErrorCode.INVALID_RANGE: False,
    ErrorCode.INVALID_WEIGHTS: False,
    ErrorCode.INVALID_LENGTH: False,
    ErrorCode.INVALID_CHECKPOINT: False,
    ErrorCode.ENTROPY_UNAVAILABLE: True,
}


class ErrorBody(BaseModel):
    """Structured error shape for logs and reports."""

    code: str
    message: str
    recoverable: bool


class RNGError(Exception):
    """Base error carrying an ErrorCode."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        self.recoverable = ERROR_RECOVERABLE[code]
        super().__init__(self.message)

    def to_body(self) -> ErrorBody:
        """Convert to ErrorBody."""
        return ErrorBody(
            code=self.code.value,
            message=self.message,
            recoverable=self.recoverable,
        )


class InvalidRangeError(RNGError, ValueError):
    """Raised when a range helper receives min > max."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.INVALID_RANGE, message)


class InvalidWeightsError(RNGError, ValueError):
    """Raised when weighted_pick receives a negative or non-finite weight."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.INVALID_WEIGHTS, message)


class InvalidLengthError(RNGError, ValueError):
    """Raised when an output helper receives a negative length."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.INVALID_LENGTH, message)


class InvalidCheckpointError(RNGError, ValueError):
    """Raised when restore() receives a checkpoint it cannot apply."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.INVALID_CHECKPOINT, message)


class EntropyUnavailableError(RNGError, RuntimeError):
    """Raised when the OS entropy source cannot be read."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.ENTROPY_UNAVAILABLE, message)
