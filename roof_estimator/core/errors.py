from enum import Enum, unique

GENERIC_FAILURE = "Unable to calculate roof estimate. Please try again."

@unique
class ErrorKind(Enum):
    """
    Each failure category maps to exactly one HTTP status and one public
    message. The message is what callers see; details stay in the logs.
    The trailing tag keeps kinds that share a status and message distinct.
    """
    VALIDATION = (400, None, "validation")  # message supplied per failure
    CONFIGURATION = (500, "API configuration error. Please verify that the key is valid and accessible.", "configuration")
    NOT_FOUND = (400, "Address could not be found. Please verify and try again.", "not_found")
    DATA_UNAVAILABLE = (400, "Solar roof data is not available for this location. Please try a different address.", "data_unavailable")
    UPSTREAM = (500, GENERIC_FAILURE, "upstream")
    INTERNAL = (500, GENERIC_FAILURE, "internal")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def public_message(self) -> str | None:
        return self.value[1]

    @property
    def tag(self) -> str:
        return self.value[2]

class EstimateError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, detail: str, public_message: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self._public_message = public_message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def public_message(self) -> str:
        return self._public_message or self.kind.public_message or GENERIC_FAILURE

class ValidationError(EstimateError):
    """Client input missing or malformed. The detail is safe to return."""
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message, public_message=message)

class ConfigurationError(EstimateError):
    kind = ErrorKind.CONFIGURATION

class NotFoundError(EstimateError):
    kind = ErrorKind.NOT_FOUND

class DataUnavailableError(EstimateError):
    kind = ErrorKind.DATA_UNAVAILABLE

class UpstreamError(EstimateError):
    kind = ErrorKind.UPSTREAM

class InternalError(EstimateError):
    kind = ErrorKind.INTERNAL
