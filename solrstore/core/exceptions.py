from enum import IntEnum

__all__ = [
    "BaseError",
    "ErrorCode",
    "InternalEngineError",
    "InvalidConfigurationError",
    "InvalidFieldDeclarationError",
    "InvalidModelDeclarationError",
    "InvalidParametersError",
    "MissingFilterValueError",
    "RequestFailedError",
    "RequestTimeoutError",
    "SchemaReloadError",
    "UnknownFilterOperatorError",
    "UnsupportedFilterShapeError",
]


class ErrorCode(IntEnum):
    INVALID_CONFIG = 1
    INVALID_MODEL = 2
    INVALID_PARAMETERS = 3
    INVALID_FILTER_VALUE = 4
    INVALID_FILTER_TYPE = 5
    UNSUPPORTED_FILTER = 6
    REQUEST_FAILED = 7
    REQUEST_TIMEOUT = 8
    INTERNAL_SOLR_ERROR = 9
    SCHEMA_RELOAD_FAILED = 10


class BaseError(Exception):
    status_code: int = 500
    code: ErrorCode

    def __init__(self, message: str = "", status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidConfigurationError(BaseError):
    status_code = 500
    code = ErrorCode.INVALID_CONFIG


class InvalidModelDeclarationError(BaseError):
    status_code = 400
    code = ErrorCode.INVALID_MODEL


class InvalidFieldDeclarationError(InvalidModelDeclarationError):
    pass


class InvalidParametersError(BaseError):
    status_code = 400
    code = ErrorCode.INVALID_PARAMETERS


class MissingFilterValueError(BaseError):
    status_code = 400
    code = ErrorCode.INVALID_FILTER_VALUE


class UnknownFilterOperatorError(BaseError):
    status_code = 400
    code = ErrorCode.INVALID_FILTER_TYPE


class UnsupportedFilterShapeError(BaseError):
    status_code = 400
    code = ErrorCode.UNSUPPORTED_FILTER


class RequestFailedError(BaseError):
    status_code = 502
    code = ErrorCode.REQUEST_FAILED


class RequestTimeoutError(BaseError):
    status_code = 504
    code = ErrorCode.REQUEST_TIMEOUT


class InternalEngineError(BaseError):
    status_code = 500
    code = ErrorCode.INTERNAL_SOLR_ERROR


class SchemaReloadError(RequestFailedError):
    """Schema was written but the core could not be reloaded.

    The schema change is not rolled back. Retry ``reload_core``
    to make it visible.
    """

    code = ErrorCode.SCHEMA_RELOAD_FAILED

    def __init__(self, message: str = "", diff: object | None = None):
        super().__init__(message)
        self.diff = diff
