"""
Error taxonomy — Aid Service
Every ServiceError is a client-facing outcome rendered as JSON by the app.
"""


class ServiceError(Exception):
    status_code = 400
    error_code = "BAD_REQUEST"

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {"error": self.message, "error_code": self.error_code}


class ValidationError(ServiceError):
    error_code = "VALIDATION_ERROR"


class NotFound(ServiceError):
    status_code = 404
    error_code = "NOT_FOUND"


class Unauthorized(ServiceError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class InvalidTransition(ServiceError):
    error_code = "INVALID_TRANSITION"

    def __init__(self, current, target):
        super().__init__(f"Cannot transition from {current} to {target}")
        self.current = current
        self.target = target


class AlreadyCompleted(ServiceError):
    error_code = "ALREADY_COMPLETED"

    def __init__(self, message="Verification session already completed"):
        super().__init__(message)


class SessionExpired(ServiceError):
    error_code = "SESSION_EXPIRED"

    def __init__(self, message="Verification code has expired"):
        super().__init__(message)


class InvalidCode(ServiceError):
    error_code = "INVALID_CODE"

    def __init__(self, message="Invalid verification code"):
        super().__init__(message)


class ResendLimitExceeded(ServiceError):
    error_code = "RESEND_LIMIT_EXCEEDED"

    def __init__(self, message="Resend limit exceeded"):
        super().__init__(message)
