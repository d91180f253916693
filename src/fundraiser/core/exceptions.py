"""
Application errors. Each carries the HTTP status it maps to; the handlers in
api.main render them as {"message": ...}.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class NotFound(AppError):
    status_code = 404


class Unauthenticated(AppError):
    status_code = 401


class InvalidCredentials(Unauthenticated):
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class Conflict(AppError):
    status_code = 400


class DuplicateUsername(Conflict):
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class UpstreamFailure(AppError):
    status_code = 400
