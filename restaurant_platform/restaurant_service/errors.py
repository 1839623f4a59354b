"""
Error taxonomy for the restaurant service.

Handlers raise these; the exception handlers registered in ``main.py`` turn
them into HTTP responses without leaking internal detail.
"""


class RestaurantServiceError(Exception):
    status_code = 500
    message = "Something went wrong"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFoundError(RestaurantServiceError):
    status_code = 404
    message = "Not found"


class UnauthorizedError(RestaurantServiceError):
    status_code = 401
    message = "Unauthorized"


class InternalError(RestaurantServiceError):
    status_code = 500
    message = "Something went wrong"
