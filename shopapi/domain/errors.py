# shopapi/domain/errors.py
"""
Bledy domenowe. Serwisy rzucaja je, routery tlumacza na HTTPException
wedlug status_code.
"""


class ShopError(Exception):
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ShopError):
    status_code = 400
    default_message = "Invalid request"


class Conflict(ShopError):
    status_code = 400
    default_message = "Resource already exists"


class NotFound(ShopError):
    status_code = 404
    default_message = "Resource not found"


class Unauthorized(ShopError):
    status_code = 401
    default_message = "Authorization token required"


class InvalidCredentials(Unauthorized):
    # ten sam komunikat dla nieznanego emaila i zlego hasla
    default_message = "Invalid Credentials"


class Forbidden(ShopError):
    status_code = 403
    default_message = "Access denied"


class EmptyCart(ShopError):
    status_code = 400
    default_message = "Cart is empty. Add items before checking out."


class InsufficientStock(ShopError):
    status_code = 400

    def __init__(self, product_name: str, available: int):
        self.product_name = product_name
        self.available = available
        super().__init__(f'Insufficient stock for "{product_name}". Available: {available}')


class InternalError(ShopError):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: str | None = None):
        self.details = details
        super().__init__(message)
