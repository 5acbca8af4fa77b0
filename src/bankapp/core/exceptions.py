"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class AuthFailureError(AppError):
    """
    Raised when credentials do not match any account.

    The message is identical for an unknown identifier and a wrong secret.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="AUTH_FAILED")


class DuplicateIdentifierError(AppError):
    """Raised when a login identifier or account id is already taken."""

    def __init__(self, identifier: str):
        super().__init__(f"Identifier already exists: {identifier}", code="DUPLICATE_IDENTIFIER")


class InsufficientFundsError(AppError):
    """Raised when attempting to withdraw more than the account balance."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class PolicyViolationError(AppError):
    """Raised when the acting role may not perform an operation."""

    def __init__(self, action: str, role: str):
        super().__init__(f"Role '{role}' may not {action}", code="POLICY_VIOLATION")


class NotAuthenticatedError(AppError):
    """Raised when an operation needs a signed-in session and there is none."""

    def __init__(self):
        super().__init__("No active session", code="NOT_AUTHENTICATED")
