class AuthError(Exception):
    """Base class for authentication errors."""
    pass

class InvalidCredentialsError(AuthError):
    """Raised when authentication fails due to an unknown email or a wrong password."""
    pass

class EmailAlreadyExistsError(AuthError):
    """Raised when trying to register with an existing email."""
    pass

class InvalidTokenError(AuthError):
    """Raised when a token is invalid (format, signature, claims)."""
    pass

class TokenExpiredError(AuthError):
    """Raised when a token has expired."""
    pass
