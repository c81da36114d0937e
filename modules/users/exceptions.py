"""
Users module exceptions.
"""

from shared.exceptions import ConflictError


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    client_message = "User with this email already exists"
    client_code = "EMAIL_ALREADY_REGISTERED"

    def __init__(self, email: str):
        super().__init__(
            f"Email already registered: {email}",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )
