"""Custom exception classes."""


class ValidationError(Exception):
    """Raised when a record fails its field rules."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(error.message for error in self.errors))


class RegistrationNotFoundError(Exception):
    """Raised when a registration ID doesn't exist in the session."""
    pass
