"""Domain errors raised by the services and translated to HTTP by the API layer."""


class PitchScoreError(Exception):
    """Base class for every domain error; ``message`` is shown to the client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PitchScoreError):
    """Malformed or missing input (400)."""


class AuthError(PitchScoreError):
    """Missing/invalid/expired token or bad credentials (401)."""


class NotFoundError(PitchScoreError):
    """A referenced entity does not exist (404)."""


class ConflictError(PitchScoreError):
    """A uniqueness rule would be violated (409)."""
