"""Custom exception hierarchy for the langhelper application layer."""


class LangHelperError(Exception):
    """Base exception for all langhelper application errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class NotFoundError(LangHelperError):
    """Resource not found error."""


class RepositoryError(LangHelperError):
    """Card store failure; use cases let it propagate unchanged."""
