"""Exceptions for learning use cases."""

from langhelper.exceptions import NotFoundError


class ProfileNotFoundError(NotFoundError):
    """Profile not found error."""

    def __init__(self, username: str, profile_name: str) -> None:
        self.username = username
        self.profile_name = profile_name
        super().__init__(f"Profile '{profile_name}' of user '{username}' not found")


class CardNotFoundError(NotFoundError):
    """Card not found error."""

    def __init__(self, word_name: str) -> None:
        self.word_name = word_name
        super().__init__(f"Card with word '{word_name}' not found")
