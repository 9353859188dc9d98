"""
passrepeat.errors

Exceptions raised by the repeat detector and its default collaborators.
"""


class PassRepeatError(Exception):
    """Base exception for passrepeat."""
    pass


class CollaboratorError(PassRepeatError):
    """The dispatcher or optimizer failed while scoring a base token."""

    def __init__(self, base_token: str, reason: str):
        self.base_token = base_token
        super().__init__(f"could not score base token {base_token!r}: {reason}")


class PasswordTooLongError(PassRepeatError):
    """Input is longer than the configured scan budget."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"password has {length} characters, limit is {limit}")
