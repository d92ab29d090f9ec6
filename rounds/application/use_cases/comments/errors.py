"""Errors raised by the comment use cases."""


class SessionNotFoundError(LookupError):
    """The drinking session does not exist."""


class CommentNotFoundError(LookupError):
    """The comment does not exist."""


class CommentPermissionError(PermissionError):
    """The user is not the author of the comment."""


__all__ = ["CommentNotFoundError", "CommentPermissionError", "SessionNotFoundError"]
