"""Error taxonomy for parse / layout / render failures.

Every fatal error is a client error (400). InvalidColorToken is the one
non-fatal member: the resolver treats it as "not found" and falls through.
"""

from __future__ import annotations


class RtnpxError(ValueError):
    """Base class for all request-level failures."""

    status: int = 400


class MissingDirection(RtnpxError):
    def __init__(self) -> None:
        super().__init__("direction is required")


class InvalidDirection(RtnpxError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"direction must be 'right' or 'bottom' (got {value!r})")


class MissingData(RtnpxError):
    def __init__(self) -> None:
        super().__init__("data is required")


class MalformedToken(RtnpxError):
    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"invalid data token {token!r}: {reason}")


class InvalidDimension(RtnpxError):
    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a positive number (got {value!r})")


class InvalidColorToken(RtnpxError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"invalid color token: {token!r}")
