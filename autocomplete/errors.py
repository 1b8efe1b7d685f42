from __future__ import annotations


class AutocompleteError(Exception):
    """Base class for errors raised by this package."""


class BadRequest(AutocompleteError): ...


class InvalidQuery(BadRequest):
    """A lookup window that cannot be applied, such as a negative offset."""


class AuthenticationError(AutocompleteError): ...


class MissingToken(AuthenticationError): ...


class InvalidToken(AuthenticationError): ...


class InvalidCredentials(AuthenticationError): ...


class RateLimited(AutocompleteError):
    def __init__(self, retry_after: float) -> None:
        super().__init__(retry_after)
        self.retry_after = retry_after
