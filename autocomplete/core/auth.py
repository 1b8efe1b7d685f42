from __future__ import annotations

import datetime
import hmac
import logging
from typing import TYPE_CHECKING, Any, Final

import jwt

from autocomplete.errors import InvalidCredentials, InvalidToken

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

DEFAULT_LIFETIME: Final = 86400.0


class TokenIssuer:
    """Checks user credentials and issues/verifies the signed bearer tokens that prove them.

    Parameters
    ----------
    secret : str
        Key used to sign and verify tokens.
    users : Mapping[str, str]
        Known usernames mapped to their passwords.
    lifetime : float, optional
        Seconds a token stays valid after being issued. Defaults to one day.
    algorithm : str, optional
        HMAC algorithm used for signing. Tokens signed any other way are rejected.
    """

    def __init__(
        self,
        secret: str,
        users: Mapping[str, str],
        *,
        lifetime: float = DEFAULT_LIFETIME,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self._users = dict(users)
        self.lifetime = lifetime
        self.algorithm = algorithm

    def authenticate(self, username: str, password: str) -> str:
        expected = self._users.get(username)
        if expected is None or not hmac.compare_digest(expected.encode(), password.encode()):
            log.info("Rejected login for %r", username)
            msg = "Invalid credentials"
            raise InvalidCredentials(msg)
        return self.issue(username)

    def issue(self, username: str) -> str:
        now = datetime.datetime.now(datetime.UTC)
        claims = {
            "username": username,
            "iat": now,
            "exp": now + datetime.timedelta(seconds=self.lifetime),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm], options={"require": ["exp"]})
        except jwt.InvalidTokenError as exc:
            msg = f"Invalid token: {exc}"
            raise InvalidToken(msg) from exc
