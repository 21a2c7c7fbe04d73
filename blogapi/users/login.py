"""
Authenticator

Checks a username/password pair against the credential store and issues a
signed session token for the matching user.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from blogapi.shared.auth import issue_token
from blogapi.shared.errors import InvalidCredentials
from blogapi.shared.passwords import verify_password
from blogapi.users.store import CredentialStore

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    username: str
    name: Optional[str]


class Authenticator:
    def __init__(self, store: CredentialStore, secret: str, token_lifetime: Optional[timedelta] = None):
        self.store = store
        self._secret = secret
        self._token_lifetime = token_lifetime

    def authenticate(self, username: str, password: str) -> LoginResult:
        """
        Verify credentials and return a session token.

        Unknown users, wrong passwords and empty fields all fail the same way.
        Read-only against the credential store.

        Raises:
            InvalidCredentials: If the credentials do not match a user
        """
        user = self.store.find_by_username(username)
        if user is None or not password or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for username {username!r}")
            raise InvalidCredentials()

        token = issue_token(user.id, user.username, self._secret, self._token_lifetime)
        logger.info(f"User {user.username} logged in")
        return LoginResult(token=token, username=user.username, name=user.name)
