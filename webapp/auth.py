import logging

from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    BaseUser,
)
from starlette.requests import HTTPConnection

from cookbook.models import Requester


logger = logging.getLogger(__name__)


class RequesterUser(BaseUser):
    def __init__(self, requester: Requester) -> None:
        self.requester = requester

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.requester.id

    @property
    def identity(self) -> str:
        return self.requester.id


class DevTokenBackend(AuthenticationBackend):
    """Resolves `Authorization: Bearer <token>` against a fixed token table.

    A missing, malformed or unknown token means an anonymous request.
    """

    def __init__(self, tokens: dict[str, Requester]) -> None:
        self.tokens = tokens

    async def authenticate(
        self, conn: HTTPConnection
    ) -> tuple[AuthCredentials, BaseUser] | None:
        header = conn.headers.get("authorization")
        if not header:
            return None

        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None

        requester = self.tokens.get(token.strip())
        if requester is None:
            logger.info("Unknown token, treating request as anonymous.")
            return None

        scopes = ["authenticated"]
        if requester.is_admin:
            scopes.append("admin")
        return AuthCredentials(scopes), RequesterUser(requester)


def requester_from(conn: HTTPConnection) -> Requester | None:
    user = conn.user
    if isinstance(user, RequesterUser):
        return user.requester
    return None
