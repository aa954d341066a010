"""Top-level connection to an ArangoDB server.

A connection owns the transport capability (blocking for ``Connection``,
asyncio for ``AsyncConnection``), the server root URL and the name of the
authenticated user. Three ways to establish one:

- ``establish_without_auth(url)``
- ``establish_basic_auth(url, username, password)``
- ``establish_jwt(url, username, password)``

Establishing first checks that the endpoint is ArangoDB (``Server`` response
header), then resolves the ``Authorization`` header. The authenticated
session is derived from the unauthenticated one with ``with_headers``, so
both share a single connection pool.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar
from urllib.parse import quote

import httpx

from arangokit.client.base import ClientExt, Flow, RawResponse, Request, single
from arangokit.client.httpx_client import AsyncHttpxClient, HttpxClient, TransportSettings
from arangokit.connection.auth import Auth, AuthMethod, authorization_flow
from arangokit.connection.model import (
    CreateDatabase,
    CreateDatabaseOptions,
    DatabaseInfo,
    Permission,
    Role,
)
from arangokit.errors import InsufficientPermissionError, InvalidServerError
from arangokit.response import expect_field, expect_result
from arangokit.serialization import to_json

if TYPE_CHECKING:
    from arangokit.config import ConnectionConfig
    from arangokit.database import Database

logger = logging.getLogger(__name__)

SERVER_HEADER = "Server"
SYSTEM_DATABASE = "_system"


def normalize_url(arango_url: str) -> str:
    """Server root of ``arango_url`` (scheme, host and port, ending with ``/``)."""
    try:
        parsed = httpx.URL(arango_url)
    except httpx.InvalidURL as exc:
        raise InvalidServerError(f"invalid url: {arango_url}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidServerError(f"invalid url: {arango_url}")
    return str(parsed.join("/"))


def check_server(response: RawResponse) -> None:
    """Raise ``InvalidServerError`` unless the response comes from ArangoDB."""
    server = response.header(SERVER_HEADER)
    if server is None:
        raise InvalidServerError("Unknown")
    if server.lower() != "arangodb":
        raise InvalidServerError(server)
    logger.debug("Validated ArangoDB server")


def validate_server_flow(arango_url: str) -> Flow[None]:
    return (yield from single(Request("GET", arango_url), check_server))


class GenericConnection(ABC):
    """Connection to one server, generic over the transport capability.

    Subclasses pick the capability through ``client_class``; everything else,
    including which methods exist, is shared.
    """

    client_class: ClassVar[type[ClientExt]]

    def __init__(
        self,
        session: ClientExt,
        arango_url: str,
        username: str,
        role: Role = Role.NORMAL,
    ) -> None:
        self._session = session
        self._arango_url = arango_url
        self._username = username
        self._role = role

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._username}@{self._arango_url} ({self._role.value})>"

    # ------------------------------------------------------------------
    # Establishing
    # ------------------------------------------------------------------
    @classmethod
    def establish_without_auth(cls, arango_url: str, **kwargs: Any) -> Any:
        logger.debug("Establish without auth")
        return cls.establish(arango_url, Auth.none(), **kwargs)

    @classmethod
    def establish_basic_auth(cls, arango_url: str, username: str, password: str, **kwargs: Any) -> Any:
        logger.debug("Establish with basic auth")
        return cls.establish(arango_url, Auth.basic(username, password), **kwargs)

    @classmethod
    def establish_jwt(cls, arango_url: str, username: str, password: str, **kwargs: Any) -> Any:
        logger.debug("Establish with jwt")
        return cls.establish(arango_url, Auth.jwt(username, password), **kwargs)

    @classmethod
    def establish(
        cls,
        arango_url: str,
        auth: Auth,
        *,
        settings: TransportSettings | None = None,
        client: ClientExt | None = None,
        validate: bool = True,
    ) -> Any:
        """Build a connection authenticated with ``auth``.

        Args:
            arango_url: Any URL on the server; only its root is kept.
            auth: Authentication method and credentials.
            settings: Transport settings for a newly built capability.
            client: Pre-built capability to use instead of building one.
            validate: Check the ``Server`` header before authenticating.
        """
        root = normalize_url(arango_url)
        base = client if client is not None else cls.client_class.new(settings=settings)
        flow = cls._establish_flow(base, arango_url, root, auth, validate)
        return cls._drive(base, flow, close_on_error=client is None)

    @classmethod
    def from_config(cls, config: ConnectionConfig, **kwargs: Any) -> Any:
        """Establish with the authentication method and transport of ``config``."""
        config.validate_full()
        if config.auth == AuthMethod.BASIC.value:
            auth = Auth.basic(config.username or "", config.password or "")
        elif config.auth == AuthMethod.JWT.value:
            auth = Auth.jwt(config.username or "", config.password or "")
        else:
            auth = Auth.none()
        kwargs.setdefault("settings", config.to_transport_settings())
        kwargs.setdefault("validate", config.validate_server)
        return cls.establish(config.url, auth, **kwargs)

    @classmethod
    def validate_server(cls, arango_url: str, *, settings: TransportSettings | None = None) -> Any:
        """Check that ``arango_url`` is served by ArangoDB."""
        client = cls.client_class.new(settings=settings)
        return cls._drive(client, validate_server_flow(arango_url), close_on_error=True, close=True)

    @classmethod
    def _establish_flow(
        cls,
        base: ClientExt,
        arango_url: str,
        root: str,
        auth: Auth,
        validate: bool,
    ) -> Flow[GenericConnection]:
        if validate:
            yield from validate_server_flow(arango_url)
        authorization = yield from authorization_flow(root, auth)
        session = base.with_headers({"Authorization": authorization}) if authorization else base
        logger.debug("Established connection to %s as %s", root, auth.username)
        return cls(session, root, auth.username)

    @classmethod
    @abstractmethod
    def _drive(
        cls, client: ClientExt, flow: Flow[Any], *, close_on_error: bool = False, close: bool = False
    ) -> Any:
        """Run ``flow`` on ``client``, closing it on failure or afterwards when asked."""

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def url(self) -> str:
        return self._arango_url

    @property
    def session(self) -> ClientExt:
        return self._session

    @property
    def username(self) -> str:
        return self._username

    @property
    def role(self) -> Role:
        return self._role

    def close(self) -> Any:
        """Release the connection pool shared by every handle of this connection."""
        return self._session.close()

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------
    def db(self, name: str) -> Any:
        """Database handle, checked to exist and be accessible."""
        return self._session.run(self._db_flow(name))

    def accessible_databases(self) -> Any:
        """Databases the current user can access, with their permission."""
        url = f"{self._arango_url}_api/user/{quote(self._username, safe='')}/database"
        return self._session.execute(Request("GET", url), expect_result(dict[str, Permission]))

    def server_role(self) -> Any:
        """Role of the server in a cluster (``SINGLE``, ``COORDINATOR``, ...)."""
        request = Request("GET", f"{self._arango_url}_admin/server/role")
        return self._session.execute(request, expect_field("role", str))

    def create_database(self, name: str, options: CreateDatabaseOptions | None = None) -> Any:
        """Create a database and return a handle to it."""
        return self._session.run(self._create_database_flow(name, options))

    def drop_database(self, name: str) -> Any:
        request = Request("DELETE", f"{self._arango_url}_api/database/{quote(name, safe='')}")
        return self._session.execute(request, expect_result(bool))

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------
    def into_admin(self) -> Any:
        """Admin view of this connection; needs read-write access to ``_system``."""
        return self._session.run(self._into_admin_flow())

    def into_normal(self) -> GenericConnection:
        return self._with_role(Role.NORMAL)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _database(self, name: str) -> Database:
        from arangokit.database import Database

        return Database(name, self._arango_url, self._session)

    def _db_flow(self, name: str) -> Flow[Database]:
        db = self._database(name)
        yield from single(Request("GET", f"{db.url}_api/database/current"), expect_result(DatabaseInfo))
        return db

    def _create_database_flow(self, name: str, options: CreateDatabaseOptions | None) -> Flow[Database]:
        body = CreateDatabase(name=name, options=options)
        request = Request("POST", f"{self._arango_url}_api/database", to_json(body))
        yield from single(request, expect_result(bool))
        logger.debug("Created database %s", name)
        return (yield from self._db_flow(name))

    def _into_admin_flow(self) -> Flow[GenericConnection]:
        url = f"{self._arango_url}_api/user/{quote(self._username, safe='')}/database"
        databases = yield from single(Request("GET", url), expect_result(dict[str, Permission]))
        permission = databases.get(SYSTEM_DATABASE)
        if permission is None:
            raise InsufficientPermissionError(Permission.NO_ACCESS, "access to _system database")
        if permission is not Permission.READ_WRITE:
            raise InsufficientPermissionError(Permission.READ_ONLY, "write to _system database")
        return self._with_role(Role.ADMIN)

    def _with_role(self, role: Role) -> GenericConnection:
        clone = copy.copy(self)
        clone._role = role
        return clone


class Connection(GenericConnection):
    """Blocking connection backed by ``HttpxClient``."""

    client_class = HttpxClient

    @classmethod
    def _drive(
        cls, client: ClientExt, flow: Flow[Any], *, close_on_error: bool = False, close: bool = False
    ) -> Any:
        try:
            result = client.run(flow)
        except BaseException:
            if close_on_error:
                client.close()
            raise
        if close:
            client.close()
        return result

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncConnection(GenericConnection):
    """asyncio connection backed by ``AsyncHttpxClient``; methods return awaitables."""

    client_class = AsyncHttpxClient

    @classmethod
    async def _drive(
        cls, client: ClientExt, flow: Flow[Any], *, close_on_error: bool = False, close: bool = False
    ) -> Any:
        try:
            result = await client.run(flow)
        except BaseException:
            if close_on_error:
                await client.close()
            raise
        if close:
            await client.close()
        return result

    async def __aenter__(self) -> AsyncConnection:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


__all__ = [
    "AsyncConnection",
    "Connection",
    "GenericConnection",
    "SERVER_HEADER",
    "check_server",
    "normalize_url",
    "validate_server_flow",
]
