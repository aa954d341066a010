"""Authentication methods and the ``Authorization`` header they produce."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum

from arangokit.client.base import Flow, Request, single
from arangokit.response import expect_field
from arangokit.serialization import to_json


class AuthMethod(str, Enum):
    NONE = "none"
    BASIC = "basic"
    JWT = "jwt"


@dataclass(frozen=True)
class Auth:
    """How a connection authenticates; the password never shows in ``repr``."""

    method: AuthMethod = AuthMethod.NONE
    username: str = "root"
    password: str = field(default="", repr=False)

    @classmethod
    def none(cls) -> Auth:
        return cls()

    @classmethod
    def basic(cls, username: str, password: str) -> Auth:
        return cls(AuthMethod.BASIC, username, password)

    @classmethod
    def jwt(cls, username: str, password: str) -> Auth:
        return cls(AuthMethod.JWT, username, password)


def basic_authorization(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def jwt_login_flow(arango_url: str, username: str, password: str) -> Flow[str]:
    """Exchange credentials for a token at ``POST /_open/auth``."""
    body = to_json({"username": username, "password": password})
    return (yield from single(Request("POST", f"{arango_url}_open/auth", body), expect_field("jwt", str)))


def authorization_flow(arango_url: str, auth: Auth) -> Flow[str | None]:
    """Resolve the ``Authorization`` header value for ``auth`` (None without auth)."""
    if auth.method is AuthMethod.BASIC:
        return basic_authorization(auth.username, auth.password)
    if auth.method is AuthMethod.JWT:
        token = yield from jwt_login_flow(arango_url, auth.username, auth.password)
        return f"Bearer {token}"
    return None


__all__ = [
    "Auth",
    "AuthMethod",
    "authorization_flow",
    "basic_authorization",
    "jwt_login_flow",
]
