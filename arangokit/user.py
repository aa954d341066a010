"""Users and their access levels (``_api/user``)."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from arangokit.serialization import ApiModel


class UserAccessLevel(str, Enum):
    NONE = "none"
    READ_ONLY = "ro"
    READ_WRITE = "rw"


class User(ApiModel):
    """A user account; ``password`` is only ever sent, never reported back."""

    username: str = Field(alias="user")
    password: str | None = Field(default=None, alias="passwd")
    active: bool = True
    extra: dict[str, Any] | None = None


__all__ = ["User", "UserAccessLevel"]
