"""
Auth schemas: the per-request caller identity and its API shape.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

ADMIN_ROLE = "admin"
USER_ROLE = "user"


@dataclass(frozen=True)
class Caller:
    """
    Who is making the request, resolved once per request.

    `user_id is None` means anonymous. `role` is only meaningful for
    authenticated callers.
    """

    user_id: str | None = None
    role: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    @property
    def is_admin(self) -> bool:
        return self.user_id is not None and self.role == ADMIN_ROLE


ANONYMOUS = Caller()


class CallerResponse(BaseModel):
    user_id: str | None
    role: str | None
    is_admin: bool
