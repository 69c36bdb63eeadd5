"""Caller identity for API requests.

Authentication happens upstream; the gateway forwards the verified user id
and role in headers. A request without a user id has no actor.
"""

from fastapi import Header

from ordering.auth import Actor


async def current_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Actor | None:
    if not x_user_id:
        return None
    return Actor(user_id=x_user_id, role=x_user_role or "customer")
