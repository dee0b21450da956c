"""Seeding helpers for HTTP-level tests."""

from ozza.domain.model import User
from ozza.domain.service import JWTService


async def session_headers(env, user: User) -> dict[str, str]:
    """Headers carrying a session cookie for ``user``."""
    jwt_service = await env.get(JWTService)
    token = jwt_service.create_token(str(user.id), user.email.root)
    return {"Cookie": f"auth_token={token}"}
