"""Authentication dependencies.

Every extraction request carries the caller's Supabase JWT. The client
built from it is scoped to that user, so Row-Level Security decides which
rows the persisted transactions belong to.
"""

from fastapi import Depends, Header
from supabase import Client, create_client

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import AuthenticationError


async def get_user_token(authorization: str = Header(default="")) -> str:
    """Extract Bearer token from Authorization header.

    Returns the raw JWT string.
    """
    if not authorization.startswith("Bearer "):
        raise AuthenticationError(
            "Missing or invalid Authorization header. Expected: Bearer <token>"
        )

    token = authorization[7:].strip()
    if not token:
        raise AuthenticationError("Missing bearer token")
    return token


async def get_user_client(
    token: str = Depends(get_user_token),
    settings: Settings = Depends(get_settings),
) -> Client:
    """Provide a Supabase client authenticated with the user's JWT.

    We pass an empty refresh token: the gateway is stateless and each
    request carries a fresh access token from the client.
    """
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    client.auth.set_session(token, "")
    return client


def require_user_id(client: Client) -> str:
    """Resolve the authenticated user's id or raise AuthenticationError."""
    user_response = client.auth.get_user()
    if not user_response or not user_response.user:
        raise AuthenticationError("Invalid bearer token")
    return str(user_response.user.id)
