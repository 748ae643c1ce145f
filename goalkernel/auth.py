"""API key guard for /kernel endpoints."""

from fastapi import Header, HTTPException

from goalkernel.config import settings


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Accept the key from X-API-Key or Authorization: Bearer.

    With KERNEL_API_KEY unset every request passes; otherwise a mismatch is 401.
    """
    if settings.kernel_api_key is None:
        return ""

    key = x_api_key if x_api_key is not None else _bearer_token(authorization)
    if key != settings.kernel_api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return key
