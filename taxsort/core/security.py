"""Caller identity.

Authentication happens upstream (reverse proxy / API gateway). The proxy
forwards the authenticated user id in the ``X-User-Id`` header.
"""

from fastapi import Header, HTTPException, status

from taxsort.models.classification_rule import GLOBAL_OWNER


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Return the authenticated user id or reject the request."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )
    user_id = x_user_id.strip()
    # Reserved owner of the shared system rules.
    if user_id == GLOBAL_OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Reserved user identity",
        )
    return user_id
