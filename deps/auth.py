import os
from typing import Annotated, Optional

from fastapi import Header, HTTPException

# Load once at module import
QUIZ_API_KEY = os.getenv("QUIZ_API_KEY", "")


def require_client(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
) -> None:
    """
    Client/API guard. When QUIZ_API_KEY is configured, the X-Api-Key header
    must match it; when it is not configured the API is open.
    """
    if QUIZ_API_KEY and x_api_key != QUIZ_API_KEY:
        raise HTTPException(status_code=401, detail="Unauthorized.")


def current_user_id(
    x_user_id: Annotated[str | None, Header(alias="x-user-id")] = None,
) -> Optional[str]:
    """
    Identity of the caller as asserted by the upstream identity provider.
    Missing or blank means the request is unauthenticated.
    """
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()
