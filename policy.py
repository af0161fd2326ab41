from __future__ import annotations

from enum import Enum
from typing import Optional

from errors import Forbidden, Unauthenticated


class AccessDecision(str, Enum):
    PERMIT = "Permit"
    DENY_FORBIDDEN = "Deny-Forbidden"
    DENY_UNAUTHENTICATED = "Deny-Unauthenticated"


def authorize(requester_id: Optional[str], owner_id: str) -> AccessDecision:
    """Only the identity that created a quiz may read, update or delete it."""
    if not requester_id:
        return AccessDecision.DENY_UNAUTHENTICATED
    if requester_id == owner_id:
        return AccessDecision.PERMIT
    return AccessDecision.DENY_FORBIDDEN


def ensure_access(requester_id: Optional[str], owner_id: str) -> None:
    decision = authorize(requester_id, owner_id)
    if decision is AccessDecision.DENY_UNAUTHENTICATED:
        raise Unauthenticated("Authentication is required to access this quiz.")
    if decision is AccessDecision.DENY_FORBIDDEN:
        raise Forbidden("You do not have access to this quiz.")
