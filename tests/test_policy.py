import pytest

from errors import Forbidden, Unauthenticated
from policy import AccessDecision, authorize, ensure_access


def test_owner_is_permitted():
    assert authorize("u1", "u1") is AccessDecision.PERMIT
    ensure_access("u1", "u1")


def test_other_user_is_forbidden():
    assert authorize("u2", "u1") is AccessDecision.DENY_FORBIDDEN
    with pytest.raises(Forbidden):
        ensure_access("u2", "u1")


@pytest.mark.parametrize("requester", [None, ""])
def test_absent_identity_is_unauthenticated(requester):
    assert authorize(requester, "u1") is AccessDecision.DENY_UNAUTHENTICATED
    with pytest.raises(Unauthenticated):
        ensure_access(requester, "u1")
