"""Admin capability checks.

Privileged operations (picking out of turn, resetting a draft, editing
eligibility) take an ``AdminCapability`` argument instead of a boolean flag.
The only way to obtain one is ``authorize_admin`` with the configured admin
token.
"""

from __future__ import annotations

import hmac
import logging
from typing import final

logger = logging.getLogger(__name__)

_GRANT_KEY = object()


@final
class AdminCapability:
    __slots__ = ("_granted_to",)

    def __init__(self, granted_to: str, *, _key: object = None) -> None:
        if _key is not _GRANT_KEY:
            raise TypeError("AdminCapability must be obtained through authorize_admin()")
        self._granted_to = granted_to

    @property
    def granted_to(self) -> str:
        return self._granted_to

    def __repr__(self) -> str:
        return f"AdminCapability(granted_to={self._granted_to!r})"


def authorize_admin(presented_token: str | None, admin_token: str, *, granted_to: str = "admin") -> AdminCapability | None:
    """Return a capability if ``presented_token`` matches the configured admin token.

    An empty configured token disables admin access entirely.
    """
    if not admin_token or not presented_token:
        return None
    if not hmac.compare_digest(presented_token.encode(), admin_token.encode()):
        logger.warning("Rejected admin token presented by %s", granted_to)
        return None
    return AdminCapability(granted_to, _key=_GRANT_KEY)
