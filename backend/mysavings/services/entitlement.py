"""Free/premium entitlement state consulted before every goal creation."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class Entitlement:
    """
    Two-state tier flag: free -> premium, never back.

    The free tier allows exactly one goal; premium removes the limit.
    """

    def __init__(self, premium: bool = False) -> None:
        self._premium = premium
        self._lock = threading.Lock()

    def is_premium(self) -> bool:
        return self._premium

    def upgrade(self) -> None:
        """Switch to premium. Upgrading an already-premium entitlement is a no-op."""
        with self._lock:
            if self._premium:
                return
            self._premium = True
        logger.info("Entitlement upgraded to premium")

    def can_create_goal(self, current_goal_count: int) -> bool:
        return self._premium or current_goal_count == 0

    @property
    def plan(self) -> str:
        return "PREMIUM" if self._premium else "FREE"
