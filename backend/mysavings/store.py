"""Process-scoped application state shared by routers through FastAPI dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import HTTPException

from .config import settings
from .services.chat import ChatSession, ChatSessionNotFound
from .services.entitlement import Entitlement
from .services.ledger import GoalLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    name: str
    email: str = ""

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("profile name is required")


class AppStore:
    """
    Owns the entitlement flag, the goal ledger, the profile, and open chats.

    Starts on the free plan with no goals. Nothing outlives the process.
    """

    def __init__(
        self,
        profile: Profile | None = None,
        chat_reply_delay: float | None = None,
    ) -> None:
        self.entitlement = Entitlement()
        self.ledger = GoalLedger(self.entitlement)
        self.profile = profile or Profile(name=settings.profile_name, email=settings.profile_email)
        self.chat_reply_delay = (
            settings.chat_reply_delay_seconds if chat_reply_delay is None else chat_reply_delay
        )
        self._chats: dict[UUID, ChatSession] = {}

    def open_chat(self) -> ChatSession:
        session = ChatSession(reply_delay=self.chat_reply_delay)
        self._chats[session.id] = session
        return session

    def get_chat(self, session_id: UUID) -> ChatSession:
        session = self._chats.get(session_id)
        if session is None:
            raise ChatSessionNotFound("Chat session not found")
        return session

    def dismiss_chat(self, session_id: UUID) -> ChatSession:
        """Close the chat but keep its transcript; later messages are refused."""
        session = self.get_chat(session_id)
        session.dismiss()
        return session

    def close(self) -> None:
        for session in self._chats.values():
            session.dismiss()
        self._chats.clear()


# Shared store used by FastAPI dependencies.
store: AppStore | None = None


def init_store() -> AppStore:
    global store

    if store is None:
        store = AppStore()
        logger.info("Initialized in-memory store (plan=%s)", store.entitlement.plan)
    return store


def close_store() -> None:
    global store

    if store is None:
        return

    store.close()
    store = None


def get_store() -> AppStore:
    # Centralized guard to avoid obscure None-type errors in route handlers.
    if store is None:
        raise HTTPException(status_code=500, detail="Store is not initialized")
    return store
