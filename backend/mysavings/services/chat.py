"""Simulated assistant chat with a deferred, cancellable reply."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Literal
from uuid import UUID, uuid4

logger = logging.getLogger(__name__)

ChatRole = Literal["user", "assistant"]
GREETING = "Hi, this is ai chat of mysavings. How can I help you?"
MAX_MESSAGE_LENGTH = 2000
PURCHASE_WORDS = {"car", "cars", "bike", "laptop", "phone", "buy", "buying"}
PREMIUM_WORDS = {"premium", "upgrade", "pro"}
SAVING_WORDS = {"save", "saving", "savings"}


class ChatSessionNotFound(LookupError):
    """No chat session with that id."""


class ChatSessionClosed(RuntimeError):
    """The chat was dismissed; it no longer accepts messages."""


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str


def _message_words(text: str) -> set[str]:
    return set(re.findall(r"[a-z]+", text.lower()))


def build_reply(message: str, goal_count: int) -> str:
    """Template reply for the simulated assistant. Deterministic, no model call."""
    words = _message_words(message)

    if goal_count == 0:
        goal_hint = "Start by creating a goal with a target amount and a duration in months."
    elif goal_count == 1:
        goal_hint = "You are tracking 1 goal. Adding a saving every month keeps it on pace."
    else:
        goal_hint = f"You are tracking {goal_count} goals. Focus on the one closest to its end date first."

    if words & PREMIUM_WORDS:
        return "Premium unlocks unlimited savings goals, custom reminders, and advanced insights."
    if words & PURCHASE_WORDS:
        return f"Great plan! Break the price into monthly amounts and save on your reminder date. {goal_hint}"
    if words & SAVING_WORDS:
        return f"Try setting aside a fixed amount right after payday. {goal_hint}"
    return f"Thanks for your message! {goal_hint}"


class ChatSession:
    """
    One chat transcript.

    Replies are scheduled on the running event loop and delivered at most once.
    After `dismiss()` no reply reaches the transcript, even if its timer already fired.
    """

    def __init__(self, reply_delay: float) -> None:
        self.id: UUID = uuid4()
        self._reply_delay = max(reply_delay, 0.0)
        self._messages: list[ChatMessage] = [ChatMessage(role="assistant", text=GREETING)]
        self._pending: dict[int, asyncio.TimerHandle] = {}
        self._ticket = 0
        self._closed = False

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_replies(self) -> int:
        return len(self._pending)

    def submit(self, text: str, goal_count: int = 0) -> ChatMessage:
        """Append the user message and schedule the reply. Must run inside an event loop."""
        if self._closed:
            raise ChatSessionClosed("Chat session was dismissed")

        clean = text.strip()
        if not clean:
            raise ValueError("message must not be empty")
        if len(clean) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"message must be at most {MAX_MESSAGE_LENGTH} characters")

        loop = asyncio.get_running_loop()
        message = ChatMessage(role="user", text=clean)
        self._messages.append(message)

        self._ticket += 1
        ticket = self._ticket
        reply = build_reply(clean, goal_count)
        self._pending[ticket] = loop.call_later(self._reply_delay, self._deliver, ticket, reply)
        return message

    def _deliver(self, ticket: int, reply: str) -> None:
        if self._pending.pop(ticket, None) is None:
            return
        if self._closed:
            logger.debug("Dropped reply for dismissed chat %s", self.id)
            return
        self._messages.append(ChatMessage(role="assistant", text=reply))

    def dismiss(self) -> None:
        self._closed = True
        for handle in self._pending.values():
            handle.cancel()
        if self._pending:
            logger.debug("Cancelled %d pending replies for chat %s", len(self._pending), self.id)
        self._pending.clear()
