"""Simulated assistant chat (`/chat/sessions`); replies arrive after a fixed delay."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from .services.chat import ChatSession, ChatSessionClosed
from .store import AppStore, get_store

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatMessageRequest(BaseModel):
    message: str = Field(min_length=1, max_length=2000)


class ChatMessageItem(BaseModel):
    role: Literal["user", "assistant"]
    text: str


class ChatSessionResponse(BaseModel):
    id: UUID
    messages: list[ChatMessageItem]
    pending_replies: int
    closed: bool


def _session_response(session: ChatSession) -> ChatSessionResponse:
    return ChatSessionResponse(
        id=session.id,
        messages=[ChatMessageItem(role=m.role, text=m.text) for m in session.messages],
        pending_replies=session.pending_replies,
        closed=session.closed,
    )


@router.post("/sessions", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED)
async def open_chat(store: AppStore = Depends(get_store)) -> ChatSessionResponse:
    return _session_response(store.open_chat())


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_chat(
    session_id: UUID,
    store: AppStore = Depends(get_store),
) -> ChatSessionResponse:
    try:
        return _session_response(store.get_chat(session_id))
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/sessions/{session_id}/messages", response_model=ChatSessionResponse)
async def send_chat_message(
    session_id: UUID,
    payload: ChatMessageRequest,
    store: AppStore = Depends(get_store),
) -> ChatSessionResponse:
    """Append the user message; the assistant reply lands in the transcript later."""
    try:
        session = store.get_chat(session_id)
        session.submit(payload.message, goal_count=len(store.ledger))
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ChatSessionClosed as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return _session_response(session)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_chat(
    session_id: UUID,
    store: AppStore = Depends(get_store),
):
    """Close the chat; pending replies are dropped and new messages get 409."""
    try:
        store.dismiss_chat(session_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
