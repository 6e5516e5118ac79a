from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .store import AppStore, get_store

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileResponse(BaseModel):
    name: str
    email: str
    plan: str


@router.get("", response_model=ProfileResponse)
async def get_profile(store: AppStore = Depends(get_store)) -> ProfileResponse:
    return ProfileResponse(
        name=store.profile.name,
        email=store.profile.email,
        plan=store.entitlement.plan,
    )
