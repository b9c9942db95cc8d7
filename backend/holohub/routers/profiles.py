"""Profile routes."""

from fastapi import APIRouter, HTTPException

from holohub.dependencies import ProfileServiceDep, SessionDep
from holohub.models import Profile, ProfileUpdate

router = APIRouter()


@router.get("/me", response_model=Profile)
async def get_my_profile(service: ProfileServiceDep, session: SessionDep):
    return await service.get_profile(session.user_id) or Profile(user_id=session.user_id)


@router.put("/me", response_model=Profile)
async def update_my_profile(body: ProfileUpdate, service: ProfileServiceDep, session: SessionDep):
    return await service.update_profile(session.user_id, body)


@router.get("/{user_id}", response_model=Profile)
async def get_profile(user_id: str, service: ProfileServiceDep):
    profile = await service.get_profile(user_id)
    if not profile:
        raise HTTPException(404, "Profile not found")
    return profile
