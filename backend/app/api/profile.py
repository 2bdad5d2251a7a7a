from typing import Any

from fastapi import APIRouter, Body, Depends

from backend.app.api.deps import repository_provider
from backend.app.core.auth.jwt_auth import require_admin
from backend.app.repositories.profile import ProfileRepository


router = APIRouter(prefix="/api/profile", tags=["profile"])
get_profile_repository = repository_provider(ProfileRepository)


@router.get("")
async def get_profile(repo: ProfileRepository = Depends(get_profile_repository)):
    return await repo.get()


@router.put("", dependencies=[Depends(require_admin)])
async def save_profile(payload: Any = Body(...), repo: ProfileRepository = Depends(get_profile_repository)):
    return await repo.upsert(payload)
