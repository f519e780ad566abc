from fastapi import APIRouter, Depends

from app.core.result import to_response
from app.deps import get_current_user_id, get_profile_service
from app.models.account import ProfilePatch
from app.services.profiles import ProfileService

router = APIRouter()


@router.get("")
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Return the caller's profile; first call creates it."""
    return to_response(await profiles.ensure_profile(user_id))


@router.patch("")
async def update_profile(
    body: ProfilePatch,
    user_id: str = Depends(get_current_user_id),
    profiles: ProfileService = Depends(get_profile_service),
):
    return to_response(await profiles.update_profile(user_id, body.to_update()))


@router.delete("")
async def delete_profile(
    user_id: str = Depends(get_current_user_id),
    profiles: ProfileService = Depends(get_profile_service),
):
    return to_response(await profiles.delete_profile(user_id))
