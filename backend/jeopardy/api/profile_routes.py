"""
User profile routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user, require_admin
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.user_schemas import ProfileResponse, ProfileUpdate, StatsUpdate
from jeopardy.services.user_service import ProfileService

router = APIRouter()

@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Profile with statistics"""
    return await ProfileService(db).get_profile(user_id)

@router.put("/{user_id}", response_model=ProfileResponse)
async def update_profile(
    user_id: int,
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await ProfileService(db).update_profile(user_id, data, current_user)

@router.put("/{user_id}/stats", response_model=ProfileResponse)
async def update_stats(
    user_id: int,
    data: StatsUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Manual statistics correction"""
    return await ProfileService(db).update_stats(user_id, data)
