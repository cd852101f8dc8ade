"""
Player routes
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.session_schemas import PlayerCreate, PlayerResponse, PlayerUpdate
from jeopardy.services.player_service import PlayerService

router = APIRouter()

@router.post("", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
async def join_session(
    data: PlayerCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Join a game session"""
    return await PlayerService(db).join_session(data, current_user)

@router.get("/session/{session_id}", response_model=List[PlayerResponse])
async def get_session_players(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await PlayerService(db).get_session_players(session_id)

@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await PlayerService(db).get_player(player_id)

@router.put("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: int,
    data: PlayerUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await PlayerService(db).update_player(player_id, data, current_user)

@router.delete("/{player_id}")
async def delete_player(
    player_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Leave a session or remove a player"""
    await PlayerService(db).delete_player(player_id, current_user)
    return {"message": "Player removed", "playerId": player_id}
