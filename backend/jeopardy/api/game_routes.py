"""
Game management routes
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.game_schemas import GameCreate, GameDetailResponse, GameResponse, GameUpdate
from jeopardy.services.game_service import GameService

router = APIRouter()

@router.post("", response_model=GameDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    game_data: GameCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new game"""
    return await GameService(db).create_game(game_data, current_user)

@router.get("", response_model=List[GameResponse])
async def list_games(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).list_games(skip=skip, limit=limit)

@router.get("/{game_id}", response_model=GameDetailResponse)
async def get_game(
    game_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Game with categories, rows and questions"""
    return await GameService(db).get_game(game_id)

@router.put("/{game_id}", response_model=GameResponse)
async def update_game(
    game_id: int,
    game_data: GameUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).update_game(game_id, game_data, current_user)

@router.delete("/{game_id}")
async def delete_game(
    game_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a game"""
    await GameService(db).delete_game(game_id, current_user)
    return {"message": "Game deleted", "gameId": game_id}
