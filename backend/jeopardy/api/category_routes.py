"""
Category routes
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.game_schemas import CategoryCreate, CategoryResponse, CategoryUpdate, CategoryWithQuestions
from jeopardy.services.game_service import GameService

router = APIRouter()

@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).create_category(data, current_user)

@router.get("/game/{game_id}", response_model=List[CategoryWithQuestions])
async def get_game_categories(
    game_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Categories of a game in board order"""
    return await GameService(db).get_categories(game_id)

@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).update_category(category_id, data, current_user)

@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    await GameService(db).delete_category(category_id, current_user)
    return {"message": "Category deleted", "categoryId": category_id}
