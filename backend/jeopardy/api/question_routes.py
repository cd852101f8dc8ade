"""
Question and question-row routes
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.game_schemas import (
    QuestionCreate,
    QuestionResponse,
    QuestionRowCreate,
    QuestionRowResponse,
    QuestionUpdate,
)
from jeopardy.services.game_service import GameService

router = APIRouter()

# Row routes must stay above "/{question_id}"

@router.post("/rows", response_model=QuestionRowResponse, status_code=status.HTTP_201_CREATED)
async def create_row(
    data: QuestionRowCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a value row to a game"""
    return await GameService(db).create_row(data, current_user)

@router.get("/rows/game/{game_id}", response_model=List[QuestionRowResponse])
async def get_game_rows(
    game_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).get_rows(game_id)

@router.delete("/rows/{row_id}")
async def delete_row(
    row_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    await GameService(db).delete_row(row_id, current_user)
    return {"message": "Question row deleted", "rowId": row_id}

@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    data: QuestionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Fill a (category, row) cell"""
    return await GameService(db).create_question(data, current_user)

@router.get("/game/{game_id}", response_model=List[QuestionResponse])
async def get_game_questions(
    game_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).get_questions(game_id)

@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).get_question(question_id)

@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    data: QuestionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await GameService(db).update_question(question_id, data, current_user)

@router.delete("/{question_id}")
async def delete_question(
    question_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    await GameService(db).delete_question(question_id, current_user)
    return {"message": "Question deleted", "questionId": question_id}
