"""
Live game session routes
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.session_schemas import (
    AnswerQuestionRequest,
    AnswerResponse,
    CurrentTurnUpdate,
    FinalizedSessionResponse,
    GameSessionCreate,
    GameSessionDetailResponse,
    GameSessionResponse,
    SessionQuestionResponse,
    SessionQuestionUpdate,
)
from jeopardy.services.session_service import SessionService

router = APIRouter()

@router.post("", response_model=GameSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    data: GameSessionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Start a session of a game"""
    return await SessionService(db).create_session(data, current_user)

@router.get("", response_model=List[GameSessionResponse])
async def list_sessions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Sessions the caller owns or plays in"""
    return await SessionService(db).list_sessions(current_user)

@router.get("/game/{game_id}", response_model=List[GameSessionResponse])
async def list_game_sessions(
    game_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await SessionService(db).list_game_sessions(game_id, current_user)

@router.get("/{session_id}", response_model=GameSessionDetailResponse)
async def get_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Session with board, players and question states"""
    return await SessionService(db).get_session(session_id, current_user)

@router.patch("/{session_id}/current-turn", response_model=GameSessionResponse)
async def update_current_turn(
    session_id: int,
    data: CurrentTurnUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await SessionService(db).update_current_turn(session_id, data, current_user)

@router.patch("/{session_id}/questions/{question_id}", response_model=SessionQuestionResponse)
async def update_session_question(
    session_id: int,
    question_id: int,
    data: SessionQuestionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Reveal or answer a question"""
    return await SessionService(db).update_session_question(session_id, question_id, data, current_user)

@router.post("/{session_id}/answer", response_model=AnswerResponse)
async def answer_question(
    session_id: int,
    data: AnswerQuestionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await SessionService(db).answer_question(session_id, data, current_user)

@router.patch("/{session_id}/end", response_model=FinalizedSessionResponse)
async def end_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Finish the session and record statistics"""
    return await SessionService(db).end_session(session_id, current_user)

@router.delete("/{session_id}")
async def delete_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    await SessionService(db).delete_session(session_id, current_user)
    return {"message": "Game session deleted", "sessionId": session_id}
