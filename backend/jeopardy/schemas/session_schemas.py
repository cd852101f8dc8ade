"""
Game session and player schemas
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer, model_validator

from jeopardy.models.session import PlayerRole
from jeopardy.schemas.base import CamelModel, serialize_dt
from jeopardy.schemas.game_schemas import GameResponse, GameDetailResponse, QuestionResponse

class GameSessionCreate(CamelModel):
    """Create-session request"""
    game_id: int
    name: str = Field(..., min_length=1, max_length=200)
    number_of_players: int = Field(default=3, ge=2, le=10, description="Seats, 2-10")
    number_of_ai_players: int = Field(default=0, ge=0, le=10, description="AI seats, at most numberOfPlayers")
    default_timer: int = Field(default=30, ge=5, le=120, description="Seconds per question, 5-120")

    @model_validator(mode="after")
    def _ai_players_fit(self):
        if self.number_of_ai_players > self.number_of_players:
            raise ValueError("numberOfAiPlayers cannot exceed numberOfPlayers")
        return self

class CurrentTurnUpdate(CamelModel):
    """Accepts {currentTurn} or the older {playerId}"""
    current_turn: Optional[int] = None
    player_id: Optional[int] = None

    @model_validator(mode="after")
    def _one_target(self):
        if self.current_turn is None and self.player_id is None:
            raise ValueError("currentTurn is required")
        return self

    @property
    def target_player_id(self) -> int:
        return self.current_turn if self.current_turn is not None else self.player_id

class SessionQuestionUpdate(CamelModel):
    is_revealed: Optional[bool] = None
    is_answered: Optional[bool] = None
    player_id: Optional[int] = None
    is_correct: Optional[bool] = None

class AnswerQuestionRequest(CamelModel):
    question_id: int
    player_id: int
    is_correct: bool

class PlayerCreate(CamelModel):
    """Join request"""
    game_session_id: int
    name: str = Field(..., min_length=1, max_length=100)
    role: Optional[PlayerRole] = None

class PlayerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[PlayerRole] = None

class PlayerResponse(CamelModel):
    id: int
    name: str
    points: int
    role: PlayerRole
    game_session_id: int
    user_id: Optional[int] = None

class SessionQuestionResponse(CamelModel):
    id: int
    game_session_id: int
    question_id: int
    is_revealed: bool
    is_answered: bool
    answered_by_id: Optional[int] = None
    state: str

class SessionQuestionDetail(SessionQuestionResponse):
    question: QuestionResponse

class GameSessionResponse(CamelModel):
    """Session with players and game reference"""
    id: int
    game_id: int
    name: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    current_turn_id: Optional[int] = None
    number_of_players: int
    number_of_ai_players: int
    default_timer: int
    is_ended: bool
    players: List[PlayerResponse] = []
    game: GameResponse
    user_role: Optional[str] = None

    @field_serializer('started_at', 'ended_at')
    def _serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return serialize_dt(dt)

class GameSessionDetailResponse(GameSessionResponse):
    """Session with the full grid and per-question state"""
    game: GameDetailResponse
    questions: List[SessionQuestionDetail] = []

class FinalizedSessionResponse(GameSessionResponse):
    winner_id: Optional[int] = None
    is_tie: bool = False

class AnswerResponse(CamelModel):
    success: bool = True
    points_change: int
    session_question: SessionQuestionResponse
    player: PlayerResponse
