"""
Live session models: game session, players, per-session question state
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from jeopardy.core.database import Base
from jeopardy.core.utils import utcnow

class PlayerRole(str, enum.Enum):
    """Seat role inside a session"""
    GAME_MASTER = "GAME_MASTER"
    CONTESTANT = "CONTESTANT"

class GameSession(Base):
    """One live playthrough of a game"""
    __tablename__ = "game_sessions"

    id = Column(Integer, primary_key=True, index=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    started_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    ended_at = Column(DateTime(timezone=True), nullable=True)  # set once; the session is terminal afterwards
    # Plain column: a real FK would make players <-> sessions a cycle
    current_turn_id = Column(Integer, nullable=True)
    number_of_players = Column(Integer, nullable=False, default=3)
    number_of_ai_players = Column(Integer, nullable=False, default=0)
    default_timer = Column(Integer, nullable=False, default=30)

    # Relationships
    game = relationship("Game", back_populates="sessions")
    players = relationship(
        "Player", back_populates="game_session", order_by="Player.id",
        cascade="all, delete", passive_deletes=True,
    )
    questions = relationship(
        "GameSessionQuestion", back_populates="game_session", order_by="GameSessionQuestion.id",
        cascade="all, delete", passive_deletes=True,
    )
    current_turn = relationship(
        "Player",
        primaryjoin="foreign(GameSession.current_turn_id) == Player.id",
        viewonly=True,
    )

    @property
    def is_ended(self) -> bool:
        return self.ended_at is not None

class Player(Base):
    """Session-scoped participant, human or AI"""
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    points = Column(Integer, nullable=False, default=0)  # may go negative
    role = Column(Enum(PlayerRole), nullable=False, default=PlayerRole.CONTESTANT)
    game_session_id = Column(Integer, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)  # NULL for AI players

    # One seat per human per session; NULL user ids never collide
    __table_args__ = (
        UniqueConstraint("game_session_id", "user_id", name="uq_player_session_user"),
    )

    game_session = relationship("GameSession", back_populates="players")
    user = relationship("User")

class GameSessionQuestion(Base):
    """Reveal/answer state of one question within one session"""
    __tablename__ = "game_session_questions"

    id = Column(Integer, primary_key=True, index=True)
    game_session_id = Column(Integer, ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="RESTRICT"), nullable=False)  # removed only with its session
    is_revealed = Column(Boolean, nullable=False, default=False)
    is_answered = Column(Boolean, nullable=False, default=False)
    answered_by_id = Column(Integer, ForeignKey("players.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        UniqueConstraint("game_session_id", "question_id", name="uq_session_question"),
    )

    game_session = relationship("GameSession", back_populates="questions")
    question = relationship("Question")
    answered_by = relationship("Player")

    @property
    def state(self) -> str:
        if self.is_answered:
            return "answered"
        if self.is_revealed:
            return "revealed"
        return "hidden"
