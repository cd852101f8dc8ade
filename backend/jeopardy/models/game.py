"""
Game catalog models: game, categories, question rows, questions
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from jeopardy.core.database import Base

class Game(Base):
    """Reusable quiz template"""
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    creator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    creator = relationship("User", back_populates="games")
    categories = relationship(
        "Category", back_populates="game", order_by="Category.order",
        cascade="all, delete", passive_deletes=True,
    )
    question_rows = relationship(
        "QuestionRow", back_populates="game", order_by="QuestionRow.order",
        cascade="all, delete", passive_deletes=True,
    )
    sessions = relationship(
        "GameSession", back_populates="game",
        cascade="all, delete", passive_deletes=True,
    )

class Category(Base):
    """Grid column"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    order = Column(Integer, nullable=False, default=0)  # display order, not necessarily contiguous
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("game_id", "order", name="uq_category_game_order"),
    )

    game = relationship("Game", back_populates="categories")
    questions = relationship("Question", back_populates="category", cascade="all, delete", passive_deletes=True)

class QuestionRow(Base):
    """Grid row; shares one point value across categories"""
    __tablename__ = "question_rows"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(Integer, nullable=False)
    order = Column(Integer, nullable=False, default=0)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("game_id", "order", name="uq_question_row_game_order"),
    )

    game = relationship("Game", back_populates="question_rows")
    questions = relationship("Question", back_populates="question_row", cascade="all, delete", passive_deletes=True)

class Question(Base):
    """One grid cell"""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    question = Column(Text, nullable=False, default="")
    answer = Column(Text, nullable=False, default="")
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    row_id = Column(Integer, ForeignKey("question_rows.id", ondelete="CASCADE"), nullable=False, index=True)

    # A grid cell is filled at most once
    __table_args__ = (
        UniqueConstraint("category_id", "row_id", name="uq_question_cell"),
    )

    category = relationship("Category", back_populates="questions")
    question_row = relationship("QuestionRow", back_populates="questions")

    @property
    def value(self) -> int:
        return self.question_row.value if self.question_row else 0
