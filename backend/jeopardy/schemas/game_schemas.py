"""
Game catalog schemas
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from jeopardy.schemas.base import CamelModel, serialize_dt

class GameCreate(CamelModel):
    """Create-game request"""
    title: str = Field(..., min_length=1, max_length=200)
    use_template: bool = Field(default=False, description="Seed the default 5x5 empty grid")

class GameUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    is_active: Optional[bool] = None

class CreatorInfo(CamelModel):
    id: int
    name: str

class GameResponse(CamelModel):
    """Game without its grid"""
    id: int
    title: str
    is_active: bool
    creator_id: int
    creator: Optional[CreatorInfo] = None
    created_at: Optional[datetime] = None

    @field_serializer('created_at')
    def _serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return serialize_dt(dt)

class CategoryCreate(CamelModel):
    game_id: int
    name: str = Field(..., min_length=1, max_length=200)
    order: int = Field(..., ge=0)

class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    order: Optional[int] = Field(None, ge=0)

class QuestionRowCreate(CamelModel):
    game_id: int
    value: int = Field(..., gt=0)
    order: int = Field(..., ge=0)

class QuestionRowResponse(CamelModel):
    id: int
    value: int
    order: int
    game_id: int

class QuestionCreate(CamelModel):
    category_id: int
    row_id: int
    question: str = ""
    answer: str = ""

class QuestionUpdate(CamelModel):
    question: Optional[str] = None
    answer: Optional[str] = None

class QuestionResponse(CamelModel):
    id: int
    question: str
    answer: str
    category_id: int
    row_id: int
    value: int

class CategoryResponse(CamelModel):
    id: int
    name: str
    order: int
    game_id: int

class CategoryWithQuestions(CategoryResponse):
    questions: List[QuestionResponse] = []

class GameDetailResponse(GameResponse):
    """Game with its full grid"""
    categories: List[CategoryWithQuestions] = []
    question_rows: List[QuestionRowResponse] = []
