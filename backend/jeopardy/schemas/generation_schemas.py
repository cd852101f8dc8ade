"""
AI game generation schemas
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from jeopardy.schemas.base import CamelModel

class GenerateGameRequest(CamelModel):
    """Generation form; theme-or-categories is checked by the service"""
    theme: Optional[str] = Field(None, max_length=200)
    categories: Optional[List[str]] = None
    details: Optional[str] = None
    example_questions: Optional[str] = None
    allow_images: bool = False
    allow_videos: bool = False

class GenerationAccepted(CamelModel):
    success: bool = True
    message: str
    generation_id: str

class GenerationStatusResponse(CamelModel):
    success: bool = True
    status: str
    id: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

class GeneratedQuestion(BaseModel):
    """One clue as returned by the model"""
    clue: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    difficulty: Optional[int] = None

class GeneratedCategory(BaseModel):
    name: str = Field(..., min_length=1)
    questions: List[GeneratedQuestion] = Field(..., min_length=1)

class GeneratedGame(BaseModel):
    categories: List[GeneratedCategory] = Field(..., min_length=1)
