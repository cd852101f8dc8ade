"""
User, auth and profile schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from jeopardy.models.user import SystemRole
from jeopardy.schemas.base import CamelModel, serialize_dt

class UserRegister(CamelModel):
    """Registration request"""
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)

class UserLogin(CamelModel):
    email: str
    password: str

class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")

class AssignRoleRequest(CamelModel):
    """Role is checked by the service so unknown literals surface as a 400 with a clear message"""
    user_id: int
    role: str

class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    role: SystemRole
    created_at: Optional[datetime] = None

    @field_serializer('created_at')
    def _serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return serialize_dt(dt)

class AuthResponse(CamelModel):
    token: str
    user: UserResponse

class Token(BaseModel):
    """OAuth2 token response (OAuth2 field names)"""
    access_token: str
    token_type: str = "bearer"

class UserRolesResponse(CamelModel):
    user_id: int
    role: SystemRole

class ProfileUpdate(CamelModel):
    avatar: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = None

class StatsUpdate(CamelModel):
    games_played: Optional[int] = Field(None, ge=0)
    games_won: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = None

class ProfileResponse(CamelModel):
    id: int
    user_id: int
    avatar: Optional[str] = None
    bio: Optional[str] = None
    games_played: int
    games_won: int
    rating: float
    user: Optional[UserResponse] = None
