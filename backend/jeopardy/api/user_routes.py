"""
User account and authentication routes
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user, require_admin
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.user_schemas import (
    AssignRoleRequest,
    AuthResponse,
    Token,
    UserLogin,
    UserRegister,
    UserResponse,
    UserRolesResponse,
    UserUpdate,
)
from jeopardy.services.user_service import UserService

router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserRegister,
    db: Session = Depends(get_db)
):
    """Register a new user"""
    return await UserService(db).register(data)

@router.post("/login", response_model=AuthResponse)
async def login(
    data: UserLogin,
    db: Session = Depends(get_db)
):
    """Log in with email and password"""
    return await UserService(db).login(data)

@router.post("/token", response_model=Token)
async def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """OAuth2 password flow (username is the email)"""
    access_token = await UserService(db).issue_token(form_data.username, form_data.password)
    return Token(access_token=access_token)

@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)

@router.put("/role", response_model=UserResponse)
async def assign_role(
    data: AssignRoleRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Change a user's system role"""
    return await UserService(db).assign_role(data)

@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await UserService(db).update_user(user_id, data, current_user)

@router.get("/{user_id}/roles", response_model=UserRolesResponse)
async def get_user_roles(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await UserService(db).get_user_roles(user_id)
