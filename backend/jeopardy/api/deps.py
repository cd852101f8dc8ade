"""
Shared route dependencies: current user, admin guard, generation collaborators
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from jeopardy.core.database import get_db
from jeopardy.core.exceptions import AuthenticationError, AuthorizationError
from jeopardy.core.security import decode_access_token
from jeopardy.models.user import User
from jeopardy.services.generation_service import GenerationTaskRegistry, task_registry
from jeopardy.services.llm_service import LLMService
from jeopardy.services.user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/token")


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Resolve the bearer token to a live user row"""
    payload = decode_access_token(token)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token")

    user = UserService(db).resolve(user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise AuthorizationError("Administrator role required")
    return current_user


def get_llm_service() -> LLMService:
    return LLMService()


def get_task_registry() -> GenerationTaskRegistry:
    return task_registry
