"""
API routers
"""

from fastapi import APIRouter
from .user_routes import router as user_router
from .profile_routes import router as profile_router
from .rbac_routes import roles_router, permissions_router
from .game_routes import router as game_router
from .category_routes import router as category_router
from .question_routes import router as question_router
from .session_routes import router as session_router
from .player_routes import router as player_router
from .ai_game_routes import router as ai_game_router

# Main router, mounted under /api
api_router = APIRouter()

api_router.include_router(user_router, prefix="/users", tags=["Users"])
api_router.include_router(profile_router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(roles_router, prefix="/roles", tags=["Roles"])
api_router.include_router(permissions_router, prefix="/permissions", tags=["Permissions"])
api_router.include_router(game_router, prefix="/games", tags=["Games"])
api_router.include_router(category_router, prefix="/categories", tags=["Categories"])
api_router.include_router(question_router, prefix="/questions", tags=["Questions"])
api_router.include_router(session_router, prefix="/game-sessions", tags=["Game sessions"])
api_router.include_router(player_router, prefix="/players", tags=["Players"])
api_router.include_router(ai_game_router, prefix="/ai-games", tags=["AI games"])
