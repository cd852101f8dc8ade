# Business logic services
from .user_service import UserService, ProfileService
from .rbac_service import RbacService
from .game_service import GameService
from .session_service import SessionService
from .player_service import PlayerService
from .llm_service import LLMService
from .generation_service import GenerationService, GenerationTaskRegistry, task_registry

__all__ = [
    "UserService",
    "ProfileService",
    "RbacService",
    "GameService",
    "SessionService",
    "PlayerService",
    "LLMService",
    "GenerationService",
    "GenerationTaskRegistry",
    "task_registry",
]
