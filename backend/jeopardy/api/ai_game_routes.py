"""
AI game generation routes
"""

from fastapi import APIRouter, BackgroundTasks, Depends, status

from jeopardy.api.deps import get_current_user, get_llm_service, get_task_registry
from jeopardy.core.database import get_session_factory
from jeopardy.models.user import User
from jeopardy.schemas.generation_schemas import GenerateGameRequest, GenerationAccepted, GenerationStatusResponse
from jeopardy.services.generation_service import GenerationService, GenerationTaskRegistry, run_generation
from jeopardy.services.llm_service import LLMService

router = APIRouter()

@router.post("/generate", response_model=GenerationAccepted, status_code=status.HTTP_202_ACCEPTED)
async def generate_game(
    form: GenerateGameRequest,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    llm: LLMService = Depends(get_llm_service),
    registry: GenerationTaskRegistry = Depends(get_task_registry),
    session_factory=Depends(get_session_factory)
):
    """Queue generation and return the task id to poll"""
    task = GenerationService(registry).start(form, current_user)
    background_tasks.add_task(
        run_generation, task.id, form, current_user.id, session_factory, llm, registry
    )
    return GenerationAccepted(message="Game generation request accepted", generation_id=task.id)

@router.get("/status/{generation_id}", response_model=GenerationStatusResponse,
            response_model_exclude_none=True)
async def get_generation_status(
    generation_id: str,
    current_user: User = Depends(get_current_user),
    registry: GenerationTaskRegistry = Depends(get_task_registry)
):
    return GenerationService(registry).get_status(generation_id, current_user)
