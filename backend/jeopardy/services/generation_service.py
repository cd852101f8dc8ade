"""
AI game generation: request validation, task registry, background job
"""

import json
import logging
import re
import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from jeopardy.core.config import settings
from jeopardy.core.exceptions import AuthorizationError, NotFoundError, UpstreamError, ValidationError
from jeopardy.core.templates import JEOPARDY_PROMPT
from jeopardy.core.utils import utcnow
from jeopardy.models.user import User
from jeopardy.schemas.generation_schemas import GenerateGameRequest, GeneratedGame, GenerationStatusResponse
from jeopardy.services.game_service import GameService
from jeopardy.services.llm_service import LLMService

logger = logging.getLogger(__name__)

PENDING = "pending"
COMPLETED = "completed"
FAILED = "failed"

MIN_CATEGORIES = 2
MAX_CATEGORIES = 10
DEFAULT_TITLE = "AI generated game"


@dataclass
class GenerationTask:
    id: str
    user_id: int
    status: str = PENDING
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)


class GenerationTaskRegistry:
    """Process-local task table.

    The request thread writes ``pending``; the background job writes the
    terminal state once. Later terminal writes are ignored.
    """

    def __init__(self):
        self._tasks: Dict[str, GenerationTask] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> GenerationTask:
        task = GenerationTask(id=str(uuid.uuid4()), user_id=user_id)
        with self._lock:
            self._tasks[task.id] = task
        return replace(task)

    def get(self, task_id: str) -> Optional[GenerationTask]:
        with self._lock:
            task = self._tasks.get(task_id)
            return replace(task) if task else None

    def _finish(self, task_id: str, status: str, data=None, error=None) -> bool:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                logger.warning("Generation task %s is unknown, dropping %s result", task_id, status)
                return False
            if task.status != PENDING:
                logger.warning("Generation task %s already %s, ignoring %s", task_id, task.status, status)
                return False
            task.status = status
            task.data = data
            task.error = error
            return True

    def complete(self, task_id: str, data: Dict[str, Any]) -> bool:
        return self._finish(task_id, COMPLETED, data=data)

    def fail(self, task_id: str, error: str) -> bool:
        return self._finish(task_id, FAILED, error=error)

    def __len__(self):
        with self._lock:
            return len(self._tasks)


task_registry = GenerationTaskRegistry()


def validate_generation_form(form: GenerateGameRequest) -> List[str]:
    """Every problem with the form, empty when it is acceptable"""
    errors = []
    theme = (form.theme or "").strip()
    categories = form.categories or []

    if not theme and not categories:
        errors.append("Either a theme or a list of categories is required")
    if categories and not MIN_CATEGORIES <= len(categories) <= MAX_CATEGORIES:
        errors.append(f"Number of categories must be between {MIN_CATEGORIES} and {MAX_CATEGORIES}")
    if any(not (name or "").strip() for name in categories):
        errors.append("Category names cannot be empty")
    return errors


def build_prompt_values(form: GenerateGameRequest) -> Dict[str, Any]:
    """Template variables for JEOPARDY_PROMPT"""
    categories = [c.strip() for c in form.categories or []]
    if categories:
        topic = f"Categories: {', '.join(categories)}"
    else:
        topic = form.theme.strip() if form.theme else "General Knowledge"
    if form.details:
        topic += f". Additional details: {form.details}"
    if form.example_questions:
        topic += f". Example questions: {form.example_questions}"
    if form.allow_images:
        topic += ". Clues may reference images"
    if form.allow_videos:
        topic += ". Clues may reference videos"

    return {
        "language": settings.GENERATION_LANGUAGE,
        "numCategories": len(categories) or settings.DEFAULT_CATEGORY_COUNT,
        "numQuestions": settings.DEFAULT_QUESTIONS_PER_CATEGORY,
        "topic": topic,
    }


_CODE_FENCE_START = re.compile(r"^\s*```[a-zA-Z]*\s*")
_CODE_FENCE_END = re.compile(r"\s*```\s*$")
_VAR_DECLARATION = re.compile(r"^\s*(?:const|let|var)\s+\w+\s*=\s*")


def parse_generated_game(text: str) -> GeneratedGame:
    """Turn raw model output into a validated game structure"""
    cleaned = _CODE_FENCE_START.sub("", text)
    cleaned = _CODE_FENCE_END.sub("", cleaned)
    cleaned = _VAR_DECLARATION.sub("", cleaned).strip().rstrip(";")

    try:
        raw = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise UpstreamError(f"LLM output is not valid JSON: {e.msg}")

    try:
        return GeneratedGame.model_validate(raw)
    except SchemaValidationError as e:
        raise UpstreamError(f"LLM output is not a valid game: {e.error_count()} problem(s)")


async def run_generation(task_id: str, form: GenerateGameRequest, user_id: int,
                         session_factory: Callable[[], Session], llm: LLMService,
                         registry: GenerationTaskRegistry) -> None:
    """Background job: prompt -> LLM -> parse -> persist -> complete.

    Runs detached from the request, so every failure ends up in the task
    record instead of propagating.
    """
    logger.info("Generation task %s started for user %s", task_id, user_id)
    try:
        text = await llm.generate_from_template(JEOPARDY_PROMPT, build_prompt_values(form))
        generated = parse_generated_game(text)

        grid = [
            (category.name, [(q.clue, q.answer) for q in category.questions])
            for category in generated.categories
        ]
        db = session_factory()
        try:
            game = GameService(db).create_game_with_grid(
                user_id, (form.theme or "").strip() or DEFAULT_TITLE, grid
            )
            game_id = game.id
        finally:
            db.close()

        data = generated.model_dump()
        data["gameId"] = game_id
        registry.complete(task_id, data)
        logger.info("Generation task %s completed: game %s", task_id, game_id)
    except Exception as e:
        logger.exception("Generation task %s failed", task_id)
        registry.fail(task_id, str(e) or e.__class__.__name__)


class GenerationService:
    """Front door for generation requests and status polling"""

    def __init__(self, registry: GenerationTaskRegistry):
        self.registry = registry

    def start(self, form: GenerateGameRequest, current_user: User) -> GenerationTask:
        errors = validate_generation_form(form)
        if errors:
            raise ValidationError("; ".join(errors), details=errors)

        task = self.registry.create(current_user.id)
        logger.info("User %s queued generation task %s", current_user.id, task.id)
        return task

    def get_status(self, task_id: str, current_user: User) -> GenerationStatusResponse:
        task = self.registry.get(task_id)
        if task is None:
            raise NotFoundError("Generation task not found")
        if task.user_id != current_user.id:
            raise AuthorizationError("Not allowed to view this generation task")

        return GenerationStatusResponse(
            status=task.status,
            id=task.id,
            data=task.data if task.status == COMPLETED else None,
            error=task.error if task.status == FAILED else None,
        )
