"""
Game catalog service: games, categories, question rows, questions
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jeopardy.core.exceptions import AlreadyExistsError, InvalidStateError, NotFoundError, ValidationError
from jeopardy.core.templates import EMPTY_GAME_TEMPLATE
from jeopardy.models.game import Category, Game, Question, QuestionRow
from jeopardy.models.session import GameSession, GameSessionQuestion
from jeopardy.models.user import User
from jeopardy.schemas.game_schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithQuestions,
    GameCreate,
    GameDetailResponse,
    GameResponse,
    GameUpdate,
    QuestionCreate,
    QuestionResponse,
    QuestionRowCreate,
    QuestionRowResponse,
    QuestionUpdate,
)
from jeopardy.services.access import require_game_owner

logger = logging.getLogger(__name__)

# (category name, [(question, answer), ...]) in display order
GridSpec = Sequence[Tuple[str, Sequence[Tuple[str, str]]]]

class GameService:
    """Game catalog service"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------

    def _get_game(self, game_id: int) -> Game:
        game = self.db.query(Game).filter(Game.id == game_id).first()
        if not game:
            raise NotFoundError("Game not found")
        return game

    def _get_category(self, category_id: int) -> Category:
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError("Category not found")
        return category

    def _get_row(self, row_id: int) -> QuestionRow:
        row = self.db.query(QuestionRow).filter(QuestionRow.id == row_id).first()
        if not row:
            raise NotFoundError("Question row not found")
        return row

    def _get_question(self, question_id: int) -> Question:
        question = self.db.query(Question).filter(Question.id == question_id).first()
        if not question:
            raise NotFoundError("Question not found")
        return question

    def _commit_unique(self, message: str) -> None:
        """Commit, turning a unique-constraint race into a 400"""
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExistsError(message)

    def _ensure_not_on_board(self, *criteria, what: str) -> None:
        """Session boards pin their questions; 409 while any board holds one"""
        in_use = self.db.query(GameSessionQuestion.id).join(
            Question, GameSessionQuestion.question_id == Question.id
        ).filter(*criteria).first()
        if in_use:
            raise InvalidStateError(f"{what} is used by a game session")

    # ------------------------------------------------------------------
    # games
    # ------------------------------------------------------------------

    def create_game_with_grid(self, creator_id: int, title: str, grid: GridSpec,
                              row_values: Optional[Sequence[int]] = None,
                              commit: bool = True) -> Game:
        """Build a game and its whole grid in one unit of work.

        Rows are created for the longest category; row ``i`` is worth
        ``row_values[i]`` (default ``(i + 1) * 100``). Each (category, row)
        cell receives at most one question.
        """
        row_count = max((len(questions) for _, questions in grid), default=0)
        if row_values is None:
            row_values = [(i + 1) * 100 for i in range(row_count)]
        if len(row_values) < row_count:
            raise ValidationError("Not enough row values for the grid")

        game = Game(title=title, creator_id=creator_id, is_active=True)
        rows = [QuestionRow(value=row_values[i], order=i) for i in range(row_count)]
        game.question_rows = rows

        for order, (name, questions) in enumerate(grid):
            category = Category(name=name, order=order)
            game.categories.append(category)
            for row, (text, answer) in zip(rows, questions):
                category.questions.append(Question(question=text, answer=answer, question_row=row))

        self.db.add(game)
        if commit:
            self.db.commit()
            self.db.refresh(game)
        else:
            self.db.flush()
        return game

    async def create_game(self, data: GameCreate, current_user: User) -> GameDetailResponse:
        """Create a game, optionally seeded with the empty 5x5 grid"""
        if data.use_template:
            empty = EMPTY_GAME_TEMPLATE["empty_question"]
            rows = EMPTY_GAME_TEMPLATE["question_rows"]
            grid = [
                (c["name"], [(empty["question"], empty["answer"])] * len(rows))
                for c in EMPTY_GAME_TEMPLATE["categories"]
            ]
            game = self.create_game_with_grid(
                current_user.id, data.title, grid, row_values=[r["value"] for r in rows]
            )
        else:
            game = Game(title=data.title, creator_id=current_user.id, is_active=True)
            self.db.add(game)
            self.db.commit()
            self.db.refresh(game)

        logger.info("User %s created game %s (%s)", current_user.id, game.id, game.title)
        return GameDetailResponse.model_validate(game)

    async def list_games(self, skip: int = 0, limit: int = 100) -> List[GameResponse]:
        games = self.db.query(Game).order_by(Game.id.desc()).offset(skip).limit(limit).all()
        return [GameResponse.model_validate(g) for g in games]

    async def get_game(self, game_id: int) -> GameDetailResponse:
        return GameDetailResponse.model_validate(self._get_game(game_id))

    async def update_game(self, game_id: int, data: GameUpdate, current_user: User) -> GameResponse:
        game = self._get_game(game_id)
        require_game_owner(game, current_user, "edit this game")

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(game, field, value)

        self.db.commit()
        self.db.refresh(game)
        return GameResponse.model_validate(game)

    async def delete_game(self, game_id: int, current_user: User) -> None:
        """Delete a game with its grid and sessions"""
        game = self._get_game(game_id)
        require_game_owner(game, current_user, "delete this game")

        # Sessions go first so their boards release the questions
        self.db.query(GameSession).filter(
            GameSession.game_id == game.id
        ).delete(synchronize_session=False)
        self.db.delete(game)
        self.db.commit()
        logger.info("User %s deleted game %s", current_user.id, game_id)

    # ------------------------------------------------------------------
    # categories
    # ------------------------------------------------------------------

    async def create_category(self, data: CategoryCreate, current_user: User) -> CategoryResponse:
        game = self._get_game(data.game_id)
        require_game_owner(game, current_user, "add categories to this game")

        clash = self.db.query(Category).filter(
            Category.game_id == game.id, Category.order == data.order
        ).first()
        if clash:
            raise AlreadyExistsError(f"Category order {data.order} is already used in this game")

        category = Category(name=data.name, order=data.order, game_id=game.id)
        self.db.add(category)
        self._commit_unique(f"Category order {data.order} is already used in this game")
        self.db.refresh(category)
        return CategoryResponse.model_validate(category)

    async def get_categories(self, game_id: int) -> List[CategoryWithQuestions]:
        self._get_game(game_id)
        categories = self.db.query(Category).filter(
            Category.game_id == game_id
        ).order_by(Category.order).all()
        return [CategoryWithQuestions.model_validate(c) for c in categories]

    async def update_category(self, category_id: int, data: CategoryUpdate, current_user: User) -> CategoryResponse:
        category = self._get_category(category_id)
        require_game_owner(category.game, current_user, "edit this category")

        if data.order is not None and data.order != category.order:
            clash = self.db.query(Category).filter(
                Category.game_id == category.game_id,
                Category.order == data.order,
                Category.id != category.id,
            ).first()
            if clash:
                raise AlreadyExistsError(f"Category order {data.order} is already used in this game")

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(category, field, value)

        self._commit_unique("Category order is already used in this game")
        self.db.refresh(category)
        return CategoryResponse.model_validate(category)

    async def delete_category(self, category_id: int, current_user: User) -> None:
        category = self._get_category(category_id)
        require_game_owner(category.game, current_user, "delete this category")
        self._ensure_not_on_board(Question.category_id == category.id, what="Category")

        self.db.delete(category)
        self.db.commit()

    # ------------------------------------------------------------------
    # question rows
    # ------------------------------------------------------------------

    async def create_row(self, data: QuestionRowCreate, current_user: User) -> QuestionRowResponse:
        game = self._get_game(data.game_id)
        require_game_owner(game, current_user, "add question rows to this game")

        clash = self.db.query(QuestionRow).filter(
            QuestionRow.game_id == game.id, QuestionRow.order == data.order
        ).first()
        if clash:
            raise AlreadyExistsError(f"Row order {data.order} is already used in this game")

        row = QuestionRow(value=data.value, order=data.order, game_id=game.id)
        self.db.add(row)
        self._commit_unique(f"Row order {data.order} is already used in this game")
        self.db.refresh(row)
        return QuestionRowResponse.model_validate(row)

    async def get_rows(self, game_id: int) -> List[QuestionRowResponse]:
        self._get_game(game_id)
        rows = self.db.query(QuestionRow).filter(
            QuestionRow.game_id == game_id
        ).order_by(QuestionRow.order).all()
        return [QuestionRowResponse.model_validate(r) for r in rows]

    async def delete_row(self, row_id: int, current_user: User) -> None:
        row = self._get_row(row_id)
        require_game_owner(row.game, current_user, "delete this question row")
        self._ensure_not_on_board(Question.row_id == row.id, what="Question row")

        self.db.delete(row)
        self.db.commit()

    # ------------------------------------------------------------------
    # questions
    # ------------------------------------------------------------------

    async def create_question(self, data: QuestionCreate, current_user: User) -> QuestionResponse:
        """Fill one grid cell"""
        category = self._get_category(data.category_id)
        require_game_owner(category.game, current_user, "add questions to this game")

        row = self.db.query(QuestionRow).filter(QuestionRow.id == data.row_id).first()
        if not row or row.game_id != category.game_id:
            raise ValidationError("Question row does not belong to this game")

        existing = self.db.query(Question).filter(
            Question.category_id == category.id, Question.row_id == row.id
        ).first()
        if existing:
            raise AlreadyExistsError("A question for this category and row already exists")

        question = Question(
            question=data.question,
            answer=data.answer,
            category_id=category.id,
            row_id=row.id,
        )
        self.db.add(question)
        self._commit_unique("A question for this category and row already exists")
        self.db.refresh(question)
        return QuestionResponse.model_validate(question)

    async def get_questions(self, game_id: int) -> List[QuestionResponse]:
        self._get_game(game_id)
        questions = self.db.query(Question).join(Category).filter(
            Category.game_id == game_id
        ).order_by(Category.order, Question.id).all()
        return [QuestionResponse.model_validate(q) for q in questions]

    async def get_question(self, question_id: int) -> QuestionResponse:
        return QuestionResponse.model_validate(self._get_question(question_id))

    async def update_question(self, question_id: int, data: QuestionUpdate, current_user: User) -> QuestionResponse:
        question = self._get_question(question_id)
        require_game_owner(question.category.game, current_user, "edit this question")

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(question, field, value)

        self.db.commit()
        self.db.refresh(question)
        return QuestionResponse.model_validate(question)

    async def delete_question(self, question_id: int, current_user: User) -> None:
        question = self._get_question(question_id)
        require_game_owner(question.category.game, current_user, "delete this question")
        self._ensure_not_on_board(Question.id == question.id, what="Question")

        self.db.delete(question)
        self.db.commit()
