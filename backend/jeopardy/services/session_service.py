"""
Game session service: session lifecycle, turns, question state, scoring
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jeopardy.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from jeopardy.core.utils import utcnow
from jeopardy.models.game import Category, Game, Question
from jeopardy.models.session import GameSession, GameSessionQuestion, Player
from jeopardy.models.user import User, UserProfile
from jeopardy.schemas.session_schemas import (
    AnswerQuestionRequest,
    AnswerResponse,
    CurrentTurnUpdate,
    FinalizedSessionResponse,
    GameSessionCreate,
    GameSessionDetailResponse,
    GameSessionResponse,
    PlayerResponse,
    SessionQuestionResponse,
    SessionQuestionUpdate,
)
from jeopardy.services.access import (
    derive_role,
    require_game_owner,
    require_session_manager,
    require_turn_control,
)

logger = logging.getLogger(__name__)

class SessionService:
    """Game session service"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _get_session(self, session_id: int) -> GameSession:
        session = self.db.query(GameSession).filter(GameSession.id == session_id).first()
        if not session:
            raise NotFoundError("Game session not found")
        return session

    @staticmethod
    def _ensure_active(session: GameSession) -> None:
        if session.ended_at is not None:
            raise InvalidStateError("Game session has already ended")

    @staticmethod
    def _seated_player(session: GameSession, player_id: int) -> Player:
        for player in session.players:
            if player.id == player_id:
                return player
        raise NotFoundError("Player not found in this game session")

    @staticmethod
    def _with_role(response, session: GameSession, user: User):
        response.user_role = derive_role(session, user.id)
        return response

    def _visible_sessions(self, user: User):
        query = self.db.query(GameSession).join(Game, GameSession.game_id == Game.id)
        if not user.is_admin:
            seated = self.db.query(Player.game_session_id).filter(Player.user_id == user.id)
            query = query.filter(or_(Game.creator_id == user.id, GameSession.id.in_(seated)))
        return query

    # ------------------------------------------------------------------
    # create / read / delete
    # ------------------------------------------------------------------

    async def create_session(self, data: GameSessionCreate, current_user: User) -> GameSessionResponse:
        """Create a session and snapshot the game's grid into it.

        The session row and every GameSessionQuestion are written in one
        transaction; a failure leaves nothing behind.
        """
        game = self.db.query(Game).filter(Game.id == data.game_id).first()
        if not game:
            raise NotFoundError("Game not found")

        session = GameSession(
            game_id=game.id,
            name=data.name,
            started_at=utcnow(),
            number_of_players=data.number_of_players,
            number_of_ai_players=data.number_of_ai_players,
            default_timer=data.default_timer,
        )

        try:
            self.db.add(session)
            self.db.flush()

            question_ids = [
                question_id for (question_id,) in self.db.query(Question.id)
                .join(Category, Question.category_id == Category.id)
                .filter(Category.game_id == game.id)
                .order_by(Category.order, Question.row_id)
                .all()
            ]
            self.db.add_all([
                GameSessionQuestion(
                    game_session_id=session.id,
                    question_id=question_id,
                    is_revealed=False,
                    is_answered=False,
                )
                for question_id in question_ids
            ])
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to create session for game %s", game.id)
            raise

        self.db.refresh(session)
        logger.info(
            "User %s created session %s for game %s with %d questions",
            current_user.id, session.id, game.id, len(question_ids),
        )
        return self._with_role(GameSessionResponse.model_validate(session), session, current_user)

    async def list_sessions(self, current_user: User) -> List[GameSessionResponse]:
        """Sessions the caller owns or plays in (all of them for admins)"""
        sessions = self._visible_sessions(current_user).order_by(GameSession.id.desc()).all()
        return [
            self._with_role(GameSessionResponse.model_validate(s), s, current_user)
            for s in sessions
        ]

    async def list_game_sessions(self, game_id: int, current_user: User) -> List[GameSessionResponse]:
        if not self.db.query(Game).filter(Game.id == game_id).first():
            raise NotFoundError("Game not found")
        sessions = self._visible_sessions(current_user).filter(
            GameSession.game_id == game_id
        ).order_by(GameSession.id.desc()).all()
        return [
            self._with_role(GameSessionResponse.model_validate(s), s, current_user)
            for s in sessions
        ]

    async def get_session(self, session_id: int, current_user: User) -> GameSessionDetailResponse:
        session = self._get_session(session_id)
        return self._with_role(GameSessionDetailResponse.model_validate(session), session, current_user)

    async def delete_session(self, session_id: int, current_user: User) -> None:
        session = self._get_session(session_id)
        require_game_owner(session.game, current_user, "delete this game session")

        self.db.delete(session)
        self.db.commit()
        logger.info("User %s deleted session %s", current_user.id, session_id)

    # ------------------------------------------------------------------
    # turn
    # ------------------------------------------------------------------

    async def update_current_turn(self, session_id: int, data: CurrentTurnUpdate,
                                  current_user: User) -> GameSessionResponse:
        """Point the turn at a player seated in this session"""
        session = self._get_session(session_id)
        require_turn_control(session, current_user)
        self._ensure_active(session)

        target = self._seated_player(session, data.target_player_id)
        session.current_turn_id = target.id
        self.db.commit()
        self.db.refresh(session)

        logger.info("Session %s: turn -> player %s", session.id, target.id)
        return self._with_role(GameSessionResponse.model_validate(session), session, current_user)

    # ------------------------------------------------------------------
    # question state & scoring
    # ------------------------------------------------------------------

    def _session_open(self, session: GameSession):
        return select(GameSession.id).where(
            GameSession.id == session.id,
            GameSession.ended_at.is_(None),
        ).exists()

    def _ended_meanwhile(self, session: GameSession) -> bool:
        ended_at = self.db.query(GameSession.ended_at).filter(GameSession.id == session.id).scalar()
        return ended_at is not None

    def _apply_transition(self, session: GameSession, session_question: GameSessionQuestion,
                          is_revealed: Optional[bool], is_answered: Optional[bool],
                          player_id: Optional[int], is_correct: Optional[bool]
                          ) -> Tuple[GameSessionQuestion, int, Optional[Player]]:
        """hidden -> revealed -> answered, never backwards.

        Answering is a compare-and-swap on ``is_answered`` that also requires
        the session to still be open: of several concurrent answers only one
        flips the flag, and only that one scores.
        """
        if is_revealed is False and is_answered:
            raise ValidationError("A question cannot be answered without being revealed")
        if is_revealed is False and session_question.is_revealed:
            raise InvalidStateError("A revealed question cannot be hidden again")
        if is_answered is False and session_question.is_answered:
            raise InvalidStateError("An answered question cannot be reopened")
        if not is_answered and (player_id is not None or is_correct is not None):
            raise ValidationError("playerId and isCorrect can only be sent together with isAnswered=true")

        player = self._seated_player(session, player_id) if player_id is not None else None
        if is_correct is not None and player is None:
            raise ValidationError("isCorrect requires playerId")

        points_change = 0
        if is_answered:
            result = self.db.execute(
                update(GameSessionQuestion)
                .where(
                    GameSessionQuestion.id == session_question.id,
                    GameSessionQuestion.is_answered.is_(False),
                    self._session_open(session),
                )
                .values(
                    is_answered=True,
                    is_revealed=True,
                    answered_by_id=player.id if player is not None else None,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                if self._ended_meanwhile(session):
                    raise InvalidStateError("Game session has already ended")
                raise InvalidStateError("Question has already been answered")

            if player is not None and is_correct is not None:
                value = session_question.question.value
                points_change = value if is_correct else -value
                self.db.execute(
                    update(Player)
                    .where(Player.id == player.id)
                    .values(points=Player.points + points_change)
                    .execution_options(synchronize_session=False)
                )
        elif is_revealed and not session_question.is_revealed:
            result = self.db.execute(
                update(GameSessionQuestion)
                .where(
                    GameSessionQuestion.id == session_question.id,
                    self._session_open(session),
                )
                .values(is_revealed=True)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                raise InvalidStateError("Game session has already ended")

        self.db.commit()
        self.db.refresh(session_question)
        if player is not None:
            self.db.refresh(player)

        if is_answered:
            logger.info(
                "Session %s: question %s answered by player %s (%+d)",
                session.id, session_question.question_id,
                player.id if player is not None else None, points_change,
            )
        return session_question, points_change, player

    async def update_session_question(self, session_id: int, question_id: int,
                                      data: SessionQuestionUpdate,
                                      current_user: User) -> SessionQuestionResponse:
        """Reveal / answer one question of the session"""
        session = self._get_session(session_id)
        require_session_manager(session, current_user, "manage questions in this session")

        session_question = self.db.query(GameSessionQuestion).filter(
            GameSessionQuestion.game_session_id == session.id,
            GameSessionQuestion.question_id == question_id,
        ).first()
        if not session_question:
            raise NotFoundError("Question not found in this game session")
        self._ensure_active(session)

        session_question, _, _ = self._apply_transition(
            session, session_question,
            is_revealed=data.is_revealed,
            is_answered=data.is_answered,
            player_id=data.player_id,
            is_correct=data.is_correct,
        )
        return SessionQuestionResponse.model_validate(session_question)

    async def answer_question(self, session_id: int, data: AnswerQuestionRequest,
                              current_user: User) -> AnswerResponse:
        """Reveal, answer and score a question in one step"""
        session = self._get_session(session_id)
        require_session_manager(session, current_user, "score answers in this session")

        session_question = self.db.query(GameSessionQuestion).filter(
            GameSessionQuestion.game_session_id == session.id,
            GameSessionQuestion.question_id == data.question_id,
        ).first()
        if not session_question:
            raise NotFoundError("Question not found in this game session")
        self._ensure_active(session)

        session_question, points_change, player = self._apply_transition(
            session, session_question,
            is_revealed=True,
            is_answered=True,
            player_id=data.player_id,
            is_correct=data.is_correct,
        )
        return AnswerResponse(
            points_change=points_change,
            session_question=SessionQuestionResponse.model_validate(session_question),
            player=PlayerResponse.model_validate(player),
        )

    # ------------------------------------------------------------------
    # finalization
    # ------------------------------------------------------------------

    def _record_result(self, user_id: int, won: bool) -> None:
        """Atomically bump a user's statistics, creating the profile on first use"""
        if not self.db.query(UserProfile.id).filter(UserProfile.user_id == user_id).first():
            self.db.add(UserProfile(user_id=user_id))
            self.db.flush()

        values = {"games_played": UserProfile.games_played + 1}
        if won:
            values["games_won"] = UserProfile.games_won + 1
        self.db.execute(
            update(UserProfile)
            .where(UserProfile.user_id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    @staticmethod
    def _pick_winner(players: List[Player]) -> Tuple[Optional[Player], bool]:
        """Strictly highest score wins; a shared top score is a tie with no winner"""
        if not players:
            return None, False
        top = max(p.points for p in players)
        leaders = [p for p in players if p.points == top]
        if len(leaders) > 1:
            return None, True
        return leaders[0], False

    async def end_session(self, session_id: int, current_user: User) -> FinalizedSessionResponse:
        """Close the session and record wins / games played.

        Setting ``ended_at`` is guarded by ``ended_at IS NULL`` and committed
        together with the statistics, so a session is only ever counted once.
        """
        session = self._get_session(session_id)
        require_session_manager(session, current_user, "end this session")

        result = self.db.execute(
            update(GameSession)
            .where(GameSession.id == session.id, GameSession.ended_at.is_(None))
            .values(ended_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise InvalidStateError("Game session has already ended")

        players = sorted(session.players, key=lambda p: p.id)
        winner, is_tie = self._pick_winner(players)

        try:
            for player in players:
                if player.user_id is None:
                    continue
                self._record_result(player.user_id, won=winner is not None and player.id == winner.id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to finalize session %s", session.id)
            raise

        self.db.refresh(session)
        logger.info(
            "Session %s ended: winner=%s tie=%s players=%d",
            session.id, winner.id if winner else None, is_tie, len(players),
        )

        response = self._with_role(FinalizedSessionResponse.model_validate(session), session, current_user)
        response.winner_id = winner.id if winner else None
        response.is_tie = is_tie
        return response
