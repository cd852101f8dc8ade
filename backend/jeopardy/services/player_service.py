"""
Player seats inside a game session
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jeopardy.core.exceptions import AlreadyExistsError, AuthorizationError, InvalidStateError, NotFoundError
from jeopardy.models.session import GameSession, Player, PlayerRole
from jeopardy.models.user import User
from jeopardy.schemas.session_schemas import PlayerCreate, PlayerResponse, PlayerUpdate
from jeopardy.services.access import find_seat, is_game_owner

logger = logging.getLogger(__name__)

class PlayerService:
    """Player service"""

    def __init__(self, db: Session):
        self.db = db

    def _get_session(self, session_id: int) -> GameSession:
        session = self.db.query(GameSession).filter(GameSession.id == session_id).first()
        if not session:
            raise NotFoundError("Game session not found")
        return session

    def _get_player(self, player_id: int) -> Player:
        player = self.db.query(Player).filter(Player.id == player_id).first()
        if not player:
            raise NotFoundError("Player not found")
        return player

    async def join_session(self, data: PlayerCreate, current_user: User) -> PlayerResponse:
        """Seat the caller in a session with zero points.

        A user holds at most one seat per session; the unique constraint on
        (game_session_id, user_id) catches concurrent joins.
        """
        session = self._get_session(data.game_session_id)
        if session.ended_at is not None:
            raise InvalidStateError("Game session has already ended")

        role = data.role or PlayerRole.CONTESTANT
        if role == PlayerRole.GAME_MASTER and not is_game_owner(session.game, current_user):
            raise AuthorizationError("Only the game creator can join as game master")

        if find_seat(session, current_user.id) is not None:
            raise AlreadyExistsError("You have already joined this game session")

        player = Player(
            name=data.name,
            points=0,
            role=role,
            game_session_id=session.id,
            user_id=current_user.id,
        )
        self.db.add(player)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExistsError("You have already joined this game session")
        self.db.refresh(player)

        logger.info("User %s joined session %s as player %s (%s)",
                    current_user.id, session.id, player.id, role.value)
        return PlayerResponse.model_validate(player)

    async def get_session_players(self, session_id: int) -> List[PlayerResponse]:
        session = self._get_session(session_id)
        return [PlayerResponse.model_validate(p) for p in session.players]

    async def get_player(self, player_id: int) -> PlayerResponse:
        return PlayerResponse.model_validate(self._get_player(player_id))

    async def update_player(self, player_id: int, data: PlayerUpdate, current_user: User) -> PlayerResponse:
        """Rename a seat or change its role. Points are never set directly."""
        player = self._get_player(player_id)
        owner = is_game_owner(player.game_session.game, current_user)

        if data.name is not None:
            if player.user_id != current_user.id and not owner:
                raise AuthorizationError("Not allowed to rename this player")
            player.name = data.name
        if data.role is not None:
            if not owner:
                raise AuthorizationError("Only the game creator can change player roles")
            player.role = data.role

        self.db.commit()
        self.db.refresh(player)
        return PlayerResponse.model_validate(player)

    async def delete_player(self, player_id: int, current_user: User) -> None:
        """Leave (own seat) or kick (game creator / admin)"""
        player = self._get_player(player_id)
        session = player.game_session
        if player.user_id != current_user.id and not is_game_owner(session.game, current_user):
            raise AuthorizationError("Not allowed to remove this player")

        if session.current_turn_id == player.id:
            session.current_turn_id = None
        self.db.delete(player)
        self.db.commit()
        logger.info("Player %s removed from session %s", player_id, session.id)
