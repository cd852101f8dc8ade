"""
Session role derivation and per-operation authorization policy
"""

from typing import Optional

from jeopardy.core.exceptions import AuthorizationError
from jeopardy.models.game import Game
from jeopardy.models.session import GameSession, Player, PlayerRole
from jeopardy.models.user import User

HOST = "host"
GAMEMASTER = "gamemaster"
PLAYER = "player"


def find_seat(session: GameSession, user_id: Optional[int]) -> Optional[Player]:
    """The caller's human player row in this session, if any"""
    if user_id is None:
        return None
    for player in session.players:
        if player.user_id == user_id:
            return player
    return None


def derive_role(session: GameSession, user_id: Optional[int]) -> str:
    """host > gamemaster > player, strictly in that order"""
    if user_id is not None and session.game.creator_id == user_id:
        return HOST
    seat = find_seat(session, user_id)
    if seat is not None and seat.role == PlayerRole.GAME_MASTER:
        return GAMEMASTER
    return PLAYER


def is_game_owner(game: Game, user: User) -> bool:
    return game.creator_id == user.id or user.is_admin


def require_game_owner(game: Game, user: User, action: str = "modify this game") -> None:
    """Creator-only mutation with admin override"""
    if not is_game_owner(game, user):
        raise AuthorizationError(f"Not allowed to {action}")


def can_manage_session(session: GameSession, user: User) -> bool:
    """Game creator, a GAME_MASTER seat, or a system admin"""
    return user.is_admin or derive_role(session, user.id) in (HOST, GAMEMASTER)


def require_session_manager(session: GameSession, user: User, action: str = "manage this session") -> None:
    if not can_manage_session(session, user):
        raise AuthorizationError(f"Not allowed to {action}")


def require_turn_control(session: GameSession, user: User) -> None:
    """Any seated player may pass the turn; so may the host and admins"""
    if find_seat(session, user.id) is not None:
        return
    if can_manage_session(session, user):
        return
    raise AuthorizationError("Only players of this session can change the turn")
