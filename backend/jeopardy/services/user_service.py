"""
User accounts, authentication and profiles
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from jeopardy.core.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from jeopardy.core.security import create_access_token, hash_password, verify_password
from jeopardy.models.user import SystemRole, User, UserProfile
from jeopardy.schemas.user_schemas import (
    AssignRoleRequest,
    AuthResponse,
    ProfileResponse,
    ProfileUpdate,
    StatsUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserRolesResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

class UserService:
    """User account service"""

    def __init__(self, db: Session):
        self.db = db

    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def _auth_response(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.role.value)
        return AuthResponse(token=token, user=UserResponse.model_validate(user))

    async def register(self, data: UserRegister) -> AuthResponse:
        """Create a user (and an empty profile) and issue a token"""
        email = data.email.lower()
        if self.db.query(User).filter(User.email == email).first():
            raise AlreadyExistsError(f"User with email '{email}' already exists")

        user = User(
            email=email,
            name=data.name,
            password_hash=hash_password(data.password),
            role=SystemRole.USER,
        )
        user.profile = UserProfile()
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info("Registered user %s (%s)", user.id, user.email)
        return self._auth_response(user)

    def authenticate(self, email: str, password: str) -> User:
        user = self.db.query(User).filter(User.email == email.lower()).first()
        if not user:
            raise AuthenticationError("User not found")
        if not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid password")
        return user

    async def login(self, data: UserLogin) -> AuthResponse:
        user = self.authenticate(data.email, data.password)
        return self._auth_response(user)

    async def issue_token(self, email: str, password: str) -> str:
        """OAuth2 password flow"""
        user = self.authenticate(email, password)
        return create_access_token(user.id, user.role.value)

    def resolve(self, user_id: int) -> Optional[User]:
        """Identity lookup used by the bearer-token dependency"""
        return self.db.query(User).filter(User.id == user_id).first()

    async def update_user(self, user_id: int, data: UserUpdate, current_user: User) -> UserResponse:
        if current_user.id != user_id and not current_user.is_admin:
            raise AuthorizationError("Not allowed to edit this user")

        user = self._get_user(user_id)
        update_data = data.model_dump(exclude_unset=True)
        if "email" in update_data and update_data["email"]:
            email = update_data["email"].lower()
            existing = self.db.query(User).filter(User.email == email, User.id != user_id).first()
            if existing:
                raise AlreadyExistsError(f"User with email '{email}' already exists")
            update_data["email"] = email

        for field, value in update_data.items():
            if value is not None:
                setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return UserResponse.model_validate(user)

    async def assign_role(self, data: AssignRoleRequest) -> UserResponse:
        """Change a user's system role (admin only, enforced by the route)"""
        try:
            role = SystemRole(data.role)
        except ValueError:
            raise ValidationError(f"Invalid role '{data.role}'")

        user = self._get_user(data.user_id)
        user.role = role
        self.db.commit()
        self.db.refresh(user)

        logger.info("User %s role set to %s", user.id, role.value)
        return UserResponse.model_validate(user)

    async def get_user_roles(self, user_id: int) -> UserRolesResponse:
        user = self._get_user(user_id)
        return UserRolesResponse(user_id=user.id, role=user.role)


class ProfileService:
    """User profile / statistics service"""

    def __init__(self, db: Session):
        self.db = db

    def _get_profile(self, user_id: int) -> UserProfile:
        profile = self.db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    async def get_profile(self, user_id: int) -> ProfileResponse:
        return ProfileResponse.model_validate(self._get_profile(user_id))

    async def update_profile(self, user_id: int, data: ProfileUpdate, current_user: User) -> ProfileResponse:
        """Create-or-update avatar and bio"""
        if current_user.id != user_id and not current_user.is_admin:
            raise AuthorizationError("Not allowed to edit this profile")

        if not self.db.query(User).filter(User.id == user_id).first():
            raise NotFoundError("User not found")

        profile = self.db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if profile is None:
            profile = UserProfile(user_id=user_id)
            self.db.add(profile)

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)

        self.db.commit()
        self.db.refresh(profile)
        return ProfileResponse.model_validate(profile)

    async def update_stats(self, user_id: int, data: StatsUpdate) -> ProfileResponse:
        """Manual statistics override (admin only, enforced by the route)"""
        profile = self._get_profile(user_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(profile, field, value)

        self.db.commit()
        self.db.refresh(profile)
        return ProfileResponse.model_validate(profile)
