"""
Role / permission registry
"""

from typing import List

from sqlalchemy.orm import Session

from jeopardy.core.exceptions import AlreadyExistsError, NotFoundError
from jeopardy.models.rbac import Permission, Role, RolePermission
from jeopardy.schemas.rbac_schemas import (
    AssignPermissionRequest,
    PermissionCreate,
    PermissionResponse,
    RoleCreate,
    RolePermissionResponse,
    RoleResponse,
)

class RbacService:
    """Named roles and permissions"""

    def __init__(self, db: Session):
        self.db = db

    async def create_role(self, data: RoleCreate) -> RoleResponse:
        if self.db.query(Role).filter(Role.name == data.name).first():
            raise AlreadyExistsError(f"Role '{data.name}' already exists")

        role = Role(name=data.name, description=data.description)
        self.db.add(role)
        self.db.commit()
        self.db.refresh(role)
        return RoleResponse.model_validate(role)

    async def get_roles(self) -> List[RoleResponse]:
        roles = self.db.query(Role).order_by(Role.id).all()
        return [RoleResponse.model_validate(role) for role in roles]

    async def create_permission(self, data: PermissionCreate) -> PermissionResponse:
        if self.db.query(Permission).filter(Permission.name == data.name).first():
            raise AlreadyExistsError(f"Permission '{data.name}' already exists")

        permission = Permission(name=data.name, description=data.description)
        self.db.add(permission)
        self.db.commit()
        self.db.refresh(permission)
        return PermissionResponse.model_validate(permission)

    async def get_permissions(self) -> List[PermissionResponse]:
        permissions = self.db.query(Permission).order_by(Permission.id).all()
        return [PermissionResponse.model_validate(p) for p in permissions]

    async def assign_permission(self, data: AssignPermissionRequest) -> RolePermissionResponse:
        role = self.db.query(Role).filter(Role.id == data.role_id).first()
        if not role:
            raise NotFoundError("Role not found")
        permission = self.db.query(Permission).filter(Permission.id == data.permission_id).first()
        if not permission:
            raise NotFoundError("Permission not found")

        existing = self.db.query(RolePermission).filter(
            RolePermission.role_id == role.id,
            RolePermission.permission_id == permission.id,
        ).first()
        if existing:
            raise AlreadyExistsError(f"Role '{role.name}' already has permission '{permission.name}'")

        grant = RolePermission(role=role, permission=permission)
        self.db.add(grant)
        self.db.commit()
        self.db.refresh(grant)
        return RolePermissionResponse.model_validate(grant)
