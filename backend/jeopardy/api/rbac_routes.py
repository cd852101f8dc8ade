"""
Role and permission registry routes
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jeopardy.api.deps import get_current_user, require_admin
from jeopardy.core.database import get_db
from jeopardy.models.user import User
from jeopardy.schemas.rbac_schemas import (
    AssignPermissionRequest,
    PermissionCreate,
    PermissionResponse,
    RoleCreate,
    RolePermissionResponse,
    RoleResponse,
)
from jeopardy.services.rbac_service import RbacService

roles_router = APIRouter()
permissions_router = APIRouter()

@roles_router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    data: RoleCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return await RbacService(db).create_role(data)

@roles_router.get("", response_model=List[RoleResponse])
async def get_roles(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All roles with their permissions"""
    return await RbacService(db).get_roles()

@roles_router.post("/permissions", response_model=RolePermissionResponse, status_code=status.HTTP_201_CREATED)
async def assign_permission(
    data: AssignPermissionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Grant a permission to a role"""
    return await RbacService(db).assign_permission(data)

@permissions_router.post("", response_model=PermissionResponse, status_code=status.HTTP_201_CREATED)
async def create_permission(
    data: PermissionCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return await RbacService(db).create_permission(data)

@permissions_router.get("", response_model=List[PermissionResponse])
async def get_permissions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await RbacService(db).get_permissions()
