"""
Role / permission registry schemas
"""

from typing import List, Optional

from pydantic import Field

from jeopardy.schemas.base import CamelModel

class PermissionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class PermissionResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None

class RoleCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class RolePermissionInfo(CamelModel):
    id: int
    permission: PermissionResponse

class RoleResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    role_permissions: List[RolePermissionInfo] = []

class AssignPermissionRequest(CamelModel):
    role_id: int
    permission_id: int

class RolePermissionResponse(CamelModel):
    id: int
    role_id: int
    permission_id: int
    role: RoleResponse
    permission: PermissionResponse
