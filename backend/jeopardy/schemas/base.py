"""
Shared schema base: camelCase on the wire, snake_case in Python
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from jeopardy.core.utils import format_timestamp_with_timezone

class CamelModel(BaseModel):
    """Base for request/response schemas"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

def serialize_dt(dt: Optional[datetime]) -> Optional[str]:
    return format_timestamp_with_timezone(dt)
