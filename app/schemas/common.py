# ============================================================================
# FILE: app/schemas/common.py
# Response envelope, pagination and shared summaries
# ============================================================================
from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, Generic, List, Optional, TypeVar

DataT = TypeVar("DataT")
ItemT = TypeVar("ItemT")

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]

class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class ApiResponse(CamelModel, Generic[DataT]):
    """Success envelope shared by every endpoint"""
    status_code: int = 200
    data: Optional[DataT] = None
    message: str = "Success"
    success: bool = True

class ErrorResponse(CamelModel):
    """Failure envelope shared by every endpoint"""
    status_code: int
    message: str
    success: bool = False
    errors: List[Any] = []

class Page(CamelModel, Generic[ItemT]):
    items: List[ItemT]
    total_items: int
    total_pages: int
    page: int
    limit: int
    has_next_page: bool
    has_prev_page: bool

class UserSummary(CamelModel):
    """Public fields of a user embedded in other resources"""
    id: str
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None

class DeletedResource(CamelModel):
    id: str

def envelope(data: Any = None, message: str = "Success", status_code: int = 200) -> dict:
    return {"status_code": status_code, "data": data, "message": message, "success": True}
