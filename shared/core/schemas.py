from pydantic import BaseModel
from typing import Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


class UserToken(BaseModel):
    """Identity claims carried by an issued access token."""
    id: str
    company_id: Union[str, int] = 0
    phone: Optional[str] = None
    exp: Optional[int] = None


class FieldError(BaseModel):
    field: str
    message: str


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: bool
    status_code: str
    message: str
    errors: Optional[List[FieldError]] = None
