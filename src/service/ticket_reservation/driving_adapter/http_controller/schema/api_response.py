from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar('T')


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorDetail(BaseModel):
    path: List[Any]
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Envelope of every response: {success, data?, message?, errors?}"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[ErrorDetail]] = None
