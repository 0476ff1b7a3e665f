from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

SUCCESS_CODE = 200
SUCCESS_MESSAGE = "success"


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every response body: {code, message, data}"""
    code: int
    message: str
    data: Optional[T] = None

    @classmethod
    def success(cls, data: Optional[T] = None) -> "ApiResponse[T]":
        return cls(code=SUCCESS_CODE, message=SUCCESS_MESSAGE, data=data)

    @classmethod
    def error(cls, code: int, message: str) -> "ApiResponse[T]":
        return cls(code=code, message=message, data=None)


class PageResult(BaseModel, Generic[T]):
    total: int
    records: List[T]
    current: int
    size: int
    pages: int

    @classmethod
    def of(cls, total: int, records: List[T], current: int, size: int) -> "PageResult[T]":
        pages = (total + size - 1) // size if size > 0 else 0
        return cls(total=total, records=records, current=current, size=size, pages=pages)
