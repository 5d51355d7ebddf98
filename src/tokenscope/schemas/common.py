# tokenscope/schemas/common.py

from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar('T')  # 定义泛型类型

class JsonResponse(BaseModel, Generic[T]):  # 继承 Generic[T]
    data: T  # 使用泛型类型 T
    msg: str = "success"
    status: int = 200
