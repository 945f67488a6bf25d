"""
通用Schema模型
"""
from pydantic import BaseModel
from typing import Any, Optional


class ResponseModel(BaseModel):
    """标准响应模型"""
    code: int = 200
    message: Optional[str] = None
    data: Optional[Any] = None
