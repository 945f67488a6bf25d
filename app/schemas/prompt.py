"""
提问相关Schema
"""
from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """提问请求"""
    prompt: str = Field(..., description="用户输入的问题")


class PromptResponse(BaseModel):
    """提问结果"""
    text: str
