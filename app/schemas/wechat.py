"""
微信消息相关Schema
"""
from pydantic import BaseModel
from typing import Optional


class VerificationRequest(BaseModel):
    """微信服务器配置验证参数"""
    signature: str
    timestamp: str
    nonce: str
    echostr: str


class InboundMessage(BaseModel):
    """微信推送消息（用于XML解析）"""
    ToUserName: str
    FromUserName: str
    MsgType: str
    Content: Optional[str] = None
    CreateTime: Optional[int] = None
    MsgId: Optional[str] = None
    
    @property
    def is_text(self) -> bool:
        return self.MsgType == "text"


class OutboundReply(BaseModel):
    """被动回复的文本消息"""
    ToUserName: str
    FromUserName: str
    CreateTime: int
    MsgType: str = "text"
    Content: str
