"""
微信公众号消息服务
"""
import logging
from typing import Optional
from fastapi import Depends
from app.core.config import settings
from app.core.errors import GeminiAPIError
from app.services.gemini_service import GeminiService, get_gemini_service
from app.utils.wechat_xml import parse_inbound_message, build_text_reply

logger = logging.getLogger(__name__)


class WechatMessageService:
    """处理微信推送的消息，转发给Gemini并构建被动回复"""
    
    def __init__(
        self,
        gemini: GeminiService,
        unsupported_reply: str,
        fallback_reply: str,
        api_error_reply: Optional[str] = None
    ):
        """
        Args:
            gemini: Gemini服务
            unsupported_reply: 非文本消息的固定回复
            fallback_reply: Gemini未返回文本时的回复
            api_error_reply: Gemini调用失败时的回复，为None时向上抛出异常
        """
        self.gemini = gemini
        self.unsupported_reply = unsupported_reply
        self.fallback_reply = fallback_reply
        self.api_error_reply = api_error_reply
    
    async def handle(self, body: bytes) -> str:
        """
        处理一条微信消息
        
        Args:
            body: 微信推送的原始XML
        
        Returns:
            str: 回复的XML
        
        Raises:
            MalformedMessageError: XML无法解析
            GeminiAPIError: Gemini调用失败且未配置错误回复
        """
        message = parse_inbound_message(body)
        
        # 目前只处理文本消息
        if not message.is_text:
            return build_text_reply(message, self.unsupported_reply)
        
        prompt = message.Content or ""
        logger.info("Received prompt from %s: %s", message.FromUserName, prompt)
        
        try:
            text = await self.gemini.generate_text(prompt)
        except GeminiAPIError:
            if self.api_error_reply is None:
                raise
            logger.exception("Gemini调用失败，使用错误回复", extra={"error_kind": GeminiAPIError.error_kind})
            text = self.api_error_reply
        
        return build_text_reply(message, text or self.fallback_reply)


def get_wechat_message_service(
    gemini: GeminiService = Depends(get_gemini_service)
) -> WechatMessageService:
    """FastAPI依赖：获取微信消息服务"""
    return WechatMessageService(
        gemini,
        unsupported_reply=settings.WECHAT_UNSUPPORTED_REPLY,
        fallback_reply=settings.WECHAT_FALLBACK_REPLY,
        api_error_reply=settings.WECHAT_API_ERROR_REPLY
    )
