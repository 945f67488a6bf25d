"""
微信公众号回调API
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Request, Query
from fastapi.responses import PlainTextResponse, Response
from app.core.config import settings
from app.core.errors import WechatBridgeError
from app.schemas.wechat import VerificationRequest
from app.services.wechat_service import WechatMessageService, get_wechat_message_service
from app.utils.wechat_signature import verify_signature

logger = logging.getLogger(__name__)

router = APIRouter(tags=["微信公众号"])


@router.get("/api/wechat")
async def wechat_verify(
    signature: Optional[str] = Query(None),
    timestamp: Optional[str] = Query(None),
    nonce: Optional[str] = Query(None),
    echostr: Optional[str] = Query(None)
):
    """
    微信服务器配置验证（GET请求）
    微信首次配置时会调用此接口进行验证
    """
    if not signature or not timestamp or not nonce or not echostr:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing verification parameters."
        )
    
    params = VerificationRequest(signature=signature, timestamp=timestamp, nonce=nonce, echostr=echostr)
    
    if verify_signature(settings.WECHAT_TOKEN, params.timestamp, params.nonce, params.signature):
        return PlainTextResponse(content=params.echostr)
    
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Verification failed."
    )


@router.post("/api/wechat")
async def wechat_message(
    request: Request,
    service: WechatMessageService = Depends(get_wechat_message_service)
):
    """
    接收微信消息（POST请求）
    
    无论处理是否成功都返回200，避免微信超时重试；
    失败时返回空响应，错误类型写入日志。
    """
    try:
        body = await request.body()
        reply_xml = await service.handle(body)
    except WechatBridgeError as e:
        logger.error("Error handling message [%s]: %s", e.error_kind, e, extra={"error_kind": e.error_kind})
        return PlainTextResponse(content="")
    except Exception:
        logger.exception("Error handling message [internal]", extra={"error_kind": "internal"})
        return PlainTextResponse(content="")
    
    return Response(content=reply_xml, media_type="application/xml")
