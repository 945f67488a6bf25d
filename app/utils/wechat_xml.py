"""
微信XML消息解析与构建
"""
import re
import time
import xml.etree.ElementTree as ET
from typing import Optional

from app.core.errors import MalformedMessageError
from app.schemas.wechat import InboundMessage, OutboundReply

REQUIRED_TAGS = ("ToUserName", "FromUserName", "MsgType")

INVALID_XML_CHARS = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _find_text(root: ET.Element, tag: str) -> Optional[str]:
    node = root.find(tag)
    return node.text if node is not None else None


def parse_inbound_message(body: bytes) -> InboundMessage:
    """
    解析微信推送的XML消息
    
    Args:
        body: 原始请求体
    
    Returns:
        InboundMessage: 解析后的消息
    
    Raises:
        MalformedMessageError: XML格式错误或缺少必需字段
    """
    if not body or not body.strip():
        raise MalformedMessageError("请求体为空")
    
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise MalformedMessageError(f"XML解析失败: {e}") from e
    
    missing = [tag for tag in REQUIRED_TAGS if not _find_text(root, tag)]
    if missing:
        raise MalformedMessageError(f"缺少必需字段: {', '.join(missing)}")
    
    create_time = _find_text(root, "CreateTime")
    return InboundMessage(
        ToUserName=_find_text(root, "ToUserName"),
        FromUserName=_find_text(root, "FromUserName"),
        MsgType=_find_text(root, "MsgType"),
        Content=_find_text(root, "Content"),
        CreateTime=int(create_time) if create_time and create_time.isdigit() else None,
        MsgId=_find_text(root, "MsgId"),
    )


def _cdata(value: str) -> str:
    # XML 1.0不允许的控制字符直接去掉
    value = INVALID_XML_CHARS.sub("", value)
    # "]]>" 会提前结束CDATA段，拆到两个CDATA段中
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def build_reply(inbound: InboundMessage, content: str, create_time: Optional[int] = None) -> OutboundReply:
    """根据收到的消息构建回复，收发双方互换"""
    return OutboundReply(
        ToUserName=inbound.FromUserName,
        FromUserName=inbound.ToUserName,
        CreateTime=create_time if create_time is not None else int(time.time()),
        Content=content,
    )


def render_reply(reply: OutboundReply) -> str:
    """序列化为微信被动回复的XML格式"""
    return (
        "<xml>"
        f"<ToUserName>{_cdata(reply.ToUserName)}</ToUserName>"
        f"<FromUserName>{_cdata(reply.FromUserName)}</FromUserName>"
        f"<CreateTime>{reply.CreateTime}</CreateTime>"
        f"<MsgType>{_cdata(reply.MsgType)}</MsgType>"
        f"<Content>{_cdata(reply.Content)}</Content>"
        "</xml>"
    )


def build_text_reply(inbound: InboundMessage, content: str, create_time: Optional[int] = None) -> str:
    """构建并序列化文本回复"""
    return render_reply(build_reply(inbound, content, create_time))
