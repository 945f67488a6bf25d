"""
内部错误类型

对微信的响应始终是200，这里的error_kind只用于日志区分失败原因。
"""
from typing import Optional


class WechatBridgeError(Exception):
    """网关内部错误基类"""
    
    error_kind = "internal"


class MalformedMessageError(WechatBridgeError):
    """微信推送的XML无法解析或缺少必需字段"""
    
    error_kind = "malformed_message"


class GeminiAPIError(WechatBridgeError):
    """Gemini接口调用失败（网络错误、超时或非200响应）"""
    
    error_kind = "upstream_api"
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
