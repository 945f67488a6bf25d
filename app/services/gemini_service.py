"""
Gemini服务 - 单次同步生成文本
"""
import logging
import httpx
from typing import Optional
from app.core.config import settings
from app.core.errors import GeminiAPIError

logger = logging.getLogger(__name__)


class GeminiService:
    """Gemini generateContent 接口的轻量封装"""
    
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        初始化Gemini服务
        
        Args:
            api_key: Gemini API Key
            model: 模型名称
            api_base: API根地址
            timeout: 请求超时时间（秒）
            transport: 自定义httpx传输层（测试时注入）
        """
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport
    
    @classmethod
    def from_settings(cls) -> "GeminiService":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            api_base=settings.GEMINI_API_BASE,
            timeout=settings.GEMINI_TIMEOUT
        )
    
    async def generate_text(self, prompt: str) -> Optional[str]:
        """
        根据提示词生成文本
        
        Args:
            prompt: 用户提示词
        
        Returns:
            生成的文本；模型未返回可用文本时为None
        
        Raises:
            GeminiAPIError: 网络错误、超时或接口返回非200
        """
        url = f"{self.api_base}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "contents": [
                {"parts": [{"text": prompt}]}
            ]
        }
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise GeminiAPIError(f"Gemini请求失败: {e}") from e
        
        if response.status_code != 200:
            raise GeminiAPIError(
                f"API调用失败: {response.status_code} - {response.text}",
                status_code=response.status_code
            )
        
        try:
            data = response.json()
        except ValueError as e:
            raise GeminiAPIError("Gemini返回了非JSON响应", status_code=response.status_code) from e
        
        if not isinstance(data, dict):
            raise GeminiAPIError("Gemini返回的JSON格式不正确", status_code=response.status_code)
        
        return self._extract_text(data)
    
    @staticmethod
    def _extract_text(data: dict) -> Optional[str]:
        candidates = data.get("candidates") or []
        if not candidates:
            logger.warning("Gemini未返回候选结果: %s", data.get("promptFeedback"))
            return None
        
        candidate = candidates[0] if isinstance(candidates, list) else None
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return None
        
        text = "".join(
            part["text"] for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        return text or None


def get_gemini_service() -> GeminiService:
    """FastAPI依赖：获取Gemini服务"""
    return GeminiService.from_settings()
