"""
应用配置文件
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """应用配置"""
    
    # 应用基本配置
    APP_NAME: str = "WeChat Gemini Bridge"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # CORS配置
    CORS_ORIGINS: list = ["*"]
    
    # Gemini配置（必填，缺失时启动失败）
    GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT: float = 60.0
    
    # 微信公众号配置
    WECHAT_TOKEN: str  # 服务器配置中的Token
    WECHAT_UNSUPPORTED_REPLY: str = "Sorry, I can only understand text messages for now."
    WECHAT_FALLBACK_REPLY: str = "I'm not sure how to respond to that."
    WECHAT_API_ERROR_REPLY: Optional[str] = None  # 为空时，Gemini调用失败返回空响应
    
    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
