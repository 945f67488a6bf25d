"""
提问表单的状态流转：idle → loading → success | error → idle
"""
import logging
from pydantic import BaseModel
from app.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred."


class PromptFormState(BaseModel):
    """表单渲染状态"""
    prompt: str = ""
    response: str = ""
    error: str = ""
    loading: bool = False


async def submit_prompt(state: PromptFormState, prompt: str, service: GeminiService) -> PromptFormState:
    """
    提交提示词
    
    空白输入不调用接口，直接返回原状态；
    成功时只填充response，失败时只填充error。
    """
    if not prompt.strip():
        return state
    
    state = PromptFormState(prompt=prompt, loading=True)
    try:
        text = await service.generate_text(prompt)
        state.response = text or ""
    except Exception as e:
        logger.error("Prompt form request failed: %s", e)
        state.error = str(e) or UNKNOWN_ERROR
    finally:
        state.loading = False
    
    return state
