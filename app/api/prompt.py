"""
Gemini提问API - 表单页面与JSON接口
"""
from pathlib import Path
from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from app.core.config import settings
from app.core.errors import GeminiAPIError
from app.schemas.common import ResponseModel
from app.schemas.prompt import PromptRequest, PromptResponse
from app.services.gemini_service import GeminiService, get_gemini_service
from app.services.prompt_form import PromptFormState, submit_prompt

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Gemini提问"])


def _render(request: Request, state: PromptFormState):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.APP_NAME,
            "state": state,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def prompt_page(request: Request):
    """提问表单页面"""
    return _render(request, PromptFormState())


@router.post("/", response_class=HTMLResponse)
async def prompt_submit(
    request: Request,
    prompt: str = Form(""),
    gemini: GeminiService = Depends(get_gemini_service)
):
    """提交表单并渲染结果"""
    state = await submit_prompt(PromptFormState(prompt=prompt), prompt, gemini)
    return _render(request, state)


@router.post("/api/prompt", response_model=ResponseModel)
async def prompt_api(
    request: PromptRequest,
    gemini: GeminiService = Depends(get_gemini_service)
):
    """
    提问JSON接口
    
    请求体:
    {
        "prompt": "Why is the sky blue?"
    }
    """
    if not request.prompt.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="提问内容不能为空"
        )
    
    try:
        text = await gemini.generate_text(request.prompt)
    except GeminiAPIError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    
    return ResponseModel(
        code=200,
        data=PromptResponse(text=text or "").model_dump()
    )
