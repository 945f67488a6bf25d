"""
测试公共配置

必需的环境变量需要在导入应用之前设置。
"""
import os

os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["WECHAT_TOKEN"] = "testtoken"

import pytest
from fastapi.testclient import TestClient

from fakes import FakeGemini
from app.core.errors import GeminiAPIError
from app.services.gemini_service import get_gemini_service
from main import app


@pytest.fixture()
def fake_gemini():
    fake = FakeGemini()
    app.dependency_overrides[get_gemini_service] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture()
def failing_gemini():
    fake = FakeGemini(error=GeminiAPIError("API调用失败: 500 - boom", status_code=500))
    app.dependency_overrides[get_gemini_service] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    return TestClient(app)
