import logging
from typing import Optional

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import settings
from services.errors import ExternalServiceError
from services.llm.base import LLMClient

logger = logging.getLogger(__name__)

# 생성 설정 (고정값, 사용자 설정 불가)
TEMPERATURE = 0.7
TOP_P = 0.95
TOP_K = 40
MAX_OUTPUT_TOKENS = 2048


def get_llm() -> ChatGoogleGenerativeAI:
    """고정 생성 설정으로 Gemini 채팅 모델 생성"""
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=settings.GEMINI_API_KEY,
        temperature=TEMPERATURE,
        top_p=TOP_P,
        top_k=TOP_K,
        max_output_tokens=MAX_OUTPUT_TOKENS,
        timeout=settings.LLM_TIMEOUT,
        max_retries=0,
    )


def _content_text(content) -> str:
    # 모델 버전에 따라 content가 문자열 또는 part 리스트
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiClient(LLMClient):
    def __init__(self, llm: Optional[ChatGoogleGenerativeAI] = None):
        self._llm = llm

    @property
    def llm(self) -> ChatGoogleGenerativeAI:
        if self._llm is None:
            self._llm = get_llm()
        return self._llm

    async def generate(self, prompt: str) -> str:
        try:
            llm = self.llm
            resp = await llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise ExternalServiceError(f"Gemini request failed: {e}") from e

        text = _content_text(getattr(resp, "content", ""))
        if not text.strip():
            raise ExternalServiceError("Gemini returned an empty response")
        return text
