"""
services/narrative_analyzer.py

집계된 성적 데이터 → 고정 프롬프트 → Gemini → {analysis, recommendations}

응답 처리 규칙
- 앞뒤 공백 제거
- ```json 코드블록이면 펜스 제거, 라벨 없는 ``` 코드블록도 펜스 제거
- 정확히 두 개의 문자열 필드(analysis, recommendations)를 가진 JSON 객체만 허용
- 실패 시 AnalysisFormatError(raw_text 포함), 부분 복구/재시도 없음
"""

import json
import logging
import re
from typing import Optional, Sequence

from pydantic import ValidationError

from schemas.reports import NarrativeResult, StudentGradeView, SubjectSnapshot
from services.grade_aggregator import PASSING_THRESHOLD
from services.errors import AnalysisFormatError
from services.llm.base import LLMClient
from services.llm.llm_gemini import GeminiClient

logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTION = """You are an AI student performance analyzer.
You will receive data including students, their grades, and subject details.

You must respond in **strict JSON** format (no markdown, no code blocks, just pure JSON):

{
  "analysis": "Detailed analysis of student performance, trends, and observations (3-5 sentences)",
  "recommendations": "Actionable recommendations for improving student outcomes (3-5 sentences)"
}

Rules:
- The grading system: lower is better. Passing threshold is < 3.0
- Students with average >= 3.0 have failed
- Use logical, evidence-based reasoning in your analysis
- Provide specific, actionable recommendations
- Be concise but insightful
- ONLY return the JSON object, nothing else"""

ANALYSIS_REQUEST = """Provide insights on:
1. Overall class performance
2. Trends across grading periods
3. Struggling students
4. Recommendations for improvement

Return ONLY the JSON object, no other text."""


def build_dataset(subject: SubjectSnapshot, students: Sequence[StudentGradeView],
                  threshold: float = PASSING_THRESHOLD) -> dict:
    return {
        "subject": subject.model_dump(by_alias=True),
        "students": [s.model_dump(by_alias=True) for s in students],
        "passingThreshold": threshold,
    }


def build_prompt(subject: SubjectSnapshot, students: Sequence[StudentGradeView],
                 threshold: float = PASSING_THRESHOLD) -> str:
    dataset = json.dumps(build_dataset(subject, students, threshold), indent=2, ensure_ascii=False)
    return (
        f"{SYSTEM_INSTRUCTION}\n\n"
        "Analyze the following student performance data:\n\n"
        f"{dataset}\n\n"
        f"{ANALYSIS_REQUEST}"
    )


def unwrap_code_fence(text: str) -> str:
    """```json ... ``` / ``` ... ``` 펜스 제거"""
    text = text.strip()
    if text.startswith("```json"):
        text = re.sub(r"```json\n?", "", text)
        text = re.sub(r"```\n?\Z", "", text)
    elif text.startswith("```"):
        text = re.sub(r"```\n?", "", text)
    return text.strip()


def parse_analysis_response(raw_text: str) -> NarrativeResult:
    text = unwrap_code_fence(raw_text)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response: {text}")
        raise AnalysisFormatError(raw_text=raw_text) from e

    if not isinstance(payload, dict):
        logger.error(f"AI response is not a JSON object: {text}")
        raise AnalysisFormatError(raw_text=raw_text)

    try:
        return NarrativeResult.model_validate(payload)
    except ValidationError as e:
        logger.error(f"AI response does not match analysis schema: {text}")
        raise AnalysisFormatError(raw_text=raw_text) from e


class NarrativeAnalyzer:
    def __init__(self, client: Optional[LLMClient] = None):
        self.client = client or GeminiClient()

    async def analyze(self, subject: SubjectSnapshot, students: Sequence[StudentGradeView]) -> NarrativeResult:
        prompt = build_prompt(subject, students)
        text = await self.client.generate(prompt)
        return parse_analysis_response(text)
