import weasyprint
from datetime import date
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from config.settings import settings
from schemas.reports import AnalysisReport


def _grade_cell(value) -> str:
    """빈 값은 '-' 로 표시"""
    if value is None:
        return "-"
    return f"{value:g}"


def report_filename(report: AnalysisReport, on: Optional[date] = None) -> str:
    on = on or date.today()
    return f"grade_report_{report.subject.code}_{on.isoformat()}.pdf"


def _ascii_fallback(filename: str) -> str:
    return "".join(c if " " <= c <= "~" and c not in "\"\\" else "_" for c in filename)


def content_disposition(filename: str) -> str:
    """다운로드 헤더 값: 따옴표 ASCII 파일명 + RFC 5987 UTF-8 파일명 (한글 과목 코드 대비)"""
    return f"attachment; filename=\"{_ascii_fallback(filename)}\"; filename*=UTF-8''{quote(filename, safe='')}"


class PDFService:
    def __init__(self, template_dir: Union[str, Path, None] = None):
        # 템플릿 환경 설정
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or settings.TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["grade"] = _grade_cell

    def _render_template(self, template_name: str, data: dict) -> str:
        """템플릿을 렌더링하여 HTML 생성"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """HTML을 PDF로 변환"""
        return weasyprint.HTML(string=html_content).write_pdf()

    def render_grade_report_html(self, report: AnalysisReport, on: Optional[date] = None) -> str:
        on = on or date.today()
        return self._render_template("grade_report.html", {
            "report": report,
            "generated_on": f"{on:%B} {on.day}, {on.year}",
        })

    def render_grade_report(self, report: AnalysisReport, on: Optional[date] = None) -> bytes:
        """성적 분석 리포트 PDF 생성 (리포트 객체만 사용, DB 접근 없음)"""
        return self._html_to_pdf(self.render_grade_report_html(report, on))
