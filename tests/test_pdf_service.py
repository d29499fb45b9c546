"""
Tests for the grade report renderer (HTML template + PDF conversion).
"""

from datetime import date
from unittest.mock import patch

import pytest

from schemas.reports import AnalysisReport, ClassSummary, StudentGradeView, SubjectSnapshot, TermGrades
from services.pdf_service import PDFService, content_disposition, report_filename


@pytest.fixture
def report():
    return AnalysisReport(
        subject=SubjectSnapshot(code="CC101", name="Introduction to Computing", description="Fundamentals"),
        summary=ClassSummary(total_students=2, passed=1, failed=1, average_grade="2.88"),
        analysis="Half the class is struggling.",
        recommendations="Schedule remedial sessions.",
        passed_students=("Ana Cruz",),
        failed_students=("Ben Reyes",),
        students_data=(
            StudentGradeView(id=1, student_number="2024-0001", name="Ana Cruz",
                             grades=TermGrades(prelim=1.5, midterm=2.0, semifinal=1.0, final=1.5), average=1.5),
            StudentGradeView(id=2, student_number="2024-0002", name="Ben Reyes",
                             grades=TermGrades(prelim=4.0, midterm=4.5), average=4.25),
        ),
    )


@pytest.fixture
def service():
    return PDFService()


class TestRenderHtml:
    def test_header_and_summary(self, service, report):
        html = service.render_grade_report_html(report, on=date(2025, 3, 7))

        assert "CC101 - Introduction to Computing" in html
        assert "Fundamentals" in html
        assert "Generated on: March 7, 2025" in html
        assert "2.88" in html
        assert "Passed Students (1)" in html
        assert "Failed Students (1)" in html

    def test_absent_terms_rendered_as_dash(self, service, report):
        html = service.render_grade_report_html(report)

        ben_row = html.split("2024-0002")[1].split("</tr>")[0]
        assert "<td>4</td>" in ben_row
        assert "<td>4.5</td>" in ben_row
        assert ben_row.count("<td>-</td>") == 2
        assert "4.25" in ben_row

    def test_empty_recommendations_section_omitted(self, service, report):
        html = service.render_grade_report_html(report.model_copy(update={"recommendations": ""}))
        assert "Recommendations</div>" not in html

    def test_text_is_escaped(self, service, report):
        html = service.render_grade_report_html(report.model_copy(update={"analysis": "<b>bold</b>"}))
        assert "&lt;b&gt;bold&lt;/b&gt;" in html


class TestRenderPdf:
    def test_pdf_bytes_from_weasyprint(self, service, report):
        with patch("services.pdf_service.weasyprint.HTML") as html:
            html.return_value.write_pdf.return_value = b"%PDF"
            assert service.render_grade_report(report) == b"%PDF"
        assert "Ben Reyes" in html.call_args.kwargs["string"]

    def test_filename(self, report):
        assert report_filename(report, on=date(2025, 3, 7)) == "grade_report_CC101_2025-03-07.pdf"


class TestContentDisposition:
    def test_plain_code(self):
        assert content_disposition("grade_report_CC101_2025-03-07.pdf") == (
            "attachment; filename=\"grade_report_CC101_2025-03-07.pdf\"; "
            "filename*=UTF-8''grade_report_CC101_2025-03-07.pdf"
        )

    def test_space_is_quoted_and_encoded(self):
        value = content_disposition("grade_report_CC 101_2025-03-07.pdf")

        assert 'filename="grade_report_CC 101_2025-03-07.pdf"' in value
        assert "filename*=UTF-8''grade_report_CC%20101_2025-03-07.pdf" in value

    def test_non_ascii_code_is_latin1_safe(self):
        value = content_disposition("grade_report_수학101_2025-03-07.pdf")

        value.encode("latin-1")
        assert 'filename="grade_report___101_2025-03-07.pdf"' in value
        assert "filename*=UTF-8''grade_report_%EC%88%98%ED%95%99101_2025-03-07.pdf" in value

    def test_quote_in_code_does_not_break_header(self):
        value = content_disposition('grade_report_A"B_2025-03-07.pdf')

        assert 'filename="grade_report_A_B_2025-03-07.pdf"' in value
        assert "A%22B" in value
