import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from schemas.reports import AnalysisReport
from services.pdf_service import PDFService, content_disposition, report_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf", tags=["PDF export"])

pdf_service = PDFService()


# ✅ [PDF] 성적 분석 리포트 PDF
# - 분석 API가 돌려준 리포트 객체를 그대로 받아 렌더링 (DB 재조회 없음)
@router.post("/grade-report")
def generate_grade_report_pdf(report: AnalysisReport):
    try:
        pdf_content = pdf_service.render_grade_report(report)
    except Exception as e:
        logger.exception("PDF rendering failed")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {"code": 500, "message": f"PDF generation failed: {e}"}
            }
        )

    return Response(
        content=pdf_content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(report_filename(report))}
    )
