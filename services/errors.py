class GradePortalError(Exception):
    """서비스 계층 공통 예외 (code로 실패 종류 구분)"""
    code = "GRADE_PORTAL_ERROR"
    status_code = 500


class StoreError(GradePortalError):
    """DB(레코드 저장소) 호출 실패"""
    code = "STORE_ERROR"
    status_code = 502


class BatchSaveError(StoreError):
    """성적 일괄 저장 중 일부 요청 실패 (이미 성공한 쓰기는 롤백되지 않음)"""
    code = "BATCH_SAVE_FAILED"

    def __init__(self, message: str = "Some grades failed to save", failed_student_ids=()):
        super().__init__(message)
        self.failed_student_ids = tuple(failed_student_ids)


class ExternalServiceError(GradePortalError):
    """Gemini 호출 실패 (쿼터, 네트워크 등)"""
    code = "EXTERNAL_SERVICE_ERROR"
    status_code = 502


class AnalysisFormatError(GradePortalError):
    """AI 응답이 analysis/recommendations JSON 형식이 아님"""
    code = "ANALYSIS_FORMAT_ERROR"
    status_code = 502

    def __init__(self, message: str = "AI returned invalid JSON format", raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
