from __future__ import annotations

from fastapi import status


class ResumeAnalyzerError(RuntimeError):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(ResumeAnalyzerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"


class InputMissingError(ResumeAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "input_missing"


class UnsupportedFormatError(ResumeAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "unsupported_format"


class UploadTooLargeError(ResumeAnalyzerError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    code = "upload_too_large"


class ExtractionError(ResumeAnalyzerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "extraction_failed"


class ContentTooShortError(ResumeAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "content_too_short"


class SimilarityServiceError(ResumeAnalyzerError):
    code = "similarity_unavailable"


class PersistenceError(ResumeAnalyzerError):
    code = "persistence_failed"


class RecordNotFoundError(ResumeAnalyzerError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
