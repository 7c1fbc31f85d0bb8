from __future__ import annotations


class TailoringError(RuntimeError):
    def __init__(self, message: str, *, code: str = "tailoring_failed"):
        super().__init__(message)
        self.code = code


class TailoringValidationError(TailoringError):
    def __init__(self, message: str):
        super().__init__(message, code="validation")


class TailoringAuthError(TailoringError):
    def __init__(self, message: str = "You must be signed in to analyze your resume."):
        super().__init__(message, code="unauthorized")


class RemoteFunctionError(TailoringError):
    def __init__(self, message: str, *, function: str, status_code: int | None = None):
        super().__init__(message, code="remote")
        self.function = function
        self.status_code = status_code
