"""서비스 예외"""


class ServiceError(Exception):
    """요청 처리 중 발생하는 기본 예외

    exception handler 가 {"success": false, "error": message} 로 응답한다.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """필수 필드 누락 등 잘못된 요청"""
    status_code = 400


class StorageQueryError(ServiceError):
    """요청 처리 중 DB 오류 (내부 상세는 로그에만 남김)"""
    status_code = 500

    def __init__(self):
        super().__init__("database error")


class StorageInitError(Exception):
    """DB 초기화 재시도 횟수 초과"""

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"DB initialization failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
