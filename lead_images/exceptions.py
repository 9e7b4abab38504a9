from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(APIException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ProfileTypeMismatchError(APIException):
    def __init__(self, detail: str = "Profile type mismatch"):
        super().__init__(status_code=400, detail=detail)


class CapacityExhaustedError(APIException):
    """Profile is full and every stored image is priority-protected."""

    def __init__(self, detail: str, remaining_slots: int = 0):
        super().__init__(status_code=409, detail=detail)
        self.remaining_slots = remaining_slots


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )
