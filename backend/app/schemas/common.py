from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """에러 코드 + 메시지"""

    error: str
    message: str


class ErrorResponse(BaseModel):
    """서비스 에러 응답 (HTTPException detail 래핑 형태)"""

    detail: ErrorDetail
