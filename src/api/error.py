"""API error handling

Use case errors are raised as ClientError and rendered as
{"error": {"code", "message", "reason"}}.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error

# Status codes of the error codes returned by the billing use cases
ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_DATE": status.HTTP_400_BAD_REQUEST,
    "SUBSCRIPTION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        """Build a ClientError with the status code mapped from error.code (500 when unknown)"""
        return cls(
            error,
            status_code=ERROR_STATUS_CODES.get(
                error.code, status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
        )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.model_dump()},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    reason = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    error = Error(
        code="VALIDATION_ERROR",
        message="Invalid request parameters",
        reason=reason,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": error.model_dump()},
    )
