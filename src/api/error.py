from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error


class ClientError(Exception):
    """Raised by routes to turn a use case Error into an HTTP response"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    body = {"code": exc.error.code, "message": exc.error.message}
    if exc.error.details:
        body["details"] = exc.error.details
    return JSONResponse(status_code=exc.status_code, content={"error": body})


ERROR_STATUS_CODES = {
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LISTING_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SETTINGS_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ARTIFACT_NOT_READY": status.HTTP_409_CONFLICT,
    "RENDER_FAILED": status.HTTP_502_BAD_GATEWAY,
    "DELIVERY_FAILED": status.HTTP_502_BAD_GATEWAY,
}


def raise_client_error(error: Error):
    """Raise ClientError with the HTTP status matching the error code"""
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        # unexpected use case failures end in _FAILED after a rollback
        if error.code.endswith("_FAILED"):
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        else:
            status_code = status.HTTP_400_BAD_REQUEST
    raise ClientError(error, status_code=status_code)
