"""
JSON error responses in the API's ``{error, errorCode?}`` shape.
"""

from typing import Optional

from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str, error_code: Optional[str] = None) -> JSONResponse:
    content = {"error": message}
    if error_code:
        content["errorCode"] = error_code
    return JSONResponse(status_code=status_code, content=content)
