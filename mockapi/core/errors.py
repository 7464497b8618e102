# mockapi/core/errors.py
from fastapi import HTTPException


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Invalid request body"):
        super().__init__(status_code=400, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class AuthError(HTTPException):
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(status_code=401, detail=detail)


MISSING_AUTH_HEADER = "Missing or invalid authorization header"
INVALID_TOKEN = "Invalid or expired token"
INVALID_CREDENTIALS = "Invalid credentials"
ORIGIN_NOT_ALLOWED = "Origin not allowed"
