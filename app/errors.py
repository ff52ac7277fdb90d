"""
Domain failures raised from the service layer.

Each one is an HTTPException so a route never has to translate it: FastAPI
renders ``{"detail": "<message>"}`` with the matching status code. None of
them is fatal; the request fails and the session is discarded.
"""

from fastapi import HTTPException


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ConflictError(HTTPException):
    # duplicate or closed survey; surfaced as 400 on the submission endpoint
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=400, detail=detail)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, detail=detail)


class InvalidArgumentError(HTTPException):
    def __init__(self, detail: str = "Invalid argument"):
        super().__init__(status_code=400, detail=detail)


class InsufficientBalanceError(HTTPException):
    def __init__(self, detail: str = "Insufficient balance"):
        super().__init__(status_code=400, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail)
