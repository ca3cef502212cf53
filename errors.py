from fastapi import HTTPException


class InvalidArgument(HTTPException):
    def __init__(self, detail: str = "Invalid argument"):
        super().__init__(status_code=400, detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=409, detail=detail)


class StorageError(HTTPException):
    """Persistence failure. Never retried; the caller sees a generic 500."""

    def __init__(self, detail: str = "Storage error"):
        super().__init__(status_code=500, detail=detail)
