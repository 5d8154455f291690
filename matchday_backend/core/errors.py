# errors.py
# Domain error taxonomy. Each error is an HTTPException so routes and
# services can raise it directly and FastAPI renders {"detail": ...}.

from fastapi import HTTPException


class MatchdayError(HTTPException):
    status_code = 400

    def __init__(self, detail: str, headers: dict = None):
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)


class Unauthenticated(MatchdayError):
    status_code = 401

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class PermissionDenied(MatchdayError):
    status_code = 403


class InvalidArgument(MatchdayError):
    status_code = 400


class NotFound(MatchdayError):
    status_code = 404


class AlreadyExists(MatchdayError):
    status_code = 409


class FailedPrecondition(MatchdayError):
    """The request is valid but the match is in the wrong state for it."""
    status_code = 409
