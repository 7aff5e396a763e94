from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, message: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class Unauthenticated(HTTPException):
    def __init__(self, message: str = "Unauthorized Access"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


class Forbidden(HTTPException):
    def __init__(self, message: str = "Forbidden Access"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)


class NotFound(HTTPException):
    def __init__(self, message: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class Conflict(HTTPException):
    def __init__(self, message: str = "Already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=message)


class InternalError(HTTPException):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)
