from fastapi import HTTPException, status


class InspectionServiceError(HTTPException):
    """Base for failures a handler detects itself; rendered as ``{"detail": message}``."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(InspectionServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(InspectionServiceError):
    status_code = status.HTTP_409_CONFLICT


class ReferentialIntegrityError(InspectionServiceError):
    status_code = status.HTTP_409_CONFLICT
