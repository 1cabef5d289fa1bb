"""Survey custom exceptions"""
from fastapi import HTTPException, status


class MalformedSurveyDataError(Exception):
    """Raised when the persisted survey slot can't be parsed as a record list"""
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored survey data under '{key}' is malformed: {reason}")


class DuplicateSurveyRecordException(HTTPException):
    """Raised when a record with the same id is already stored"""
    def __init__(self, record_id: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Survey record {record_id} already exists"
        )


class NoSurveyDataException(HTTPException):
    """Raised when a summary is requested but no records exist"""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No survey data available"
        )
