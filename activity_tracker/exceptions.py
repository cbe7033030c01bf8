from datetime import date

from fastapi import HTTPException, status


class NotFoundException(HTTPException):
    def __init__(self, detail: str = "Object not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationException(HTTPException):
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictException(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class CategoryNotFoundException(NotFoundException):
    def __init__(self, category_id: int):
        super().__init__(detail=f"Category with id={category_id} not found")


class WeeklyPlanItemNotFoundException(NotFoundException):
    def __init__(self, item_id: int):
        super().__init__(detail=f"Weekly plan item with id={item_id} not found")


class PlanItemNotFoundException(NotFoundException):
    def __init__(self, item_id: int):
        super().__init__(detail=f"Plan item with id={item_id} not found")


class LogEntryNotFoundException(NotFoundException):
    def __init__(self, log_id: int):
        super().__init__(detail=f"Log entry with id={log_id} not found")


class AlreadyCompletedException(ConflictException):
    def __init__(self, item_id: int, week_start: date):
        super().__init__(detail=f"Weekly plan item {item_id} already completed in week {week_start.isoformat()}")


class NotCompletedException(ConflictException):
    def __init__(self, item_id: int, week_start: date):
        super().__init__(detail=f"Weekly plan item {item_id} not completed in week {week_start.isoformat()}")
