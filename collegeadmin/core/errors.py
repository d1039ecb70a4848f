"""
Доменные ошибки сервиса.

Сервисный слой (core/, crud/) бросает только их; в HTTP-ответ их превращает
единый обработчик в collegeadmin.main.
"""
from typing import Any, Dict, Optional

from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.details = details


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidInputError(ServiceError):
    """Входные данные не прошли проверку типа или диапазона (например, max_marks = 0)."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class RemoteFailureError(ServiceError):
    """Ошибка хранилища: сеть, права, нарушение ограничения."""
    status_code = status.HTTP_502_BAD_GATEWAY


class ConflictError(ServiceError):
    """Нарушение уникальности (student_id, faculty_id, email)."""
    status_code = status.HTTP_409_CONFLICT
