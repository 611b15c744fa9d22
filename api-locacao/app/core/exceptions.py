# app/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=409)


class ValidationError(AppError):
    def __init__(self, message: str = "Dados inválidos", *, details: list[dict] | None = None) -> None:
        super().__init__(message, status_code=400)
        self.details = details or []


class StorageError(AppError):
    def __init__(self, message: str = "Falha no storage de arquivos") -> None:
        super().__init__(message, status_code=500)
