"""Exceptions raised by the task store and mapped to HTTP errors by the server."""


class TaskboardError(Exception):
    """Base class for all taskboard errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskboardError):
    """Required input is missing or empty."""

    status_code = 400


class TaskNotFound(TaskboardError):
    """No task (or route) matches the request."""

    status_code = 404

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)
