"""
FILE: taskboard/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskboardError (base exception)
  - TaskNotFoundError
  - InvalidInputError
  - MutationInFlightError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TaskboardError for easy catching
  - Status update failures are NOT modelled here: the mutator recovers
    from them locally and only reports them through the notifier
"""


class TaskboardError(Exception):
    """Base exception for all taskboard errors."""
    pass


class TaskNotFoundError(TaskboardError):
    """Task with given ID doesn't exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidInputError(TaskboardError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class MutationInFlightError(TaskboardError):
    """A status change was started while another one is still pending."""

    def __init__(self, task_id: int, pending_task_id: int):
        self.task_id = task_id
        self.pending_task_id = pending_task_id
        super().__init__(
            f"Cannot move task {task_id}: task {pending_task_id} is still being saved"
        )
