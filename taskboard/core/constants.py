"""
FILE: taskboard/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - RAW_STATUS_*: Raw status literal written back for each column
  - *_SYNONYMS: Backend status vocabulary recognised per column
  - DEFAULT_ACTIVATION_DISTANCE, DEFAULT_PERSIST_TIMEOUT
  - NOTIFY_SUCCESS, NOTIFY_ERROR
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Synonyms are stored already normalised (lowercase, single spaces)
"""

# Raw status strings sent to the backend on a column change
RAW_STATUS_TODO = "Not Started"
RAW_STATUS_IN_PROGRESS = "In Progress"
RAW_STATUS_COMPLETED = "Completed"

# Recognised backend vocabulary (normalised)
TODO_SYNONYMS = frozenset({
    "todo", "to do", "not started", "notstarted", "pending", "new", "open", "backlog",
})
IN_PROGRESS_SYNONYMS = frozenset({
    "in progress", "inprogress", "working", "doing", "active", "started",
    "in review", "review",
})
COMPLETED_SYNONYMS = frozenset({
    "completed", "complete", "done", "finished", "closed", "resolved",
})

# Gesture handling
DEFAULT_ACTIVATION_DISTANCE = 3.0  # pixels

# Seconds before a status update is treated as failed
DEFAULT_PERSIST_TIMEOUT = 10.0

# Notification kinds
NOTIFY_SUCCESS = "success"
NOTIFY_ERROR = "error"

# Priorities accepted by task creation
VALID_PRIORITIES = ("low", "normal", "high", "critical")
DEFAULT_PRIORITY = "normal"
