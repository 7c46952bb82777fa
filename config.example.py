# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACKER_APP_NAME": "App display name (default: task-tracker).",
    "TASKTRACKER_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKTRACKER_DATA_DIR": "Local directory for the log file (default: .local/task_tracker).",
    "TASKTRACKER_LOG_TO_FILE": "Write full DEBUG logs to <data_dir>/task_tracker.log (true/false).",
    # Connectors
    "TASKTRACKER_CONSOLE_ENABLED": "Run the interactive console (true/false).",
    # Task rules
    "TASKTRACKER_GUARD_DONE_ON_UPDATE": (
        "Refuse plain updates that set status to Done while dependencies are unfinished "
        "(default: true)."
    ),
}
