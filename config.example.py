# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real tokens. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKLIST_DATA_DIR": "Local data directory, holds tasklist.log (default: .local/tasklist).",
    # Remote task API
    "TASKLIST_API_BASE_URL": "Base URL of the tasks API (default: http://localhost:8080).",
    "TASKLIST_HTTP_TIMEOUT_MS": "Per-call timeout in milliseconds (default: 10000; <= 0 disables).",
    "TASKLIST_API_TOKEN": "Optional bearer token sent as 'Authorization: Bearer <token>'.",
    "TASKLIST_EXTRA_HEADERS": "Optional extra headers: 'Name: value; Other: value'.",
}
