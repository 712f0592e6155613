"""Preferred key order of structured log events."""

DEFAULT_EVENT_KEY_ORDER: list[str] = ["ts", "level"]

EVENT_KEY_ORDER: dict[str, list[str]] = {
    "app_start": [
        "ts",
        "level",
        "content_id",
        "content_dir",
        "slot",
        "debug",
        "log_file",
    ],
    "app_stop": [
        "ts",
        "level",
        "reason",
        "uptime_ms",
        "error_type",
        "error",
    ],
    "command_exec": [
        "ts",
        "level",
        "command",
        "result",
        "elapsed_ms",
    ],
    "command_error": [
        "ts",
        "level",
        "command",
        "error_type",
        "error",
    ],
    "save_write": [
        "ts",
        "level",
        "slot",
        "save_file",
        "history_len",
    ],
}
