import logging
import sys
from typing import TextIO

# Emojis per level
EMOJI_MAP = {
    "DEBUG": "🐞",
    "INFO": "💡",
    "WARNING": "⚠️",
    "ERROR": "🔥",
    "CRITICAL": "💀",
}

# Extra fields whose values must never reach the log output
SENSITIVE_FIELDS = frozenset({"api_key", "credential", "authorization"})

_DEFAULT_RECORD_ATTRS = frozenset(
    logging.LogRecord(
        name="",
        level=logging.NOTSET,
        pathname="",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    ).__dict__
) | {"message", "asctime"}


class EmojiFormatter(logging.Formatter):
    """Formatter that adds emojis, subsystem context, and extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        emoji = EMOJI_MAP.get(record.levelname, "")
        log_line = (
            f"{emoji} [{record.levelname:<8}] ({record.name}) {record.getMessage()}"
        )

        extra_attrs = {
            k: ("***" if k in SENSITIVE_FIELDS else v)
            for k, v in record.__dict__.items()
            if k not in _DEFAULT_RECORD_ATTRS and not k.startswith("_")
        }

        if extra_attrs:
            extra_str = " ".join(f"{k}={v!r}" for k, v in extra_attrs.items())
            log_line = f"{log_line} | {extra_str}"

        if record.exc_info:
            log_line = f"{log_line}\n{self.formatException(record.exc_info)}"

        return log_line


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> None:
    """Configure root logger with emoji formatter."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(EmojiFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)


def parse_log_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


# Helper for subsystems
def get_logger(name: str) -> logging.Logger:
    """Get a subsystem logger."""
    return logging.getLogger(f"{name}")


def preview(text: str, limit: int = 100) -> str:
    """Shorten free text (prompts, responses) before it goes into a log line."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
