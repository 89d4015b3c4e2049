import logging
import os
import sys
import uuid
from logging.handlers import TimedRotatingFileHandler


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default

    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_log_level(raw_level: str | None, default: int) -> int:
    if not raw_level:
        return default

    normalized = raw_level.strip().upper()
    if normalized.isdigit():
        return int(normalized)

    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed
    return default


class RunContextFilter(logging.Filter):
    """Stamps every record with the run id and the command being run."""

    def __init__(self, run_id: str, command: str):
        super().__init__()
        self.run_id = run_id
        self.command = command

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        record.command = self.command
        return True


def configure_logging(command: str = "portfolio") -> str:
    run_id = os.getenv("BIGUNIT_RUN_ID", uuid.uuid4().hex[:12])

    base_level = _parse_log_level(os.getenv("BIGUNIT_LOG_LEVEL"), logging.INFO)
    console_level = _parse_log_level(
        os.getenv("BIGUNIT_CONSOLE_LOG_LEVEL"),
        base_level,
    )
    file_level = _parse_log_level(
        os.getenv("BIGUNIT_FILE_LOG_LEVEL"),
        _parse_log_level(os.getenv("BIGUNIT_LOG_LEVEL"), logging.DEBUG),
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt=(
            "%(asctime)s %(levelname)s %(name)s "
            "[run_id=%(run_id)s command=%(command)s] %(message)s"
        )
    )
    context_filter = RunContextFilter(run_id=run_id, command=command)

    # stderr keeps stdout free for the command's own output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    if env_bool("BIGUNIT_LOG_TO_FILE", False):
        log_dir = os.getenv("BIGUNIT_LOG_DIR", "logs")
        os.makedirs(log_dir, exist_ok=True)
        backup_count = int(os.getenv("BIGUNIT_LOG_BACKUP_COUNT", "30"))

        file_handler = TimedRotatingFileHandler(
            os.path.join(log_dir, "bigunit.log"),
            when="midnight",
            interval=1,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger("bigunit").setLevel(
        _parse_log_level(os.getenv("BIGUNIT_LIBRARY_LOG_LEVEL"), logging.NOTSET)
    )

    return run_id
