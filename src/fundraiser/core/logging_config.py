import json
import logging
import sys

# Third-party loggers held at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = ("stripe", "urllib3", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """One JSON object per log line, for the Lambda and container log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str = "INFO") -> None:
    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers = [stdout]
    root.setLevel(level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
