import logging
import re

_SECRET_PATTERNS = (
    re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+", re.IGNORECASE),
    re.compile(r"(apikey[=:]\s*)[A-Za-z0-9._\-]+", re.IGNORECASE),
)


class RedactingFilter(logging.Filter):
    """Masks bearer tokens and service keys before records are emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern in _SECRET_PATTERNS:
            redacted = pattern.sub(r"\1[REDACTED]", redacted)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    handler.addFilter(RedactingFilter())

    package_logger = logging.getLogger("ops_control_center")
    package_logger.setLevel(level.upper())
    package_logger.handlers.clear()
    package_logger.addHandler(handler)