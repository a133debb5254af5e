import logging
import sys
import structlog
from structlog.types import Processor


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _renderer(is_debug: bool) -> Processor:
    if is_debug:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def configure_logging(log_level: str = "INFO", is_debug: bool = False):
    """
    Set up structlog for the prompt store and its CLI.

    Store and seeder events are emitted with dotted names and keyword
    context, e.g. ``prompt.created prompt_id=...`` or
    ``seed.finished created=2 skipped=0 invalid=1``. A debug app renders
    them on the console; any other app writes one UTF-8 JSON object per
    line so prompt titles stay readable.

    SQLAlchemy, Alembic and Flask keep logging through the stdlib root
    logger at the same level.
    """
    level = _resolve_level(log_level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.dict_tracebacks,
        structlog.processors.UnicodeDecoder(),
        _renderer(is_debug),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).debug(
        "logging.configured",
        renderer="console" if is_debug else "json",
        level=logging.getLevelName(level),
    )
