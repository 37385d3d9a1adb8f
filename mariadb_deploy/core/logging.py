import logging

import structlog

from mariadb_deploy.core.config import settings

REDACTED = "****"


def _redact(value):
    if isinstance(value, dict):
        return {k: REDACTED if k == "password" and v is not None else _redact(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        # mysql takes the password glued to its flag, e.g. -psecret
        return [f"-p{REDACTED}" if isinstance(v, str) and v.startswith("-p") else _redact(v) for v in value]
    return value


def redact_passwords(logger, method_name, event_dict):
    """
    Mask client passwords before an event is rendered.

    Masks any ``password`` key, nested dicts included, and ``-p<password>``
    tokens of logged mysql argument lists.
    """
    return _redact(event_dict)


def build_processors(json_format: bool = False, redact: bool = True) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if redact:
        processors.append(redact_passwords)
    processors.append(structlog.processors.format_exc_info)

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False, exception_formatter=structlog.dev.plain_traceback))
    return processors


def configure_logging():
    """
    Route deploy and client logging through structlog.

    LOG_LEVEL sets the stdlib level, LOG_JSON_FORMAT picks the JSON renderer
    over the console one and LOG_REDACT_PASSWORDS registers ``redact_passwords``.
    Debug level shows every mysql command that is built.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper())

    structlog.configure(
        processors=build_processors(settings.LOG_JSON_FORMAT, settings.LOG_REDACT_PASSWORDS),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=log_level, format="%(message)s [%(name)s]", force=True)
    # pyinfra logs each connector command at DEBUG
    logging.getLogger("pyinfra").setLevel(max(logging.INFO, log_level))

    return structlog.get_logger()


def get_logger(name=None, **context) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger
