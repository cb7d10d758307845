"""JSON logging for the snaplink lambdas

`initialize_logging()` runs when a lambda package is imported (see
`snaplink/lambdas/*/__init__.py`). Each record becomes one JSON line on
stdout, tagged with the deployment it came from and any `extra` fields:

{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "snaplink.services.shortener_service",
    "message": "Created short URL.",
    "app": "snaplink",
    "env": "prod",
    "code": "aB3xY9",
    "event": "SHORT_URL_CREATED"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from snaplink.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}

# AWS SDK loggers are chatty at DEBUG and would drown the application events
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    def __init__(self, app: str | None = None, env: str | None = None):
        super().__init__()
        self.deployment = {key: value for key, value in (('app', app), ('env', env)) if value}

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.deployment,
        }
        log.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Datetimes, exceptions etc. passed through `extra` are logged as their str()
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging to stdout as JSON

    Args:
        level (str, optional): root log level, defaults to $LOG_LEVEL or INFO.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                    'app': os.getenv(ENV.App.APP_NAME),
                    'env': os.getenv(ENV.App.APP_ENV, 'local').lower(),
                },
            },
            'handlers': {
                'stdout': {'class': 'logging.StreamHandler', 'formatter': 'json', 'stream': 'ext://sys.stdout'},
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {'level': level, 'handlers': ['stdout']},
        }
    )
