import logging
import json

from app.ballot.model.enums import BallotEventEnum
from app.ballot.model.events import BallotEvent
from app.config import LOGGER_FILE

import sys
from pathlib import Path
from loguru import logger

BALLOT_LEVEL = "BALLOT"


class InterceptHandler(logging.Handler):
    loglevel_mapping = {
        50: 'CRITICAL',
        40: 'ERROR',
        30: 'WARNING',
        20: 'INFO',
        10: 'DEBUG',
        0: 'NOTSET',
    }

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = self.loglevel_mapping[record.levelno]

        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        log = logger.bind(request_id='app')
        log.opt(
            depth=depth,
            exception=record.exc_info
        ).log(level, record.getMessage())


class CustomizeLogger:

    @classmethod
    def make_logger(cls, config_path: Path):

        config = cls.load_logging_config(config_path)
        logging_config = config.get('logger')

        filepath = logging_config.get('path') if LOGGER_FILE is None else LOGGER_FILE

        logger = cls.customize_logging(
            filepath,
            level=logging_config.get('level'),
            retention=logging_config.get('retention'),
            rotation=logging_config.get('rotation'),
            format=logging_config.get('format')
        )
        return logger

    @classmethod
    def customize_logging(cls,
            filepath: Path,
            level: str,
            rotation: str,
            retention: str,
            format: str
    ):

        logger.remove()
        logger.configure(extra={"request_id": None})
        try:
            logger.level(BALLOT_LEVEL)
        except ValueError:
            logger.level(BALLOT_LEVEL, no=25, color="<blue>", icon="")
        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            level=level.upper(),
            format=format
        )
        # an empty path keeps logs on stdout only
        if filepath:
            logger.add(
                str(filepath),
                rotation=rotation,
                retention=retention,
                enqueue=True,
                backtrace=True,
                level=level.upper(),
                format=format
            )
        logging.basicConfig(handlers=[InterceptHandler()], level=0)
        logging.getLogger("uvicorn.access").handlers = [InterceptHandler()]
        for _log in ['uvicorn',
                     'uvicorn.error',
                     'fastapi'
                     ]:
            _logger = logging.getLogger(_log)
            _logger.handlers = [InterceptHandler()]

        return logger.bind(request_id=None, method=None)


    @classmethod
    def load_logging_config(cls, config_path):
        config = None
        with open(config_path) as config_file:
            config = json.load(config_file)
        return config


class BallotLogger(object):
    """
    Customized logger for ballot notifications.

    An instance is subscribed to the engine, every notification the
    engine emits ends up as one record at the BALLOT level.
    """

    def __call__(self, event: BallotEvent):
        self.ballot(event.event, sequence=event.sequence, **event.params())

    def _log(self, level, event: BallotEventEnum, **kwargs):
        logger.bind(event=event.value).log(
            level, "{} {}", event.value, json.dumps(kwargs, sort_keys=True)
        )

    def ballot(self, event: BallotEventEnum, **kwargs):
        self._log(BALLOT_LEVEL, event, **kwargs)


ballot_logger = BallotLogger()

logger_config_path = Path(__file__).with_name("logger_config.json")
logger = CustomizeLogger.make_logger(logger_config_path)
