"""
Loguru sinks and the shared state behind Logger.io

Besides the emitting process, each line carries the seating scope of its call chain:
the bus configuration or trip being worked on.
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING
import zoneinfo

from loguru import logger as loguru_logger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


if TYPE_CHECKING:
    from loguru import Record


# <repo>/logs, or the test log directory when running under pytest
LOG_DIR = os.environ.get('TEST_LOG_DIR', str(Path(__file__).resolve().parents[3] / 'logs'))

# Claim tokens are bearer capabilities, never log them in clear
SENSITIVE_KEYWORDS = frozenset({'password', 'token'})

# Keyword arguments naming the aggregate a call works on, most specific first
SCOPE_KEYWORDS = ('config_id', 'trip_id')
NO_SCOPE = '-'

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)
seating_scope_var: ContextVar[str] = ContextVar('seating_scope_var', default=NO_SCOPE)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    SEATING_SCOPE = 'seating_scope'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _inject_seating_scope(record: 'Record') -> None:
    # Runs in the caller's context, so the scope of the current task is read
    record['extra'][ExtraField.SEATING_SCOPE] = seating_scope_var.get()


class InterceptHandler(logging.Handler):
    """Route stdlib logging (asyncpg, sqlalchemy, asyncio) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith('sqlalchemy') and record.levelno < logging.WARNING:
            return
        if record.name == 'asyncio' and record.levelno <= logging.DEBUG:
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        f'<m>{{extra[{ExtraField.SEATING_SCOPE}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _file_sink_path() -> str:
    local_now = datetime.now(zoneinfo.ZoneInfo(settings.LOG_TIMEZONE))
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    return f'{LOG_DIR}/{prefix}{local_now:%Y-%m-%d_%H}.log'


loguru_logger.remove()
custom_logger = loguru_logger.patch(_inject_seating_scope).bind(
    **{
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.SEATING_SCOPE: NO_SCOPE,
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }
)

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# Hourly files in DEBUG only; production ships stdout
if settings.DEBUG:
    custom_logger.add(
        _file_sink_path(),
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
