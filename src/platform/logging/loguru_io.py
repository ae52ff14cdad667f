"""
Logger.io: call tracing for use cases, repositories and entity factories

    @Logger.io
    async def claim_seat(self, *, token: str, seat_number: int) -> ClaimSeatResult: ...

Arguments and return values are logged at DEBUG with claim tokens masked. A call that
receives `config_id` or `trip_id` sets the seating scope for everything it calls, so
nested repository lines carry the bus they touch. An exception is logged once, by the
innermost decorated frame, and re-raised.
"""

from collections.abc import Awaitable
from contextvars import Token
from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import (
    SCOPE_KEYWORDS,
    ExtraField,
    call_depth_var,
    custom_logger,
    seating_scope_var,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)

_F = TypeVar('_F', bound=Callable[..., Any])


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}
        self.depth = 2  # _enter/_leave/_fail -> wrapper -> caller

    @staticmethod
    def _enter_scope(kwargs: dict[str, Any]) -> Token[str] | None:
        for key in SCOPE_KEYWORDS:
            if (value := kwargs.get(key)) is not None:
                return seating_scope_var.set(f'{key}={value}')
        return None

    def _enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Token[str] | None:
        scope = self._enter_scope(kwargs)
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if settings.DEBUG:  # masking walks the whole payload
            self._custom_logger.bind(**self.extra).opt(depth=self.depth).debug(
                f'args: {self.mask_sensitive(args)}, kwargs: {self.mask_sensitive(kwargs)}'
            )
        return scope

    def _leave(self, return_value: Any) -> None:
        if settings.DEBUG:
            self._custom_logger.bind(**self.extra).opt(depth=self.depth).debug(
                f'return: {self.mask_sensitive(return_value)}'
            )

    def _fail(self, e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        bound = self._custom_logger.bind(**self.extra).opt(depth=self.depth)
        # Expected outcomes (seat taken, link expired, ...) carry no traceback
        if isinstance(e, CustomBaseError):
            bound.error(f'{type(e).__name__}[{e.status_code}]: {e}')
        else:
            bound.exception(f'{type(e).__name__}: {e}')

    @staticmethod
    def _exit_scope(scope: Token[str] | None) -> None:
        reset_call_depth()
        if scope is not None:
            seating_scope_var.reset(scope)

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def mask_sensitive(self, data: Any) -> Any:
        if isinstance(data, dict):
            processed: Any = {
                key: self.mask_sensitive(should_mask_keyword(key, value))
                for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            processed = type(data)(self.mask_sensitive(item) for item in data)
        else:
            processed = mask_sensitive(data)
        return truncate_content(processed) if self.truncate_content else processed

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                scope = None
                try:
                    scope = self._enter(args, kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    return_value = await cast(Awaitable[Any], func(*args, **kwargs))
                    self._leave(return_value)
                    return return_value
                except Exception as e:
                    self._fail(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    self._exit_scope(scope)

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            scope = None
            try:
                scope = self._enter(args, kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                return_value = func(*args, **kwargs)
                self._leave(return_value)
                return return_value
            except Exception as e:
                self._fail(e)
                if self.reraise:
                    raise
                return None
            finally:
                self._exit_scope(scope)

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator
