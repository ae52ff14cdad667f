from inspect import Parameter, getfile, getsourcelines, signature
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


_MAX_CONTENT_LENGTH = 500
_MASK = '********'

# Matches `token='abc'` / `password="abc"` inside reprs of attrs classes and dicts
_SENSITIVE_PATTERN = re.compile(
    r"""(\b(?:{keys})\b['"]?)(\s*[=:]\s*)(['"])[^'"]*\3""".format(
        keys='|'.join(sorted(SENSITIVE_KEYWORDS))
    )
)

_POSITIONAL = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_KEYWORD = (Parameter.POSITIONAL_OR_KEYWORD, Parameter.KEYWORD_ONLY)


def get_chain_start_time() -> float:
    start_time = chain_start_time_var.get()
    if not start_time:
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def reset_call_depth() -> None:
    depth = max(call_depth_var.get() - 1, 0)
    call_depth_var.set(depth)
    if depth == 0:
        chain_start_time_var.set(0)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    return f'{basename(getfile(target))}::{func.__qualname__}:{getsourcelines(func)[1]}'


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Drop arguments the wrapped callable would reject: unknown kwargs, surplus positionals."""
    params = list(signature(getattr(func, '__wrapped__', func)).parameters.values())
    kinds = {p.kind for p in params}

    if Parameter.VAR_KEYWORD not in kinds:
        accepted = {p.name for p in params if p.kind in _KEYWORD}
        kwargs = {k: v for k, v in kwargs.items() if k in accepted}

    if Parameter.VAR_POSITIONAL not in kinds:
        slots = [p for p in params if p.kind in _POSITIONAL and p.name not in kwargs]
        args = args[: len(slots)]

    return args, kwargs


def mask_sensitive(data: Any) -> Any:
    text = str(data)
    masked = _SENSITIVE_PATTERN.sub(rf"\1\2'{_MASK}'", text)
    return data if masked == text else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return _MASK if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(data: Any) -> Any:
    if isinstance(data, str) and len(data) > _MAX_CONTENT_LENGTH:
        return f'{data[:_MAX_CONTENT_LENGTH]}...(truncated)'
    return data
