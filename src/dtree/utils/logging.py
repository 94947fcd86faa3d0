from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable, Optional


def log_calls(
    logger_name: str | None = None,
    *,
    summarize: Optional[Callable[[Any], str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator logging calls at DEBUG level; failures are logged and re-raised.

    ``summarize`` renders the return value for the log line. Loaders pass one so
    a whole tree is not dumped through ``repr``.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)
        render = summarize or repr

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug("Calling %s args=%s kwargs=%s", func.__name__, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.exception("Error in %s: %s", func.__name__, e)
                raise
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s returned %s", func.__name__, render(result))
            return result

        return _wrapper

    return _decorator


def summarize_tree(tree: Any) -> str:
    """Short description of a DecisionTree for log lines."""
    root_id = getattr(tree, "root_id", None)
    if root_id is None:
        return repr(tree)
    return f"DecisionTree(root={root_id!r}, nodes={len(tree)})"


__all__ = ["log_calls", "summarize_tree"]
