import inspect
import traceback
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import typer

from prompt_relay.core.exceptions import RelayError
from prompt_relay.utils.logging import get_logger

logger = get_logger("core.error_handler")


def handle_error(
    error: Exception | None = None,
    *,
    context: str | None = None,
    verbose: bool = False,
    error_str: str | None = None,
) -> None:
    """Central error handler for the application.

    Args:
        error: The exception instance to handle (can be None if error_str is provided).
        context: Optional string describing where the error occurred.
        verbose: If True, log detailed traceback for debugging.
        error_str: Optional error message string if no exception object is available.
    """
    ctx = f"[{context}]" if context else ""

    if error is None:
        logger.critical(f"{ctx} {error_str or 'An unknown error occurred'}".strip())
        return

    if isinstance(error, RelayError):
        # Known errors already carry their subsystem prefix
        logger.error(f"{ctx} {error}".strip())
    else:
        error_msg = str(error) or "No error message provided"
        logger.critical(
            f"{ctx} Unexpected error: {type(error).__name__}: {error_msg}".strip()
        )

    if verbose:
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        logger.debug(f"Traceback:\n{trace}")


T = TypeVar("T")
P = ParamSpec("P")


def safe_entrypoint(
    context: str, *, exit_code: int = 1
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator to wrap CLI entrypoints with unified error handling.

    Errors are logged through ``handle_error`` and turned into a non-zero exit
    so scripts can tell a failed run apart. ``verbose`` is read from the
    keyword arguments when the command declares it.
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            verbose = bool(kwargs.get("verbose", False))
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort):
                raise
            except Exception as err:
                handle_error(err, context=context, verbose=verbose)
                raise typer.Exit(code=exit_code) from err

        wrapper.__signature__ = inspect.signature(func)  # type: ignore[attr-defined]
        return wrapper

    return decorator
