import functools
from typing import Callable, Type, TypeVar, ParamSpec
from .exceptions import ValidationException, DataFormatException
from utils.system.logger import logger

T = TypeVar('T')
P = ParamSpec('P')

def log_exception(exc: Exception, func_name: str) -> None:
    """Helper function to log exceptions through the structured logger."""
    logger.warning(
        f"Error in {func_name}",
        extra={"exception_type": type(exc).__name__, "exception_message": str(exc)},
    )

def handle_exceptions(*exception_types: Type[Exception]) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    A decorator that logs the specified exception types and re-raises them.

    Args:
    - *exception_types: Exception types to be caught
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except exception_types as e:
                log_exception(e, func.__name__)
                raise
        return wrapper
    return decorator

def validate_input() -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator for input validation."""
    return handle_exceptions(ValidationException, DataFormatException)
