from .result import Result, Success, Failure, Unit, unit, catching
from .async_result import AsyncResult, async_result
from .errors import ResultError, NoneValueError, UnwrapError
from .logging import logger, configure_logger
from .version import __version__

__all__ = [
    "Result", "Success", "Failure", "Unit", "unit", "catching",
    "AsyncResult", "async_result",
    "ResultError", "NoneValueError", "UnwrapError",
    "logger", "configure_logger", "__version__",
]
