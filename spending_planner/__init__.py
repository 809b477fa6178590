#!filepath: spending_planner/__init__.py

from .utils.logger import Logging, logs
from .utils.datetime_utils import WeekUtils
from .utils.errors import UserInputError, TimelineValidationError, CorruptChainError
from .config.app_config import AppConfig

__version__ = "0.1.0"

# alias 简化调用
datetime_utils = WeekUtils

__all__ = [
    "logs", "Logging",
    "AppConfig",
    "datetime_utils",
    "UserInputError", "TimelineValidationError", "CorruptChainError",
    "__version__",
]
