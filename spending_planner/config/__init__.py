from .app_config import AppConfig
from .log_config import LogConfig
from .planner_config import PlannerConfig, ALLOWED_TIMELINE_WEEKS

__all__ = ["AppConfig", "LogConfig", "PlannerConfig", "ALLOWED_TIMELINE_WEEKS"]
