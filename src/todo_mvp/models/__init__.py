"""todo-mvp domain models.

Pydantic models for tasks, listing filters, statistics and configuration.
"""

from .config_models import AppConfig, LocalConfig, OutputConfig, RemoteConfig
from .task import Task, TaskFilterType, TaskStatistics

__all__ = [
    # Task models
    "Task",
    "TaskFilterType",
    "TaskStatistics",
    # Config models
    "AppConfig",
    "LocalConfig",
    "RemoteConfig",
    "OutputConfig",
]
