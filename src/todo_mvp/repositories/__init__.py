"""Repository interfaces and the task cache coordinator.

The TaskStore ABC is the "Port" of the Hexagonal Architecture.

Implementations (Adapters) are in:
- todo_mvp.adapters.sqlite (local storage)
- todo_mvp.adapters.memory (in-memory remote stub)
- todo_mvp.adapters.rest_api (remote API)
"""

from .coordinator import CacheState, TaskCacheCoordinator
from .repository import TaskRef, TaskStore, task_id_of

__all__ = [
    "TaskStore",
    "TaskRef",
    "task_id_of",
    "TaskCacheCoordinator",
    "CacheState",
]
