"""todo-mvp: task management backed by a cached local/remote task store."""

__version__ = "0.1.0"
