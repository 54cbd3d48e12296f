"""Service layer for todo-mvp."""
