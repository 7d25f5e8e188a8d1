"""
FastAPI Todo API package.

Exposes the application factory and the storage gateway for convenience
imports: ``from todo_api import create_app, TodoStore``.
"""

from .main import create_app
from .store import TodoStore

__all__ = ["create_app", "TodoStore"]
