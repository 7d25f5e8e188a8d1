from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a row of the todos table.

    Fields:
    - id: Unique integer identifier, assigned by storage and never reused
    - description: Free text, may be empty
    - done: Boolean completion flag, false on creation
    """

    id: int
    description: str
    done: bool
