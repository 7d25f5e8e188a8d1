from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Ids are stored as signed 64-bit integers
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Form fields for creating a new Todo item.

    Unknown fields are ignored. The description is stored as given; an empty
    string is accepted.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"description": "Buy milk"}},
    )

    description: str = Field(..., description="Text of the todo item")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Form fields for overwriting an existing Todo item.
    All fields are required; the id selects the row and is never changed.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {"id": 1, "description": "Buy oat milk", "done": True}
        },
    )

    id: int = Field(..., ge=ID_MIN, le=ID_MAX, description="Identifier of the todo item to update")
    description: str = Field(..., description="New text of the todo item")
    done: bool = Field(..., description="New completion status flag")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": 1, "description": "Buy milk", "done": False}
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    description: str = Field(..., description="Text of the todo item")
    done: bool = Field(..., description="Completion status flag")
