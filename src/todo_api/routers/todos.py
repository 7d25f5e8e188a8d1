from __future__ import annotations

import logging
from typing import Annotated, List

from fastapi import APIRouter, Path, status
from fastapi.responses import RedirectResponse

from ..dependencies import CreateFormDep, SettingsDep, StoreDep, UpdateFormDep
from ..schemas import ID_MAX, ID_MIN, TodoOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"])


def _redirect(target: str) -> RedirectResponse:
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every Todo item ordered by ascending id.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"description": "Storage error"},
    },
)
def list_todos(store: StoreDep) -> List[TodoOut]:
    """
    List all todos.
    """
    logger.info("Requested list of todos")
    return [TodoOut(**it) for it in store.list_all()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "/create",
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
    summary="Create Todo",
    description="Create a Todo item from a form-encoded description, then redirect to the front-end.",
    responses={
        303: {"description": "Todo created"},
        422: {"description": "Malformed form body"},
        500: {"description": "Storage error"},
    },
)
def create_todo(
    payload: CreateFormDep,
    store: StoreDep,
    settings: SettingsDep,
) -> RedirectResponse:
    """
    Create a new Todo. Its id is assigned by storage and it starts not done.
    """
    logger.info("Creating new Todo")
    store.create(payload.description)
    return _redirect(settings.redirect_url)


# PUBLIC_INTERFACE
@router.get(
    "/delete/{todo_id}",
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
    summary="Delete Todo",
    description="Delete a Todo item by ID, then redirect to the front-end. Unknown ids are ignored.",
    responses={
        303: {"description": "Todo deleted or did not exist"},
        422: {"description": "Id is not an integer"},
        500: {"description": "Storage error"},
    },
)
def delete_todo(
    todo_id: Annotated[int, Path(ge=ID_MIN, le=ID_MAX, description="Identifier of the todo item to delete")],
    store: StoreDep,
    settings: SettingsDep,
) -> RedirectResponse:
    """
    Delete a Todo. Deleting an id that does not exist still redirects.
    """
    logger.info("Deleting Todo with Id: %s", todo_id)
    store.delete_by_id(todo_id)
    return _redirect(settings.redirect_url)


# PUBLIC_INTERFACE
@router.get(
    "/update",
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
    summary="Update Todo",
    description=(
        "Overwrite description and done of a Todo item, then redirect to the front-end.\n\n"
        "Fields are read from the query string as submitted by a GET form:\n"
        "- id: identifier of the todo to update\n"
        "- description: new text\n"
        "- done: new completion flag\n\n"
        "Unknown ids are ignored."
    ),
    responses={
        303: {"description": "Todo updated or did not exist"},
        422: {"description": "Missing or malformed field"},
        500: {"description": "Storage error"},
    },
)
def update_todo(
    payload: UpdateFormDep,
    store: StoreDep,
    settings: SettingsDep,
) -> RedirectResponse:
    """
    Full overwrite of the mutable fields of a Todo item.
    """
    logger.info("Updating Id: %s", payload.id)
    store.update_by_id(payload.id, payload.description, payload.done)
    return _redirect(settings.redirect_url)
