from typing import Annotated, Any, Mapping, Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from .exceptions import DecodeError
from .schemas import TodoCreate, TodoUpdate
from .settings import Settings
from .store import TodoStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_store(request: Request) -> TodoStore:
    """Return the store the application was built with."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


def _decode(model: Type[ModelT], data: Mapping[str, Any], source: str) -> ModelT:
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        detail = [
            {**err, "loc": [source, *err["loc"]]}
            for err in e.errors(include_url=False, include_context=False)
        ]
        raise DecodeError(detail) from e


async def decode_create_form(request: Request) -> TodoCreate:
    """Decode the form-encoded body of a create request."""
    form = await request.form()
    return _decode(TodoCreate, form, "body")


def decode_update_form(request: Request) -> TodoUpdate:
    """Decode the fields of an update request submitted by a GET form."""
    return _decode(TodoUpdate, request.query_params, "query")


StoreDep = Annotated[TodoStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CreateFormDep = Annotated[TodoCreate, Depends(decode_create_form)]
UpdateFormDep = Annotated[TodoUpdate, Depends(decode_update_form)]
