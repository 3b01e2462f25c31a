"""Pydantic schemas for the single trailing instruction of a model reply.

Every variant is a flat object tagged by ``type``. Variant-specific
fields are optional at this level: a recognised tag with a missing field
still deserializes, and the dispatcher degrades it to a no-op.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _ActionBase(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class AddTaskAction(_ActionBase):
    type: Literal["add_task"] = "add_task"
    task: str | None = None


class AddMultipleTasksAction(_ActionBase):
    type: Literal["add_multiple_tasks"] = "add_multiple_tasks"
    # Entries are validated one by one at dispatch time
    tasks: list[Any] | None = None


class MarkCompletedAction(_ActionBase):
    type: Literal["mark_completed"] = "mark_completed"
    task_id: str | None = Field(default=None, alias="taskId")


class MarkPendingAction(_ActionBase):
    type: Literal["mark_pending"] = "mark_pending"
    task_id: str | None = Field(default=None, alias="taskId")


class EditTaskAction(_ActionBase):
    type: Literal["edit_task"] = "edit_task"
    task_id: str | None = Field(default=None, alias="taskId")
    task: str | None = None


class DeleteTaskAction(_ActionBase):
    type: Literal["delete_task"] = "delete_task"
    task_id: str | None = Field(default=None, alias="taskId")


class NoneAction(_ActionBase):
    type: Literal["none"] = "none"


Action = Annotated[
    Union[
        AddTaskAction,
        AddMultipleTasksAction,
        MarkCompletedAction,
        MarkPendingAction,
        EditTaskAction,
        DeleteTaskAction,
        NoneAction,
    ],
    Field(discriminator="type"),
]

ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)

ACTION_TYPES = (
    "add_task",
    "add_multiple_tasks",
    "mark_completed",
    "mark_pending",
    "edit_task",
    "delete_task",
    "none",
)


def action_to_payload(action: BaseModel) -> dict[str, Any]:
    """Serialize an action to its wire shape (``taskId`` spelling, no nulls)."""
    return action.model_dump(by_alias=True, exclude_none=True)
