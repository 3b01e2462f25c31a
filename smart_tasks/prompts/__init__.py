"""Prompts module - action schemas, templates and prompt builder."""

from smart_tasks.prompts.schemas import (
    ACTION_ADAPTER,
    ACTION_TYPES,
    Action,
    AddTaskAction,
    AddMultipleTasksAction,
    MarkCompletedAction,
    MarkPendingAction,
    EditTaskAction,
    DeleteTaskAction,
    NoneAction,
    action_to_payload,
)

from smart_tasks.prompts.templates import (
    TASK_ASSISTANT_SYSTEM,
    EMPTY_TASKS_PLACEHOLDER,
    WELCOME_MESSAGE,
    PROVIDER_ERROR_MESSAGE,
    TURN_ERROR_MESSAGE,
    FETCH_ERROR_MESSAGE,
)

from smart_tasks.prompts.builder import ChatPrompt, build_prompt, format_tasks

__all__ = [
    # Schemas
    "ACTION_ADAPTER",
    "ACTION_TYPES",
    "Action",
    "AddTaskAction",
    "AddMultipleTasksAction",
    "MarkCompletedAction",
    "MarkPendingAction",
    "EditTaskAction",
    "DeleteTaskAction",
    "NoneAction",
    "action_to_payload",
    # Templates
    "TASK_ASSISTANT_SYSTEM",
    "EMPTY_TASKS_PLACEHOLDER",
    "WELCOME_MESSAGE",
    "PROVIDER_ERROR_MESSAGE",
    "TURN_ERROR_MESSAGE",
    "FETCH_ERROR_MESSAGE",
    # Builder
    "ChatPrompt",
    "build_prompt",
    "format_tasks",
]
