"""
Task CRUD endpoints. Every route is protected and scoped to the caller.
"""

import logging
import uuid

from flask import Blueprint, request

from core.errors import APIError, NotFoundError, ValidationError, safe_error_response, success_response
from core.timestamps import to_utc_iso
from taskapi.auth import jwt_required
from taskapi.extensions import get_repositories
from taskapi.schemas import CreateTaskRequest, PaginationParams, UpdateTaskRequest, parse_body

logger = logging.getLogger(__name__)

tasks_bp = Blueprint('tasks', __name__, url_prefix='/v1/tasks')


def _parse_task_id(task_id: str) -> str:
    try:
        return str(uuid.UUID(task_id))
    except ValueError:
        raise ValidationError("Invalid task ID")


@tasks_bp.route('', methods=['GET'])
@jwt_required
def list_tasks(ctx):
    """List the caller's tasks, newest first, one page at a time."""
    params = PaginationParams.from_query(request.args)
    try:
        tasks, pagination = get_repositories().tasks.get_all(ctx.user_id, params.page, params.limit)
    except Exception as e:
        return safe_error_response(e, "get tasks")

    return success_response({
        "tasks": [task.to_dict() for task in tasks],
        "pagination": pagination.to_dict(),
    })


@tasks_bp.route('', methods=['POST'])
@jwt_required
def create_task(ctx):
    """Create a task in the pending state."""
    req = parse_body(CreateTaskRequest, request.get_json(silent=True))
    try:
        task = get_repositories().tasks.create(
            ctx.user_id,
            req.title,
            req.description,
            to_utc_iso(req.due_date) if req.due_date else None,
        )
    except Exception as e:
        return safe_error_response(e, "create task")

    return success_response({"task": task.to_dict()}, 201)


@tasks_bp.route('/<task_id>', methods=['GET'])
@jwt_required
def get_task(task_id, ctx):
    """Fetch one task owned by the caller."""
    task_id = _parse_task_id(task_id)
    try:
        task = get_repositories().tasks.get_by_id(task_id, ctx.user_id)
        if task is None:
            raise NotFoundError("Task not found")
    except APIError:
        raise
    except Exception as e:
        return safe_error_response(e, "get task")

    return success_response({"task": task.to_dict()})


@tasks_bp.route('/<task_id>', methods=['PUT'])
@jwt_required
def update_task(task_id, ctx):
    """Apply a partial update to one of the caller's tasks."""
    task_id = _parse_task_id(task_id)
    req = parse_body(UpdateTaskRequest, request.get_json(silent=True))

    repo = get_repositories().tasks
    try:
        task = repo.get_by_id(task_id, ctx.user_id)
        if task is None:
            raise NotFoundError("Task not found")

        if req.title is not None:
            task.title = req.title
        if req.description is not None:
            task.description = req.description
        if req.status is not None:
            task.status = req.status
        if req.due_date is not None:
            task.due_date = to_utc_iso(req.due_date)

        task = repo.update(task)
    except APIError:
        raise
    except Exception as e:
        return safe_error_response(e, "update task")

    return success_response({"task": task.to_dict()})


@tasks_bp.route('/<task_id>', methods=['DELETE'])
@jwt_required
def delete_task(task_id, ctx):
    """Soft-delete one of the caller's tasks."""
    task_id = _parse_task_id(task_id)
    try:
        if not get_repositories().tasks.delete(task_id, ctx.user_id):
            raise NotFoundError("Task not found")
    except APIError:
        raise
    except Exception as e:
        return safe_error_response(e, "delete task")

    return "", 204
