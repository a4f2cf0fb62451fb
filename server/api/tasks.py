# server/api/tasks.py

from typing import Annotated
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from api.auth import get_current_user
from core.task_service import TaskService
from database import get_db
from models.schemas import TaskCreate, TaskFilter, TaskRead, TaskStatusUpdate
from models.user import User


router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("", response_model=list[TaskRead])
def get_tasks(
    filters: Annotated[TaskFilter, Query()],
    user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.get_tasks(filters, user)


@router.get("/{task_id}", response_model=TaskRead)
def get_task_by_id(
    task_id: int,
    user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.get_task_by_id(task_id, user)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    dto: TaskCreate,
    user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.create_task(dto, user)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    tasks.delete_task(task_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/status", response_model=TaskRead)
def update_task_status(
    task_id: int,
    body: TaskStatusUpdate,
    user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.update_task_status(task_id, body.status, user)
