# server/core/task_service.py

import logging
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import InternalError, NotFoundError
from models.schemas import TaskCreate, TaskFilter
from models.task import Task, TaskStatus
from models.user import User


logger = logging.getLogger(__name__)


class TaskService:
    """
    Task CRUD scoped to the owning user.
    Every method takes the authenticated user and filters on its id, so a task
    owned by someone else behaves exactly like a missing one.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_tasks(self, filters: TaskFilter, user: User) -> list[Task]:
        query = self.db.query(Task).filter(Task.user_id == user.id)

        if filters.status is not None:
            query = query.filter(Task.status == filters.status)

        if filters.search:
            query = query.filter(or_(
                Task.title.icontains(filters.search, autoescape=True),
                Task.description.icontains(filters.search, autoescape=True),
            ))

        try:
            return query.order_by(Task.id.asc()).all()
        except SQLAlchemyError as e:
            logger.exception(
                'Failed to get tasks for user "%s". Filters: %s',
                user.username,
                filters.model_dump_json(),
            )
            raise InternalError() from e

    def get_task_by_id(self, task_id: int, user: User) -> Task:
        try:
            task = self.db.query(Task).filter_by(id=task_id, user_id=user.id).first()
        except SQLAlchemyError as e:
            logger.exception('Failed to get task %s for user "%s"', task_id, user.username)
            raise InternalError() from e

        if task is None:
            raise NotFoundError(f'Task with ID "{task_id}" not found')
        return task

    def create_task(self, dto: TaskCreate, user: User) -> Task:
        task = Task(
            title=dto.title,
            description=dto.description,
            status=TaskStatus.OPEN,
            user_id=user.id,
        )

        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(
                'Failed to create a task for user "%s". Data: %s',
                user.username,
                dto.model_dump_json(),
            )
            raise InternalError() from e

        return task

    def delete_task(self, task_id: int, user: User) -> None:
        try:
            affected = self.db.query(Task).filter_by(id=task_id, user_id=user.id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception('Failed to delete task %s for user "%s"', task_id, user.username)
            raise InternalError() from e

        if affected == 0:
            raise NotFoundError(f'Task with ID "{task_id}" not found')

    def update_task_status(self, task_id: int, status: TaskStatus, user: User) -> Task:
        task = self.get_task_by_id(task_id, user)
        task.status = status

        try:
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(
                'Failed to update status of task %s for user "%s"', task_id, user.username
            )
            raise InternalError() from e

        return task
