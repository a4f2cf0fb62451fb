# server/models/task.py

import enum
from sqlalchemy import Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from . import Base


# -------------------------------
# Task Model
# -------------------------------

class TaskStatus(str, enum.Enum):
    """
    Lifecycle of a task. New tasks start as OPEN.
    """
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class Task(Base):
    """
    Database model for tasks.
    Each task belongs to exactly one user through user_id.
    """
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.OPEN)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    user = relationship("User", back_populates="tasks")
