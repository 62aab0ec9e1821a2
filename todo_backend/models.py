from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import relationship

from .database import Base


# -----------------------------
# Модели БД
# -----------------------------
class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    # колонка называется password, но хранит только bcrypt-хеш
    hashed_password = Column("password", String, nullable=False)
    tasks = relationship("Task", back_populates="owner")


class Task(Base):
    __tablename__ = "tasks"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text)
    description = Column(Text)
    completed = Column(Boolean, nullable=False, default=False)
    owner = relationship("User", back_populates="tasks")


@event.listens_for(Task, "init", propagate=True)
def _task_init(target, args, kwargs):
    if "completed" not in kwargs:
        target.completed = False
