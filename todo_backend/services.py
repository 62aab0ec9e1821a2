import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .config import Settings
from .models import Task, User
from .security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class AuthError(Exception):
    pass


class UserNotFound(AuthError):
    pass


class InvalidCredentials(AuthError):
    pass


class TaskNotFound(Exception):
    pass


# -----------------------------
# Аутентификация
# -----------------------------
def register_user(db: Session, username: str, password: str) -> User:
    new_user = User(username=username, hashed_password=get_password_hash(password))
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # уникальность username проверяет сама БД
        db.rollback()
        raise
    db.refresh(new_user)
    logger.info("User %r registered with id %s", new_user.username, new_user.id)
    return new_user


def authenticate_user(db: Session, username: str, password: str) -> User:
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise UserNotFound(username)
    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials(username)
    return user


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(user.id, settings.jwt_secret)


# -----------------------------
# CRUD для задач
# -----------------------------
def _get_owned_task(db: Session, owner_id: int, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == owner_id).first()
    if task is None:
        raise TaskNotFound(task_id)
    return task


def list_tasks(db: Session, owner_id: int) -> List[Task]:
    return db.query(Task).filter(Task.user_id == owner_id).all()


def create_task(db: Session, owner_id: int, title: str, description: Optional[str]) -> Task:
    db_task = Task(user_id=owner_id, title=title, description=description, completed=False)
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


def update_task(
    db: Session,
    owner_id: int,
    task_id: int,
    title: str,
    description: Optional[str],
    completed: bool,
) -> Task:
    task = _get_owned_task(db, owner_id, task_id)
    task.title = title
    task.description = description
    task.completed = completed
    db.commit()
    db.refresh(task)
    return task


def set_task_completion(db: Session, owner_id: int, task_id: int, completed: bool) -> Task:
    task = _get_owned_task(db, owner_id, task_id)
    task.completed = completed
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, owner_id: int, task_id: int) -> None:
    deleted = (
        db.query(Task)
        .filter(Task.id == task_id, Task.user_id == owner_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise TaskNotFound(task_id)
    db.commit()
