import logging
import time
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import services
from .config import APP_PORT, Settings
from .database import Base, get_db, make_engine, make_session_factory
from .logging_setup import setup_logging
from .schemas import (
    RegisterOut,
    TaskCompletion,
    TaskCreate,
    TaskOut,
    TaskUpdate,
    Token,
    UserCredentials,
    UserOut,
)
from .security import get_current_user_id, get_settings

logger = logging.getLogger(__name__)


# -----------------------------
# Инициализация приложения
# -----------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    engine = make_engine(settings.database_url)
    # Автоматическая инициализация таблиц
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Todo API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    _install_error_handlers(app)
    _install_request_logging(app)
    _install_routes(app)
    return app


# -----------------------------
# Обработка ошибок
# -----------------------------
def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(services.AuthError)
    async def auth_error(request: Request, exc: services.AuthError):
        # не сообщаем клиенту, существует ли такой пользователь
        logger.warning("Failed login for %r: %s", str(exc), type(exc).__name__)
        return PlainTextResponse("Invalid username or password", status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(services.TaskNotFound)
    async def task_not_found(request: Request, exc: services.TaskNotFound):
        return PlainTextResponse("Task not found", status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(SQLAlchemyError)
    async def store_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return PlainTextResponse("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _install_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response


def _install_routes(app: FastAPI) -> None:
    # -----------------------------
    # Эндпоинты аутентификации
    # -----------------------------
    @app.post("/register", response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
    def register(user: UserCredentials, db: Session = Depends(get_db)):
        new_user = services.register_user(db, user.username, user.password)
        return {"message": "User registered", "user": UserOut.model_validate(new_user)}

    @app.post("/login", response_model=Token)
    def login(
        credentials: UserCredentials,
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        user = services.authenticate_user(db, credentials.username, credentials.password)
        return {"token": services.issue_token(user, settings)}

    # -----------------------------
    # CRUD для задач
    # -----------------------------
    @app.get("/tasks", response_model=List[TaskOut])
    def get_tasks(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
        return services.list_tasks(db, user_id)

    @app.post("/tasks", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
    def create_task(
        task: TaskCreate,
        db: Session = Depends(get_db),
        user_id: int = Depends(get_current_user_id),
    ):
        return services.create_task(db, user_id, task.title, task.description)

    @app.put("/tasks/{task_id}", response_model=TaskOut)
    def update_task(
        task_id: int,
        task_update: TaskUpdate,
        db: Session = Depends(get_db),
        user_id: int = Depends(get_current_user_id),
    ):
        return services.update_task(
            db,
            user_id,
            task_id,
            task_update.title,
            task_update.description,
            task_update.completed,
        )

    @app.put("/tasks/{task_id}/completion", response_model=TaskOut)
    def set_completion(
        task_id: int,
        body: TaskCompletion,
        db: Session = Depends(get_db),
        user_id: int = Depends(get_current_user_id),
    ):
        return services.set_task_completion(db, user_id, task_id, body.completed)

    @app.delete("/tasks/{task_id}", response_class=PlainTextResponse)
    def delete_task(
        task_id: int,
        db: Session = Depends(get_db),
        user_id: int = Depends(get_current_user_id),
    ):
        services.delete_task(db, user_id, task_id)
        return "Task deleted"


def run() -> None:
    setup_logging()
    app = create_app(Settings.from_env())
    logger.info("listening on port %s", APP_PORT)
    uvicorn.run(app, host="0.0.0.0", port=APP_PORT, log_config=None)


if __name__ == "__main__":
    run()
