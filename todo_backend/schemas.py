from typing import Optional

from pydantic import BaseModel, ConfigDict, constr


# -----------------------------
# Pydantic-схемы
# -----------------------------
class UserCredentials(BaseModel):
    username: constr(min_length=1, max_length=50)
    # bcrypt учитывает только первые 72 байта
    password: constr(min_length=1, max_length=72)


class UserOut(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class RegisterOut(BaseModel):
    message: str
    user: UserOut


class Token(BaseModel):
    token: str


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None


class TaskUpdate(BaseModel):
    title: str
    description: Optional[str] = None
    completed: bool


class TaskCompletion(BaseModel):
    completed: bool


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str]
    completed: bool

    model_config = ConfigDict(from_attributes=True)
