from todo_backend.models import Task, User


def test_task_defaults():
    task = Task(title="read", description="x")
    assert task.completed is False


def test_task_explicit_completed_kept():
    assert Task(title="read", completed=True).completed is True


def test_user_password_not_plaintext():
    user = User(username="alice", hashed_password="notplain")
    assert "notplain" not in repr(user)
