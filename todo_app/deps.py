from fastapi import Request

from todo_app.repository.base import TodoRepository


def get_repository(request: Request) -> TodoRepository:
    # 进程内唯一的仓储实例，create_app 时挂到 app.state 上
    return request.app.state.repository
