# todo_app/repository/base.py
from abc import ABC, abstractmethod
from typing import List, Optional

from todo_app.schema.todo import Todo, TodoCreate, TodoUpdate


class RepositoryError(Exception):
    """仓储层错误的基类"""


class TodoNotFoundError(RepositoryError):
    def __init__(self, todo_id: int):
        self.id = todo_id
        super().__init__(f"NotFound, id is {todo_id}")


class RepositoryInternalError(RepositoryError):
    """存储内部故障（例如获取锁超时）"""


class TodoRepository(ABC):
    """Todo 仓储接口

    所有实现都必须能被多个并发请求直接共享，调用方不需要额外加锁。
    返回给调用方的都是副本，修改返回值不会影响存储。
    """

    @abstractmethod
    def create(self, payload: TodoCreate) -> Todo:
        """创建 Todo，分配新 id，completed 固定为 False"""

    @abstractmethod
    def find(self, todo_id: int) -> Optional[Todo]:
        """按 id 查找，不存在时返回 None"""

    @abstractmethod
    def all(self) -> List[Todo]:
        """返回全部 Todo，顺序不保证"""

    @abstractmethod
    def update(self, todo_id: int, payload: TodoUpdate) -> Todo:
        """只更新 payload 中给出的字段，不存在时抛出 TodoNotFoundError"""

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """删除 Todo，不存在时抛出 TodoNotFoundError"""
