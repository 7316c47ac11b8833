# todo_app/repository/memory.py
import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional

from todo_app.repository.base import TodoNotFoundError, TodoRepository
from todo_app.repository.lock import ReadWriteLock
from todo_app.schema.todo import Todo, TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


class IdStrategy(str, Enum):
    # 当前条数 + 1，删除后再创建可能复用已有 id（保留旧行为）
    COUNT = "count"
    # 单调递增，永不复用
    SEQUENCE = "sequence"


class TodoRepositoryForMemory(TodoRepository):
    """基于 dict 的内存仓储，所有操作都在同一把读写锁下完成"""

    def __init__(
            self,
            initial: Optional[Iterable[Todo]] = None,
            id_strategy: IdStrategy = IdStrategy.COUNT,
            lock_timeout: Optional[float] = None
    ):
        self._store: Dict[int, Todo] = {}
        self._lock = ReadWriteLock(timeout=lock_timeout)
        self.id_strategy = IdStrategy(id_strategy)
        self._last_id = 0
        for todo in initial or []:
            self._store[todo.id] = todo.model_copy()
            self._last_id = max(self._last_id, todo.id)

    def _next_id(self) -> int:
        # 调用方必须持有写锁
        if self.id_strategy is IdStrategy.SEQUENCE:
            self._last_id += 1
            return self._last_id
        return len(self._store) + 1

    def create(self, payload: TodoCreate) -> Todo:
        with self._lock.write():
            todo_id = self._next_id()
            if todo_id in self._store:
                logger.warning(f"id {todo_id} 已存在，将被新 Todo 覆盖")
            todo = Todo(id=todo_id, text=payload.text, completed=False)
            self._store[todo_id] = todo
            logger.debug(f"创建 Todo: {todo_id}")
            return todo.model_copy()

    def find(self, todo_id: int) -> Optional[Todo]:
        with self._lock.read():
            todo = self._store.get(todo_id)
            return todo.model_copy() if todo else None

    def all(self) -> List[Todo]:
        with self._lock.read():
            return [todo.model_copy() for todo in self._store.values()]

    def update(self, todo_id: int, payload: TodoUpdate) -> Todo:
        with self._lock.write():
            current = self._store.get(todo_id)
            if current is None:
                raise TodoNotFoundError(todo_id)

            todo = Todo(
                id=todo_id,
                text=payload.text if payload.text is not None else current.text,
                completed=(
                    payload.completed
                    if payload.completed is not None
                    else current.completed
                )
            )
            self._store[todo_id] = todo
            logger.debug(f"更新 Todo: {todo_id}")
            return todo.model_copy()

    def delete(self, todo_id: int) -> None:
        with self._lock.write():
            if self._store.pop(todo_id, None) is None:
                raise TodoNotFoundError(todo_id)
            logger.debug(f"删除 Todo: {todo_id}")
