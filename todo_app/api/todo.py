from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
import logging

from todo_app.deps import get_repository
from todo_app.repository.base import TodoNotFoundError, TodoRepository
from todo_app.schema.todo import Todo, TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"])


@router.post("/todos", response_model=Todo, status_code=status.HTTP_201_CREATED)
def create_todo(
        payload: TodoCreate,
        repository: TodoRepository = Depends(get_repository)
):
    return repository.create(payload)


@router.get("/todos", response_model=List[Todo])
def all_todo(repository: TodoRepository = Depends(get_repository)):
    return repository.all()


@router.get("/todo/{todo_id}", response_model=Todo)
def find_todo(
        todo_id: int,
        repository: TodoRepository = Depends(get_repository)
):
    todo = repository.find(todo_id)
    if todo is None:
        raise HTTPException(status_code=404, detail="待办事项不存在")
    return todo


# PATCH 和 PUT 都是局部更新，未传的字段保持不变
@router.patch("/todo/{todo_id}", response_model=Todo)
@router.put("/todo/{todo_id}", response_model=Todo)
def update_todo(
        todo_id: int,
        payload: TodoUpdate,
        repository: TodoRepository = Depends(get_repository)
):
    try:
        return repository.update(todo_id, payload)
    except TodoNotFoundError as e:
        logger.info(f"更新失败: {e}")
        raise HTTPException(status_code=404, detail="待办事项不存在")


@router.delete("/todo/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(
        todo_id: int,
        repository: TodoRepository = Depends(get_repository)
):
    try:
        repository.delete(todo_id)
    except TodoNotFoundError as e:
        logger.info(f"删除失败: {e}")
        raise HTTPException(status_code=404, detail="待办事项不存在")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
