from pydantic import BaseModel
from typing import Optional


# 存储中的 Todo 实体，id 由仓储分配
class Todo(BaseModel):
    id: int
    text: str
    completed: bool = False


# 创建 Todo 时的输入（不带 id 和 completed）
class TodoCreate(BaseModel):
    text: str


# 更新 Todo 时的输入，未传的字段保持原值
class TodoUpdate(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None
