# todo_app/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from todo_app.repository.memory import IdStrategy

LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "info"
    host: str = "127.0.0.1"
    port: int = 3000
    id_strategy: IdStrategy = IdStrategy.COUNT
    lock_timeout: Optional[float] = None


def get_settings(env_file: Optional[str] = None) -> Settings:
    """从环境变量（以及 .env 文件）读取配置，非法值直接报错

    env_file 为空时从当前项目目录向上查找 .env，已存在的环境变量优先。
    """
    load_dotenv(dotenv_path=env_file)

    log_level = os.getenv("LOG_LEVEL", "info").lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL 不合法: {log_level}")

    try:
        id_strategy = IdStrategy(os.getenv("TODO_ID_STRATEGY", "count").lower())
    except ValueError:
        raise ValueError(
            f"TODO_ID_STRATEGY 只能是 count 或 sequence: {os.getenv('TODO_ID_STRATEGY')}"
        )

    lock_timeout = os.getenv("TODO_LOCK_TIMEOUT")

    return Settings(
        log_level=log_level,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
        id_strategy=id_strategy,
        lock_timeout=float(lock_timeout) if lock_timeout else None
    )
