from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from typing import Optional
import logging
import time

from todo_app.api.errors import register_error_handlers
from todo_app.api.todo import router as todo_router
from todo_app.config import Settings, get_settings
from todo_app.repository.base import TodoRepository
from todo_app.repository.memory import TodoRepositoryForMemory

logger = logging.getLogger(__name__)


def create_app(
        repository: Optional[TodoRepository] = None,
        settings: Optional[Settings] = None
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    if repository is None:
        repository = TodoRepositoryForMemory(
            id_strategy=settings.id_strategy,
            lock_timeout=settings.lock_timeout
        )

    app = FastAPI(title="Todo Service")
    # 仓储只创建一次，所有请求共享，生命周期和进程一致
    app.state.repository = repository
    app.state.settings = settings

    app.include_router(todo_router)
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "heeeeeeee"

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.info(
                f"{request.method} {request.url.path} | 响应状态: {response.status_code} | 耗时: {process_time:.4f}s"
            )
            return response
        except Exception as e:
            logger.error(f"请求处理异常: {e}")
            raise

    return app


app = create_app()


def run():
    import uvicorn

    settings = app.state.settings
    logger.debug(f"listening on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
