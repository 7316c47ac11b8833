# todo_app/repository/lock.py
import threading
from contextlib import contextmanager
from typing import Optional

from todo_app.repository.base import RepositoryInternalError


class ReadWriteLock:
    """读写锁：允许多个读者并发，写者独占

    有写者在等待时，新的读者会排在写者后面，避免写者饿死。
    timeout 为 None 时一直等待，否则超时抛出 RepositoryInternalError。
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self.timeout = timeout

    def _wait_for(self, predicate, kind: str):
        # 调用方必须已持有 self._cond
        if not self._cond.wait_for(predicate, timeout=self.timeout):
            raise RepositoryInternalError(
                f"acquire {kind} lock timed out after {self.timeout}s"
            )

    def acquire_read(self):
        with self._cond:
            self._wait_for(
                lambda: not self._writer and self._waiting_writers == 0, "read"
            )
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._waiting_writers += 1
            try:
                self._wait_for(
                    lambda: not self._writer and self._readers == 0, "write"
                )
            except RepositoryInternalError:
                # 放弃等待后要唤醒被挡住的读者
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
