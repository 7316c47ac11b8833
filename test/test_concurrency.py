import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_app.repository.base import RepositoryInternalError
from todo_app.repository.lock import ReadWriteLock
from todo_app.repository.memory import IdStrategy, TodoRepositoryForMemory
from todo_app.schema.todo import TodoCreate, TodoUpdate


@pytest.mark.parametrize("strategy", list(IdStrategy))
def test_concurrent_creates_get_distinct_ids(strategy):
    repository = TodoRepositoryForMemory(id_strategy=strategy)
    n = 200

    with ThreadPoolExecutor(max_workers=16) as pool:
        created = list(pool.map(
            lambda i: repository.create(TodoCreate(text=f"todo {i}")), range(n)
        ))

    ids = {todo.id for todo in created}
    assert len(ids) == n
    assert ids == set(range(1, n + 1))
    assert len(repository.all()) == n


def test_concurrent_updates_are_not_lost(repository):
    for i in range(50):
        repository.create(TodoCreate(text=f"todo {i}"))

    def work(todo_id):
        repository.update(todo_id, TodoUpdate(completed=True))
        repository.update(todo_id, TodoUpdate(text=f"done {todo_id}"))
        return repository.find(todo_id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(work, range(1, 51)))

    for todo in results:
        assert todo.completed is True
        assert todo.text == f"done {todo.id}"


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    barrier = threading.Barrier(2, timeout=2)

    def reader():
        with lock.read():
            # 两个读者必须同时持有读锁才能通过 barrier
            barrier.wait()

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(reader) for _ in range(2)]
        for future in futures:
            future.result()


def test_writer_excludes_readers_and_writers():
    lock = ReadWriteLock(timeout=0.05)

    with lock.write():
        with pytest.raises(RepositoryInternalError):
            lock.acquire_read()
        with pytest.raises(RepositoryInternalError):
            lock.acquire_write()

    with lock.read():
        with pytest.raises(RepositoryInternalError):
            lock.acquire_write()
        # 放弃等待的写者不会挡住后来的读者
        with lock.read():
            pass


def test_lock_released_after_exception():
    lock = ReadWriteLock(timeout=0.05)

    with pytest.raises(RuntimeError):
        with lock.write():
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        with lock.read():
            raise RuntimeError("boom")

    with lock.write():
        pass


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []
    order_lock = threading.Lock()

    def record(name):
        with order_lock:
            order.append(name)

    def writer():
        with lock.write():
            record("writer")

    def late_reader():
        with lock.read():
            record("reader")

    lock.acquire_read()
    writer_thread = threading.Thread(target=writer)
    writer_thread.start()

    # 等写者进入等待
    for _ in range(200):
        with lock._cond:
            if lock._waiting_writers:
                break
        time.sleep(0.005)

    reader_thread = threading.Thread(target=late_reader)
    reader_thread.start()
    time.sleep(0.05)
    assert order == []

    lock.release_read()
    writer_thread.join(timeout=2)
    reader_thread.join(timeout=2)
    assert order == ["writer", "reader"]
