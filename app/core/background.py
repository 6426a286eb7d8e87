# app/core/background.py
# Fire-and-forget 背景工作 (瀏覽數累加、寄信)
# 不綁定 request 的生命週期，失敗時寫入 log，不回傳給呼叫端
import asyncio
import logging
from typing import Coroutine, Set

logger = logging.getLogger(__name__)

# 保留 Task 參照，避免執行中被 GC 回收
_background_tasks: Set[asyncio.Task] = set()


def _on_task_done(task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        logger.warning(f"背景工作被取消: {task.get_name()}")
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            f"背景工作失敗: {task.get_name()}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )


def spawn(coro: Coroutine, name: str) -> asyncio.Task:
    """在目前的 event loop 上啟動背景工作，立即回傳不等待"""
    task = asyncio.create_task(coro, name=name)
    _background_tasks.add(task)
    task.add_done_callback(_on_task_done)
    return task


async def wait_for_background_tasks() -> None:
    """
    等待目前 event loop 上所有尚未完成的背景工作 (關閉服務 / 測試時使用)。
    例外已由 _on_task_done 記錄，這裡不再拋出。
    """
    loop = asyncio.get_running_loop()
    pending = [t for t in _background_tasks if t.get_loop() is loop and not t.done()]
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
