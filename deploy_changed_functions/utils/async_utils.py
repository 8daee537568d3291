# deploy_changed_functions/utils/async_utils.py
"""Asynchronous operation utilities"""

import asyncio
from typing import Any, Coroutine, Iterable, List, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    loop = None
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # No running loop
        pass

    if loop and loop.is_running():
        # Already in async context, create new thread
        import threading

        result = None
        exception = None

        def run_in_thread():
            nonlocal result, exception
            try:
                result = asyncio.run(coro)
            except BaseException as e:
                exception = e

        thread = threading.Thread(target=run_in_thread)
        thread.start()
        thread.join()

        if exception:
            raise exception
        return result
    else:
        # No running loop, use asyncio.run
        return asyncio.run(coro)


async def gather_fail_fast(coros: Iterable[Coroutine[Any, Any, T]]) -> List[T]:
    """
    Run coroutines concurrently, cancelling the rest on the first failure

    Args:
        coros: Coroutines to run

    Returns:
        Results in the order the coroutines were given

    Raises:
        The first exception raised by any coroutine
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    if not tasks:
        return []

    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)

    failed = [task for task in tasks if task in done and task.exception() is not None]
    if failed:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        raise failed[0].exception()

    return [task.result() for task in tasks]

