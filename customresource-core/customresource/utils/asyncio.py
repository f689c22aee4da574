import asyncio
import concurrent.futures
import functools
import inspect
from contextvars import copy_context

# Thread pool executor for running blocking functions (e.g., HTTP calls) in async context.
THREAD_POOL = concurrent.futures.ThreadPoolExecutor(thread_name_prefix="cfn-worker")


async def run_sync(func, *args, thread_pool=None, **kwargs):
    """
    Run the given blocking function in a thread pool and suspend the calling coroutine until it returns.
    The context variables of the caller are propagated to the worker thread.
    """
    loop = asyncio.get_running_loop()
    thread_pool = thread_pool or THREAD_POOL
    func_wrapped = functools.partial(func, *args, **kwargs)
    return await loop.run_in_executor(thread_pool, copy_context().run, func_wrapped)


async def maybe_await(value):
    """Return the result of ``value``, awaiting it first if it is awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
