import asyncio
import logging
import multiprocessing
import pathlib
from multiprocessing.pool import Pool
from typing import Awaitable

logger = logging.getLogger(__name__)


def read_file_bytes(path: pathlib.Path) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


class Processor:
    """Worker pool that performs blocking file I/O and exposes results as awaitables."""

    def __init__(self, concurrency: int | None = None):
        if concurrency is None:
            concurrency = multiprocessing.cpu_count()

        self._concurrency = concurrency
        self._pool: Pool = Pool(self._concurrency)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._pool.close()

    @property
    def concurrency(self):
        return self._concurrency

    def read(self, path: pathlib.Path) -> Awaitable[bytes]:
        """Read the whole file in a worker.

        :return: The file content. Errors raised by open() or read() are re-raised by the awaitable."""
        logger.info(f"Starting read: {path}")

        async def log_and_read():
            result = await self._evaluate(read_file_bytes, path)
            logger.info(f"Completed read: {path} ({len(result)} bytes)")
            return result

        return log_and_read()

    def _evaluate(self, func, *args):
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        self._pool.apply_async(func, args=args,
                               callback=lambda v: loop.call_soon_threadsafe(future.set_result, v),
                               error_callback=lambda e: loop.call_soon_threadsafe(future.set_exception, e))

        return future
