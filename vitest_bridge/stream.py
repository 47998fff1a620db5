"""Asynchronous streaming of a file that is rewritten while a run is in progress."""

import asyncio
import logging
import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Final, cast

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1

_CLOSED: Final = object()

type FileSignature = tuple[int, int, int, int] | None


class StreamClosedError(Exception):
    """Raised when reading from a stream that has been stopped and drained."""


def file_signature(path: str) -> FileSignature:
    """Return what identifies the current content of ``path``, None if it is gone."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    return (st.st_ino, st.st_size, st.st_mtime_ns, st.st_ctime_ns)


def read_from_start(fd: int, size: int) -> bytes:
    """Read up to ``size`` bytes of ``fd`` starting at offset 0."""
    os.lseek(fd, 0, os.SEEK_SET)
    data = bytearray()
    while len(data) < size:
        chunk = os.read(fd, size - len(data))
        if not chunk:
            break
        data += chunk
    return bytes(data)


def reopen_if_replaced(fd: int, path: str) -> int | None:
    """Return a descriptor for the file currently at ``path``.

    When the path now names another file, e.g. after an atomic rename, the
    new file is opened and ``fd`` is closed. Returns None while nothing
    exists at ``path``.
    """
    try:
        current = os.stat(path)
    except FileNotFoundError:
        return None
    if os.path.samestat(os.fstat(fd), current):
        return fd
    try:
        new_fd = os.open(path, os.O_RDONLY)
    except FileNotFoundError:
        return None
    os.close(fd)
    return new_fd


class FileStream:
    """Live subscription to the full contents of one file.

    The stream owns the file descriptor and the watch on the path. Every
    change republishes the whole file, so the writer is expected to rewrite
    the file, in place or by replacing it, rather than append to it.
    """

    def __init__(self, file_path: str, fd: int, poll_interval: float) -> None:
        self.file_path = file_path
        self._fd = fd
        self._poll_interval = poll_interval
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._read_semaphore = asyncio.Semaphore(1)
        self._exit_future: asyncio.Future[None] = (
            asyncio.get_running_loop().create_future()
        )
        self._read_tasks: set[asyncio.Task[None]] = set()
        self._watch_task: asyncio.Task[None] | None = None
        self._teardown_task: asyncio.Task[None] | None = None
        self._closed = False

    @classmethod
    async def open(
        cls, file_path: str, *, poll_interval: float = DEFAULT_POLL_INTERVAL
    ) -> "FileStream":
        """Open ``file_path`` and publish its current contents.

        Args:
            file_path: File to stream
            poll_interval: Seconds between checks of the file for changes

        Returns:
            The stream, with the contents at open time already queued

        Raises:
            OSError: If the file cannot be opened or read

        """
        fd = await asyncio.to_thread(os.open, file_path, os.O_RDONLY)
        stream = cls(file_path, fd, poll_interval)
        try:
            signature = await asyncio.to_thread(file_signature, file_path)
            await stream._read()
        except BaseException:
            os.close(stream._fd)
            raise

        stream._watch_task = asyncio.create_task(stream._watch(signature))
        stream._teardown_task = asyncio.create_task(stream._teardown())
        log.debug("Streaming %s", file_path)
        return stream

    @property
    def pending(self) -> int:
        """Number of queued items not yet consumed."""
        return self._queue.qsize()

    async def next_chunk(self) -> bytes:
        """Wait for the next snapshot of the file.

        Raises:
            StreamClosedError: Once the stream is stopped and every queued
                snapshot has been consumed
            OSError: If reading the file failed, which ends the stream

        """
        item = await self._queue.get()
        if item is _CLOSED:
            self._queue.put_nowait(_CLOSED)
            raise StreamClosedError(f"Stream of {self.file_path} is closed")
        if isinstance(item, BaseException):
            raise item
        return cast(bytes, item)

    def stop(self) -> None:
        """Request teardown of the stream; later calls have no effect."""
        if not self._exit_future.done():
            self._exit_future.set_result(None)

    async def wait_closed(self) -> None:
        """Wait until the watch is cancelled and the descriptor closed."""
        if self._teardown_task is not None:
            await self._teardown_task

    def __aiter__(self) -> "FileStream":
        return self

    async def __anext__(self) -> bytes:
        try:
            return await self.next_chunk()
        except StreamClosedError:
            raise StopAsyncIteration from None

    async def _read(self) -> None:
        async with self._read_semaphore:
            if self._closed:
                return
            fd = await asyncio.to_thread(reopen_if_replaced, self._fd, self.file_path)
            if fd is None:
                return
            if fd != self._fd:
                log.debug("Reopened %s after it was replaced", self.file_path)
                self._fd = fd
            stat = await asyncio.to_thread(os.fstat, self._fd)
            data = await asyncio.to_thread(read_from_start, self._fd, stat.st_size)
            self._queue.put_nowait(data)

    async def _read_after_change(self) -> None:
        try:
            await self._read()
        except OSError as exc:
            self._fail(exc)

    def _schedule_read(self) -> None:
        task = asyncio.create_task(self._read_after_change())
        self._read_tasks.add(task)
        task.add_done_callback(self._read_tasks.discard)

    async def _watch(self, signature: FileSignature) -> None:
        try:
            while True:
                await asyncio.sleep(self._poll_interval)
                current = await asyncio.to_thread(file_signature, self.file_path)
                if current == signature:
                    continue
                signature = current
                # Removal is not a rewrite; wait for the file to come back.
                if current is not None:
                    self._schedule_read()
        except OSError as exc:
            self._fail(exc)

    def _fail(self, exc: OSError) -> None:
        self._queue.put_nowait(exc)
        self.stop()

    async def _teardown(self) -> None:
        await self._exit_future
        if self._watch_task is not None:
            self._watch_task.cancel()

        async with self._read_semaphore:
            self._closed = True
            try:
                await asyncio.to_thread(os.close, self._fd)
            except OSError as exc:
                self._queue.put_nowait(exc)

        if self._read_tasks:
            await asyncio.gather(*self._read_tasks)
        self._queue.put_nowait(_CLOSED)
        log.debug("Stopped streaming %s", self.file_path)


async def stream(
    file_path: str, *, poll_interval: float = DEFAULT_POLL_INTERVAL
) -> tuple[Callable[[], Awaitable[bytes]], Callable[[], None]]:
    """Stream a file, returning its chunk reader and stop function."""
    handle = await FileStream.open(file_path, poll_interval=poll_interval)
    return handle.next_chunk, handle.stop


@asynccontextmanager
async def streaming(
    file_path: str, *, poll_interval: float = DEFAULT_POLL_INTERVAL
) -> AsyncGenerator[FileStream, None]:
    """Stream a file for the duration of the block."""
    handle = await FileStream.open(file_path, poll_interval=poll_interval)
    try:
        yield handle
    finally:
        handle.stop()
        await handle.wait_closed()
