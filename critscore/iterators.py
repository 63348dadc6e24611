"""Line and batch iterators over streams and iterables."""

from __future__ import annotations

from itertools import islice
from typing import IO, Any, Generic, Iterable, Iterator, List, TypeVar

T = TypeVar("T")


class LineReader:
    """Iterate over the lines of a stream, without line terminators.

    A trailing ``\\r`` is dropped along with the ``\\n``. A final line without
    a newline is still returned, and a trailing newline does not produce an
    extra empty line. Binary streams are decoded as UTF-8.
    """

    def __init__(self, stream: IO[Any]) -> None:
        self._stream = stream

    def __iter__(self) -> "LineReader":
        return self

    def __next__(self) -> str:
        line = self._stream.readline()
        if not line:
            raise StopIteration
        if isinstance(line, (bytes, bytearray)):
            line = bytes(line).decode("utf-8", errors="replace")
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line

    def close(self) -> None:
        """Close the underlying stream."""
        self._stream.close()

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class Batcher(Generic[T]):
    """Group the items of an iterable into lists of at most ``batch_size``.

    If the source raises, the partially collected batch is discarded, the
    error propagates, and the batcher yields nothing more.
    """

    def __init__(self, source: Iterable[T], batch_size: int) -> None:
        self._source = source
        self._items: Iterator[T] = iter(source)
        # A batch always holds at least one item.
        self._size = max(batch_size, 1)
        self._stopped = False

    def __iter__(self) -> "Batcher[T]":
        return self

    def __next__(self) -> List[T]:
        if self._stopped:
            raise StopIteration
        try:
            chunk = list(islice(self._items, self._size))
        except Exception:
            self._stopped = True
            raise
        if not chunk:
            self._stopped = True
            raise StopIteration
        return chunk

    def close(self) -> None:
        """Close the source, if it can be closed."""
        closer = getattr(self._source, "close", None)
        if callable(closer):
            closer()

    def __enter__(self) -> "Batcher[T]":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def lines(stream: IO[Any]) -> LineReader:
    """Return a LineReader over ``stream``."""
    return LineReader(stream)


def batch(source: Iterable[T], batch_size: int) -> Batcher[T]:
    """Return a Batcher over ``source`` with the given batch size."""
    return Batcher(source, batch_size)