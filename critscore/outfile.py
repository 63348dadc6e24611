"""Open an output destination chosen by command-line flags."""

from __future__ import annotations

import argparse
import io
import os
import sys
import threading
from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import SplitResult, urlsplit, urlunsplit

_O_SYNC = getattr(os, "O_SYNC", 0)
_O_BINARY = getattr(os, "O_BINARY", 0)

_MEMORY_BUCKETS: Dict[str, Dict[str, bytes]] = {}
_MEMORY_LOCK = threading.Lock()


def _memory_blob(bucket: str, key: str) -> Optional[bytes]:
    """Return what was written to ``key`` in the in-memory ``bucket``."""
    with _MEMORY_LOCK:
        return _MEMORY_BUCKETS.get(bucket, {}).get(key)


class _MemoryBlob(io.BytesIO):
    """A blob buffered in memory and stored in its bucket when closed."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__()
        self._bucket = bucket
        self._key = key

    def close(self) -> None:
        if not self.closed:
            data = self.getvalue()
            with _MEMORY_LOCK:
                _MEMORY_BUCKETS.setdefault(self._bucket, {})[self._key] = data
        super().close()


class NamedWriter:
    """A writable stream that also carries a name identifying it.

    Text is encoded as UTF-8 for binary streams and bytes decoded for text
    streams. Closing never closes the process's standard streams.
    """

    def __init__(self, stream: Any, name: str) -> None:
        self.stream = stream
        self.name = name
        self._owns = not any(
            stream is std
            for std in (sys.stdout, sys.__stdout__, sys.stderr, sys.__stderr__)
        )

    def write(self, data: Union[str, bytes, bytearray]) -> int:
        if isinstance(self.stream, io.TextIOBase):
            if isinstance(data, (bytes, bytearray)):
                data = bytes(data).decode("utf-8")
        elif isinstance(data, str):
            data = data.encode("utf-8")
        return self.stream.write(data)

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        if self._owns:
            self.stream.close()
        else:
            self.stream.flush()

    def __enter__(self) -> "NamedWriter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _url_parts(target: str) -> Optional[SplitResult]:
    try:
        parts = urlsplit(target)
    except ValueError:
        return None
    # A single-letter scheme is a drive letter, not a URL.
    if len(parts.scheme) > 1:
        return parts
    return None


class Opener:
    """Defines output flags on a parser and opens the chosen destination."""

    def __init__(
        self,
        parser: argparse.ArgumentParser,
        file_flag: str,
        force_flag: str,
        append_flag: str,
        file_help_name: str,
    ) -> None:
        self.perm = 0o666
        self.filename_transform: Callable[[str], str] = lambda name: name
        self._force_flag = force_flag
        self._filename = ""
        self._force = False
        self._append = False
        self._file_dest = parser.add_argument(
            f"--{file_flag}",
            default="",
            metavar=file_help_name,
            help=f"use the file {file_help_name} for output. "
            "Defaults to stdout if not set.",
        ).dest
        self._force_dest = parser.add_argument(
            f"--{force_flag}",
            action="store_true",
            help=f"overwrites {file_help_name} if it already exists "
            f"and --{append_flag} is not set.",
        ).dest
        self._append_dest = parser.add_argument(
            f"--{append_flag}",
            action="store_true",
            help=f"appends to {file_help_name} if it already exists.",
        ).dest

    def configure(self, namespace: argparse.Namespace) -> None:
        """Take the flag values from a parsed ``namespace``."""
        self._filename = getattr(namespace, self._file_dest, "") or ""
        self._force = bool(getattr(namespace, self._force_dest, False))
        self._append = bool(getattr(namespace, self._append_dest, False))

    def _open_file(self, filename: str, extra_flags: int) -> NamedWriter:
        flags = os.O_WRONLY | os.O_CREAT | _O_SYNC | _O_BINARY | extra_flags
        fd = os.open(filename, flags, self.perm)
        try:
            stream = os.fdopen(fd, "wb")
        except BaseException:
            os.close(fd)
            raise
        return NamedWriter(stream, filename)

    def _open_blob_store(self, target: str, parts: SplitResult) -> NamedWriter:
        if self._append or not self._force:
            raise ValueError(f"blob store must use --{self._force_flag} flag")
        key = parts.path[1:] if parts.path.startswith("/") else parts.path
        bucket = urlunsplit((parts.scheme, parts.netloc, "", parts.query, parts.fragment))
        if parts.scheme != "mem":
            raise ValueError(f"failed to open {bucket}: unsupported blob store")
        return NamedWriter(_MemoryBlob(bucket, key), target)

    def open(self) -> NamedWriter:
        """Open the output chosen by the flags.

        With no filename, standard output is used. A URL opens a blob store,
        which requires the force flag and forbids the append flag. An existing
        file is appended to with the append flag, truncated with the force
        flag, and otherwise FileExistsError is raised.
        """
        target = self.filename_transform(self._filename)
        if not target:
            return NamedWriter(sys.stdout, "/dev/stdout")
        parts = _url_parts(target)
        if parts is not None:
            return self._open_blob_store(target, parts)
        if self._append:
            return self._open_file(target, os.O_APPEND)
        if self._force:
            return self._open_file(target, os.O_TRUNC)
        return self._open_file(target, os.O_EXCL)


DEFAULT_OPENER: Optional[Opener] = None


def define_flags(
    parser: argparse.ArgumentParser,
    file_flag: str,
    force_flag: str,
    append_flag: str,
    file_help_name: str,
) -> Opener:
    """Create the default Opener, defining its flags on ``parser``."""
    global DEFAULT_OPENER
    DEFAULT_OPENER = Opener(parser, file_flag, force_flag, append_flag, file_help_name)
    return DEFAULT_OPENER


def open_output(namespace: argparse.Namespace) -> NamedWriter:
    """Open the output of the default Opener using ``namespace``.

    define_flags must have been called first.
    """
    if DEFAULT_OPENER is None:
        raise RuntimeError("define_flags must be called before open_output")
    DEFAULT_OPENER.configure(namespace)
    return DEFAULT_OPENER.open()