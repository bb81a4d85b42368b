"""Filesystem helpers: path normalisation, directory listing and file contents."""

from __future__ import annotations

import enum
import itertools
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from ringkit import jsonutil

PathLike = Union[str, "os.PathLike[str]"]


def _normal_parts(path: PathLike) -> tuple[str, list[str]]:
    pure = Path(path)
    if pure.anchor:
        root, rest = pure.parts[0], pure.parts[1:]
    else:
        root, rest = "", pure.parts
    stack: list[str] = []
    for part in rest:
        if part == "..":
            # The parent of the root, or of nothing, stays where it is.
            if stack:
                stack.pop()
        elif part != ".":
            stack.append(part)
    return root, stack


def normalize_path(path: PathLike) -> Path:
    """Resolve "." and ".." lexically, without touching the filesystem."""
    root, stack = _normal_parts(path)
    return Path(root, *stack)


def join_path(paths: list[str]) -> str:
    """Join path segments (an absolute segment restarts the path) and normalise."""
    root, stack = _normal_parts(Path(*paths))
    if not root and not stack:
        return ""
    return str(Path(root, *stack))


def working_dir() -> Path | None:
    """The current working directory, or None if it cannot be determined."""
    try:
        return Path.cwd()
    except OSError:
        return None


def _split_lines(text: str) -> list[str]:
    pieces = text.split("\n")
    last = pieces.pop()
    lines = [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]
    if last:
        lines.append(last)
    return lines


def _read_exact(handle: Any, size: int) -> bytes:
    data = handle.read(size)
    if len(data) < size:
        raise EOFError(f"expected {size} bytes, found {len(data)}")
    return data


@dataclass(frozen=True)
class PathCheck:
    """Questions about what a path refers to."""

    path: PathLike

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def is_dir(self) -> bool:
        return os.path.isdir(self.path)

    def is_file(self) -> bool:
        return os.path.isfile(self.path)

    def is_symlink(self) -> bool:
        return os.path.islink(self.path)


class _Kind(enum.Flag):
    FILE = enum.auto()
    DIR = enum.auto()
    SYMLINK = enum.auto()


@dataclass(frozen=True)
class Directory:
    """Listings of the entries of a directory, by kind."""

    path: PathLike

    def files(self) -> list[str]:
        return self._entries(_Kind.FILE)

    def dirs(self) -> list[str]:
        return self._entries(_Kind.DIR)

    def symlinks(self) -> list[str]:
        return self._entries(_Kind.SYMLINK)

    def _entries(self, focus: _Kind) -> list[str]:
        with os.scandir(self.path) as entries:
            return [
                entry.name
                for entry in entries
                if (_Kind.FILE in focus and entry.is_file(follow_symlinks=False))
                or (_Kind.DIR in focus and entry.is_dir(follow_symlinks=False))
                or (_Kind.SYMLINK in focus and entry.is_symlink())
            ]


@dataclass(frozen=True)
class Content:
    """Reading and writing the contents of one file."""

    path: PathLike

    def length(self) -> int:
        """Size of the file in bytes."""
        return os.stat(self.path).st_size

    def head(self, size: int) -> bytes:
        """Exactly the first size bytes; EOFError if the file is shorter."""
        with open(self.path, "rb") as handle:
            return _read_exact(handle, size)

    def head_lines(self, count: int) -> list[str]:
        """The first count lines, with trailing whitespace removed."""
        with open(self.path, "rb") as handle:
            return [raw.decode("utf-8").rstrip() for raw in itertools.islice(handle, count)]

    def head_string(self, size: int) -> str:
        return self.head(size).decode("utf-8", errors="replace")

    def tail(self, size: int) -> bytes:
        """The last size bytes, or the whole file if it is smaller."""
        with open(self.path, "rb") as handle:
            file_size = os.fstat(handle.fileno()).st_size
            if size > file_size:
                return handle.read()
            handle.seek(file_size - size)
            return _read_exact(handle, size)

    def tail_lines(self, count: int) -> list[str]:
        """The last count lines, read backwards in chunks from the end."""
        found: list[str] = []
        chunk_size = max(2, min(16, count // 32)) * 1024
        with open(self.path, "rb") as handle:
            position = os.fstat(handle.fileno()).st_size
            while position > 0 and len(found) < count:
                read_size = min(chunk_size, position)
                position -= read_size
                handle.seek(position)
                chunk = _read_exact(handle, read_size).decode("utf-8", errors="replace")
                for line in reversed(_split_lines(chunk)):
                    if len(found) >= count:
                        break
                    found.append(line)
        found.reverse()
        return found

    def tail_string(self, size: int) -> str:
        return self.tail(size).decode("utf-8", errors="replace")

    def read_bytes(self) -> bytes:
        with open(self.path, "rb") as handle:
            return handle.read()

    def lines(self) -> list[str]:
        """All lines of the file, which must be valid UTF-8."""
        return _split_lines(self.read_bytes().decode("utf-8"))

    def utf8_string(self) -> str:
        return self.read_bytes().decode("utf-8", errors="replace")

    def truncate(self, size: int) -> None:
        """Set the file's length to size bytes."""
        os.truncate(self.path, size)

    def write(self, contents: str) -> None:
        """Create or overwrite the file with contents."""
        with open(self.path, "wb") as handle:
            handle.write(contents.encode("utf-8"))

    def append(self, contents: str) -> None:
        """Append contents to an existing file."""
        descriptor = os.open(self.path, os.O_WRONLY | os.O_APPEND)
        with os.fdopen(descriptor, "wb") as handle:
            handle.write(contents.encode("utf-8"))

    def clear(self) -> None:
        self.truncate(0)

    def json(self) -> Any:
        return jsonutil.decode(self.utf8_string())

    def write_json(self, obj: Any) -> None:
        self.write(jsonutil.encode(obj))