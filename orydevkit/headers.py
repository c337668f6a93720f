"""Copy files like ``cp``, prepending a header that points to the original."""

from __future__ import annotations

import os
import stat
from typing import Iterator

from orydevkit.comments import write_file_with_header

COPY_HEADER_TEMPLATE = "AUTO-GENERATED, DO NOT EDIT!\nPlease edit the original at {}"

ROOT_PATH = "https://example.com/meta/blob/master/"


def _is_dir_no_follow(path: str) -> bool | None:
    """Return whether ``path`` is a directory, or None if it cannot be examined."""
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except OSError:
        return None


def _read(src: str) -> str:
    with open(src, encoding="utf-8", newline="") as handle:
        return handle.read()


def _header_for(src: str) -> str:
    return COPY_HEADER_TEMPLATE.format(ROOT_PATH + src)


def _check_destination(dst: str) -> None:
    if dst.endswith("/"):
        raise ValueError(f"cannot create file {dst!r}")


def _base(path: str) -> str:
    return os.path.basename(os.path.normpath(path))


def copy_file(src: str, dst: str) -> None:
    """Copy ``src`` (relative to the working directory) to ``dst`` with a header.

    If ``dst`` is a directory the file is placed inside it.
    """
    _check_destination(dst)
    body = _read(src)
    dst_path = dst
    if _is_dir_no_follow(dst):
        dst_path = os.path.join(dst, _base(src))
    write_file_with_header(dst_path, _header_for(src), body)


def copy_file_no_overwrite(src: str, dst: str) -> None:
    """Like :func:`copy_file`, but leave an existing destination file untouched."""
    _check_destination(dst)
    body = _read(src)
    dst_path = dst
    is_dir = _is_dir_no_follow(dst)
    if is_dir is not None:
        if not is_dir:
            return
        dst_path = os.path.join(dst, _base(src))
    write_file_with_header(dst_path, _header_for(src), body)


def _folder_exists(path: str) -> bool:
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except FileNotFoundError:
        return False


def _walk(root: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(path, is_dir)`` for ``root`` and everything below it, in lexical order."""
    yield root, True
    with os.scandir(root) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        path = os.path.join(root, entry.name)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(path)
        else:
            yield path, False


def copy_files(src: str, dst: str) -> None:
    """Recursively copy ``src`` to ``dst`` like ``cp -r``, adding headers to files."""
    if not stat.S_ISDIR(os.lstat(src).st_mode):
        copy_file(src, dst)
        return
    extra = ""
    if _folder_exists(dst):
        extra = _base(src)
        try:
            os.makedirs(os.path.join(dst, extra), exist_ok=True)
        except OSError:
            pass
    for path, is_dir in _walk(src):
        relative = path[len(src) :].lstrip("/" + os.sep)
        parts = [part for part in (extra, relative) if part]
        target = os.path.join(dst, *parts)
        if is_dir:
            os.makedirs(target, exist_ok=True)
        else:
            copy_file(path, target)