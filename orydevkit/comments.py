"""Add and remove comment blocks at the top of source files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

FileType = str


@dataclass(frozen=True)
class CommentFormat:
    """A line-comment syntax, given by the text that opens and closes each line."""

    start_token: str
    end_token: str = ""

    def remove(self, text: str, token: str) -> str:
        """Remove the comment block that contains ``token`` from ``text``.

        A block starts at a line beginning with the rendered token and ends
        at the next empty line, which is dropped as well.
        """
        comment_with_token = self.render_line_start(token)
        in_comment = False
        kept = []
        for line in text.split("\n"):
            if line.startswith(comment_with_token):
                in_comment = True
            if in_comment and line == "":
                in_comment = False
                continue
            if not in_comment:
                kept.append(line)
        return "\n".join(kept)

    def render_block(self, text: str) -> str:
        """Turn every non-empty line of ``text`` into a comment line."""
        return "\n".join(
            self.render_line(line) if line else line for line in text.split("\n")
        )

    def render_line(self, text: str) -> str:
        """Turn one line of text into a comment line."""
        return f"{self.start_token}{text}{self.end_token}"

    def render_line_start(self, text: str) -> str:
        """Turn the start of a line into the start of a comment line."""
        return f"{self.start_token}{text}"


DOUBLE_SLASH_COMMENTS = CommentFormat("// ")
POUND_COMMENTS = CommentFormat("# ")
HTML_COMMENTS = CommentFormat("<!-- ", " -->")

COMMENT_FORMATS: dict[FileType, CommentFormat] = {
    "cs": DOUBLE_SLASH_COMMENTS,
    "dart": DOUBLE_SLASH_COMMENTS,
    "go": DOUBLE_SLASH_COMMENTS,
    "java": DOUBLE_SLASH_COMMENTS,
    "js": DOUBLE_SLASH_COMMENTS,
    "md": HTML_COMMENTS,
    "php": DOUBLE_SLASH_COMMENTS,
    "py": POUND_COMMENTS,
    "rb": POUND_COMMENTS,
    "rs": DOUBLE_SLASH_COMMENTS,
    "ts": DOUBLE_SLASH_COMMENTS,
    "vue": HTML_COMMENTS,
    "yml": POUND_COMMENTS,
}

_SEPARATORS = {"/", os.sep} | ({os.altsep} if os.altsep else set())


def contains_file_type(file_types: Iterable[FileType], file_type: FileType) -> bool:
    """Tell whether ``file_type`` is among ``file_types``."""
    return file_type in file_types


def get_file_type(file_path: str) -> FileType:
    """Return the extension of ``file_path`` without its dot; ``yaml`` becomes ``yml``."""
    ext = ""
    for pos in range(len(file_path) - 1, -1, -1):
        char = file_path[pos]
        if char in _SEPARATORS:
            break
        if char == ".":
            ext = file_path[pos + 1 :]
            break
    return "yml" if ext == "yaml" else ext


def supports_file(file_path: str) -> bool:
    """Tell whether comments can be added to the file at ``file_path``."""
    return get_file_type(file_path) in COMMENT_FORMATS


def file_content_without_header(path: str, token: str) -> str:
    """Return the file's content without the comment block identified by ``token``."""
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    comment_format = COMMENT_FORMATS.get(get_file_type(path))
    if comment_format is None:
        return text
    return comment_format.remove(text, token)


def write_file_with_header(path: str, header: str, body: str) -> None:
    """Write ``body`` to ``path``, preceded by ``header`` rendered as a comment.

    Files whose type has no known comment format receive only the body.
    """
    comment_format = COMMENT_FORMATS.get(get_file_type(path))
    if comment_format is None:
        content = body
    else:
        content = f"{comment_format.render_block(header)}\n\n{body}"
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)