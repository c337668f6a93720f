"""List the changes of a git repository as files, directories or a raw log."""

from __future__ import annotations

import re
import subprocess
from typing import Iterable

ALL_CHANGES = "--name-only --oneline"
LAST_COMMIT_CHANGES = "-1 --name-only --oneline"

# A commit line as printed by ``git log --oneline``, the end of the text, or a
# trailing newline.
_COMMIT_MESSAGE = re.compile(r"^([a-z0-9]{7} .*[\t\n\f\r ]|\Z)|\n$", re.MULTILINE)


def git_default_options(is_pr: bool) -> str:
    """Return the git options used when none are given."""
    return ALL_CHANGES if is_pr else LAST_COMMIT_CHANGES


def remove_commit_messages(change_log: str) -> str:
    """Strip commit lines and the trailing newline from a ``--oneline`` log."""
    return _COMMIT_MESSAGE.sub("", change_log)


def deduplicate_changelog(lines: Iterable[str]) -> list[str]:
    """Return ``lines`` without repeats, keeping the first occurrence of each."""
    return list(dict.fromkeys(lines))


def cleanse_repository_changes(
    lines: Iterable[str], include_files: bool, deduplicate: bool
) -> list[str]:
    """Turn changed paths into directories unless ``include_files`` is set.

    A path without a slash lies in the root directory and becomes ``.``.
    """
    if include_files:
        cleansed = list(lines)
    else:
        cleansed = [line[: line.rfind("/")] if "/" in line else "." for line in lines]
    if deduplicate:
        cleansed = deduplicate_changelog(cleansed)
    return cleansed


def case_insensitive_sort(data: Iterable[str]) -> list[str]:
    """Return ``data`` sorted without regard to case."""
    return sorted(data, key=str.lower)


class RepositoryChanges:
    """Changes in a local git repository, read once from ``git log``."""

    def __init__(
        self,
        root_directory: str = ".",
        revision_range: str = "",
        git_options: str = "",
        is_pr: bool = False,
        verbose: bool = False,
        debug: bool = False,
    ) -> None:
        self.root_directory = root_directory
        self.revision_range = revision_range
        self.git_options = git_options
        self.is_pr = is_pr
        self.verbose = verbose
        self.debug = debug
        self._change_log = ""

    def _read_change_log(self) -> str:
        if not self._change_log:
            args = ["--no-pager", "log"]
            if self.revision_range:
                args.append(self.revision_range)
            options = self.git_options or git_default_options(self.is_pr)
            args.extend(options.split(" "))
            if self.verbose:
                print(f"getRepositoryChanges: '$ git [{' '.join(args)}]'")
            try:
                completed = subprocess.run(
                    ["git", *args],
                    cwd=self.root_directory,
                    capture_output=True,
                    text=True,
                    check=True,
                )
            except (OSError, subprocess.CalledProcessError) as err:
                raise RuntimeError(f"Error getting changes from Git: {err}") from err
            self._change_log = completed.stdout
        if self.debug:
            print(f"getRepositoryChangeLog: \n{self._change_log}")
        return self._change_log

    def change_log(self) -> str:
        """Return the raw output of ``git log``."""
        return self._read_change_log()

    def changed_files(self) -> str:
        """Return the changed files, one per line, deduplicated and sorted."""
        lines = remove_commit_messages(self._read_change_log()).split("\n")
        files = case_insensitive_sort(cleanse_repository_changes(lines, True, True))
        result = "\n".join(files)
        if self.debug:
            print(f"getChangedFiles: \n{result}")
        return result

    def changed_directories(self) -> str:
        """Return the directories with changes, one per line, deduplicated and sorted."""
        lines = remove_commit_messages(self._read_change_log()).split("\n")
        directories = case_insensitive_sort(
            cleanse_repository_changes(lines, False, True)
        )
        result = "\n".join(directories)
        if self.debug:
            print(f"getChangedDirectories: \n{result}\n")
        return result