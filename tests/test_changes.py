import subprocess
from unittest import mock

import pytest

from orydevkit.changes import (
    ALL_CHANGES,
    LAST_COMMIT_CHANGES,
    RepositoryChanges,
    case_insensitive_sort,
    cleanse_repository_changes,
    deduplicate_changelog,
    git_default_options,
    remove_commit_messages,
)

SAMPLE_GIT_OUTPUT = """303599b feat: improve create migrations command (#16)
cmd/dev/pop/migration/create.go
ca21cb5 autogen: pin v0.0.24 release commit
cmd/dev/schema/render_version.go
cmd/dev/schema/render_version_test.go
cmd/pkg/repos.go
README.md
go.mod
go.sum
63fd21e chore: update deprecated goreleaser config and add goimports linter (#14)
.github/workflows/checks-go.yml
go.sum
test/changelog.md"""

CHANGELOG_WITHOUT_COMMIT_MESSAGES = """cmd/dev/pop/migration/create.go
cmd/dev/schema/render_version.go
cmd/dev/schema/render_version_test.go
cmd/pkg/repos.go
README.md
go.mod
go.sum
.github/workflows/checks-go.yml
go.sum
test/changelog.md"""

DEDUPLICATED_CHANGELOG_OUTPUT = """303599b feat: improve create migrations command (#16)
cmd/dev/pop/migration/create.go
ca21cb5 autogen: pin v0.0.24 release commit
cmd/dev/schema/render_version.go
cmd/dev/schema/render_version_test.go
cmd/pkg/repos.go
README.md
go.mod
go.sum
63fd21e chore: update deprecated goreleaser config and add goimports linter (#14)
.github/workflows/checks-go.yml
test/changelog.md"""

CLEANSED_DIRECTORIES_CHANGELOG_OUTPUT = """cmd/dev/pop/migration
cmd/dev/schema
cmd/pkg
.
.github/workflows
test"""

CLEANSED_FILES_CHANGELOG_OUTPUT = """cmd/dev/pop/migration/create.go
cmd/dev/schema/render_version.go
cmd/dev/schema/render_version_test.go
cmd/pkg/repos.go
README.md
go.mod
go.sum
.github/workflows/checks-go.yml
test/changelog.md"""

SORTED_CLEANSED_FILES_CHANGELOG_OUTPUT = """.github/workflows/checks-go.yml
cmd/dev/pop/migration/create.go
cmd/dev/schema/render_version.go
cmd/dev/schema/render_version_test.go
cmd/pkg/repos.go
go.mod
go.sum
README.md
test/changelog.md"""


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


def test_deduplication():
    lines = deduplicate_changelog(SAMPLE_GIT_OUTPUT.split("\n"))
    assert "\n".join(lines) == DEDUPLICATED_CHANGELOG_OUTPUT


def test_removing_commit_messages():
    assert remove_commit_messages(SAMPLE_GIT_OUTPUT) == CHANGELOG_WITHOUT_COMMIT_MESSAGES


def test_removing_commit_messages_drops_trailing_newline():
    assert remove_commit_messages(SAMPLE_GIT_OUTPUT + "\n") == (
        CHANGELOG_WITHOUT_COMMIT_MESSAGES
    )


def test_cleanse_changelog_files():
    lines = cleanse_repository_changes(
        CHANGELOG_WITHOUT_COMMIT_MESSAGES.split("\n"), True, True
    )
    assert "\n".join(lines) == CLEANSED_FILES_CHANGELOG_OUTPUT


def test_cleanse_changelog_directories():
    lines = cleanse_repository_changes(
        CHANGELOG_WITHOUT_COMMIT_MESSAGES.split("\n"), False, True
    )
    assert "\n".join(lines) == CLEANSED_DIRECTORIES_CHANGELOG_OUTPUT


def test_cleanse_without_deduplication_keeps_repeats():
    lines = cleanse_repository_changes(["a/x", "a/y", "z"], False, False)
    assert lines == ["a", "a", "."]


def test_case_insensitive_sorting():
    lines = case_insensitive_sort(CLEANSED_FILES_CHANGELOG_OUTPUT.split("\n"))
    assert "\n".join(lines) == SORTED_CLEANSED_FILES_CHANGELOG_OUTPUT


@pytest.mark.parametrize(
    "is_pr, expected", [(True, ALL_CHANGES), (False, LAST_COMMIT_CHANGES)]
)
def test_git_default_options(is_pr, expected):
    assert git_default_options(is_pr) == expected


def test_default_option_values():
    assert git_default_options(True) == "--name-only --oneline"
    assert git_default_options(False) == "-1 --name-only --oneline"


@mock.patch("orydevkit.changes.subprocess.run")
def test_changed_files_from_git(run):
    run.return_value = _completed(SAMPLE_GIT_OUTPUT + "\n")
    changes = RepositoryChanges(root_directory="/repo")
    assert changes.changed_files() == SORTED_CLEANSED_FILES_CHANGELOG_OUTPUT
    command = run.call_args.args[0]
    assert command == ["git", "--no-pager", "log", "-1", "--name-only", "--oneline"]
    assert run.call_args.kwargs["cwd"] == "/repo"


@mock.patch("orydevkit.changes.subprocess.run")
def test_changed_directories_from_git(run):
    run.return_value = _completed(SAMPLE_GIT_OUTPUT)
    changes = RepositoryChanges()
    assert changes.changed_directories() == (
        ".\n.github/workflows\ncmd/dev/pop/migration\ncmd/dev/schema\ncmd/pkg\ntest"
    )


@mock.patch("orydevkit.changes.subprocess.run")
def test_change_log_is_cached(run):
    run.return_value = _completed(SAMPLE_GIT_OUTPUT)
    changes = RepositoryChanges()
    assert changes.change_log() == SAMPLE_GIT_OUTPUT
    assert changes.change_log() == SAMPLE_GIT_OUTPUT
    assert run.call_count == 1


@mock.patch("orydevkit.changes.subprocess.run")
def test_revision_range_and_custom_options(run):
    run.return_value = _completed("x")
    changes = RepositoryChanges(
        revision_range="main..HEAD", git_options="--pretty=full", is_pr=True
    )
    assert changes.change_log() == "x"
    assert run.call_args.args[0] == [
        "git",
        "--no-pager",
        "log",
        "main..HEAD",
        "--pretty=full",
    ]


@mock.patch("orydevkit.changes.subprocess.run")
def test_pr_uses_all_changes(run):
    run.return_value = _completed("x")
    assert RepositoryChanges(is_pr=True).change_log() == "x"
    assert run.call_args.args[0][-2:] == ["--name-only", "--oneline"]
    assert "-1" not in run.call_args.args[0]


@mock.patch("orydevkit.changes.subprocess.run")
def test_git_failure_raises(run):
    run.side_effect = subprocess.CalledProcessError(128, ["git"])
    with pytest.raises(RuntimeError, match="Error getting changes from Git"):
        RepositoryChanges().changed_files()