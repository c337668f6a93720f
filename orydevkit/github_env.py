"""Shell ``export`` lines describing the GitHub Actions build context."""

from __future__ import annotations

import re
import subprocess

TAG_PREFIX = "refs/tags/"
BRANCH_PREFIX = "refs/heads/"

_WORD = re.compile(r"[\w']+")


def _title(text: str) -> str:
    return _WORD.sub(lambda match: match.group(0)[:1].upper() + match.group(0)[1:], text)


def _git_current_branch() -> str:
    completed = subprocess.run(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"],
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout


def render_env(
    github_ref: str,
    repository: str,
    ignore_pkgs: str,
    current_branch: str | None = None,
) -> str:
    """Render the environment exports for a build.

    ``current_branch`` is used when ``github_ref`` names neither a tag nor a
    branch; if it is None, git is asked for it. Raises ValueError when
    ``repository`` is not of the form ``org/repo``.
    """
    if github_ref.startswith(TAG_PREFIX):
        head = f"export GIT_TAG={github_ref.replace(TAG_PREFIX, '')}"
    elif github_ref.startswith(BRANCH_PREFIX):
        head = f"export GIT_BRANCH={github_ref.replace(BRANCH_PREFIX, '')}"
    else:
        branch = _git_current_branch() if current_branch is None else current_branch
        head = f"export GIT_BRANCH={branch.strip()}"

    repo = repository.split("/")
    if len(repo) != 2:
        raise ValueError(
            f"Malformed repository information in GITHUB_REPOSITORY: {repository}"
        )
    org, name = repo
    ignored = " ".join(f"-x {pkg}" for pkg in ignore_pkgs.split(","))
    return (
        f"{head}"
        f"export GITHUB_ORG={org}\n"
        f"export GITHUB_REPO={name}\n"
        f"export SWAGGER_APP_NAME={_title(org.lower())}_{_title(name.lower())}\n"
        f"export SWAGGER_SPEC_IGNORE_PKGS='{ignored}'"
    )