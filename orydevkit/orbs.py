"""Bump the versions of CircleCI orbs referenced in a CircleCI config file."""

from __future__ import annotations

import re
import subprocess
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping

ORBS = tuple(
    f"ory/{name}"
    for name in (
        "goreleaser",
        "sdk",
        "changelog",
        "nancy",
        "docs",
        "prettier",
        "go" "langci",
    )
)

DEFAULT_CONFIG_PATH = ".circleci/config.yml"

_LATEST = re.compile(r"^Latest:[\t\n\f\r ](.*)$", re.IGNORECASE | re.MULTILINE)
_SPACE = r"[\t\n\f\r ]"


def parse_latest_version(orb_id: str, info: str) -> str:
    """Return the ``Latest:`` entry of ``circleci orb info`` output.

    Raises ValueError unless exactly one such entry is present.
    """
    matches = _LATEST.findall(info)
    if len(matches) != 1:
        raise ValueError(
            f"Expected info to contain\n\n\tLatest: {orb_id}@a.b.c\n\n"
            f"but got:\n\n{info}"
        )
    return matches[0]


def fetch_orb_version(orb_id: str) -> str:
    """Ask the ``circleci`` tool for the latest version of ``orb_id``."""
    completed = subprocess.run(
        ["circleci", "--skip-update-check", "orb", "info", orb_id],
        capture_output=True,
        text=True,
        check=True,
    )
    return parse_latest_version(orb_id, completed.stdout)


def fetch_versions(orb_ids: Iterable[str] = ORBS) -> dict[str, str]:
    """Fetch the latest versions of all ``orb_ids`` concurrently."""
    ids = list(orb_ids)
    if not ids:
        return {}
    with ThreadPoolExecutor(max_workers=len(ids)) as executor:
        return dict(zip(ids, executor.map(fetch_orb_version, ids)))


def bump_config(config: str, versions: Mapping[str, str]) -> str:
    """Replace every indented ``name: <orb>@<version>`` entry with the new version."""
    for orb_id, version in versions.items():
        pattern = re.compile(
            rf"^({_SPACE}{_SPACE}[^:]+:{_SPACE})({re.escape(orb_id)}@[0-9a-zA-Z.]+)$",
            re.IGNORECASE | re.MULTILINE,
        )
        config = pattern.sub(lambda match, new=version: match.group(1) + new, config)
    return config