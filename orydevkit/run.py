"""Run commands depending on whether the current component is touched by changes."""

from __future__ import annotations

import subprocess
from enum import Enum

from orydevkit.depgraph import Component


class RunMode(str, Enum):
    """When to run the commands for the current component."""

    CURRENT_AFFECTED = "current_affected"
    CURRENT_CHANGED = "current_changed"
    CURRENT_INVOLVED = "current_involved"


def _describe(**states: bool) -> str:
    return ", ".join(f"{name}: {str(value).lower()}" for name, value in states.items())


def run_command(component: Component, command_line: str, dry_run: bool) -> None:
    """Run ``command_line`` (split on spaces), or only announce it when ``dry_run``.

    Raises OSError if the program cannot be started and
    subprocess.CalledProcessError if it exits with an error.
    """
    if dry_run:
        print("Skipping execution because --dry-run was set.", end="")
        return
    subprocess.run(command_line.split(" "), check=True)


def run_wrapper(
    component: Component,
    command_line: str,
    mode: RunMode | str,
    affected: bool,
    changed: bool,
    involved: bool,
    inverse: bool,
    dry_run: bool = False,
) -> None:
    """Run the command if the state selected by ``mode`` differs from ``inverse``.

    Raises ValueError for an unknown mode and RuntimeError if the command fails.
    """
    try:
        run_mode = RunMode(mode)
    except ValueError:
        raise ValueError(f"unknown runMode: {mode}") from None

    if run_mode is RunMode.CURRENT_INVOLVED:
        should_run = involved != inverse
        details = _describe(
            affected=affected, changed=changed, involved=involved, inverse=inverse
        )
    elif run_mode is RunMode.CURRENT_AFFECTED:
        should_run = affected != inverse
        details = _describe(affected=affected, inverse=inverse)
    else:
        should_run = changed != inverse
        details = _describe(changed=changed, inverse=inverse)

    print(f"{component.id} runCmd: {str(should_run).lower()} ({details})")
    if should_run:
        try:
            run_command(component, command_line, dry_run)
        except (OSError, subprocess.CalledProcessError) as err:
            raise RuntimeError(
                f"failed to execute command '{command_line}': {err}"
            ) from err