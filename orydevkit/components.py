"""Select the monorepo components touched by a set of changed directories."""

from __future__ import annotations

import os
from typing import Iterable

from orydevkit.depgraph import CONFIG_FILE, Component, ComponentGraph, load_component


def _directories(changed_directories: str | Iterable[str]) -> list[str]:
    if isinstance(changed_directories, str):
        return changed_directories.split("\n")
    return list(changed_directories)


def changed_components(
    graph: ComponentGraph, changed_directories: str | Iterable[str]
) -> list[Component]:
    """Return the components whose path prefixes one of the changed directories.

    ``changed_directories`` is a list of paths or a newline-separated string.
    """
    found: dict[str, Component] = {}
    for changed_path in _directories(changed_directories):
        for path, component in graph.component_paths.items():
            if component.id not in found and changed_path.startswith(path):
                found[component.id] = component
    return list(found.values())


def affected_components(
    graph: ComponentGraph, changed_directories: str | Iterable[str]
) -> list[Component]:
    """Return every component that depends, directly or not, on a changed one."""
    affected: dict[str, None] = {}
    for changed in changed_components(graph, changed_directories):
        for dependent in changed.dependent_components(graph):
            affected.setdefault(dependent.id)

    pending = list(affected)
    while pending:
        component = graph.component_ids[pending.pop(0)]
        for dependent in component.dependent_components(graph):
            if dependent.id not in affected:
                affected[dependent.id] = None
                pending.append(dependent.id)
    return [graph.component_ids[cid] for cid in affected]


def involved_components(
    graph: ComponentGraph, changed_directories: str | Iterable[str]
) -> list[Component]:
    """Return the changed components together with those they affect."""
    directories = _directories(changed_directories)
    ids = dict.fromkeys(
        component.id
        for component in (
            *changed_components(graph, directories),
            *affected_components(graph, directories),
        )
    )
    return [graph.component_ids[cid] for cid in ids]


def current_component(
    root_directory: str, working_directory: str | None = None
) -> Component:
    """Load the component configured in ``working_directory`` (default: cwd)."""
    if working_directory is None:
        working_directory = os.getcwd()
    return load_component(os.path.join(working_directory, CONFIG_FILE), root_directory)


def format_components(components: Iterable[Component], verbose: bool) -> str:
    """Render components one per line: as YAML when verbose, else by id."""
    return "".join(
        f"{component.to_yaml() if verbose else component.id}\n"
        for component in components
    )