"""Monorepo components read from ``monorepo.yml`` files and their dependency graph."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterator

import yaml

CONFIG_FILE = "monorepo.yml"


class ConfigError(Exception):
    """A component configuration is missing, malformed or inconsistent."""


class CircularDependencyError(Exception):
    """The components depend on each other in a cycle."""

    def __init__(self, remaining: "ComponentGraph") -> None:
        super().__init__("Circular dependency found")
        self.remaining = remaining


@dataclass
class Component:
    """A component's configuration plus its path relative to the root directory."""

    id: str = ""
    name: str = ""
    dependencies: list[str] = field(default_factory=list)
    path: str = ""

    def to_yaml(self) -> str:
        """Render the component as YAML."""
        return yaml.safe_dump(
            {
                "id": self.id,
                "name": self.name,
                "deps": list(self.dependencies),
                "path": self.path,
            },
            sort_keys=False,
            default_flow_style=False,
        )

    def __str__(self) -> str:
        return self.to_yaml()

    def is_dependent(self, cid: str) -> bool:
        """Tell whether this component depends on the component ``cid``."""
        return cid in self.dependencies

    def dependent_components(self, graph: "ComponentGraph") -> list["Component"]:
        """Return the components of ``graph`` that depend on this one."""
        found: dict[int, Component] = {}
        for comp in graph.components:
            if comp.is_dependent(self.id):
                found.setdefault(id(comp), comp)
        return list(found.values())


@dataclass
class ComponentGraph:
    """All components found below a root directory."""

    components: list[Component] = field(default_factory=list)
    component_ids: dict[str, Component] = field(default_factory=dict)
    component_dependencies: dict[str, set[str]] = field(default_factory=dict)
    component_paths: dict[str, Component] = field(default_factory=dict)

    def add_component(self, component: Component) -> None:
        """Add ``component`` to the graph."""
        self.components.append(component)
        self.component_ids[component.id] = component
        self.component_paths[component.path] = component
        self.component_dependencies[component.id] = set(component.dependencies)

    def __len__(self) -> int:
        return len(self.components)

    def resolve(self) -> "ComponentGraph":
        """Return a graph whose components come after everything they depend on.

        Raises ConfigError for an unknown dependency and
        CircularDependencyError, holding the unresolved components, for a cycle.
        """
        for cid, deps in self.component_dependencies.items():
            for dep in sorted(deps):
                if dep not in self.component_ids:
                    raise ConfigError(f"Component '{cid}': dependency '{dep}' unknown!")

        pending = {cid: set(deps) for cid, deps in self.component_dependencies.items()}
        order = list(dict.fromkeys(c.id for c in self.components))
        order += [cid for cid in pending if cid not in order]

        resolved = ComponentGraph()
        while pending:
            ready = [cid for cid in order if cid in pending and not pending[cid]]
            if not ready:
                remaining = ComponentGraph()
                for cid in order:
                    if cid in pending:
                        remaining.add_component(self.component_ids[cid])
                raise CircularDependencyError(remaining)
            ready_set = set(ready)
            for cid in ready:
                del pending[cid]
                resolved.add_component(self.component_ids[cid])
            for deps in pending.values():
                deps -= ready_set
        return resolved

    @classmethod
    def from_directory(cls, root_directory: str) -> "ComponentGraph":
        """Build a graph from every ``monorepo.yml`` below ``root_directory``."""
        if not os.path.isdir(root_directory):
            os.stat(root_directory)
            raise NotADirectoryError(
                f"Provided path '{root_directory}' is not a directory"
            )
        graph = cls()
        for path in _walk_files(root_directory):
            if os.path.basename(path) == CONFIG_FILE:
                graph.add_component(load_component(path, root_directory))
        return graph


def _walk_files(root: str) -> Iterator[str]:
    """Yield files below ``root`` in lexical order, reporting unreadable directories."""
    try:
        with os.scandir(root) as entries:
            ordered = sorted(entries, key=lambda entry: entry.name)
    except OSError as err:
        print(err)
        return
    for entry in ordered:
        path = os.path.join(root, entry.name)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(path)
        else:
            yield path


def _as_string(value: object, key: str, config_file_path: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(
            f"Error reading config file '{config_file_path}', invalid format: "
            f"'{key}' must be a string"
        )
    return value


def load_component(config_file_path: str, root_dir: str) -> Component:
    """Read the component configured in ``config_file_path``.

    Its path is the config file's directory relative to ``root_dir``.
    """
    try:
        with open(config_file_path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as err:
        raise ConfigError(f"Config file not found: '{config_file_path}'") from err
    try:
        data = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as err:
        raise ConfigError(
            f"Error reading config file '{config_file_path}', invalid format: {err}"
        ) from err
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Error reading config file '{config_file_path}', invalid format: "
            "expected a mapping"
        )
    deps = data.get("deps")
    if deps is None:
        deps = []
    if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
        raise ConfigError(
            f"Error reading config file '{config_file_path}', invalid format: "
            "'deps' must be a list of strings"
        )
    component = Component(
        id=_as_string(data.get("id"), "id", config_file_path),
        name=_as_string(data.get("name"), "name", config_file_path),
        dependencies=list(deps),
        path=_as_string(data.get("path"), "path", config_file_path),
    )
    absolute_config = os.path.abspath(config_file_path)
    absolute_root = os.path.abspath(root_dir) + os.sep
    relative = absolute_config
    if relative.startswith(absolute_root):
        relative = relative[len(absolute_root) :]
    suffix = os.sep + CONFIG_FILE
    if relative.endswith(suffix):
        relative = relative[: -len(suffix)]
    component.path = relative
    return component