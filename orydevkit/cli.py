"""Command line entry point for the developer tools."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from functools import partial

from orydevkit.changes import RepositoryChanges
from orydevkit.components import (
    affected_components,
    changed_components,
    current_component,
    format_components,
    involved_components,
)
from orydevkit.depgraph import CircularDependencyError, ComponentGraph, ConfigError
from orydevkit.github_env import render_env
from orydevkit.headers import copy_file, copy_file_no_overwrite, copy_files
from orydevkit.markdown_render import render_markdown
from orydevkit.orbs import DEFAULT_CONFIG_PATH, ORBS, bump_config, fetch_versions
from orydevkit.run import RunMode, run_wrapper

_ERRORS = (
    OSError,
    ValueError,
    RuntimeError,
    ConfigError,
    CircularDependencyError,
    subprocess.CalledProcessError,
)


def _show_help(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    parser.print_help()
    return 0


def _group(subparsers, name: str, help_text: str, description: str | None = None):
    parser = subparsers.add_parser(name, help=help_text, description=description or help_text)
    parser.set_defaults(handler=partial(_show_help, parser))
    return parser, parser.add_subparsers(metavar="command")


def _repository(args: argparse.Namespace, git_options: str = "") -> RepositoryChanges:
    return RepositoryChanges(
        args.root,
        args.revision_range,
        git_options,
        is_pr=bool(args.pr),
        verbose=args.verbose,
        debug=args.debug,
    )


def _changed_directories(args: argparse.Namespace) -> str:
    try:
        return _repository(args).changed_directories()
    except RuntimeError:
        return ""


def _cmd_changes(args: argparse.Namespace) -> int:
    repository = _repository(args, args.gitopts)
    try:
        if args.mode == "full":
            if not args.gitopts:
                repository.git_options = "--pretty=full" if args.pr else "-1 --pretty=full"
            output = repository.change_log()
        elif args.mode == "directories":
            output = repository.changed_directories()
        elif args.mode == "files":
            output = repository.changed_files()
        else:
            print(f"Unknown ListMode '{args.mode}'", file=sys.stderr)
            return 1
    except RuntimeError:
        output = ""
    print(output)
    return 0


def _cmd_components(args: argparse.Namespace) -> int:
    try:
        graph = ComponentGraph.from_directory(args.root)
    except (OSError, ConfigError):
        graph = ComponentGraph()
    if args.mode == "all":
        selected = graph.components
    elif args.mode == "affected":
        selected = affected_components(graph, _changed_directories(args))
    elif args.mode == "changed":
        selected = changed_components(graph, _changed_directories(args))
    elif args.mode == "involved":
        selected = involved_components(graph, _changed_directories(args))
    else:
        print(f"Unknown ListMode '{args.mode}'", file=sys.stderr)
        return 1
    print(format_components(selected, args.verbose), end="")
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    graph = ComponentGraph.from_directory(args.root)
    component = current_component(args.root)
    directories = _changed_directories(args)
    affected = component.id in {c.id for c in affected_components(graph, directories)}
    changed = component.id in {c.id for c in changed_components(graph, directories)}
    run_wrapper(
        component,
        args.commands,
        args.mode,
        affected,
        changed,
        changed or affected,
        args.inverse,
        args.dry_run,
    )
    return 0


def _cmd_bump(args: argparse.Namespace) -> int:
    versions = fetch_versions(ORBS)
    with open(args.path, encoding="utf-8", newline="") as handle:
        config = handle.read()
    config = bump_config(config, versions)
    if args.write:
        with open(args.path, "w", encoding="utf-8", newline="") as handle:
            handle.write(config)
        print(f"Successfully wrote new orb versions to CircleCI config file: {args.path}")
    else:
        print(config)
    return 0


def _cmd_github_env(args: argparse.Namespace) -> int:
    output = render_env(
        os.environ.get("GITHUB_REF", ""),
        os.environ.get("GITHUB_REPOSITORY", ""),
        os.environ.get("SWAGGER_SPEC_IGNORE_PKGS", ""),
    )
    print(output, end="")
    return 0


def _cmd_copy(args: argparse.Namespace) -> int:
    if args.recursive:
        copy_files(args.src, args.dst)
    elif args.no_clobber:
        copy_file_no_overwrite(args.src, args.dst)
    else:
        copy_file(args.src, args.dst)
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    with open(args.file, "rb") as handle:
        print(render_markdown(handle.read()))
    return 0


def _add_monorepo_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", default=".", help="Root directory to search for dependency configurations.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug output")
    parser.add_argument("--pr", default="", help="Pull Request")
    parser.add_argument("--branch", default="", help="Branch")
    parser.add_argument("--revisionRange", dest="revision_range", default="", help="Revision range used to determine changes.")


def _build_monorepo(ci) -> None:
    _, monorepo = _group(ci, "monorepo", "Helpers for CircleCI monorepo support")

    changes = monorepo.add_parser("changes", help="List changes in the repository.")
    _add_monorepo_flags(changes)
    changes.add_argument("-m", "--mode", default="directories", help="Type of change information: full, files, directories.")
    changes.add_argument("-g", "--gitopts", default="", help="Custom git arguments used to determine changes.")
    changes.set_defaults(handler=_cmd_changes)

    components = monorepo.add_parser("components", help="List components based on mode.")
    _add_monorepo_flags(components)
    components.add_argument("-m", "--mode", default="involved", help="Components to list: affected, all, changed, involved.")
    components.set_defaults(handler=_cmd_components)

    run = monorepo.add_parser("run", help="Runs the specified commands on changes")
    _add_monorepo_flags(run)
    run.add_argument("-c", "--commands", default="", help="Commands to be run if the current component is affected.")
    run.add_argument("-m", "--mode", default=RunMode.CURRENT_INVOLVED.value, help="current_changed, current_affected or current_involved.")
    run.add_argument("--dry-run", action="store_true", help="Only display the commands.")
    run.add_argument("--inverse", action="store_true", help="Run when the component is not affected/involved/changed.")
    run.set_defaults(handler=_cmd_run)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(prog="ory")
    parser.set_defaults(handler=partial(_show_help, parser))
    root = parser.add_subparsers(metavar="command")

    _, dev = _group(
        root,
        "dev",
        "Developer tools for writing Ory software",
        "Developer tools and convenience functions for writing Ory software.",
    )

    _, ci = _group(dev, "ci", "Continuous Integration helpers")

    _, orbs = _group(ci, "orbs", "Helpers for CircleCI")
    bump = orbs.add_parser("bump", help="Bump CircleCI Orb versions")
    bump.add_argument("path", nargs="?", default=DEFAULT_CONFIG_PATH)
    bump.add_argument("-w", "--write", action="store_true", help="Write output to the config file instead of stdout.")
    bump.set_defaults(handler=_cmd_bump)

    _, github = _group(ci, "github", "Helpers for GitHub")
    env = github.add_parser("env", help="Sets up environment variables")
    env.set_defaults(handler=_cmd_github_env)

    _build_monorepo(ci)

    _, headers = _group(dev, "headers", "Adds language-specific headers to files")
    cp = headers.add_parser("cp", help="Behaves like cp but adds a header pointing to the original.")
    cp.add_argument("src")
    cp.add_argument("dst")
    cp.add_argument("-r", "--recursive", action="store_true", help="Copy files in subdirectories")
    cp.add_argument("-n", "--no-clobber", action="store_true", help="Do not overwrite an existing file")
    cp.set_defaults(handler=_cmd_copy)

    _, markdown = _group(dev, "markdown", "Utilities for working with markdown")
    render = markdown.add_parser("render", help="Render a Markdown file")
    render.add_argument("file")
    render.set_defaults(handler=_cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command given by ``argv`` and return its exit status."""
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except _ERRORS as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())