# orydevkit

Developer tools for CI pipelines: monorepo change detection, CircleCI orb
bumping, GitHub Actions environment exports, copying files with a generated
header comment, and Markdown rendering.

## Installation

```console
$ pip install .
```

With the test dependencies:

```console
$ pip install ".[test]"
```

## Command line

All commands sit below the `dev` group of the `orydevkit` command:

```console
$ orydevkit dev --help
```

### Monorepo support

Components are described by `monorepo.yml` files anywhere below the root
directory (`--root`, default `.`). A component's path is the directory of
its `monorepo.yml` relative to the root:

```yaml
id: api
name: API server
deps:
  - common
```

List changes (`--mode` is `directories`, `files` or `full`) and components
(`--mode` is `involved`, `changed`, `affected` or `all`):

```console
$ orydevkit dev ci monorepo changes --mode files
$ orydevkit dev ci monorepo components --mode involved
```

Changes are read from `git log` in the root directory; with `--pr` set all
commits of `--revisionRange` are considered, otherwise only the last one.
A component is *changed* when a changed directory starts with its path,
*affected* when it depends, directly or indirectly, on a changed component,
and *involved* when it is either.

Run a command only when the component configured in the working directory
is touched by the changes:

```console
$ orydevkit dev ci monorepo run --mode current_involved --commands "make test"
```

`--mode` is `current_involved`, `current_changed` or `current_affected`;
`--inverse` runs the command when the component is *not* touched, and
`--dry-run` only reports the decision. The command line is split on spaces
and started directly, without a shell.

### CircleCI orbs

Bump the orbs listed in `orydevkit.orbs.ORBS` in `.circleci/config.yml`
(or the path given) to their latest versions. This needs the `circleci`
command; without `--write` the updated config is printed:

```console
$ orydevkit dev ci orbs bump --write
```

### GitHub Actions environment

Print `export` statements built from `GITHUB_REF`, `GITHUB_REPOSITORY` and
`SWAGGER_SPEC_IGNORE_PKGS`. When `GITHUB_REF` names neither a tag nor a
branch, the current branch is taken from `git`:

```console
$ orydevkit dev ci github env
```

### File headers

Copy a file like `cp` (`-r` for directories, `-n` to keep existing files),
prepending an "AUTO-GENERATED, DO NOT EDIT!" comment that links to the
source path under `orydevkit.headers.ROOT_PATH`. The comment syntax follows
the target's extension (`cs`, `dart`, `go`, `java`, `js`, `md`, `php`,
`py`, `rb`, `rs`, `ts`, `vue`, `yml`/`yaml`); other files are copied as
they are:

```console
$ orydevkit dev headers cp -r templates out
```

### Markdown

Render a Markdown file to HTML. `<p>` tags are dropped, each paragraph ends
with `<br>`, and absolute links get `target="_blank"`:

```console
$ orydevkit dev markdown render CHANGELOG.md
```

## Library use

```python
from orydevkit.comments import POUND_COMMENTS, get_file_type, supports_file
from orydevkit.depgraph import CircularDependencyError, ComponentGraph
from orydevkit.markdown_render import render_markdown

print(render_markdown("**foo**"))          # <strong>foo</strong><br>
print(POUND_COMMENTS.render_block("Hello\nWorld"))
print(get_file_type("config.yaml"), supports_file("notes.txt"))  # yml False

graph = ComponentGraph.from_directory(".")
try:
    for component in graph.resolve().components:
        print(component.id)
except CircularDependencyError as err:
    print("cycle among:", [c.id for c in err.remaining.components])
```

Other entry points: `orydevkit.changes.RepositoryChanges`,
`orydevkit.components` (`changed_components`, `affected_components`,
`involved_components`, `current_component`, `format_components`),
`orydevkit.run.run_wrapper`, `orydevkit.orbs.bump_config` and
`orydevkit.github_env.render_env`.

## What it does not do

The `dev` group holds only the `ci`, `headers` and `markdown` tools above.
There are no commands for managing hosted projects, running a proxy or
tunnel, database migrations, releases, newsletters, or API schema and
specification generation. The `headers` group only copies files; it does
not add licence headers to a tree of files.