"""Developer tools: monorepo change detection, CI helpers, file headers and Markdown rendering."""

__version__ = "0.1.0"