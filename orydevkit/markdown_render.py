"""Render Markdown to an HTML fragment with paragraphs turned into line breaks."""

from __future__ import annotations

from markdown_it import MarkdownIt


def _is_relative_link(link: str) -> bool:
    if not link:
        return False
    if link.startswith("#"):
        return True
    if link == "/" or (link.startswith("/") and not link.startswith("//")):
        return True
    return link.startswith("./") or link.startswith("../")


def _render_link_open(self, tokens, idx, options, env):
    token = tokens[idx]
    href = token.attrGet("href") or ""
    if href and not _is_relative_link(href):
        token.attrSet("target", "_blank")
    return self.renderToken(tokens, idx, options, env)


def _render_as_del(self, tokens, idx, options, env):
    tokens[idx].tag = "del"
    return self.renderToken(tokens, idx, options, env)


def _parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"typographer": True})
    md.enable(["table", "strikethrough", "replacements", "smartquotes"])
    md.add_render_rule("link_open", _render_link_open)
    md.add_render_rule("s_open", _render_as_del)
    md.add_render_rule("s_close", _render_as_del)
    return md


def render_markdown(source: bytes | str) -> str:
    """Render ``source`` to HTML, dropping ``<p>`` and closing paragraphs with ``<br>``.

    Absolute links open in a new window.
    """
    text = source.decode("utf-8") if isinstance(source, bytes) else source
    rendered = _parser().render(text)
    return rendered.replace("<p>", "").replace("</p>", "<br>")