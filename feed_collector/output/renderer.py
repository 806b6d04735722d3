"""
Markdown rendering of digest pages using a Jinja2 template.

The digest generator only depends on the `Renderer` call signature, so any
callable turning a DigestPage into text can replace MarkdownRenderer.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Callable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..core.types import DigestPage


Renderer = Callable[[DigestPage, bool], str]

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "digest.md.j2"

_LINK_TEXT_RE = re.compile(r"([\[\]\\])")
_WHITESPACE_RE = re.compile(r"\s+")


def md_link_text(value: str) -> str:
    """Escape characters that would end a markdown link label early.

    Examples:
        >>> md_link_text("[PDF] Report")
        "\\[PDF\\] Report"
    """
    return _LINK_TEXT_RE.sub(r"\\\1", value)


def oneline(value: str) -> str:
    """Collapse all whitespace runs, including newlines, to single spaces."""
    return _WHITESPACE_RE.sub(" ", value).strip()


class MarkdownRenderer:
    """Renders DigestPage objects with a Jinja2 markdown template.

    Attributes:
        weekly_dir: Directory name linked from the summary page
    """

    def __init__(
        self,
        template_dir: Path = TEMPLATE_DIR,
        template_name: str = DEFAULT_TEMPLATE,
        weekly_dir: str = "data",
    ):
        env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["md_link_text"] = md_link_text
        env.filters["oneline"] = oneline
        self._template = env.get_template(template_name)
        self.weekly_dir = weekly_dir

    def __call__(self, page: DigestPage, summary: bool = False) -> str:
        return self._template.render(
            title=page.title,
            user_name=page.user_name,
            items=page.items,
            count=page.count,
            updated=page.updated,
            summary=summary,
            weekly_dir=self.weekly_dir,
        )
