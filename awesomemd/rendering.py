"""
# Awesome-Markdown: rendering.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Markdown rendering of component bodies.
"""

from typing import Callable

import markdown

from awesomemd.utilities import unwrap_paragraph

Renderer = Callable[[str], str]

MARKDOWN_EXTENSIONS = [
    'fenced_code',
    'tables',
]


def render_markdown(text: str) -> str:
    """
    Render a markdown fragment to HTML.

    Raw HTML (e.g. the output of an earlier component) is kept as written.
    """
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def render_inline(text: str, renderer: Renderer) -> str:
    """
    Render a markdown fragment for use inside an inline element.

    The `<p>` wrapper of a lone paragraph is removed.
    """
    return unwrap_paragraph(renderer(text).strip())
