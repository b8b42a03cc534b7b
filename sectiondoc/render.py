"""
Comment and page rendering

Comment text is Markdown and goes through Python-Markdown; the finished
sections are laid out in a two-column page, docs on the left and code on
the right, linking to one shared stylesheet in the output root.
"""

from functools import lru_cache
from html import escape
from importlib import resources
from typing import List

from markdown import markdown

from .parser import Section

STYLESHEET_NAME = "doc-style.css"

MARKDOWN_EXTENSIONS = [
    'markdown.extensions.fenced_code',
    'markdown.extensions.tables',
    'markdown.extensions.smarty',
]


def render_markdown(text: str) -> str:
    """Convert comment text to HTML"""
    return markdown(text, extensions=MARKDOWN_EXTENSIONS)


def render_docs(sections: List[Section]) -> List[Section]:
    """Fill in `doc_html` for every section"""
    for section in sections:
        section.doc_html = render_markdown(section.doc_text)
    return sections


@lru_cache(maxsize=None)
def load_stylesheet() -> str:
    """Read the packaged stylesheet, once per process"""
    return (resources.files('sectiondoc') / 'resources' / STYLESHEET_NAME).read_text(encoding='utf-8')


def generate_section_html(index: int, section: Section) -> str:
    """Render one table row"""
    return f"""
            <tr id="section-{index}">
                <td class="docs">
                    <div class="pilwrap">
                        <a class="pilcrow" href="#section-{index}">&#182;</a>
                    </div>
                    {section.doc_html}
                </td>
                <td class="code">
                    {section.code_html}
                </td>
            </tr>"""


def generate_html(title: str, sections: List[Section], relative_dir: str) -> str:
    """Generate the HTML page for one source file.

    Args:
        title: Page title, normally the source file's base name
        sections: Highlighted and rendered sections
        relative_dir: Prefix leading from the page back to the output root
    """
    rows = ''.join(generate_section_html(i, section) for i, section in enumerate(sections, 1))

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <link rel="stylesheet" href="{escape(relative_dir)}{STYLESHEET_NAME}">
</head>
<body>
    <div id="container">
        <div id="background"></div>
        <table cellpadding="0" cellspacing="0">
            <thead>
                <tr>
                    <th class="docs"><h1>{escape(title)}</h1></th>
                    <th class="code"></th>
                </tr>
            </thead>
            <tbody>{rows}
            </tbody>
        </table>
    </div>
</body>
</html>
"""
