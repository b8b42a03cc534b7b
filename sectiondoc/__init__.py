"""
sectiondoc

Generates documentation pages that show a source file's comments, rendered
as Markdown, next to its syntax-highlighted code.

Example usage:
    from sectiondoc import DocGenerator, GeneratorConfig

    generator = DocGenerator(GeneratorConfig(in_dir="src", out_dir="docs"))
    generator.doc(["app.js", "lib"])
"""

__version__ = "1.0.0"

from .errors import (
    HighlighterError,
    SectionDocError,
    StructuredCommentError,
    UnsupportedLanguageError,
)
from .languages import LANGUAGES, LanguageRules, can_handle, register_language, rules_for
from .parser import Section, parse_sections
from .structured import (
    StructuredComment,
    Tag,
    format_structured_comment,
    parse_structured_comment,
    render_structured_comment,
)
from .highlight import highlight_sections
from .render import generate_html, render_docs
from .generator import DocGenerator, GeneratorConfig, create_default_config

__all__ = [
    "DocGenerator",
    "GeneratorConfig",
    "HighlighterError",
    "LANGUAGES",
    "LanguageRules",
    "Section",
    "SectionDocError",
    "StructuredComment",
    "StructuredCommentError",
    "Tag",
    "UnsupportedLanguageError",
    "can_handle",
    "create_default_config",
    "format_structured_comment",
    "generate_html",
    "highlight_sections",
    "parse_sections",
    "parse_structured_comment",
    "register_language",
    "render_docs",
    "render_structured_comment",
    "rules_for",
]
