"""
Language rule table

Maps a file extension to the lexical rules used to split that file into
comment and code sections. Adding a language is a matter of registering
another LanguageRules record; the parser never branches on the language.
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageRules:
    """Lexical rules for one language"""
    name: str
    extensions: Tuple[str, ...]
    comment_regex: re.Pattern
    comments_ignore: re.Pattern
    multiline_start: re.Pattern
    multiline_end: re.Pattern
    divider_text: str
    divider_html: re.Pattern


def c_family(name: str, *extensions: str) -> LanguageRules:
    """Build rules for a language using // and /* */ comments.

    `comment_regex` strips a single-line comment marker, `comments_ignore`
    marks comments that are dropped entirely, and the dividers let all
    sections of a file go through the highlighter in one call.
    """
    return LanguageRules(
        name=name,
        extensions=extensions,
        comment_regex=re.compile(r'^\s*//\s?'),
        comments_ignore=re.compile(r'^\s*//='),
        multiline_start=re.compile(r'/\*'),
        multiline_end=re.compile(r'\*/'),
        divider_text='\n//----{DIVIDER_THING}----\n',
        divider_html=re.compile(r'\n*<span class="c1?">//----\{DIVIDER_THING\}----</span>\n*'),
    )


LANGUAGES: Dict[str, LanguageRules] = {}
EXTENSIONS: Dict[str, LanguageRules] = {}


def register_language(rules: LanguageRules) -> LanguageRules:
    """Add a rule set to the table, keyed by name and by each extension"""
    LANGUAGES[rules.name] = rules
    for ext in rules.extensions:
        EXTENSIONS[ext.lower()] = rules
    return rules


register_language(c_family('javascript', '.js', '.mjs', '.cjs'))
register_language(c_family('typescript', '.ts'))
register_language(c_family('java', '.java'))
register_language(c_family('c', '.c', '.h'))
register_language(c_family('cpp', '.cpp', '.cc', '.hpp'))


def rules_for(filename: str) -> LanguageRules:
    """Look up the rules for a file by its extension.

    Raises:
        UnsupportedLanguageError: no rule set is registered for the extension
    """
    ext = os.path.splitext(filename)[1].lower()
    try:
        return EXTENSIONS[ext]
    except KeyError:
        raise UnsupportedLanguageError(f"Unknown language for file: {filename}") from None


def can_handle(filename: str) -> bool:
    """Check whether a rule set exists for this file"""
    return os.path.splitext(filename)[1].lower() in EXTENSIONS
