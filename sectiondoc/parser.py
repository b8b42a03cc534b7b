"""
Section parser

Splits a source file into sections. A section is one block of code together
with the comment that precedes it:

    Section(doc_text='Include the modules.\\n', code_text='var fs = ...\\n')

The parser walks the file line by line with no lookahead. Single-line
comments and multi-line comment blocks both open a new section once code has
been seen; `/** */` blocks are run through the structured comment renderer.
"""

import logging
from dataclasses import dataclass
from typing import List

from .errors import StructuredCommentError
from .languages import LanguageRules
from .structured import render_structured_comment

logger = logging.getLogger(__name__)


@dataclass
class Section:
    """One comment + code pair"""
    doc_text: str = ""
    code_text: str = ""
    doc_html: str = ""
    code_html: str = ""

    def is_blank(self) -> bool:
        return not self.doc_text.strip() and not self.code_text.strip()


def close_multiline(buffer: str) -> str:
    """Turn a finished comment block into doc text, falling back to the raw block"""
    try:
        return render_structured_comment(buffer)
    except StructuredCommentError as e:
        logger.warning(f"Structured comment error: {e}")
        return buffer


def parse_sections(text: str, rules: LanguageRules) -> List[Section]:
    """Parse the content of a file into sections.

    Args:
        text: The contents of the source file
        rules: Lexical rules for the file's language

    Returns:
        Ordered list of sections, never empty
    """
    sections: List[Section] = []
    section = Section()
    in_multiline = False
    multiline = ""

    def flush():
        # Only start a new section once the current one has code; drop it if
        # both halves turned out to be whitespace
        nonlocal section
        if section.code_text:
            if not section.is_blank():
                sections.append(section)
            section = Section()

    # Split on \n only; other line-break characters belong to the code
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()

    for line in lines:
        if line.endswith('\r'):
            line = line[:-1]
        if in_multiline:
            if rules.multiline_end.search(line):
                # The block closes on this line; anything after */ goes with it
                if not rules.comments_ignore.search(line):
                    multiline += line + '\n'
                in_multiline = False
                section.doc_text += close_multiline(multiline)
                multiline = ""
            elif not rules.comments_ignore.search(line):
                multiline += line + '\n'
        elif rules.comments_ignore.search(line):
            continue
        elif rules.multiline_start.search(line) and not rules.multiline_end.search(line):
            flush()
            in_multiline = True
            multiline = line + '\n'
        elif rules.comment_regex.search(line):
            flush()
            section.doc_text += rules.comment_regex.sub('', line, count=1) + '\n'
        else:
            section.code_text += line + '\n'

    # A block still open here never closed; its content is dropped
    if in_multiline:
        dropped = multiline.count('\n')
        logger.debug(f"Unterminated comment block discarded ({dropped} lines)")

    sections.append(section)
    return sections
