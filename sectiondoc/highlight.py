"""
Highlighter adapter

Highlights all the sections of a file with a single run of pygmentize.
The code of every section is joined with a divider comment, the highlighted
output is split again wherever the highlighted divider shows up, and each
fragment is handed back to its section.
"""

import logging
import re
import subprocess
import sys
from typing import List, Optional, Sequence

from .errors import HighlighterError
from .languages import LanguageRules
from .parser import Section

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = [sys.executable, '-m', 'pygments']

HIGHLIGHT_START = '<div class="highlight"><pre>'
HIGHLIGHT_END = '</pre></div>'
WRAPPER_START = re.compile(r'^\s*<div class="highlight"><pre>(<span></span>)?')
WRAPPER_END = re.compile(r'</pre></div>\s*$')


def build_command(command: Sequence[str], rules: LanguageRules, tab_size: int = 2) -> List[str]:
    """Assemble the highlighter command line for a language"""
    return list(command) + [
        '-l', rules.name,
        '-f', 'html',
        '-O', f'encoding=utf-8,tabsize={tab_size}',
    ]


def run_highlighter(
    code: str,
    rules: LanguageRules,
    command: Optional[Sequence[str]] = None,
    tab_size: int = 2,
    timeout: Optional[float] = None
) -> str:
    """Feed code to the highlighter on stdin and return its HTML output"""
    args = build_command(command or DEFAULT_COMMAND, rules, tab_size)
    logger.debug(f"Running highlighter: {' '.join(args)}")

    try:
        result = subprocess.run(
            args,
            input=code,
            capture_output=True,
            encoding='utf-8',
            timeout=timeout
        )
    except OSError as e:
        raise HighlighterError(f"Unable to start highlighter {args[0]}: {e}") from e
    except subprocess.TimeoutExpired:
        raise HighlighterError(f"Highlighter timed out after {timeout} seconds") from None

    if result.stderr:
        logger.warning(f"Highlighter: {result.stderr.strip()}")

    if result.returncode != 0:
        raise HighlighterError(
            f"Highlighter exited with code {result.returncode}",
            stderr=result.stderr
        )

    return result.stdout


def split_highlighted(output: str, rules: LanguageRules, count: int) -> List[str]:
    """Split highlighter output back into one fragment per section"""
    output = WRAPPER_START.sub('', output, count=1)
    output = WRAPPER_END.sub('', output, count=1)
    fragments = rules.divider_html.split(output)

    # Missing fragments are left empty
    if len(fragments) < count:
        fragments.extend([''] * (count - len(fragments)))
    return fragments[:count]


def highlight_sections(
    sections: List[Section],
    rules: LanguageRules,
    command: Optional[Sequence[str]] = None,
    tab_size: int = 2,
    timeout: Optional[float] = None
) -> List[Section]:
    """Fill in `code_html` for every section of one file.

    Args:
        sections: Sections produced by the parser
        rules: Language rules, used for the lexer name and the dividers
        command: Highlighter command, without the language/format options
        tab_size: Tab width passed to the highlighter
        timeout: Seconds to wait for the highlighter, or None to wait forever

    Returns:
        The same sections, with code_html set

    Raises:
        HighlighterError: the highlighter could not be run
    """
    code = rules.divider_text.join(section.code_text for section in sections)
    output = run_highlighter(code, rules, command, tab_size, timeout)

    for section, fragment in zip(sections, split_highlighted(output, rules, len(sections))):
        section.code_html = HIGHLIGHT_START + fragment + HIGHLIGHT_END

    return sections
