"""
Structured doc comments

Parses jsDoc-style blocks such as

    /**
     * Creates a new generator.
     *
     * @param {string} inDir The root directory containing the code
     * @return {Generator}
     */

into a StructuredComment and renders it back out as Markdown, so it can go
through the same comment renderer as plain `//` comments.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import StructuredCommentError

DOC_OPEN = re.compile(r'^\s*/\*\*(?![*/])')
GUTTER = re.compile(r'^\s*\*(?!/) ?')
TAG_LINE = re.compile(r'^@(\w+)\s*(.*)$')

TAG_ALIASES = {
    'returns': 'return',
    'arg': 'param',
    'argument': 'param',
    'exception': 'throws',
}

# Tags that are meaningless without a value
REQUIRES_VALUE = {'param', 'return', 'type', 'throws', 'see'}


@dataclass
class Tag:
    """A single @tag line and its continuation lines"""
    kind: str
    types: List[str] = field(default_factory=list)
    name: str = ""
    description: str = ""
    optional: bool = False
    default: Optional[str] = None


@dataclass
class StructuredComment:
    """Description text plus the ordered tags of a doc comment"""
    description: str = ""
    tags: List[Tag] = field(default_factory=list)

    @property
    def params(self) -> List[Tag]:
        return [tag for tag in self.tags if tag.kind == 'param']

    @property
    def returns(self) -> Optional[Tag]:
        for tag in self.tags:
            if tag.kind == 'return':
                return tag
        return None

    @property
    def other_tags(self) -> List[Tag]:
        return [tag for tag in self.tags if tag.kind not in ('param', 'return')]


def strip_delimiters(raw: str) -> List[str]:
    """Remove /** */ and the leading * gutter from every line"""
    text = DOC_OPEN.sub('', raw, count=1)
    end = text.rfind('*/')
    if end >= 0:
        text = text[:end]

    lines = text.split('\n')
    stripped = [lines[0].strip()]
    for line in lines[1:]:
        stripped.append(GUTTER.sub('', line).rstrip())

    # Drop blank lines at both ends
    while stripped and not stripped[0]:
        stripped.pop(0)
    while stripped and not stripped[-1]:
        stripped.pop()
    return stripped


def split_type(value: str) -> Tuple[List[str], str]:
    """Split a leading {type} expression off a tag value"""
    if not value.startswith('{'):
        return [], value

    depth = 0
    for i, char in enumerate(value):
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                expr = value[1:i].strip()
                types = [t.strip() for t in expr.split('|') if t.strip()]
                return types, value[i + 1:].strip()

    raise StructuredCommentError(f"Unclosed type expression: {value}")


def split_param_name(value: str) -> Tuple[str, bool, Optional[str], str]:
    """Split `name rest` or `[name=default] rest` into its parts"""
    if value.startswith('['):
        close = value.find(']')
        if close < 0:
            raise StructuredCommentError(f"Unclosed optional parameter: {value}")
        inner = value[1:close].strip()
        rest = value[close + 1:].strip()
        name, _, default = inner.partition('=')
        return name.strip(), True, (default.strip() if default else None), rest

    parts = value.split(None, 1)
    name = parts[0] if parts else ""
    rest = parts[1] if len(parts) > 1 else ""
    return name, False, None, rest


def parse_tag(kind: str, value: str) -> Tag:
    """Parse the text following an @tag marker"""
    kind = TAG_ALIASES.get(kind, kind)
    if kind in REQUIRES_VALUE and not value:
        raise StructuredCommentError(f"@{kind} requires a value")

    types, rest = split_type(value)
    tag = Tag(kind=kind, types=types)

    if kind == 'param':
        name, optional, default, rest = split_param_name(rest)
        if not name:
            raise StructuredCommentError(f"@param is missing a parameter name: {value}")
        tag.name = name
        tag.optional = optional
        tag.default = default

    tag.description = rest
    return tag


def parse_structured_comment(raw: str) -> StructuredComment:
    """Parse a /** ... */ block.

    Args:
        raw: Full comment block including the delimiter lines

    Returns:
        StructuredComment with description and tags

    Raises:
        StructuredCommentError: the block is not a doc comment or a tag is malformed
    """
    if not DOC_OPEN.match(raw):
        raise StructuredCommentError("Not a doc comment block")

    comment = StructuredComment()
    description: List[str] = []
    current: Optional[Tag] = None

    for line in strip_delimiters(raw):
        match = TAG_LINE.match(line.strip())
        if match:
            current = parse_tag(match.group(1), match.group(2).strip())
            comment.tags.append(current)
        elif current is not None:
            # Continuation of the previous tag's description
            if line.strip():
                current.description = f"{current.description} {line.strip()}".strip()
        else:
            description.append(line)

    comment.description = '\n'.join(description).strip()
    return comment


def format_types(types: List[str]) -> str:
    return f"`{'|'.join(types)}`" if types else ""


def format_structured_comment(comment: StructuredComment) -> str:
    """Render a parsed doc comment as Markdown"""
    blocks = []
    if comment.description:
        blocks.append(comment.description)

    if comment.params:
        items = ["**Parameters**", ""]
        for param in comment.params:
            item = f"* `{param.name}`"
            if param.types:
                item += f" {format_types(param.types)}"
            if param.optional:
                item += " _(optional"
                item += f", default `{param.default}`)_" if param.default else ")_"
            if param.description:
                item += f": {param.description}"
            items.append(item)
        blocks.append('\n'.join(items))

    returns = comment.returns
    if returns is not None:
        line = "**Returns**"
        if returns.types:
            line += f" {format_types(returns.types)}"
        if returns.description:
            line += f" {returns.description}"
        blocks.append(line)

    others = comment.other_tags
    if others:
        items = []
        for tag in others:
            item = f"* **@{tag.kind}**"
            if tag.types:
                item += f" {format_types(tag.types)}"
            if tag.description:
                item += f" {tag.description}"
            items.append(item)
        blocks.append('\n'.join(items))

    if not blocks:
        return ""
    return '\n\n'.join(blocks) + '\n\n'


def render_structured_comment(raw: str) -> str:
    """Parse and format a doc comment block in one step"""
    return format_structured_comment(parse_structured_comment(raw))
