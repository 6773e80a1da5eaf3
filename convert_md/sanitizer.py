"""
Mermaid source fix-ups applied before a diagram is embedded in HTML.

Mermaid rejects a handful of constructs that are common in hand-written
diagrams (stereotypes with spaces, nullable member types, stereotypes
nested in class bodies, subgraph titles with spaces). Each rule below is a
pure ``str -> str`` function; ``sanitize`` applies them in order.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import re
from typing import Callable, List, Tuple

_STEREOTYPE_RE = re.compile(r'<<([^>]+)>>')
_STEREOTYPE_SEPARATORS_RE = re.compile(r'[\s/]+')

# "+name? Type" -> "+name Type"
_NULLABLE_MEMBER_RE = re.compile(r'^(\s*[+\-#~]?\w+)\?(\s+\w+)', re.MULTILINE)
# "method() Type" -> "method()"
_METHOD_RETURN_TYPE_RE = re.compile(r'(\(\))[ \t]+\w+[ \t]*(?=\r?$)', re.MULTILINE)

# class Name {
#     <<Stereotype>>
# }
_BODY_STEREOTYPE_RE = re.compile(r'class\s+(\w+)\s*\{\s*\n\s*(<<[^>]+>>)\s*\n\s*\}')

_MULTIWORD_SUBGRAPH_RE = re.compile(
    r'^([ \t]*)subgraph[ \t]+([A-Za-z][A-Za-z0-9]*(?:[ \t]+[A-Za-z][A-Za-z0-9]*)+)[ \t]*(?=\r?$)',
    re.MULTILINE,
)
_EDGE_OPERATORS = r'(-->|---)'


def normalize_stereotypes(code: str) -> str:
    """Replace whitespace and slashes inside ``<<...>>`` with underscores."""
    def _replace(match):
        content = _STEREOTYPE_SEPARATORS_RE.sub('_', match.group(1).strip())
        return f'<<{content}>>'

    return _STEREOTYPE_RE.sub(_replace, code)


def clean_member_signatures(code: str) -> str:
    """Drop nullable markers on member names and return types after ``()``."""
    code = _NULLABLE_MEMBER_RE.sub(r'\1\2', code)
    return _METHOD_RETURN_TYPE_RE.sub(r'\1', code)


def relocate_body_stereotypes(code: str) -> str:
    """Move a stereotype that is the only content of a class body outside it."""
    return _BODY_STEREOTYPE_RE.sub(r'class \1\n\2 \1', code)


def _subgraph_id(name: str) -> str:
    return re.sub(r'\s+', '_', name)


def _name_pattern(name: str) -> str:
    # Words may be separated by any run of spaces or tabs in references
    return r'[ \t]+'.join(re.escape(word) for word in name.split())


def name_multiword_subgraphs(code: str) -> str:
    """Give subgraphs with multi-word titles an identifier and fix edges to them.

    ``subgraph Payment Service`` becomes
    ``subgraph Payment_Service["Payment Service"]`` and every
    ``X --> Payment Service`` / ``Payment Service --- Y`` reference is
    rewritten to use ``Payment_Service``.
    """
    subgraphs: List[Tuple[str, str]] = []

    def _declare(match):
        indent, name = match.group(1), match.group(2)
        subgraph_id = _subgraph_id(name)
        subgraphs.append((name, subgraph_id))
        return f'{indent}subgraph {subgraph_id}["{name}"]'

    code = _MULTIWORD_SUBGRAPH_RE.sub(_declare, code)

    # Longest names first: a shorter title can be part of a longer one
    subgraphs.sort(key=lambda item: (len(item[0].split()), len(item[0])), reverse=True)
    for name, subgraph_id in subgraphs:
        pattern = _name_pattern(name)
        code = re.sub(
            rf'{_EDGE_OPERATORS}[ \t]*{pattern}(?!\w)',
            lambda m: f'{m.group(1)} {subgraph_id}',
            code,
        )
        code = re.sub(
            rf'(?<![\w"]){pattern}[ \t]*{_EDGE_OPERATORS}',
            lambda m: f'{subgraph_id} {m.group(1)}',
            code,
        )

    return code


def escape_angle_brackets(code: str) -> str:
    """HTML-escape ``<`` and ``>``; Mermaid decodes the entities when parsing."""
    return code.replace('<', '&lt;').replace('>', '&gt;')


SANITIZE_RULES: Tuple[Callable[[str], str], ...] = (
    normalize_stereotypes,
    clean_member_signatures,
    relocate_body_stereotypes,
    name_multiword_subgraphs,
    escape_angle_brackets,
)


def sanitize(code: str) -> str:
    """Apply every rule in ``SANITIZE_RULES`` to a Mermaid diagram source."""
    for rule in SANITIZE_RULES:
        code = rule(code)
    return code
