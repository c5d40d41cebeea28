"""Prompt templates: parsing to a small AST and pure rendering.

Supported syntax:

- ``{{path}}`` or ``{{{path}}}`` inserts a request value.
- ``{{#each path}}...{{else}}...{{/each}}`` repeats its body once per list
  element, in order; the optional ``else`` branch renders for an empty list.
- ``{{#if path}}...{{else}}...{{/if}}`` renders a branch depending on whether
  the value is truthy. An absent field is falsy.
- ``{{media url=path}}`` embeds a document given as a base64 data URI.
- ``\\{{`` emits a literal ``{{``.

Inside ``#each`` the current element is ``this`` (``this.name`` for its
fields) and ``@index`` is its zero-based position. Other paths resolve
against the request root. Block tags alone on a line consume that line.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dppflows.exceptions import TemplateError
from dppflows.typing.models.common import DATA_URI_PATTERN
from dppflows.typing.models.prompt import MediaReference, RenderedPrompt

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel

_TAG_RE = re.compile(r"\\\{\{|\{\{\{\s*(.*?)\s*\}\}\}|\{\{\s*(.*?)\s*\}\}", re.DOTALL)
_STANDALONE_RE = re.compile(r"\{\{\s*(?:#(?:each|if)\s+[^}]*|else|/(?:each|if))\s*\}\}")
_PATH_RE = re.compile(r"(?:@index|this|[A-Za-z_]\w*)(?:\.[A-Za-z_]\w*)*")
_MEDIA_RE = re.compile(r"media\s+url=(\S+)")
_DATA_URI_RE = re.compile(DATA_URI_PATTERN)

_MISSING = object()


@dataclass(frozen=True)
class Text:
    """Verbatim text."""

    text: str


@dataclass(frozen=True)
class FieldRef:
    """Value lookup rendered as text."""

    path: str


@dataclass(frozen=True)
class MediaRef:
    """Inline document attachment."""

    path: str


@dataclass(frozen=True)
class Repeat:
    """Body repeated per list element, with a branch for empty lists."""

    path: str
    body: tuple[Node, ...]
    empty: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Conditional:
    """Branch selected by the truthiness of a value."""

    path: str
    then: tuple[Node, ...]
    otherwise: tuple[Node, ...] = ()


type Node = Text | FieldRef | MediaRef | Repeat | Conditional


@dataclass(frozen=True)
class PromptTemplate:
    """Parsed prompt template."""

    name: str
    source: str
    nodes: tuple[Node, ...]


def _strip_standalone_tags(source: str) -> str:
    """Drop the indentation and line break around block tags on their own line."""
    lines = []
    for line in source.splitlines(keepends=True):
        stripped = line.strip()
        if stripped and _STANDALONE_RE.fullmatch(stripped):
            lines.append(stripped)
        else:
            lines.append(line)
    return "".join(lines)


def _tokenize(source: str, name: str) -> list[tuple[str, str]]:
    """Split template text into ``("text", value)`` and ``("tag", content)`` tokens."""
    tokens: list[tuple[str, str]] = []
    position = 0
    for match in _TAG_RE.finditer(source):
        if match.start() > position:
            tokens.append(("text", source[position : match.start()]))
        position = match.end()
        if match.group(0) == "\\{{":
            tokens.append(("text", "{{"))
            continue
        triple, double = match.group(1), match.group(2)
        if triple is not None:
            if not _PATH_RE.fullmatch(triple):
                raise TemplateError(message=f"Template '{name}': invalid placeholder '{{{{{{{triple}}}}}}}'")
            tokens.append(("tag", triple))
        else:
            tokens.append(("tag", double))
    if position < len(source):
        tokens.append(("text", source[position:]))
    return tokens


def _checked_path(path: str, name: str) -> str:
    if not _PATH_RE.fullmatch(path):
        raise TemplateError(message=f"Template '{name}': invalid path '{path}'")
    return path


def parse_template(name: str, source: str) -> PromptTemplate:
    """Parse template text into an immutable AST.

    Args:
        name (str): Template name used in error messages.
        source (str): Template text.

    Raises:
        TemplateError: If tags are malformed or blocks are unbalanced.

    Returns:
        PromptTemplate: Parsed template.
    """
    tokens = _tokenize(_strip_standalone_tags(source), name)
    # Each frame: (block kind, path, nodes before else, nodes after else or None).
    stack: list[tuple[str, str, list[Node], list[Node] | None]] = [("root", "", [], None)]

    def _current() -> list[Node]:
        frame = stack[-1]
        return frame[3] if frame[3] is not None else frame[2]

    for kind, value in tokens:
        if kind == "text":
            _current().append(Text(value))
            continue

        if value.startswith("#each ") or value.startswith("#if "):
            block, _, path = value[1:].partition(" ")
            stack.append((block, _checked_path(path.strip(), name), [], None))
        elif value == "else":
            block, path, primary, secondary = stack[-1]
            if block == "root" or secondary is not None:
                raise TemplateError(message=f"Template '{name}': unexpected {{{{else}}}}")
            stack[-1] = (block, path, primary, [])
        elif value in {"/each", "/if"}:
            block, path, primary, secondary = stack.pop()
            if block != value[1:]:
                raise TemplateError(message=f"Template '{name}': unexpected {{{{{value}}}}}")
            node: Node
            if block == "each":
                node = Repeat(path, tuple(primary), tuple(secondary or ()))
            else:
                node = Conditional(path, tuple(primary), tuple(secondary or ()))
            _current().append(node)
        elif value.startswith("media"):
            match = _MEDIA_RE.fullmatch(value)
            if match is None:
                raise TemplateError(message=f"Template '{name}': invalid media tag '{value}'")
            _current().append(MediaRef(_checked_path(match.group(1), name)))
        else:
            _current().append(FieldRef(_checked_path(value, name)))

    if len(stack) != 1:
        raise TemplateError(message=f"Template '{name}': unclosed {{{{#{stack[-1][0]}}}}} block")
    return PromptTemplate(name=name, source=source, nodes=tuple(stack[0][2]))


@dataclass(frozen=True)
class _Scope:
    root: Mapping[str, Any]
    this: Any = _MISSING
    index: int | None = None


def _lookup(path: str, scope: _Scope) -> Any:
    head, *rest = path.split(".")
    if head == "@index":
        value: Any = _MISSING if scope.index is None else scope.index
    elif head == "this":
        value = scope.this
    else:
        value = scope.root.get(head, _MISSING)

    for key in rest:
        if not isinstance(value, dict):
            return _MISSING
        value = value.get(key, _MISSING)
    return value


def _require(path: str, scope: _Scope, template: PromptTemplate) -> Any:
    value = _lookup(path, scope)
    if value is _MISSING:
        raise TemplateError(message=f"Template '{template.name}': field '{path}' is missing from the request")
    return value


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    return str(value)


def _media(value: Any, path: str, index: int, template: PromptTemplate) -> MediaReference:
    match = _DATA_URI_RE.match(value) if isinstance(value, str) else None
    if match is None:
        raise TemplateError(message=f"Template '{template.name}': field '{path}' is not a base64 data URI")
    return MediaReference(index=index, mime_type=match.group(1), data_base64=match.group(3))


def _render_nodes(
    nodes: tuple[Node, ...],
    scope: _Scope,
    template: PromptTemplate,
    parts: list[str | MediaReference],
) -> None:
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, FieldRef):
            parts.append(_to_text(_require(node.path, scope, template)))
        elif isinstance(node, MediaRef):
            media_count = sum(1 for part in parts if isinstance(part, MediaReference))
            parts.append(_media(_require(node.path, scope, template), node.path, media_count, template))
        elif isinstance(node, Conditional):
            value = _lookup(node.path, scope)
            branch = node.then if value is not _MISSING and value else node.otherwise
            _render_nodes(branch, scope, template, parts)
        else:
            items = _require(node.path, scope, template)
            if not isinstance(items, list):
                raise TemplateError(message=f"Template '{template.name}': field '{node.path}' is not a list")
            if not items:
                _render_nodes(node.empty, scope, template, parts)
            for index, item in enumerate(items):
                _render_nodes(node.body, _Scope(root=scope.root, this=item, index=index), template, parts)


def render_template(template: PromptTemplate, request: BaseModel | Mapping[str, Any]) -> RenderedPrompt:
    """Render a template against a request.

    Optional request fields left unset are treated as absent.

    Args:
        template (PromptTemplate): Parsed template.
        request (BaseModel | Mapping[str, Any]): Request model or plain mapping.

    Raises:
        TemplateError: If a referenced field is absent outside a conditional.

    Returns:
        RenderedPrompt: Text parts interleaved with attachment references.
    """
    if isinstance(request, dict):
        context: Mapping[str, Any] = request
    elif hasattr(request, "model_dump"):
        context = request.model_dump(mode="json", exclude_none=True)
    else:
        context = dict(request)

    raw_parts: list[str | MediaReference] = []
    _render_nodes(template.nodes, _Scope(root=context), template, raw_parts)

    parts: list[str | MediaReference] = []
    for part in raw_parts:
        if isinstance(part, str) and parts and isinstance(parts[-1], str):
            parts[-1] += part
        elif part != "":
            parts.append(part)
    return RenderedPrompt(parts=tuple(parts))
