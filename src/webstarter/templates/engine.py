"""Template engine for starter files.

Two directive families are understood:

- ``<%= expr %>`` substitutes the value of ``expr``.
- ``<% if (cond) { %> ... <% } else if (cond) { %> ... <% } else { %> ... <% } %>``
  keeps only the text of the chosen branch. A single control tag may hold
  several statements, e.g. ``<% } if (cond) { %>``.

Expressions are deliberately small: paths rooted at ``project``
(``project.name``, ``project.entryPoint``), string and boolean literals,
``<path>.includes("tag")`` membership tests and ``!`` negation. Paths are
written in camelCase in templates and resolved against the snake_case fields
of the project configuration. A path that is not rooted at ``project`` is a
syntax error; an unknown field under ``project`` renders as an empty string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..config import ProjectConfig
from ..errors import TemplateSyntaxError

OPEN = "<%"
CLOSE = "%>"
ROOT = "project"

_SNIPPET_MAX = 80


@dataclass(frozen=True)
class RenderContext:
    project: ProjectConfig


# -----------------------------
# Expressions
# -----------------------------


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class FieldPath:
    parts: Tuple[str, ...]


@dataclass(frozen=True)
class Includes:
    path: FieldPath
    tag: str


@dataclass(frozen=True)
class Not:
    operand: "Expression"


Expression = Union[Literal, FieldPath, Includes, Not]

_IDENT = r"[A-Za-z_$][\w$]*"
_PATH_RE = re.compile(rf"^{_IDENT}(?:\s*\.\s*{_IDENT})*$")
_STRING_RE = re.compile(r"""^(?:"(?P<dq>[^"\\]*)"|'(?P<sq>[^'\\]*)')$""")
_INCLUDES_RE = re.compile(
    r"""^(?P<path>.+?)\s*\.\s*includes\s*\(\s*(?:"(?P<dq>[^"\\]*)"|'(?P<sq>[^'\\]*)')\s*\)$""",
    re.DOTALL,
)


def _snake_case(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


def _parse_path(source: str) -> FieldPath:
    if not _PATH_RE.match(source):
        raise ValueError(f"unsupported expression {source!r}")
    parts = tuple(p.strip() for p in source.split("."))
    if parts[0] != ROOT:
        raise ValueError(f"undefined path {source!r}")
    return FieldPath(parts)


def parse_expression(source: str) -> Expression:
    """Parse an interpolation or condition expression.

    Raises ValueError for anything outside the supported forms.
    """
    text = source.strip()
    if not text:
        raise ValueError("empty expression")
    if text.startswith("!"):
        return Not(parse_expression(text[1:]))
    if text in ("true", "false"):
        return Literal(text == "true")
    m = _STRING_RE.match(text)
    if m:
        return Literal(m.group("dq") if m.group("dq") is not None else m.group("sq"))
    m = _INCLUDES_RE.match(text)
    if m:
        tag = m.group("dq") if m.group("dq") is not None else m.group("sq")
        return Includes(_parse_path(m.group("path").strip()), tag)
    return _parse_path(text)


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        if name in obj:
            return obj[name]
        return obj.get(_snake_case(name))
    if is_dataclass(obj) and not isinstance(obj, type):
        attr = _snake_case(name)
        if attr in {f.name for f in fields(obj)}:
            return getattr(obj, attr)
    return None


def _resolve(path: FieldPath, context: RenderContext) -> Any:
    value: Any = context.project
    for part in path.parts[1:]:
        value = _lookup(value, part)
        if value is None:
            return None
    return value


def evaluate(expr: Expression, context: RenderContext) -> Any:
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, FieldPath):
        return _resolve(expr, context)
    if isinstance(expr, Includes):
        collection = _resolve(expr.path, context)
        if isinstance(collection, (list, tuple, set, frozenset, str)):
            return expr.tag in collection
        return False
    if isinstance(expr, Not):
        return not evaluate(expr.operand, context)
    raise TypeError(f"unknown expression node {expr!r}")


def format_value(value: Any) -> str:
    """Turn an evaluated expression into output text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(v) for v in value)
    return str(value)


# -----------------------------
# Template nodes
# -----------------------------


@dataclass
class Text:
    value: str


@dataclass
class Interpolation:
    expr: Expression


@dataclass
class Conditional:
    branches: List[Tuple[Expression, List["Node"]]] = field(default_factory=list)
    otherwise: Optional[List["Node"]] = None


Node = Union[Text, Interpolation, Conditional]


@dataclass
class _Token:
    kind: str  # text | interp | if | elif | else | end
    pos: int
    raw: str
    payload: str = ""


_ELSE_IF_RE = re.compile(r"\}\s*else\s+if\s*\((?P<cond>.*?)\)\s*\{", re.DOTALL)
_ELSE_RE = re.compile(r"\}\s*else\s*\{")
_END_RE = re.compile(r"\}")
_IF_RE = re.compile(r"if\s*\((?P<cond>.*?)\)\s*\{", re.DOTALL)
_WS_RE = re.compile(r"\s*")


class _Compiler:
    def __init__(self, text: str) -> None:
        self.text = text

    def error(self, message: str, pos: int, snippet: str) -> TemplateSyntaxError:
        line = self.text.count("\n", 0, pos) + 1
        if len(snippet) > _SNIPPET_MAX:
            snippet = snippet[:_SNIPPET_MAX] + "..."
        return TemplateSyntaxError(message, snippet=snippet, line=line)

    def tokenize(self) -> List[_Token]:
        text = self.text
        tokens: List[_Token] = []
        pos = 0
        while pos < len(text):
            start = text.find(OPEN, pos)
            if start == -1:
                tokens.append(_Token("text", pos, text[pos:], text[pos:]))
                break
            if start > pos:
                tokens.append(_Token("text", pos, text[pos:start], text[pos:start]))
            end = text.find(CLOSE, start + len(OPEN))
            if end == -1:
                raise self.error("unterminated directive", start, text[start:])
            raw = text[start : end + len(CLOSE)]
            if text.startswith(OPEN + "=", start):
                body = text[start + len(OPEN) + 1 : end]
                tokens.append(_Token("interp", start, raw, body))
            else:
                body = text[start + len(OPEN) : end]
                tokens.extend(self._statements(body, start, raw))
            pos = end + len(CLOSE)
        return tokens

    def _statements(self, body: str, pos: int, raw: str) -> List[_Token]:
        out: List[_Token] = []
        i = _WS_RE.match(body, 0).end()
        while i < len(body):
            m = _ELSE_IF_RE.match(body, i)
            if m:
                out.append(_Token("elif", pos, raw, m.group("cond")))
            else:
                m = _ELSE_RE.match(body, i)
                if m:
                    out.append(_Token("else", pos, raw))
                else:
                    m = _END_RE.match(body, i)
                    if m:
                        out.append(_Token("end", pos, raw))
                    else:
                        m = _IF_RE.match(body, i)
                        if m is None:
                            raise self.error("unsupported directive", pos, raw)
                        out.append(_Token("if", pos, raw, m.group("cond")))
            i = _WS_RE.match(body, m.end()).end()
        return out

    def expression(self, token: _Token) -> Expression:
        try:
            return parse_expression(token.payload)
        except ValueError as e:
            raise self.error(str(e), token.pos, token.raw) from None

    def compile(self) -> List[Node]:
        root: List[Node] = []
        current = root
        # (open conditional, list it was appended to, token that opened it)
        stack: List[Tuple[Conditional, List[Node], _Token]] = []
        for token in self.tokenize():
            if token.kind == "text":
                current.append(Text(token.payload))
            elif token.kind == "interp":
                current.append(Interpolation(self.expression(token)))
            elif token.kind == "if":
                body: List[Node] = []
                block = Conditional(branches=[(self.expression(token), body)])
                current.append(block)
                stack.append((block, current, token))
                current = body
            elif token.kind == "elif":
                if not stack or stack[-1][0].otherwise is not None:
                    raise self.error("unexpected 'else if'", token.pos, token.raw)
                body = []
                stack[-1][0].branches.append((self.expression(token), body))
                current = body
            elif token.kind == "else":
                if not stack or stack[-1][0].otherwise is not None:
                    raise self.error("unexpected 'else'", token.pos, token.raw)
                stack[-1][0].otherwise = []
                current = stack[-1][0].otherwise
            else:
                if not stack:
                    raise self.error("unmatched '}'", token.pos, token.raw)
                _, current, _ = stack.pop()
        if stack:
            _, _, opener = stack[-1]
            raise self.error("unterminated if block", opener.pos, opener.raw)
        return root


class Template:
    """A compiled template, renderable against any number of contexts."""

    def __init__(self, nodes: List[Node]) -> None:
        self.nodes = nodes

    def render(self, context: RenderContext) -> str:
        out: List[str] = []
        _render_nodes(self.nodes, context, out)
        return "".join(out)


def _render_nodes(nodes: List[Node], context: RenderContext, out: List[str]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.value)
        elif isinstance(node, Interpolation):
            out.append(format_value(evaluate(node.expr, context)))
        else:
            for cond, body in node.branches:
                if evaluate(cond, context):
                    _render_nodes(body, context, out)
                    break
            else:
                if node.otherwise is not None:
                    _render_nodes(node.otherwise, context, out)


def compile_template(text: str) -> Template:
    """Parse ``text`` into a Template, raising TemplateSyntaxError if malformed."""
    return Template(_Compiler(text).compile())


def render(text: str, context: RenderContext) -> str:
    """Render template text against ``context``."""
    return compile_template(text).render(context)
