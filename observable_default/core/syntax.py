"""
Host-neutral declaration syntax.

The expansion pipeline consumes these nodes instead of a concrete parser's
tree. Every node family is a small closed set of frozen dataclasses, and
source locations never take part in equality.

Example:
    VariableDecl(
        specifier=BindingSpecifier.VAR,
        bindings=(Binding(IdentifierPattern("age"), NamedType("int", int), Literal(0)),),
        attribute=Attribute("user_default", LabeledExprList((
            LabeledExpr("store", MemberAccess(None, "shared")),
        ))),
    )
"""

import ast
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union

from ..models import SourceLocation


def _location():
    return field(default=None, compare=False, repr=False)


# ─────────────────────────────────────────────────────────────────────────────
# Expressions
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Identifier:
    name: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class MemberAccess:
    """``base.member``; ``base`` is None for the leading-dot form ``.member``."""
    base: Optional["Expr"]
    member: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Call:
    callee: "Expr"
    arguments: Tuple["LabeledExpr", ...] = ()
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Literal:
    """A constant, or any value handed over by a runtime front end."""
    value: Any
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class RawExpression:
    """Expression text outside the shapes above; passed through untouched."""
    text: str
    location: Optional[SourceLocation] = _location()


Expr = Union[Identifier, MemberAccess, Call, Literal, RawExpression]


@dataclass(frozen=True)
class LabeledExpr:
    label: Optional[str]
    expression: Expr
    location: Optional[SourceLocation] = _location()


# ─────────────────────────────────────────────────────────────────────────────
# Types and patterns
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NamedType:
    """A type by name; ``annotation`` is the runtime type, when one exists."""
    name: str
    annotation: Any = field(default=None, compare=False)


@dataclass(frozen=True)
class OptionalType:
    wrapped: "TypeExpr"


TypeExpr = Union[NamedType, OptionalType]


@dataclass(frozen=True)
class IdentifierPattern:
    name: str


@dataclass(frozen=True)
class TuplePattern:
    elements: Tuple["Pattern", ...]


@dataclass(frozen=True)
class AttributePattern:
    """Any other assignment target, e.g. ``obj.attr``."""
    text: str


Pattern = Union[IdentifierPattern, TuplePattern, AttributePattern]


# ─────────────────────────────────────────────────────────────────────────────
# Declarations
# ─────────────────────────────────────────────────────────────────────────────

class BindingSpecifier(Enum):
    VAR = "var"
    LET = "let"


@dataclass(frozen=True)
class AccessorBlock:
    """Marks a binding that already computes its value."""
    kinds: Tuple[str, ...] = ("get",)


@dataclass(frozen=True)
class Binding:
    pattern: Pattern
    type_annotation: Optional[TypeExpr] = None
    initializer: Optional[Expr] = None
    accessor_block: Optional[AccessorBlock] = None


@dataclass(frozen=True)
class LabeledExprList:
    items: Tuple[LabeledExpr, ...] = ()


@dataclass(frozen=True)
class UnparsedArguments:
    """An argument clause that is not a flat labeled list."""
    text: str
    location: Optional[SourceLocation] = _location()


Arguments = Union[LabeledExprList, UnparsedArguments]


@dataclass(frozen=True)
class Attribute:
    """The directive attached to a declaration; ``arguments`` is None without parentheses."""
    name: str
    arguments: Optional[Arguments] = None
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class VariableDecl:
    specifier: BindingSpecifier
    bindings: Tuple[Binding, ...]
    attribute: Attribute
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class OtherDecl:
    """Any declaration that is not a variable (function, class, ...)."""
    kind: str
    attribute: Attribute
    location: Optional[SourceLocation] = _location()


Declaration = Union[VariableDecl, OtherDecl]


# ─────────────────────────────────────────────────────────────────────────────
# Parsing expression text
# ─────────────────────────────────────────────────────────────────────────────

def parse_expression(text: str, location: Optional[SourceLocation] = None) -> Expr:
    """
    Parse Python expression text into expression nodes.

    Accepts the leading-dot shorthand (``.shared``) in addition to regular
    Python syntax. Shapes without a node of their own become RawExpression.
    """
    source = text.strip()
    if source.startswith(".") and source[1:].isidentifier():
        return MemberAccess(None, source[1:], location)
    try:
        tree = ast.parse(source, mode="eval")
    except SyntaxError:
        return RawExpression(source, location)
    return _convert(tree.body, source, location)


def _convert(node: ast.AST, source: str, location: Optional[SourceLocation]) -> Expr:
    if isinstance(node, ast.Name):
        return Identifier(node.id, location)
    if isinstance(node, ast.Attribute):
        return MemberAccess(_convert(node.value, source, location), node.attr, location)
    if isinstance(node, ast.Constant):
        return Literal(node.value, location)
    if isinstance(node, ast.Call):
        arguments = [LabeledExpr(None, _convert(arg, source, location), location) for arg in node.args]
        arguments.extend(
            LabeledExpr(kw.arg, _convert(kw.value, source, location), location)
            for kw in node.keywords
        )
        return Call(_convert(node.func, source, location), tuple(arguments), location)
    segment = ast.get_source_segment(source, node) or ast.unparse(node)
    return RawExpression(segment, location)
