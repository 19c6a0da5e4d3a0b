"""
Printing of synthesized accessors as Python source.
"""

from ..models import AccessorFragments
from .synthesizer import AccessorSpec
from .syntax import (
    Call,
    Expr,
    Identifier,
    Literal,
    MemberAccess,
    NamedType,
    OptionalType,
    RawExpression,
    TypeExpr,
)

INDENT = "    "
CODEC_NAME = "json_codec"


def render_expression(expr: Expr, self_name: str = "Self") -> str:
    """Print an expression; the enclosing-type reference prints as ``type(self)``."""
    if isinstance(expr, Identifier):
        return "type(self)" if expr.name == self_name else expr.name
    if isinstance(expr, MemberAccess):
        if expr.base is None:
            return f".{expr.member}"
        return f"{render_expression(expr.base, self_name)}.{expr.member}"
    if isinstance(expr, Call):
        arguments = []
        for argument in expr.arguments:
            value = render_expression(argument.expression, self_name)
            arguments.append(f"{argument.label}={value}" if argument.label else value)
        return f"{render_expression(expr.callee, self_name)}({', '.join(arguments)})"
    if isinstance(expr, Literal):
        return repr(expr.value)
    if isinstance(expr, RawExpression):
        return expr.text
    raise TypeError(f"Unknown expression node: {expr!r}")


def render_type(type_expr: TypeExpr) -> str:
    if isinstance(type_expr, OptionalType):
        return f"Optional[{render_type(type_expr.wrapped)}]"
    if isinstance(type_expr, NamedType):
        return type_expr.name
    raise TypeError(f"Unknown type node: {type_expr!r}")


def render_getter(spec: AccessorSpec, self_name: str = "Self") -> str:
    body = spec.getter
    name = body.property_name
    store = render_expression(body.store.expression, self_name)
    key = render_expression(body.key, self_name)
    lines = [
        "@property",
        f"def {name}(self) -> {render_type(spec.declared_type)}:",
        f"{INDENT}self.access({name!r})",
        f"{INDENT}data = {store}.data({key})",
        f"{INDENT}if data is not None:",
        f"{INDENT * 2}decoded = {CODEC_NAME}.decode(data, {render_type(body.decode_type)})",
        f"{INDENT * 2}if decoded is not None:",
        f"{INDENT * 3}return decoded",
        f"{INDENT}return {render_expression(body.fallback, self_name)}",
    ]
    return "\n".join(lines)


def render_setter(spec: AccessorSpec, self_name: str = "Self") -> str:
    body = spec.setter
    name = body.property_name
    store = render_expression(body.store.expression, self_name)
    key = render_expression(body.key, self_name)
    lines = [
        f"@{name}.setter",
        f"def {name}(self, new_value: {render_type(body.value_type)}) -> None:",
        f"{INDENT}with self.with_mutation({name!r}):",
        f"{INDENT * 2}data = {CODEC_NAME}.encode(new_value)",
        f"{INDENT * 2}if data is not None:",
        f"{INDENT * 3}{store}.set(data, {key})",
    ]
    return "\n".join(lines)


def render_accessors(spec: AccessorSpec, self_name: str = "Self") -> AccessorFragments:
    """Render both accessors of ``spec``."""
    return AccessorFragments(
        property_name=spec.property_name,
        key=render_expression(spec.key, self_name),
        store=render_expression(spec.store.expression, self_name),
        getter=render_getter(spec, self_name),
        setter=render_setter(spec, self_name),
    )
