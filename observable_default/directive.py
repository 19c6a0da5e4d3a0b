"""
The ``user_default`` directive and its translation into declaration syntax.

Usage:
    class Person(Observable):
        # No argument list
        name: Annotated[Optional[str], user_default]

        # Labeled arguments
        age: Annotated[int, user_default(store=".shared")] = 0
        email: Annotated[str, user_default(key="contact_email", default_value="")]

Arguments are recorded exactly as written; checking them is left to the
expansion pipeline so misuse shows up as a diagnostic, not a TypeError.
"""

import sys
import types
from typing import Annotated, Any, ClassVar, Dict, Final, List, Optional, Tuple, Union, get_args, get_origin

from .core.syntax import (
    AccessorBlock,
    Attribute,
    Binding,
    BindingSpecifier,
    Expr,
    IdentifierPattern,
    LabeledExpr,
    LabeledExprList,
    Literal,
    NamedType,
    OptionalType,
    TypeExpr,
    VariableDecl,
    parse_expression,
)
from .models import SourceLocation


class UserDefault:
    """Directive marker placed in ``Annotated`` metadata."""

    def __init__(self, *args, **kwargs):
        self.args: Tuple[Any, ...] = args
        self.kwargs: Dict[str, Any] = kwargs

    def __repr__(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"user_default({', '.join(parts)})"


def user_default(*args, **kwargs) -> UserDefault:
    """
    Mark an annotated class attribute as persisted.

    Can be used with or without a call:

    Annotated[Optional[str], user_default]
    Annotated[int, user_default(store=".shared")]
    """
    return UserDefault(*args, **kwargs)


def is_directive(value: Any) -> bool:
    return value is user_default or value is UserDefault or isinstance(value, UserDefault)


# ─────────────────────────────────────────────────────────────────────────────
# Annotation -> declaration syntax
# ─────────────────────────────────────────────────────────────────────────────

def split_annotation(hint: Any) -> Tuple[Any, List[Any], bool]:
    """
    Strip ``Annotated``, ``Final`` and ``ClassVar`` from ``hint``.

    Returns:
        (bare type, Annotated metadata, whether a constant qualifier was found)
    """
    metadata: List[Any] = []
    constant = False
    while True:
        if hint is Final or hint is ClassVar:
            return Any, metadata, True
        origin = get_origin(hint)
        if origin is Annotated:
            metadata.extend(hint.__metadata__)
            hint = hint.__origin__
        elif origin is Final or origin is ClassVar:
            constant = True
            args = get_args(hint)
            hint = args[0] if args else Any
        else:
            return hint, metadata, constant


def type_name(hint: Any) -> str:
    if isinstance(hint, type) and get_origin(hint) is None:
        return hint.__name__
    return repr(hint).replace("typing.", "")


def type_expr(hint: Any) -> TypeExpr:
    """Convert a Python annotation; ``Optional[T]`` and ``T | None`` become OptionalType."""
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = get_args(hint)
        if type(None) in args:
            rest = tuple(a for a in args if a is not type(None))
            if len(rest) == 1:
                wrapped = rest[0]
            else:
                wrapped = Union[rest]
            return OptionalType(NamedType(type_name(wrapped), wrapped))
    return NamedType(type_name(hint), hint)


def argument_expr(label: Optional[str], value: Any, location: SourceLocation) -> Expr:
    # Store references may be given as expression text: "shared_store", ".shared", "Defaults.suite('x')"
    if label == "store" and isinstance(value, str):
        return parse_expression(value, location)
    return Literal(value, location)


def directive_attribute(marker: Any, name: str, location: SourceLocation) -> Attribute:
    if not isinstance(marker, UserDefault):
        return Attribute(name, None, location)
    items = [LabeledExpr(None, argument_expr(None, value, location), location) for value in marker.args]
    items.extend(
        LabeledExpr(label, argument_expr(label, value, location), location)
        for label, value in marker.kwargs.items()
    )
    return Attribute(name, LabeledExprList(tuple(items)), location)


def is_computed(value: Any) -> bool:
    # Properties and data descriptors; plain functions are ordinary defaults
    return isinstance(value, property) or hasattr(type(value), "__set__")


_MISSING = object()


def declaration_for(
    owner: type,
    name: str,
    hint: Any,
    directive_name: str,
) -> Optional[VariableDecl]:
    """
    Build the declaration for one class annotation.

    Returns None when the annotation carries no directive.
    """
    bare, metadata, constant = split_annotation(hint)
    markers = [m for m in metadata if is_directive(m)]
    if not markers:
        return None

    module = sys.modules.get(owner.__module__)
    location = SourceLocation(
        file=getattr(module, "__file__", None) or owner.__module__,
        symbol=f"{owner.__qualname__}.{name}",
    )

    value = owner.__dict__.get(name, _MISSING)
    accessor_block = None
    initializer = None
    if value is not _MISSING:
        if is_computed(value):
            accessor_block = AccessorBlock()
        else:
            initializer = Literal(value, location)

    binding = Binding(
        pattern=IdentifierPattern(name),
        type_annotation=type_expr(bare),
        initializer=initializer,
        accessor_block=accessor_block,
    )
    return VariableDecl(
        specifier=BindingSpecifier.LET if constant else BindingSpecifier.VAR,
        bindings=(binding,),
        attribute=directive_attribute(markers[0], directive_name, location),
        location=location,
    )
