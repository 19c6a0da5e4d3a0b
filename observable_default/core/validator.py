"""
Declaration validation.

Rejects every declaration shape the synthesizer cannot handle and extracts
a PropertyDescriptor from the ones it can.
"""

from dataclasses import dataclass
from typing import Optional

from ..models import SourceLocation
from ..state import ExpansionSettings, get_settings
from .diagnostics import DiagnosticID, report
from .syntax import (
    Attribute,
    Declaration,
    Expr,
    IdentifierPattern,
    OptionalType,
    OtherDecl,
    TypeExpr,
    BindingSpecifier,
)


@dataclass(frozen=True)
class PropertyDescriptor:
    """The validated shape of an annotated stored property."""
    name: str
    declared_type: TypeExpr
    default_value_expr: Optional[Expr]
    attribute: Attribute

    @property
    def is_optional(self) -> bool:
        return isinstance(self.declared_type, OptionalType)

    @property
    def value_type(self) -> TypeExpr:
        """The type values are decoded as: the wrapped type for optionals."""
        if isinstance(self.declared_type, OptionalType):
            return self.declared_type.wrapped
        return self.declared_type


def directive_location(decl: Declaration) -> Optional[SourceLocation]:
    """Where diagnostics about ``decl`` point: its directive, else the declaration."""
    return decl.attribute.location or decl.location


def validate_declaration(
    decl: Declaration,
    settings: Optional[ExpansionSettings] = None,
) -> PropertyDescriptor:
    """
    Validate ``decl`` and return its PropertyDescriptor.

    Checks run in a fixed order and the first failure is raised as an
    ExpansionError.
    """
    directive = get_settings(settings).directive_name
    location = directive_location(decl)

    if isinstance(decl, OtherDecl) or decl.specifier is not BindingSpecifier.VAR:
        raise report(DiagnosticID.NOT_VARIABLE_PROPERTY, location, directive)

    if len(decl.bindings) != 1:
        raise report(DiagnosticID.MULTIPLE_BINDINGS_NOT_SUPPORTED, location, directive)
    binding = decl.bindings[0]

    if binding.accessor_block is not None:
        raise report(DiagnosticID.ALREADY_COMPUTED_PROPERTY, location, directive)

    if not isinstance(binding.pattern, IdentifierPattern):
        raise report(DiagnosticID.NON_SIMPLE_PATTERN, location, directive)

    if binding.type_annotation is None:
        raise report(
            DiagnosticID.MISSING_TYPE_ANNOTATION, location, directive,
            detail=binding.pattern.name,
        )

    return PropertyDescriptor(
        name=binding.pattern.name,
        declared_type=binding.type_annotation,
        default_value_expr=binding.initializer,
        attribute=decl.attribute,
    )
