from .syntax import (
    AccessorBlock,
    Attribute,
    AttributePattern,
    Binding,
    BindingSpecifier,
    Call,
    Identifier,
    IdentifierPattern,
    LabeledExpr,
    LabeledExprList,
    Literal,
    MemberAccess,
    NamedType,
    OptionalType,
    OtherDecl,
    RawExpression,
    TuplePattern,
    UnparsedArguments,
    VariableDecl,
    parse_expression,
)
from .diagnostics import DiagnosticID, ExpansionError
from .validator import PropertyDescriptor, validate_declaration
from .arguments import DirectiveArguments, parse_arguments
from .resolver import ResolvedStoreRef, StoreDefaults, StoreOrigin, resolve_store
from .synthesizer import AccessorSpec, GetterBody, SetterBody, synthesize_accessors
from .render import render_accessors, render_expression
from .expansion import Expansion, expand, expand_all

__all__ = [
    # Syntax
    "AccessorBlock",
    "Attribute",
    "AttributePattern",
    "Binding",
    "BindingSpecifier",
    "Call",
    "Identifier",
    "IdentifierPattern",
    "LabeledExpr",
    "LabeledExprList",
    "Literal",
    "MemberAccess",
    "NamedType",
    "OptionalType",
    "OtherDecl",
    "RawExpression",
    "TuplePattern",
    "UnparsedArguments",
    "VariableDecl",
    "parse_expression",
    # Pipeline
    "DiagnosticID",
    "ExpansionError",
    "PropertyDescriptor",
    "validate_declaration",
    "DirectiveArguments",
    "parse_arguments",
    "ResolvedStoreRef",
    "StoreDefaults",
    "StoreOrigin",
    "resolve_store",
    "AccessorSpec",
    "GetterBody",
    "SetterBody",
    "synthesize_accessors",
    "render_accessors",
    "render_expression",
    "Expansion",
    "expand",
    "expand_all",
]
