"""
Accessor synthesis.

Produces a structured description of the getter and setter. Nothing here
knows about concrete syntax; see render.py for printing and
runtime/accessors.py for execution.

Policy:
    optional T?   fallback is the initializer, else "no value";
                  an explicit ``defaultValue`` argument is rejected.
    plain T       fallback is ``defaultValue`` if given, else the
                  initializer; one of them is required.
    key           the ``key`` argument, else the property name as a literal.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..state import ExpansionSettings, get_settings
from .arguments import DirectiveArguments
from .diagnostics import DiagnosticID, report
from .resolver import ResolvedStoreRef
from .syntax import Expr, Literal, TypeExpr
from .validator import PropertyDescriptor

logger = logging.getLogger(__name__)

NO_VALUE = Literal(None)


@dataclass(frozen=True)
class GetterBody:
    """Notify access, read ``key`` from ``store``, decode as ``decode_type``, else ``fallback``."""
    property_name: str
    store: ResolvedStoreRef
    key: Expr
    decode_type: TypeExpr
    fallback: Expr


@dataclass(frozen=True)
class SetterBody:
    """Inside one mutation notification: encode the new value, write it only if encoding worked."""
    property_name: str
    store: ResolvedStoreRef
    key: Expr
    value_type: TypeExpr


@dataclass(frozen=True)
class AccessorSpec:
    property_name: str
    declared_type: TypeExpr
    is_optional: bool
    getter: GetterBody
    setter: SetterBody

    @property
    def key(self) -> Expr:
        return self.getter.key

    @property
    def store(self) -> ResolvedStoreRef:
        return self.getter.store

    @property
    def default(self) -> Expr:
        return self.getter.fallback


def effective_default(
    prop: PropertyDescriptor,
    args: DirectiveArguments,
    settings: Optional[ExpansionSettings] = None,
) -> Expr:
    """The value the getter falls back to when nothing valid is stored."""
    directive = get_settings(settings).directive_name
    location = prop.attribute.location

    if prop.is_optional:
        if args.explicit_default is not None:
            raise report(
                DiagnosticID.OPTIONAL_TYPE_MUST_NOT_HAVE_EXPLICIT_DEFAULT,
                args.explicit_default.location or location,
                directive,
            )
        return prop.default_value_expr if prop.default_value_expr is not None else NO_VALUE

    if args.explicit_default is not None:
        return args.explicit_default
    if prop.default_value_expr is not None:
        return prop.default_value_expr
    raise report(
        DiagnosticID.NON_OPTIONAL_TYPE_REQUIRES_DEFAULT_VALUE, location, directive,
        detail=prop.name,
    )


def synthesize_accessors(
    prop: PropertyDescriptor,
    args: DirectiveArguments,
    store: ResolvedStoreRef,
    settings: Optional[ExpansionSettings] = None,
) -> AccessorSpec:
    """Combine a validated property with its arguments and resolved store."""
    fallback = effective_default(prop, args, settings)
    key = args.key if args.key is not None else Literal(prop.name)

    spec = AccessorSpec(
        property_name=prop.name,
        declared_type=prop.declared_type,
        is_optional=prop.is_optional,
        getter=GetterBody(
            property_name=prop.name,
            store=store,
            key=key,
            decode_type=prop.value_type,
            fallback=fallback,
        ),
        setter=SetterBody(
            property_name=prop.name,
            store=store,
            key=key,
            value_type=prop.declared_type,
        ),
    )
    logger.debug("Synthesized accessors for %r (optional=%s)", prop.name, prop.is_optional)
    return spec
