"""
Store expression resolution.

Maps the raw ``store`` argument onto the canonical expression the accessors
read and write through. Total: every input shape has exactly one mapping.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..state import ExpansionSettings, get_settings
from .syntax import Expr, Identifier, MemberAccess


class StoreOrigin(Enum):
    DEFAULT = "default"
    SELF_MEMBER = "self_member"
    STORE_TYPE_MEMBER = "store_type_member"
    VERBATIM = "verbatim"


@dataclass(frozen=True)
class StoreDefaults:
    """The default store, passed in explicitly rather than read from a global."""
    type_name: str = "Defaults"
    member: str = "standard"
    self_name: str = "Self"

    @classmethod
    def from_settings(cls, settings: Optional[ExpansionSettings] = None) -> "StoreDefaults":
        settings = get_settings(settings)
        return cls(
            type_name=settings.default_store_type,
            member=settings.default_store_member,
            self_name=settings.self_name,
        )


@dataclass(frozen=True)
class ResolvedStoreRef:
    """Canonical store expression; equality ignores which branch produced it."""
    expression: Expr
    origin: StoreOrigin = field(default=StoreOrigin.VERBATIM, compare=False)


def resolve_store(store_arg: Optional[Expr], defaults: StoreDefaults = StoreDefaults()) -> ResolvedStoreRef:
    """Resolve ``store_arg`` against ``defaults``."""
    if store_arg is None:
        return ResolvedStoreRef(
            MemberAccess(Identifier(defaults.type_name), defaults.member),
            StoreOrigin.DEFAULT,
        )

    # `store` -> `Self.store`
    if isinstance(store_arg, Identifier):
        return ResolvedStoreRef(
            MemberAccess(Identifier(defaults.self_name), store_arg.name, store_arg.location),
            StoreOrigin.SELF_MEMBER,
        )

    # `.shared` -> `Defaults.shared`
    if isinstance(store_arg, MemberAccess) and store_arg.base is None:
        return ResolvedStoreRef(
            MemberAccess(Identifier(defaults.type_name), store_arg.member, store_arg.location),
            StoreOrigin.STORE_TYPE_MEMBER,
        )

    return ResolvedStoreRef(store_arg, StoreOrigin.VERBATIM)
