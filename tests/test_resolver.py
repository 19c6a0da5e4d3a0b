from observable_default.core.resolver import (
    ResolvedStoreRef,
    StoreDefaults,
    StoreOrigin,
    resolve_store,
)
from observable_default.core.syntax import Call, Identifier, LabeledExpr, Literal, MemberAccess, parse_expression
from observable_default.state import configure


def test_absent_store_is_default_singleton():
    resolved = resolve_store(None)
    assert resolved.expression == MemberAccess(Identifier("Defaults"), "standard")
    assert resolved.origin is StoreOrigin.DEFAULT


def test_bare_identifier_is_qualified_with_self():
    resolved = resolve_store(Identifier("my_static_store"))
    assert resolved.expression == MemberAccess(Identifier("Self"), "my_static_store")
    assert resolved.origin is StoreOrigin.SELF_MEMBER


def test_leading_dot_is_qualified_with_store_type():
    resolved = resolve_store(MemberAccess(None, "shared"))
    assert resolved.expression == MemberAccess(Identifier("Defaults"), "shared")
    assert resolved.origin is StoreOrigin.STORE_TYPE_MEMBER


def test_shorthand_and_qualified_forms_resolve_identically():
    assert resolve_store(parse_expression(".shared")) == resolve_store(parse_expression("Defaults.shared"))


def test_other_expressions_pass_through():
    call = Call(Identifier("Defaults"), (LabeledExpr("suite_name", Literal("SHARED")),))
    assert resolve_store(call) == ResolvedStoreRef(call)
    assert resolve_store(call).origin is StoreOrigin.VERBATIM

    qualified = MemberAccess(Identifier("Elsewhere"), "store")
    assert resolve_store(qualified).expression is qualified


def test_default_store_is_threaded_in():
    defaults = StoreDefaults(type_name="IsolatedStore", member="scratch")
    assert resolve_store(None, defaults).expression == MemberAccess(Identifier("IsolatedStore"), "scratch")
    assert resolve_store(MemberAccess(None, "shared"), defaults).expression == MemberAccess(
        Identifier("IsolatedStore"), "shared"
    )


def test_defaults_from_settings():
    settings = configure(default_store_type="Prefs", default_store_member="main")
    defaults = StoreDefaults.from_settings(settings)
    assert resolve_store(None, defaults).expression == MemberAccess(Identifier("Prefs"), "main")
