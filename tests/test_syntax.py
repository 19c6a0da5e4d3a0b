from observable_default.core.syntax import (
    Call,
    Identifier,
    LabeledExpr,
    Literal,
    MemberAccess,
    RawExpression,
    parse_expression,
)
from observable_default.models import SourceLocation


def test_parse_bare_identifier():
    assert parse_expression("local_store") == Identifier("local_store")


def test_parse_leading_dot_member():
    assert parse_expression(".shared") == MemberAccess(None, "shared")


def test_parse_qualified_member():
    assert parse_expression("Defaults.shared") == MemberAccess(Identifier("Defaults"), "shared")


def test_parse_call_with_labeled_argument():
    expr = parse_expression("Defaults(suite_name='SHARED')")
    assert expr == Call(Identifier("Defaults"), (LabeledExpr("suite_name", Literal("SHARED")),))


def test_parse_unsupported_shape_is_raw():
    assert parse_expression("stores[0]") == RawExpression("stores[0]")
    assert parse_expression("not valid (") == RawExpression("not valid (")


def test_locations_do_not_affect_equality():
    here = SourceLocation(file="a.py", line=1)
    there = SourceLocation(file="b.py", line=9)
    assert parse_expression(".shared", here) == parse_expression(".shared", there)
    assert parse_expression(".shared", here).location == here
