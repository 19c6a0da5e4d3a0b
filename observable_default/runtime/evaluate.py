"""
Evaluation of store and key expressions against a name scope.
"""

from typing import Any, Mapping

from ..core.render import render_expression
from ..core.syntax import Call, Expr, Identifier, Literal, MemberAccess, RawExpression


class EvaluationError(Exception):
    """Raised when an expression cannot be evaluated in its scope."""


def evaluate(expr: Expr, scope: Mapping[str, Any]) -> Any:
    """Evaluate ``expr``; identifiers are looked up in ``scope`` only."""
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, Identifier):
        try:
            return scope[expr.name]
        except KeyError:
            raise EvaluationError(f"Name '{expr.name}' is not defined") from None
    if isinstance(expr, MemberAccess):
        if expr.base is None:
            raise EvaluationError(f"Member access '.{expr.member}' has no base")
        base = evaluate(expr.base, scope)
        try:
            return getattr(base, expr.member)
        except AttributeError as e:
            raise EvaluationError(f"Cannot evaluate '{render_expression(expr)}': {e}") from e
    if isinstance(expr, Call):
        callee = evaluate(expr.callee, scope)
        args = []
        kwargs = {}
        for argument in expr.arguments:
            value = evaluate(argument.expression, scope)
            if argument.label is None:
                args.append(value)
            else:
                kwargs[argument.label] = value
        return callee(*args, **kwargs)
    if isinstance(expr, RawExpression):
        raise EvaluationError(f"Cannot evaluate expression '{expr.text}'")
    raise EvaluationError(f"Unknown expression node: {expr!r}")
