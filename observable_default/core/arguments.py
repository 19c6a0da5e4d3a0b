"""
Directive argument parsing.

Arguments are looked up by label, independent of their position; each one
is optional on its own.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..state import ExpansionSettings, get_settings
from .diagnostics import DiagnosticID, report
from .syntax import Attribute, Expr, LabeledExprList, Literal


@dataclass(frozen=True)
class DirectiveArguments:
    key: Optional[Expr] = None
    explicit_default: Optional[Expr] = None
    store_arg: Optional[Expr] = None


_FIELDS = {
    "key": "key",
    "defaultValue": "explicit_default",
    "store": "store_arg",
}


def parse_arguments(
    attribute: Attribute,
    settings: Optional[ExpansionSettings] = None,
) -> DirectiveArguments:
    """Parse the directive's argument clause into DirectiveArguments."""
    settings = get_settings(settings)
    arguments = attribute.arguments
    if arguments is None:
        return DirectiveArguments()

    if not isinstance(arguments, LabeledExprList):
        raise report(
            DiagnosticID.MALFORMED_ARGUMENT_LIST,
            arguments.location or attribute.location,
            settings.directive_name,
            detail=f"expected labeled arguments, got '{arguments.text}'",
        )

    found: Dict[str, Expr] = {}
    for item in arguments.items:
        label = settings.label_aliases.get(item.label, item.label)
        location = item.location or attribute.location
        if label is None:
            raise report(
                DiagnosticID.MALFORMED_ARGUMENT_LIST, location, settings.directive_name,
                detail="unlabeled argument",
            )
        if label not in settings.argument_labels or label not in _FIELDS:
            raise report(
                DiagnosticID.MALFORMED_ARGUMENT_LIST, location, settings.directive_name,
                detail=f"unexpected argument '{item.label}'",
            )
        if label in found:
            raise report(
                DiagnosticID.MALFORMED_ARGUMENT_LIST, location, settings.directive_name,
                detail=f"duplicate argument '{label}'",
            )
        if label == "key" and isinstance(item.expression, Literal) and not isinstance(item.expression.value, str):
            raise report(
                DiagnosticID.MALFORMED_ARGUMENT_LIST, location, settings.directive_name,
                detail=f"key must be a string, got {item.expression.value!r}",
            )
        found[label] = item.expression

    return DirectiveArguments(**{_FIELDS[label]: expr for label, expr in found.items()})
