"""
Diagnostic identifiers, messages and the error raised on failed expansion.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..models import Diagnostic, SourceLocation

logger = logging.getLogger(__name__)


class DiagnosticID(str, Enum):
    """Stable identifiers for every expansion failure."""
    NOT_VARIABLE_PROPERTY = "NotVariableProperty"
    MULTIPLE_BINDINGS_NOT_SUPPORTED = "MultipleBindingsNotSupported"
    ALREADY_COMPUTED_PROPERTY = "AlreadyComputedProperty"
    NON_SIMPLE_PATTERN = "NonSimplePattern"
    MISSING_TYPE_ANNOTATION = "MissingTypeAnnotation"
    MALFORMED_ARGUMENT_LIST = "MalformedArgumentList"
    OPTIONAL_TYPE_MUST_NOT_HAVE_EXPLICIT_DEFAULT = "OptionalTypeMustNotHaveExplicitDefault"
    NON_OPTIONAL_TYPE_REQUIRES_DEFAULT_VALUE = "NonOptionalTypeRequiresDefaultValue"


_MESSAGES = {
    DiagnosticID.NOT_VARIABLE_PROPERTY:
        "'{directive}' can only be applied to variables",
    DiagnosticID.MULTIPLE_BINDINGS_NOT_SUPPORTED:
        "'{directive}' cannot be applied to multiple variable bindings",
    DiagnosticID.ALREADY_COMPUTED_PROPERTY:
        "'{directive}' cannot be applied to computed properties",
    DiagnosticID.NON_SIMPLE_PATTERN:
        "'{directive}' can only be applied to variables using simple declaration syntax, "
        "for example, 'name: str'",
    DiagnosticID.MISSING_TYPE_ANNOTATION:
        "'{directive}' requires an explicit type annotation",
    DiagnosticID.MALFORMED_ARGUMENT_LIST:
        "'{directive}' arguments must be a labeled list of 'key', 'defaultValue' and 'store'",
    DiagnosticID.OPTIONAL_TYPE_MUST_NOT_HAVE_EXPLICIT_DEFAULT:
        "'{directive}' arguments on optional types should not use default values",
    DiagnosticID.NON_OPTIONAL_TYPE_REQUIRES_DEFAULT_VALUE:
        "'{directive}' on non-optional types must provide a default value",
}


class ExpansionError(Exception):
    """Raised when one or more declarations cannot be expanded."""
    def __init__(self, diagnostics: Iterable[Diagnostic]):
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        super().__init__("\n".join(str(d) for d in self.diagnostics))

    @property
    def ids(self) -> List[str]:
        return [d.id for d in self.diagnostics]


def message_for(diagnostic_id: DiagnosticID, directive: str) -> str:
    """Human-readable message for ``diagnostic_id``."""
    return _MESSAGES[diagnostic_id].format(directive=directive)


def report(
    diagnostic_id: DiagnosticID,
    location: Optional[SourceLocation],
    directive: str,
    detail: Optional[str] = None,
) -> ExpansionError:
    """
    Build the error for a failed expansion step.

    The caller raises the result, which short-circuits the rest of the
    pipeline for that declaration.
    """
    message = message_for(diagnostic_id, directive)
    if detail:
        message = f"{message}: {detail}"
    diagnostic = Diagnostic(
        id=diagnostic_id.value,
        message=message,
        location=location or SourceLocation(),
    )
    logger.debug("Expansion failed: %s", diagnostic)
    return ExpansionError([diagnostic])
