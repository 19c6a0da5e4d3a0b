"""
observable-default: persisted, observable properties synthesized from annotations.

A property annotated with the ``user_default`` directive is expanded into a
getter/setter pair that reads and writes a key-value store through a JSON
codec, and reports reads and writes to the owning object's observers.
"""

from .core import DiagnosticID, ExpansionError, expand, expand_all, parse_expression
from .directive import UserDefault, user_default
from .models import AccessorFragments, Diagnostic, ExpansionReport, SourceLocation
from .observable import Observable, ObservableMeta
from .runtime import Defaults, JSONFileStore, KeyValueStore, MemoryStore, json_codec, track
from .state import ExpansionSettings, configure, get_settings, reset_settings

__version__ = "0.1.0"

__all__ = [
    "DiagnosticID",
    "ExpansionError",
    "expand",
    "expand_all",
    "parse_expression",
    "UserDefault",
    "user_default",
    "AccessorFragments",
    "Diagnostic",
    "ExpansionReport",
    "SourceLocation",
    "Observable",
    "ObservableMeta",
    "Defaults",
    "JSONFileStore",
    "KeyValueStore",
    "MemoryStore",
    "json_codec",
    "track",
    "ExpansionSettings",
    "configure",
    "get_settings",
    "reset_settings",
]
