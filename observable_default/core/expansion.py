"""
Expansion pipeline: validate, parse arguments, resolve the store, synthesize.

Each declaration is expanded on its own; a failure stops the pipeline for
that declaration only.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import AccessorFragments, ExpansionReport
from ..state import ExpansionSettings, get_settings
from .arguments import DirectiveArguments, parse_arguments
from .diagnostics import ExpansionError
from .render import render_accessors
from .resolver import StoreDefaults, resolve_store
from .synthesizer import AccessorSpec, synthesize_accessors
from .syntax import Declaration
from .validator import PropertyDescriptor, validate_declaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Expansion:
    """Everything produced for one successfully expanded declaration."""
    prop: PropertyDescriptor
    arguments: DirectiveArguments
    spec: AccessorSpec
    fragments: AccessorFragments


def expand(
    decl: Declaration,
    settings: Optional[ExpansionSettings] = None,
    store_defaults: Optional[StoreDefaults] = None,
) -> Expansion:
    """
    Expand one declaration.

    Args:
        decl: The declaration carrying the directive
        settings: Overrides the module-level settings for this call
        store_defaults: Overrides the default store derived from ``settings``

    Raises:
        ExpansionError: with a single diagnostic, on the first failed check
    """
    settings = get_settings(settings)
    if store_defaults is None:
        store_defaults = StoreDefaults.from_settings(settings)

    prop = validate_declaration(decl, settings)
    arguments = parse_arguments(prop.attribute, settings)
    store = resolve_store(arguments.store_arg, store_defaults)
    spec = synthesize_accessors(prop, arguments, store, settings)
    fragments = render_accessors(spec, store_defaults.self_name)

    logger.debug("Expanded %r: key=%s store=%s", prop.name, fragments.key, fragments.store)
    return Expansion(prop=prop, arguments=arguments, spec=spec, fragments=fragments)


def expand_all(
    decls: Iterable[Declaration],
    settings: Optional[ExpansionSettings] = None,
    store_defaults: Optional[StoreDefaults] = None,
) -> ExpansionReport:
    """Expand a batch, collecting fragments and diagnostics side by side."""
    report = ExpansionReport()
    for decl in decls:
        try:
            expansion = expand(decl, settings, store_defaults)
        except ExpansionError as e:
            report.diagnostics.extend(e.diagnostics)
            continue
        report.fragments.append(expansion.fragments)
    return report
