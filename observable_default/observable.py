import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, get_type_hints

from .core.diagnostics import ExpansionError
from .core.expansion import expand
from .core.resolver import StoreDefaults
from .directive import declaration_for
from .models import AccessorFragments, Diagnostic
from .runtime.accessors import PersistedProperty
from .runtime.observation import ObservationRegistrar
from .runtime.stores import Defaults
from .state import get_settings

logger = logging.getLogger(__name__)


class ObservableMeta(type):
    """Metaclass that expands ``user_default`` annotations into persisted properties."""

    def __new__(mcs, name, bases, namespace, store_type: Optional[type] = None, **kwargs):
        # Start with inherited registries so subclasses can extend/override.
        _persisted: Dict[str, PersistedProperty] = {}
        _fragments: Dict[str, AccessorFragments] = {}
        for base in reversed(bases):
            _persisted.update(getattr(base, "_persisted", {}))
            _fragments.update(getattr(base, "_fragments", {}))

        # Create the class
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        if store_type is None:
            store_type = getattr(cls, "_store_type", Defaults)
        cls._store_type = store_type

        settings = get_settings()
        defaults = StoreDefaults(
            type_name=store_type.__name__,
            member=settings.default_store_member,
            self_name=settings.self_name,
        )

        own = inspect.get_annotations(cls)
        hints = get_type_hints(cls, include_extras=True) if own else {}

        diagnostics: List[Diagnostic] = []
        for attr_name in own:
            decl = declaration_for(cls, attr_name, hints.get(attr_name, own[attr_name]), settings.directive_name)
            if decl is None:
                continue
            try:
                expansion = expand(decl, settings, defaults)
            except ExpansionError as e:
                diagnostics.extend(e.diagnostics)
                continue

            prop = PersistedProperty(expansion.spec, store_type, defaults.self_name)
            # Assigning after class creation skips __set_name__, so bind explicitly
            setattr(cls, attr_name, prop)
            prop.__set_name__(cls, attr_name)
            _persisted[attr_name] = prop
            _fragments[attr_name] = expansion.fragments

        if diagnostics:
            raise ExpansionError(diagnostics)

        # Attach registries to the class
        cls._persisted = _persisted
        cls._fragments = _fragments
        if _persisted:
            logger.debug("%s: persisted properties %s", name, ", ".join(_persisted))

        return cls

    def __init__(cls, name, bases, namespace, store_type: Optional[type] = None, **kwargs):
        super().__init__(name, bases, namespace, **kwargs)


class Observable(metaclass=ObservableMeta):
    """
    Base class for objects whose ``user_default`` properties are persisted.

    Example:
        class Person(Observable):
            name: Annotated[Optional[str], user_default]
            age: Annotated[int, user_default(store=".shared")] = 0

        person = Person()
        person.age = 42       # written to Defaults.shared under "age"
        person.age            # 42, also in a fresh Person()

    Pass ``store_type=`` in the class statement to resolve the default store
    (and ``.member`` shorthands) against another store class.
    """

    @property
    def _observation_registrar(self) -> ObservationRegistrar:
        registrar = self.__dict__.get("_registrar")
        if registrar is None:
            registrar = self.__dict__["_registrar"] = ObservationRegistrar()
        return registrar

    def access(self, name: str):
        """Called by getters before reading ``name``."""
        self._observation_registrar.access(self, name)

    def with_mutation(self, name: str):
        """Context manager wrapping every write to ``name``."""
        return self._observation_registrar.with_mutation(self, name)

    def observe(self, callback: Callable[[Any, str], None], names: Optional[Iterable[str]] = None) -> Callable[[], None]:
        """Call ``callback(self, name)`` after each write; returns a disposer."""
        return self._observation_registrar.observe(callback, names)

    @classmethod
    def persisted_properties(cls) -> Dict[str, PersistedProperty]:
        return dict(getattr(cls, "_persisted", {}))

    @classmethod
    def accessor_fragments(cls) -> Dict[str, AccessorFragments]:
        """Rendered getter/setter source for every persisted property."""
        return dict(getattr(cls, "_fragments", {}))
