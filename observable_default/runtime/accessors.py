"""
Descriptor that carries out a synthesized AccessorSpec.
"""

import copy
import logging
import sys
from collections import ChainMap
from contextlib import nullcontext
from typing import Any, Mapping, Optional

from ..core.render import render_expression
from ..core.synthesizer import AccessorSpec
from ..core.syntax import Literal, NamedType, OptionalType, TypeExpr
from .codec import JSONCodec, json_codec
from .evaluate import evaluate
from .stores import Defaults, StoreError

logger = logging.getLogger(__name__)


def runtime_type(type_expr: TypeExpr) -> Any:
    """The Python type the codec validates against."""
    if isinstance(type_expr, OptionalType):
        return Optional[runtime_type(type_expr.wrapped)]
    if isinstance(type_expr, NamedType) and type_expr.annotation is not None:
        return type_expr.annotation
    return Any


class PersistedProperty:
    """
    Property whose value lives in a key-value store.

    Reads notify ``obj.access(name)``, decode the stored bytes and fall back
    to the AccessorSpec fallback. Writes run inside ``obj.with_mutation(name)`` and
    are skipped when the value cannot be encoded.
    """

    def __init__(
        self,
        spec: AccessorSpec,
        store_type: type = Defaults,
        self_name: str = "Self",
        codec: JSONCodec = json_codec,
    ):
        self.spec = spec
        self.store_type = store_type
        self.self_name = self_name
        self.codec = codec
        self.name: Optional[str] = None
        self.owner: Optional[type] = None
        self.key: Optional[str] = None
        self._scope: Mapping[str, Any] = {}
        self._decode_type = runtime_type(spec.getter.decode_type)
        self._value_type = runtime_type(spec.setter.value_type)

    def __set_name__(self, owner, name: str):
        self.owner = owner
        self.name = name
        module = sys.modules.get(owner.__module__)
        self._scope = ChainMap(
            {self.self_name: owner, self.store_type.__name__: self.store_type},
            vars(module) if module is not None else {},
        )
        key = evaluate(self.spec.key, self._scope)
        if not isinstance(key, str):
            raise StoreError(f"Key for '{name}' must be a string, got {key!r}")
        self.key = key

    def store(self, obj=None):
        """
        Evaluate the store expression; done on every access.

        With an instance, the enclosing-type name refers to ``type(obj)`` so a
        subclass that overrides a class-level store is honored.
        """
        scope = self._scope
        if obj is not None:
            scope = ChainMap({self.self_name: type(obj)}, self._scope)
        return evaluate(self.spec.store.expression, scope)

    def default(self) -> Any:
        fallback = self.spec.getter.fallback
        if isinstance(fallback, Literal):
            return copy.deepcopy(fallback.value)
        return evaluate(fallback, self._scope)

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        access = getattr(obj, "access", None)
        if callable(access):
            access(self.name)
        data = self.store(obj).data(self.key)
        if data is not None:
            decoded = self.codec.decode(data, self._decode_type)
            if decoded is not None:
                return decoded
        return self.default()

    def __set__(self, obj, value):
        with_mutation = getattr(obj, "with_mutation", None)
        mutation = with_mutation(self.name) if callable(with_mutation) else nullcontext()
        with mutation:
            data = self.codec.encode(value, self._value_type)
            if data is not None:
                self.store(obj).set(data, self.key)
            else:
                logger.warning("Skipped write of '%s': value %r could not be encoded", self.key, value)

    def __repr__(self) -> str:
        store = render_expression(self.spec.store.expression, self.self_name)
        return f"PersistedProperty(name={self.name!r}, key={self.key!r}, store={store})"
