"""
JSON codec backed by pydantic TypeAdapter.

Both directions fail softly: on any validation or serialization problem
they return None instead of raising.
"""

import logging
from threading import Lock
from typing import Any, Dict, Optional

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

logger = logging.getLogger(__name__)

_CODEC_ERRORS = (ValidationError, PydanticSerializationError, PydanticSchemaGenerationError)


class JSONCodec:
    """Lossless value <-> JSON bytes conversion for any type pydantic understands."""

    def __init__(self, strict: bool = True):
        self.strict = strict
        self._adapters: Dict[Any, TypeAdapter] = {}
        self._lock = Lock()

    def adapter(self, type_: Any) -> TypeAdapter:
        type_ = Any if type_ is None else type_
        try:
            with self._lock:
                cached = self._adapters.get(type_)
        except TypeError:
            # Unhashable annotation; build a fresh adapter each time
            return TypeAdapter(type_)
        if cached is None:
            cached = TypeAdapter(type_)
            with self._lock:
                self._adapters[type_] = cached
        return cached

    def encode(self, value: Any, type_: Any = None) -> Optional[bytes]:
        """Validate ``value`` against ``type_`` and dump it as JSON bytes."""
        try:
            adapter = self.adapter(type_)
            checked = adapter.validate_python(value, strict=self.strict)
            return adapter.dump_json(checked)
        except _CODEC_ERRORS as e:
            logger.debug("Encoding %r as %r failed: %s", value, type_, e)
            return None

    def decode(self, data: bytes, type_: Any = None) -> Optional[Any]:
        """Parse ``data`` as ``type_``."""
        try:
            return self.adapter(type_).validate_json(data, strict=self.strict)
        except _CODEC_ERRORS as e:
            logger.debug("Decoding %r as %r failed: %s", data, type_, e)
            return None


# Shared codec used by generated accessors
json_codec = JSONCodec()
