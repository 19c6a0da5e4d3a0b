from .codec import JSONCodec, json_codec
from .stores import KeyValueStore, MemoryStore, Defaults, JSONFileStore, StoreError
from .observation import ObservationRegistrar, track
from .evaluate import EvaluationError, evaluate
from .accessors import PersistedProperty, runtime_type

__all__ = [
    "JSONCodec",
    "json_codec",
    "KeyValueStore",
    "MemoryStore",
    "Defaults",
    "JSONFileStore",
    "StoreError",
    "ObservationRegistrar",
    "track",
    "EvaluationError",
    "evaluate",
    "PersistedProperty",
    "runtime_type",
]
