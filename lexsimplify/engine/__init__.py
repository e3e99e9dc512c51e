"""
Substitution engine for lexical simplification.

Exports the engine, its configuration and the error types.
"""

from .errors import (
    SimplifierError,
    VectorLengthMismatchError,
    ConfigurationError,
    DataLoadError,
)
from .configuration import (
    SelectionPolicy,
    ConfigurationSnapshot,
    ReplacementConfiguration,
)
from .substitution import (
    SubstitutionEngine,
    Replacement,
    WordStore,
    NO_MATCH,
    tokenize,
    join_tokens,
    is_punctuation,
)

__all__ = [
    # Errors
    'SimplifierError',
    'VectorLengthMismatchError',
    'ConfigurationError',
    'DataLoadError',

    # Configuration
    'SelectionPolicy',
    'ConfigurationSnapshot',
    'ReplacementConfiguration',

    # Engine
    'SubstitutionEngine',
    'Replacement',
    'WordStore',
    'NO_MATCH',
    'tokenize',
    'join_tokens',
    'is_punctuation',
]
