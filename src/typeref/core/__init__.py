"""typeref.core -- the identifier-resolution and casting engine.

Architecture::

    Layer 1 -- Types & Errors
        identifier.py      Identifier value type, segment derivation, aliases
        errors.py          TypeRefError hierarchy (UnresolvableIdentifierError)

    Layer 2 -- Resolution
        index.py           NameIndex (alias -> Identifier, collision policy)
        registry.py        Registry (allowed set, storage tokens, compat flag)
        caster.py          InputShape dispatch (cast)
        codec.py           serialize / deserialize storage tokens
        comparison.py      matches() flexible equality

    Ambient
        logging.py         structlog configuration
        settings.py        TypeRefSettings (pydantic-settings)
"""

from typeref.core.caster import Caster, InputShape, Symbol, classify
from typeref.core.codec import Codec
from typeref.core.comparison import Comparator, matches
from typeref.core.errors import (
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    ResolutionFailure,
    TypeRefError,
    UnresolvableIdentifierError,
)
from typeref.core.identifier import (
    QUALIFIER,
    SEPARATOR,
    Identifier,
    candidate_aliases,
    qualname_segments,
    segments_of,
    underscore,
)
from typeref.core.index import CollisionPolicy, NameIndex
from typeref.core.registry import Registry

__all__ = [
    "QUALIFIER",
    "SEPARATOR",
    "Caster",
    "Codec",
    "CollisionPolicy",
    "Comparator",
    "ErrorCategory",
    "ErrorContext",
    "Identifier",
    "InputShape",
    "InvalidConfigError",
    "NameIndex",
    "Registry",
    "ResolutionFailure",
    "Symbol",
    "TypeRefError",
    "UnresolvableIdentifierError",
    "candidate_aliases",
    "classify",
    "matches",
    "qualname_segments",
    "segments_of",
    "underscore",
]
