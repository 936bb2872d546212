from .deferred import Deferred, data, is_deferred
from .jetter import derive, exclusive_union, intersect, merge_union
from .key_patterns import KeyPattern, key_pattern_for
from .shapes import (
    NEVER,
    UNKNOWN,
    ArrayShape,
    FieldShape,
    LiteralShape,
    NeverShape,
    ObjectShape,
    PatternField,
    Presence,
    PrimitiveShape,
    Shape,
    UnionShape,
    UnknownShape,
    union_of,
)
from .validation import SchemaIssue, validate_instance
