from .condition_builder import ConditionBuilder
from .ref_builder import RefBuilder
from .schema_builder import SchemaBuilder, resolve_schema
from .views import (
    ArraySchemaBuilder,
    BooleanSchemaBuilder,
    NullSchemaBuilder,
    NumberSchemaBuilder,
    ObjectSchemaBuilder,
    SchemaView,
    StringSchemaBuilder,
)

__all__ = [
    "ArraySchemaBuilder",
    "BooleanSchemaBuilder",
    "ConditionBuilder",
    "NullSchemaBuilder",
    "NumberSchemaBuilder",
    "ObjectSchemaBuilder",
    "RefBuilder",
    "SchemaBuilder",
    "SchemaView",
    "StringSchemaBuilder",
    "resolve_schema",
]
