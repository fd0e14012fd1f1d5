"""Resolve raw field descriptors into rendered-shape Field models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from google.protobuf import descriptor_pb2 as d2

from protoc_apidoc.classifier import ScalarKind, scalar_kind
from protoc_apidoc.models import (
    Enum,
    EnumRef,
    Field,
    FieldType,
    MessageRef,
    Scalar,
    TypeRef,
    strip_leading_dot,
)
from protoc_apidoc.parser.comments import inline_comment

if TYPE_CHECKING:
    from protoc_apidoc.parser.schema_index import SchemaIndex

FDP = d2.FieldDescriptorProto

# Synthetic map-entry full name -> entry descriptor, for one enclosing message.
MapEntryTable = Dict[str, d2.DescriptorProto]


def enum_doc(enum: Enum) -> str:
    """One '<NAME>(=<number>) <comment>' line per value, in declaration order."""
    lines = [f"{v.name}(={v.number}) {inline_comment(v.trailing_note)}".rstrip() for v in enum.values]
    return "\n".join(lines)


def _resolve_type(fd: d2.FieldDescriptorProto, index: SchemaIndex) -> TypeRef:
    type_name = strip_leading_dot(fd.type_name)
    if type_name:
        if index.lookup_enum(type_name) is not None or fd.type == FDP.TYPE_ENUM:
            return EnumRef(type_name)
        return MessageRef(type_name)
    kind = scalar_kind(fd.type)
    if kind is None:
        # TYPE_GROUP/MESSAGE/ENUM always carry a type_name; treat a bare one as text.
        kind = ScalarKind.STRING
    return Scalar(kind)


def _key_kind(entry: d2.DescriptorProto) -> Optional[ScalarKind]:
    for sub in entry.field:
        if sub.name == "key":
            return scalar_kind(sub.type) or ScalarKind.STRING
    return None


def _value_field(entry: d2.DescriptorProto) -> Optional[d2.FieldDescriptorProto]:
    for sub in entry.field:
        if sub.name == "value":
            return sub
    return None


def resolve_field(
    fd: d2.FieldDescriptorProto,
    map_entries: MapEntryTable,
    index: SchemaIndex,
    leading: str = "",
    trailing: str = "",
) -> Field:
    """Classify *fd* as scalar, enum, message or map and attach its documentation.

    A field whose type is a synthetic map entry of the enclosing message is
    reported by protoc as a repeated message; it is rebuilt here as a map
    keyed by the entry's ``key`` type with the entry's ``value`` as element.
    Enum-typed elements take the enum's value listing as their leading doc.
    """
    type_name = strip_leading_dot(fd.type_name)
    repeated = fd.label == FDP.LABEL_REPEATED
    map_key: Optional[ScalarKind] = None
    element = fd

    entry = map_entries.get(type_name) if type_name else None
    if entry is not None:
        map_key = _key_kind(entry)
        value = _value_field(entry)
        if value is not None:
            element = value
        repeated = False

    ref = _resolve_type(element, index)
    doc = leading
    if isinstance(ref, EnumRef):
        enum = index.lookup_enum(ref.name)
        if enum is not None:
            doc = enum_doc(enum)

    return Field(
        name=fd.name,
        type=FieldType(ref=ref, repeated=repeated, map_key=map_key),
        leading_doc=doc,
        trailing_note=trailing,
    )
