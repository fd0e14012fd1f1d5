"""Scalar wire-type classification: display names and zero literals."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from google.protobuf import descriptor_pb2 as d2

FDP = d2.FieldDescriptorProto


class ScalarKind(Enum):
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    DOUBLE = "double"
    FLOAT = "float"
    BOOL = "bool"


# Descriptor tag -> kind. Tags outside the eight kinds fold onto the kind
# sharing their proto3 JSON representation.
DESCRIPTOR_TYPE_MAP: Dict[int, ScalarKind] = {
    FDP.TYPE_STRING: ScalarKind.STRING,
    FDP.TYPE_BYTES: ScalarKind.STRING,
    FDP.TYPE_INT32: ScalarKind.INT32,
    FDP.TYPE_SINT32: ScalarKind.INT32,
    FDP.TYPE_SFIXED32: ScalarKind.INT32,
    FDP.TYPE_UINT32: ScalarKind.UINT32,
    FDP.TYPE_FIXED32: ScalarKind.UINT32,
    FDP.TYPE_INT64: ScalarKind.INT64,
    FDP.TYPE_SINT64: ScalarKind.INT64,
    FDP.TYPE_SFIXED64: ScalarKind.INT64,
    FDP.TYPE_UINT64: ScalarKind.UINT64,
    FDP.TYPE_FIXED64: ScalarKind.UINT64,
    FDP.TYPE_DOUBLE: ScalarKind.DOUBLE,
    FDP.TYPE_FLOAT: ScalarKind.FLOAT,
    FDP.TYPE_BOOL: ScalarKind.BOOL,
}

DISPLAY_NAMES: Dict[ScalarKind, str] = {
    ScalarKind.STRING: "string",
    ScalarKind.DOUBLE: "float",
    ScalarKind.FLOAT: "float",
    ScalarKind.BOOL: "bool",
    ScalarKind.INT64: "string(int64)",
    ScalarKind.UINT64: "string(int64)",
    ScalarKind.INT32: "int",
    ScalarKind.UINT32: "int",
}

ZERO_LITERALS: Dict[ScalarKind, str] = {
    ScalarKind.STRING: '""',
    ScalarKind.DOUBLE: "0.0",
    ScalarKind.FLOAT: "0.0",
    ScalarKind.BOOL: "false",
    ScalarKind.INT64: '"0"',
    ScalarKind.UINT64: '"0"',
    ScalarKind.INT32: "0",
    ScalarKind.UINT32: "0",
}

ENUM_DISPLAY_NAME = "string(enum)"
ENUM_ZERO_LITERAL = '""'


def scalar_kind(descriptor_type: int) -> Optional[ScalarKind]:
    """Return the scalar kind for a descriptor type tag, or None for enum/message/group."""
    return DESCRIPTOR_TYPE_MAP.get(descriptor_type)


def display_name(kind: ScalarKind) -> str:
    return DISPLAY_NAMES[kind]


def zero_literal(kind: ScalarKind) -> str:
    return ZERO_LITERALS[kind]


def map_key_literal(kind: ScalarKind) -> str:
    """Zero value of a map key kind, quoted so it can be used as an object key.

    ``""`` for string keys, ``"0"`` for integer keys, ``"false"`` for bool keys.
    """
    bare = zero_literal(kind).strip('"')
    return f'"{bare}"'
