import pytest
from google.protobuf import descriptor_pb2 as d2

from protoc_apidoc.classifier import (
    ScalarKind,
    display_name,
    map_key_literal,
    scalar_kind,
    zero_literal,
)

FDP = d2.FieldDescriptorProto


class TestDisplayNames:
    @pytest.mark.parametrize("kind, expected", [
        (ScalarKind.STRING, "string"),
        (ScalarKind.DOUBLE, "float"),
        (ScalarKind.FLOAT, "float"),
        (ScalarKind.BOOL, "bool"),
        (ScalarKind.INT64, "string(int64)"),
        (ScalarKind.UINT64, "string(int64)"),
        (ScalarKind.INT32, "int"),
        (ScalarKind.UINT32, "int"),
    ])
    def test_display_name(self, kind, expected):
        assert display_name(kind) == expected

    def test_every_kind_has_name_and_literal(self):
        for kind in ScalarKind:
            assert display_name(kind)
            assert zero_literal(kind)


class TestZeroLiterals:
    def test_literals(self):
        assert zero_literal(ScalarKind.STRING) == '""'
        assert zero_literal(ScalarKind.DOUBLE) == "0.0"
        assert zero_literal(ScalarKind.BOOL) == "false"
        assert zero_literal(ScalarKind.INT64) == '"0"'
        assert zero_literal(ScalarKind.INT32) == "0"

    def test_map_key_literals_are_quoted(self):
        assert map_key_literal(ScalarKind.STRING) == '""'
        assert map_key_literal(ScalarKind.INT32) == '"0"'
        assert map_key_literal(ScalarKind.UINT64) == '"0"'
        assert map_key_literal(ScalarKind.BOOL) == '"false"'


class TestDescriptorTypes:
    def test_direct_kinds(self):
        assert scalar_kind(FDP.TYPE_STRING) is ScalarKind.STRING
        assert scalar_kind(FDP.TYPE_INT32) is ScalarKind.INT32
        assert scalar_kind(FDP.TYPE_UINT64) is ScalarKind.UINT64
        assert scalar_kind(FDP.TYPE_DOUBLE) is ScalarKind.DOUBLE

    def test_folded_kinds(self):
        assert scalar_kind(FDP.TYPE_BYTES) is ScalarKind.STRING
        assert scalar_kind(FDP.TYPE_SINT32) is ScalarKind.INT32
        assert scalar_kind(FDP.TYPE_FIXED32) is ScalarKind.UINT32
        assert scalar_kind(FDP.TYPE_SFIXED64) is ScalarKind.INT64
        assert scalar_kind(FDP.TYPE_FIXED64) is ScalarKind.UINT64

    def test_non_scalars(self):
        assert scalar_kind(FDP.TYPE_MESSAGE) is None
        assert scalar_kind(FDP.TYPE_ENUM) is None
        assert scalar_kind(FDP.TYPE_GROUP) is None
