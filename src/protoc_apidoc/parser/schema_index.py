"""Registry of every message and enum seen during one generation run."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from google.protobuf import descriptor_pb2 as d2

from protoc_apidoc.models import Enum, EnumValue, Message, strip_leading_dot
from protoc_apidoc.parser.comments import (
    ENUM_VALUE,
    FILE_ENUM_TYPE,
    FILE_MESSAGE_TYPE,
    MESSAGE_ENUM_TYPE,
    MESSAGE_FIELD,
    MESSAGE_NESTED_TYPE,
    CommentIndex,
    Path,
)
from protoc_apidoc.parser.resolver import MapEntryTable, resolve_field

logger = logging.getLogger(__name__)


def is_map_entry(desc: d2.DescriptorProto) -> bool:
    """True for the synthetic key/value message protoc generates for a map field."""
    return desc.options.map_entry


def qualify(scope: str, name: str) -> str:
    return f"{scope}.{name}" if scope else name


class SchemaIndex:
    """Fully-qualified name -> Message / Enum, flattened across files and nesting.

    Names are stored without the leading dot descriptors use. Registering a
    name twice silently replaces the earlier entry.
    """

    def __init__(self):
        self._messages: Dict[str, Message] = {}
        self._enums: Dict[str, Enum] = {}

    def register_files(self, files: Iterable[d2.FileDescriptorProto]) -> None:
        for file in files:
            self.register_file(file)

    def register_file(self, file: d2.FileDescriptorProto) -> None:
        comments = CommentIndex(file)
        scope = file.package

        # Enums first so fields may reference an enum declared further down.
        for i, ed in enumerate(file.enum_type):
            self._register_enum(ed, scope, (FILE_ENUM_TYPE, i), comments)
        for i, md in enumerate(file.message_type):
            self._register_nested_enums(md, scope, (FILE_MESSAGE_TYPE, i), comments)

        for i, md in enumerate(file.message_type):
            self._register_message(md, scope, (FILE_MESSAGE_TYPE, i), comments)

        logger.debug(
            "Indexed %s: %d message(s), %d enum(s) total",
            file.name, len(self._messages), len(self._enums),
        )

    def lookup_message(self, name: str) -> Optional[Message]:
        return self._messages.get(strip_leading_dot(name))

    def lookup_enum(self, name: str) -> Optional[Enum]:
        return self._enums.get(strip_leading_dot(name))

    def _register_enum(
        self,
        ed: d2.EnumDescriptorProto,
        scope: str,
        path: Path,
        comments: CommentIndex,
    ) -> None:
        values = [
            EnumValue(
                name=v.name,
                number=v.number,
                trailing_note=comments.get(path + (ENUM_VALUE, k)).trailing,
            )
            for k, v in enumerate(ed.value)
        ]
        full_name = qualify(scope, ed.name)
        self._enums[full_name] = Enum(full_name=full_name, values=values)

    def _register_nested_enums(
        self,
        md: d2.DescriptorProto,
        scope: str,
        path: Path,
        comments: CommentIndex,
    ) -> None:
        full_name = qualify(scope, md.name)
        for k, ed in enumerate(md.enum_type):
            self._register_enum(ed, full_name, path + (MESSAGE_ENUM_TYPE, k), comments)
        for k, nested in enumerate(md.nested_type):
            self._register_nested_enums(nested, full_name, path + (MESSAGE_NESTED_TYPE, k), comments)

    def _register_message(
        self,
        md: d2.DescriptorProto,
        scope: str,
        path: Path,
        comments: CommentIndex,
    ) -> None:
        full_name = qualify(scope, md.name)

        # Nested types (map entries included) are indexed before this message's fields.
        for k, nested in enumerate(md.nested_type):
            self._register_message(nested, full_name, path + (MESSAGE_NESTED_TYPE, k), comments)

        map_entries: MapEntryTable = {
            qualify(full_name, nested.name): nested
            for nested in md.nested_type
            if is_map_entry(nested)
        }

        fields = []
        for k, fd in enumerate(md.field):
            comment = comments.get(path + (MESSAGE_FIELD, k))
            fields.append(
                resolve_field(fd, map_entries, self, leading=comment.leading, trailing=comment.trailing)
            )

        self._messages[full_name] = Message(
            full_name=full_name,
            display_name=md.name,
            trailing_doc=comments.get(path).trailing,
            fields=fields,
        )
