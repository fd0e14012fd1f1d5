"""Render messages as annotated, script-like example payloads.

A message renders as a brace-delimited object literal with one entry per
field, in declaration order::

    {
    // leading doc line
    name: "", // type:<string>, trailing note
    scores: [0,0], // type:<int>
    labels: {"":""}, // type:<map<string,string>>
    child: {
    ...
    },
    }

Message-typed fields carry no ``// type:<...>`` annotation; the nested object
documents itself. Repeated and map message fields get a marker comment on
the opening line instead.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from protoc_apidoc.classifier import (
    ENUM_DISPLAY_NAME,
    ENUM_ZERO_LITERAL,
    ScalarKind,
    display_name,
    map_key_literal,
    zero_literal,
)
from protoc_apidoc.models import EnumRef, Field, Message, MessageRef, Scalar, short_name
from protoc_apidoc.parser.comments import inline_comment
from protoc_apidoc.parser.schema_index import SchemaIndex

logger = logging.getLogger(__name__)

EMPTY_OBJECT = "{\n}"

Stack = Tuple[str, ...]


def _shape(literal: str, label: str, repeated: bool, map_key: Optional[ScalarKind]) -> Tuple[str, str]:
    if repeated:
        return f"[{literal},{literal}]", label
    if map_key is not None:
        return f"{{{map_key_literal(map_key)}:{literal}}}", f"map<{display_name(map_key)},{label}>"
    return literal, label


class ExampleRenderer:
    """Turns indexed messages into example text. Unknown message types render as ``{}``."""

    def __init__(self, index: SchemaIndex):
        self.index = index

    def render(self, field: Field, _stack: Stack = ()) -> Tuple[str, Optional[str]]:
        """Return ``(example, annotation)``; annotation is None for message-typed fields."""
        ftype = field.type
        ref = ftype.ref

        if isinstance(ref, Scalar):
            return _shape(zero_literal(ref.kind), display_name(ref.kind), ftype.repeated, ftype.map_key)

        if isinstance(ref, EnumRef):
            return _shape(ENUM_ZERO_LITERAL, ENUM_DISPLAY_NAME, ftype.repeated, ftype.map_key)

        if isinstance(ref, MessageRef):
            message = self.index.lookup_message(ref.name)
            if message is None:
                logger.warning("Unresolved message type '%s' for field '%s'", ref.name, field.name)
                name = short_name(ref.name)
            else:
                name = message.display_name
            obj = self.render_message(message, _stack)
            note = inline_comment(field.trailing_note)

            if ftype.repeated:
                marker = f"// {note}" if note else f"// type:<list<{name}>>"
                return f"[{marker}\n{obj}]", None
            if ftype.map_key is not None:
                key = ftype.map_key
                marker = f"// {note}" if note else f"// type:<map<{display_name(key)},{name}>>"
                return f"{{{marker}\n{map_key_literal(key)}:{obj}}}", None
            return obj, None

        raise TypeError(f"unsupported field type {ref!r}")

    def render_field(self, field: Field, _stack: Stack = ()) -> str:
        """Doc comment lines followed by the ``name: example,`` entry, newline-terminated."""
        lines = []
        if field.leading_doc:
            lines.extend(f"// {line}".rstrip() for line in field.leading_doc.split("\n"))

        example, annotation = self.render(field, _stack)
        if annotation is None:
            entry = f"{field.name}: {example},"
        else:
            entry = f"{field.name}: {example}, // type:<{annotation}>"
            note = inline_comment(field.trailing_note)
            if note:
                entry += f", {note}"
        lines.append(entry)

        return "\n".join(lines).strip(" ") + "\n"

    def render_message(self, message: Optional[Message], _stack: Stack = ()) -> str:
        if message is None:
            return EMPTY_OBJECT
        # A message already on the current path would recurse forever.
        if message.full_name in _stack:
            logger.debug("Cutting recursion into '%s'", message.full_name)
            return f"{{\n// recursive:{message.display_name}\n}}"

        stack = _stack + (message.full_name,)
        body = "".join(self.render_field(f, stack) for f in message.fields)
        return "{\n" + body + "}"
