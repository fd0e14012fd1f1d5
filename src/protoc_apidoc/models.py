from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from protoc_apidoc.classifier import ScalarKind


def strip_leading_dot(name: str) -> str:
    """Descriptors qualify type names as '.pkg.Type'; the index keys drop the dot."""
    return name[1:] if name.startswith(".") else name


def short_name(full_name: str) -> str:
    return full_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class Scalar:
    kind: ScalarKind


@dataclass(frozen=True)
class EnumRef:
    name: str


@dataclass(frozen=True)
class MessageRef:
    name: str


TypeRef = Union[Scalar, EnumRef, MessageRef]


@dataclass(frozen=True)
class FieldType:
    ref: TypeRef
    repeated: bool = False
    map_key: Optional[ScalarKind] = None

    def __post_init__(self):
        if self.map_key is not None and self.repeated:
            raise ValueError("a map field cannot also be repeated")

    @property
    def is_map(self) -> bool:
        return self.map_key is not None


@dataclass(frozen=True)
class Field:
    name: str
    type: FieldType
    leading_doc: str = ""
    trailing_note: str = ""


@dataclass
class Message:
    full_name: str
    display_name: str
    trailing_doc: str = ""
    fields: List[Field] = field(default_factory=list)


@dataclass(frozen=True)
class EnumValue:
    name: str
    number: int
    trailing_note: str = ""


@dataclass
class Enum:
    full_name: str
    values: List[EnumValue] = field(default_factory=list)


@dataclass
class Api:
    full_method_name: str
    path: str
    doc: str = ""
    http_method: str = "POST"
    request: Optional[Message] = None
    reply: Optional[Message] = None
    request_example: str = ""
    reply_example: str = ""

    @property
    def anchor(self) -> str:
        """Markdown heading anchor: the path without '/' and '.', lower-cased."""
        return self.path.replace("/", "").replace(".", "").lower()


@dataclass
class Service:
    full_name: str
    name: str
    leading_doc: str = ""
    apis: List[Api] = field(default_factory=list)


@dataclass
class CommandLineParams:
    path_prefix: str = ""
    import_map: Dict[str, str] = field(default_factory=dict)
