"""Look up schema source comments by descriptor element path."""

from __future__ import annotations

import textwrap
from typing import Dict, NamedTuple, Tuple

from google.protobuf import descriptor_pb2 as d2

# Field numbers used in SourceCodeInfo.Location.path
FILE_MESSAGE_TYPE = 4
FILE_ENUM_TYPE = 5
FILE_SERVICE = 6
MESSAGE_FIELD = 2
MESSAGE_NESTED_TYPE = 3
MESSAGE_ENUM_TYPE = 4
ENUM_VALUE = 2
SERVICE_METHOD = 2

Path = Tuple[int, ...]


class Comment(NamedTuple):
    leading: str = ""
    trailing: str = ""


def clean_comment(text: str) -> str:
    """Drop the common indentation protoc leaves after '//' and surrounding blank lines."""
    if not text:
        return ""
    lines = [line.rstrip() for line in text.split("\n")]
    return textwrap.dedent("\n".join(lines)).strip()


def inline_comment(text: str) -> str:
    """Collapse a multi-line comment onto one line for use after code."""
    return " ".join(line.strip() for line in text.split("\n") if line.strip())


class CommentIndex:
    """Comments of one file, keyed by the location path of the element they document."""

    def __init__(self, file: d2.FileDescriptorProto):
        self._comments: Dict[Path, Comment] = {}
        for loc in file.source_code_info.location:
            if not loc.leading_comments and not loc.trailing_comments:
                continue
            self._comments[tuple(loc.path)] = Comment(
                leading=clean_comment(loc.leading_comments),
                trailing=clean_comment(loc.trailing_comments),
            )

    def get(self, path: Path) -> Comment:
        return self._comments.get(tuple(path), Comment())

    def __len__(self) -> int:
        return len(self._comments)
