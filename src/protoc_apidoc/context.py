from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from google.protobuf import descriptor_pb2 as d2

from protoc_apidoc.generator.example_renderer import ExampleRenderer
from protoc_apidoc.models import CommandLineParams
from protoc_apidoc.parser.schema_index import SchemaIndex


@dataclass
class GenerationContext:
    """State of a single generation run, passed explicitly to every phase."""

    params: CommandLineParams = field(default_factory=CommandLineParams)
    index: SchemaIndex = field(default_factory=SchemaIndex)

    @classmethod
    def scan(cls, params: CommandLineParams, files: Iterable[d2.FileDescriptorProto]) -> GenerationContext:
        """Build a context whose index covers *files*.

        *files* must list every file in dependency order, imports included.
        """
        ctx = cls(params=params)
        ctx.index.register_files(files)
        return ctx

    @property
    def renderer(self) -> ExampleRenderer:
        return ExampleRenderer(self.index)
