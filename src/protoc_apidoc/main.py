from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from google.protobuf import descriptor_pb2 as d2
from google.protobuf.compiler import plugin_pb2

from protoc_apidoc.params import ConfigError
from protoc_apidoc.plugin import generate


class ProtocError(RuntimeError):
    """protoc is missing or failed to compile the inputs."""


def _find_proto_files(root: str) -> List[str]:
    """Recursively find .proto files under root, sorted for deterministic output."""
    return sorted(str(p) for p in Path(root).rglob("*.proto"))


def build_descriptor_set(proto_files: List[str], includes: List[str]) -> d2.FileDescriptorSet:
    """Compile *proto_files* with protoc, keeping imports and source comments."""
    # de-dup while preserving order
    seen = set()
    inc_args: List[str] = []
    for inc in includes:
        if inc and inc not in seen:
            seen.add(inc)
            inc_args.extend(["-I", inc])

    with tempfile.TemporaryDirectory() as td:
        desc_path = os.path.join(td, "descriptor_set.pb")
        cmd = [
            "protoc",
            "--include_imports",
            "--include_source_info",
            f"--descriptor_set_out={desc_path}",
        ] + inc_args + proto_files
        try:
            subprocess.run(cmd, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise ProtocError("'protoc' not found. Please install Protocol Buffers compiler and ensure it is in PATH.") from e
        except subprocess.CalledProcessError as e:
            raise ProtocError(f"protoc failed: {e.stderr.decode('utf-8', errors='ignore')}") from e

        fds = d2.FileDescriptorSet()
        with open(desc_path, "rb") as f:
            fds.ParseFromString(f.read())
    return fds


def build_request(
    fds: d2.FileDescriptorSet,
    files_to_generate: List[str],
    path_prefix: str = "",
) -> plugin_pb2.CodeGeneratorRequest:
    """Wrap a descriptor set in the request protoc would hand to the plugin."""
    request = plugin_pb2.CodeGeneratorRequest()
    request.file_to_generate.extend(files_to_generate)
    request.proto_file.extend(fds.file)
    if path_prefix:
        request.parameter = f"path_prefix={path_prefix}"
    return request


def run(proto: str, out_dir: str, path_prefix: str = "", includes: Optional[List[str]] = None) -> List[str]:
    """Generate Markdown for a .proto file or every .proto under a directory.

    Returns the written file paths.
    """
    # The prefix travels inside protoc's comma-separated parameter string.
    if "," in path_prefix:
        raise ConfigError([f"invalid path prefix {path_prefix!r}: must not contain ','"])

    if os.path.isdir(proto):
        root = os.path.abspath(proto)
        inputs = _find_proto_files(root)
    else:
        root = os.path.dirname(os.path.abspath(proto))
        inputs = [os.path.abspath(proto)]
    if not inputs:
        return []

    fds = build_descriptor_set(inputs, [root] + list(includes or []))
    # protoc names files relative to the include root
    names = [Path(os.path.relpath(p, root)).as_posix() for p in inputs]
    response = generate(build_request(fds, names, path_prefix))
    if response.error:
        raise ConfigError([response.error])

    written: List[str] = []
    for out in response.file:
        out_path = Path(out_dir) / out.name
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(out.content, encoding="utf-8")
        written.append(str(out_path))
    return written


def main():
    parser = argparse.ArgumentParser(
        description="Generate Markdown API documentation from .proto service definitions",
    )
    parser.add_argument("--proto", required=True, help="Path to a .proto file or a directory containing .proto files (recursively)")
    parser.add_argument("--out", required=True, help="Output directory for generated .md file(s)")
    parser.add_argument("--path-prefix", default="", help="String to prefix to every documented request path")
    parser.add_argument("-I", "--include", action="append", default=[], help="Additional import path for protoc (repeatable)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        generated = run(args.proto, args.out, args.path_prefix, args.include)
    except (ConfigError, ProtocError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    if not generated:
        print(f"No services found under {args.proto}")
        return
    print("Generated:\n" + "\n".join(generated))


if __name__ == "__main__":
    main()
