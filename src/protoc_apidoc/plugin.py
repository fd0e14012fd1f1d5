"""protoc plugin entry point: CodeGeneratorRequest on stdin, CodeGeneratorResponse on stdout."""

from __future__ import annotations

import logging
import os
import sys

from google.protobuf.compiler import plugin_pb2

from protoc_apidoc.context import GenerationContext
from protoc_apidoc.generator.catalog import build_services
from protoc_apidoc.generator.markdown_generator import generate_markdown, output_file_name
from protoc_apidoc.params import ConfigError, parse_command_line_params

logger = logging.getLogger(__name__)

DEBUG_ENV = "PROTOC_APIDOC_DEBUG"


def generate(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """Produce one Markdown document per requested file that declares a service.

    Every file in the request (imports included) is indexed before any
    service is resolved. A bad parameter string fails the whole run through
    ``response.error``.
    """
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    try:
        params = parse_command_line_params(request.parameter)
    except ConfigError as e:
        logger.error("Invalid parameters: %s", e)
        response.error = str(e)
        return response

    ctx = GenerationContext.scan(params, request.proto_file)

    files_by_name = {f.name: f for f in request.proto_file}
    for name in request.file_to_generate:
        file = files_by_name.get(name)
        if file is None:
            logger.warning("File to generate '%s' is missing from the request", name)
            continue
        if not file.service:
            logger.debug("Skipping %s: no services", name)
            continue

        services = build_services(file, ctx)
        out = response.file.add()
        out.name = output_file_name(name)
        out.content = generate_markdown(services)
        logger.info("Generated %s (%d service(s))", out.name, len(services))

    return response


def main():
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING,
        format="protoc-gen-apidoc: %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    request = plugin_pb2.CodeGeneratorRequest()
    request.ParseFromString(sys.stdin.buffer.read())
    response = generate(request)
    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
