"""Build the per-method API records of a service."""

from __future__ import annotations

import logging
from typing import List, Optional

from google.protobuf import descriptor_pb2 as d2

from protoc_apidoc.context import GenerationContext
from protoc_apidoc.models import Api, Service, strip_leading_dot
from protoc_apidoc.parser.comments import FILE_SERVICE, SERVICE_METHOD, CommentIndex
from protoc_apidoc.parser.schema_index import qualify

logger = logging.getLogger(__name__)

HTTP_METHOD = "POST"


def api_path(path_prefix: str, service_full_name: str, method_name: str) -> str:
    return f"{path_prefix}/{service_full_name}/{method_name}"


def paragraph_doc(comment: str) -> str:
    """Double every newline so each comment line becomes its own Markdown paragraph."""
    return comment.replace("\n", "\n\n")


def build_service(
    file: d2.FileDescriptorProto,
    service_index: int,
    ctx: GenerationContext,
    comments: Optional[CommentIndex] = None,
) -> Service:
    """Resolve every method of ``file.service[service_index]`` into an Api.

    Request and reply types missing from the index are logged and render as
    an empty object; they never abort the run.
    """
    if comments is None:
        comments = CommentIndex(file)
    sd = file.service[service_index]
    svc_path = (FILE_SERVICE, service_index)
    full_name = qualify(file.package, sd.name)
    renderer = ctx.renderer

    apis: List[Api] = []
    for k, md in enumerate(sd.method):
        request_type = strip_leading_dot(md.input_type)
        reply_type = strip_leading_dot(md.output_type)
        request = ctx.index.lookup_message(request_type)
        reply = ctx.index.lookup_message(reply_type)
        for role, type_name, message in (("request", request_type, request), ("reply", reply_type, reply)):
            if message is None:
                logger.warning("%s.%s: %s type '%s' not found", full_name, md.name, role, type_name)

        api = Api(
            full_method_name=qualify(full_name, md.name),
            path=api_path(ctx.params.path_prefix, full_name, md.name),
            doc=paragraph_doc(comments.get(svc_path + (SERVICE_METHOD, k)).leading),
            http_method=HTTP_METHOD,
            request=request,
            reply=reply,
        )
        api.request_example = renderer.render_message(api.request)
        api.reply_example = renderer.render_message(api.reply)
        apis.append(api)

    return Service(
        full_name=full_name,
        name=sd.name,
        leading_doc=comments.get(svc_path).leading,
        apis=apis,
    )


def build_services(file: d2.FileDescriptorProto, ctx: GenerationContext) -> List[Service]:
    comments = CommentIndex(file)
    return [build_service(file, i, ctx, comments) for i in range(len(file.service))]
