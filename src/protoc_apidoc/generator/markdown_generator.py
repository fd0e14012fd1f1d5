from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import jsbeautifier
from jinja2 import Environment, FileSystemLoader

from protoc_apidoc.models import Service

logger = logging.getLogger(__name__)


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def beautify(code: str) -> str:
    """Indent an example payload. Best effort: a formatter failure yields an empty block."""
    try:
        return jsbeautifier.beautify(code, jsbeautifier.default_options())
    except Exception as e:
        logger.warning("Could not format example code: %s: %s", type(e).__name__, e)
        return ""


def _build_service(service: Service) -> Dict:
    apis = []
    for api in service.apis:
        apis.append({
            "path": api.path,
            "anchor": api.anchor,
            "doc": api.doc,
            "http_method": api.http_method,
            "request_code": beautify(api.request_example),
            "reply_code": beautify(api.reply_example),
        })
    return {
        "name": service.name,
        # Two trailing spaces keep the comment's line breaks in Markdown.
        "doc_lines": [line + "  " for line in service.leading_doc.split("\n")],
        "apis": apis,
    }


def generate_markdown(services: List[Service]) -> str:
    """Render the documentation of every service of one file, in declaration order."""
    env = _get_template_env()
    template = env.get_template("service.md.j2")
    return template.render(services=[_build_service(s) for s in services])


def output_file_name(proto_name: str) -> str:
    """'greeter.proto' -> 'greeter.md' (first occurrence only)."""
    return proto_name.replace(".proto", ".md", 1)
