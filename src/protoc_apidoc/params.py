from __future__ import annotations

from typing import List

from protoc_apidoc.models import CommandLineParams

IMPORT_MAPPING_PREFIX = "go_import_mapping@"


class ConfigError(ValueError):
    """Raised when the plugin parameter string is malformed or names an unknown key.

    Carries every problem found, not just the first one.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def parse_command_line_params(parameter: str) -> CommandLineParams:
    """Parse protoc's comma-separated ``key=value`` parameter string.

    Recognized keys: ``path_prefix``, ``M<proto file>`` and
    ``go_import_mapping@<proto file>`` (the latter two fill the import map).
    All tokens are checked before a single ConfigError is raised.
    """
    params = CommandLineParams()
    errors: List[str] = []

    for token in (parameter or "").split(","):
        if token == "":
            continue
        key, sep, value = token.partition("=")
        if not sep or value == "":
            errors.append(f"invalid parameter {token!r}: expected format of parameter to be k=v")
            continue

        if key == "path_prefix":
            params.path_prefix = value
        elif key.startswith(IMPORT_MAPPING_PREFIX):
            params.import_map[key[len(IMPORT_MAPPING_PREFIX):]] = value
        elif key.startswith("M"):
            params.import_map[key[1:]] = value
        else:
            errors.append(f"unknown parameter {key!r}")

    if errors:
        raise ConfigError(errors)
    return params
