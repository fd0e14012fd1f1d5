import shutil
import sys
from pathlib import Path

import pytest
from google.protobuf import descriptor_pb2 as d2

from protoc_apidoc.main import ProtocError, build_descriptor_set, build_request, main, run
from protoc_apidoc.params import ConfigError

from descriptor_builders import make_file, make_message

HAS_PROTOC = shutil.which("protoc") is not None

GREETER_PROTO = """\
syntax = "proto3";

package helloworld;

// The greeting service definition.
service Greeter {
  // Sends a greeting
  rpc SayHello (HelloRequest) returns (HelloReply) {}
}

message HelloRequest {
  // The name to greet.
  string name = 1;
  map<string, int32> tags = 2;
  Mood mood = 3;
}

message HelloReply {
  string message = 1; // the greeting
}

enum Mood {
  HAPPY = 0; // smiling
  GRUMPY = 1; // not smiling
}
"""


class TestBuildRequest:
    def test_request_fields(self):
        fds = d2.FileDescriptorSet()
        fds.file.extend([make_file("a.proto", messages=[make_message("A")]), make_file("b.proto")])
        request = build_request(fds, ["b.proto"], "/api")

        assert list(request.file_to_generate) == ["b.proto"]
        assert [f.name for f in request.proto_file] == ["a.proto", "b.proto"]
        assert request.parameter == "path_prefix=/api"

    def test_no_prefix_means_no_parameter(self):
        request = build_request(d2.FileDescriptorSet(), ["a.proto"])
        assert request.parameter == ""


class TestPathPrefixValidation:
    def test_comma_in_prefix_is_rejected_before_protoc_runs(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="must not contain ','"):
            run(str(tmp_path / "missing.proto"), str(tmp_path / "out"), path_prefix="/a,b")

    def test_cli_reports_comma_in_prefix(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "protoc-apidoc", "--proto", str(tmp_path), "--out", str(tmp_path / "out"),
            "--path-prefix", "/a,b",
        ])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "FATAL: invalid path prefix '/a,b'" in capsys.readouterr().err


@pytest.mark.skipif(not HAS_PROTOC, reason="protoc not installed")
class TestRunWithProtoc:
    def test_single_file(self, tmp_path: Path):
        proto = tmp_path / "src" / "greeter.proto"
        proto.parent.mkdir()
        proto.write_text(GREETER_PROTO, encoding="utf-8")
        out_dir = tmp_path / "docs"

        written = run(str(proto), str(out_dir))

        assert written == [str(out_dir / "greeter.md")]
        doc = (out_dir / "greeter.md").read_text(encoding="utf-8")
        assert "# Greeter" in doc
        assert "The greeting service definition." in doc
        assert "- [/helloworld.Greeter/SayHello](#helloworldgreetersayhello)" in doc
        assert "Sends a greeting" in doc
        assert "// The name to greet." in doc
        assert "type:<map<string,int>>" in doc
        assert "HAPPY(=0) smiling" in doc
        assert "type:<string>, the greeting" in doc

    def test_directory(self, tmp_path: Path):
        (tmp_path / "greeter.proto").write_text(GREETER_PROTO, encoding="utf-8")
        (tmp_path / "types.proto").write_text('syntax = "proto3";\nmessage Lonely {}\n', encoding="utf-8")

        written = run(str(tmp_path), str(tmp_path / "out"), path_prefix="/twirp")

        assert [Path(p).name for p in written] == ["greeter.md"]
        assert "/twirp/helloworld.Greeter/SayHello" in Path(written[0]).read_text(encoding="utf-8")

    def test_syntax_error_raises(self, tmp_path: Path):
        bad = tmp_path / "bad.proto"
        bad.write_text("this is not a proto file", encoding="utf-8")
        with pytest.raises(ProtocError, match="protoc failed"):
            build_descriptor_set([str(bad)], [str(tmp_path)])
