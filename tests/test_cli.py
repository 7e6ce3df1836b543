import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from rpc_swagger.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliGenerate:
    def test_generate_yaml(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "hello.yaml"),
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        output_file = tmp_path / "openapi.yaml"
        assert output_file.exists()
        assert "Found 1 services and 4 structs." in result.output
        assert "3 paths, 1 schemas" in result.output

        content = output_file.read_text(encoding="utf-8")
        assert content.startswith("# Generated with rpc-swagger")
        doc = yaml.safe_load(content)
        assert doc["openapi"] == "3.0.3"
        assert doc["info"]["title"] == "example swagger doc"

    def test_generate_json(self, tmp_path):
        output_dir = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "hello.yaml"),
            "-o", str(output_dir),
            "--format", "json",
        ])

        assert result.exit_code == 0, result.output
        doc = json.loads((output_dir / "openapi.json").read_text(encoding="utf-8"))
        assert sorted(doc["paths"]) == ["/body", "/hello1", "/path{path1}"]

    def test_invalid_idl(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("- just\n- a list\n")

        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(bad), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "does not contain an IDL mapping" in result.output
        assert not (tmp_path / "openapi.yaml").exists()

    def test_missing_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0

    def test_unknown_format(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate", str(FIXTURES / "hello.yaml"),
            "-o", str(tmp_path),
            "--format", "xml",
        ])
        assert result.exit_code != 0
