"""
Tests for the earlydecoder command line interface.
"""

import json

from typer.testing import CliRunner

from earlydecoder import __version__
from earlydecoder.cli import app

runner = CliRunner()

VALID_TF = (
    'terraform {\n'
    '  required_version = ">= 1.0"\n'
    '}\n'
    '\n'
    'resource "aws_instance" "web" {\n'
    '  provider = aws.east\n'
    '}\n'
)

INVALID_PROVIDER_TF = (
    'resource "aws_instance" "db" {\n'
    '  provider = 42\n'
    '}\n'
)


class TestInspect:
    """Test the inspect command."""

    def test_json_output(self, temp_dir):
        (temp_dir / "main.tf").write_text(VALID_TF)
        result = runner.invoke(app, ["inspect", str(temp_dir), "--json"])
        assert result.exit_code == 0

        payload = json.loads(result.stdout)
        assert payload["module"]["required_core"] == [">= 1.0"]
        assert payload["module"]["resources"]["aws_instance.web"]["provider"] == "aws.east"
        assert payload["diagnostics"] == {str(temp_dir / "main.tf"): []}

    def test_table_output(self, temp_dir):
        (temp_dir / "main.tf").write_text(VALID_TF)
        result = runner.invoke(app, ["inspect", str(temp_dir)])
        assert result.exit_code == 0
        assert "Resources" in result.stdout
        assert "No diagnostics." in result.stdout

    def test_diagnostics_are_reported(self, temp_dir):
        (temp_dir / "main.tf").write_text(INVALID_PROVIDER_TF)
        result = runner.invoke(app, ["inspect", str(temp_dir)])
        assert result.exit_code == 0
        assert "Invalid provider reference" in result.stdout

    def test_strict_fails_on_errors(self, temp_dir):
        (temp_dir / "main.tf").write_text(INVALID_PROVIDER_TF)
        result = runner.invoke(app, ["inspect", str(temp_dir), "--json", "--strict"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        [diag] = payload["diagnostics"][str(temp_dir / "main.tf")]
        assert diag["summary"] == "Invalid provider reference"
        assert diag["severity"] == "error"

    def test_strict_from_environment(self, temp_dir, monkeypatch):
        from earlydecoder.settings import reload_settings

        (temp_dir / "main.tf").write_text(INVALID_PROVIDER_TF)
        monkeypatch.setenv("ED_STRICT", "true")
        reload_settings()
        assert runner.invoke(app, ["inspect", str(temp_dir)]).exit_code == 1
        assert runner.invoke(app, ["inspect", str(temp_dir), "--no-strict"]).exit_code == 0

    def test_strict_passes_without_errors(self, temp_dir):
        (temp_dir / "main.tf").write_text(VALID_TF)
        result = runner.invoke(app, ["inspect", str(temp_dir), "--strict"])
        assert result.exit_code == 0

    def test_missing_directory(self, temp_dir):
        result = runner.invoke(app, ["inspect", str(temp_dir / "missing")])
        assert result.exit_code == 1
        assert "Path is not a directory" in result.stdout


class TestVersion:

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
