"""
Tests for loading module directories from disk.
"""

import pytest

from earlydecoder.errors import ModuleLoadError
from earlydecoder.loader import find_module_files, load_module_from_dir
from earlydecoder.settings import EarlyDecoderSettings


class TestFindModuleFiles:

    def test_filters_by_suffix(self, temp_dir):
        for name in ("main.tf", "variables.tf", "notes.md", "override.tf.json"):
            (temp_dir / name).write_text("")
        (temp_dir / "sub.tf").mkdir()

        files = find_module_files(temp_dir)
        assert [f.name for f in files] == ["main.tf", "variables.tf"]

    def test_custom_suffixes(self, temp_dir):
        (temp_dir / "a.tf").write_text("")
        (temp_dir / "b.hcl").write_text("")
        settings = EarlyDecoderSettings(file_suffixes=["hcl"])
        assert [f.name for f in find_module_files(temp_dir, settings)] == ["b.hcl"]

    def test_not_a_directory(self, temp_dir):
        with pytest.raises(ModuleLoadError):
            find_module_files(temp_dir / "missing")


class TestLoadModuleFromDir:
    """Test decoding a whole module directory."""

    def test_multi_file_module(self, temp_dir):
        (temp_dir / "versions.tf").write_text(
            'terraform {\n'
            '  required_version = ">= 1.0"\n'
            '  required_providers {\n'
            '    aws = {\n'
            '      source = "hashicorp/aws"\n'
            '    }\n'
            '  }\n'
            '}\n'
        )
        (temp_dir / "main.tf").write_text(
            'resource "aws_instance" "web" {\n'
            '  ami = "ami-1"\n'
            '}\n'
        )

        mod, diags_by_file = load_module_from_dir(temp_dir)
        assert mod.required_core == [">= 1.0"]
        assert mod.provider_requirements["aws"].source == "hashicorp/aws"
        assert list(mod.resources) == ["aws_instance.web"]
        assert sorted(diags_by_file) == sorted(str(temp_dir / n) for n in ("main.tf", "versions.tf"))
        assert all(len(d) == 0 for d in diags_by_file.values())

    def test_broken_file_does_not_stop_loading(self, temp_dir):
        (temp_dir / "broken.tf").write_text('resource "a" "b" {\n  x = \n')
        (temp_dir / "main.tf").write_text('module "vpc" {\n  source = "./vpc"\n}\n')

        mod, diags_by_file = load_module_from_dir(temp_dir)
        assert mod.module_calls["module.vpc"].source == "./vpc"
        assert diags_by_file[str(temp_dir / "broken.tf")].has_errors()
        assert len(diags_by_file[str(temp_dir / "main.tf")]) == 0

    def test_empty_directory(self, temp_dir):
        mod, diags_by_file = load_module_from_dir(temp_dir)
        assert mod.resources == {}
        assert diags_by_file == {}
