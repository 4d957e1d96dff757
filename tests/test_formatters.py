"""
Tests for the rich terminal formatter.
"""

import io

from rich.console import Console

from earlydecoder.diagnostics import Diagnostics, error
from earlydecoder.formatters import ModuleSummaryFormatter
from earlydecoder.models import (
    DecodedModule, ModuleCall, ProviderConfig, ProviderRef, ProviderRequirement, Resource,
)


def _render(mod=None, diags_by_file=None) -> str:
    console = Console(file=io.StringIO(), width=200, color_system=None)
    formatter = ModuleSummaryFormatter(console)
    if mod is not None:
        formatter.print_module(mod)
    if diags_by_file is not None:
        formatter.print_diagnostics(diags_by_file)
    return console.file.getvalue()


class TestPrintModule:
    """Test table rendering of decoded modules."""

    def test_sections(self):
        mod = DecodedModule(required_core=[">= 1.0"])
        mod.provider_requirements["aws"] = ProviderRequirement(source="hashicorp/aws")
        mod.provider_configs["aws.east"] = ProviderConfig(name="aws", alias="east")
        output = _render(mod)
        assert "Required core versions" in output
        assert "hashicorp/aws" in output
        assert "aws.east" in output
        assert "Resources" not in output

    def test_markup_in_values_is_printed_verbatim(self):
        mod = DecodedModule(required_core=["[bold]>= 1.0"])
        web = Resource(type="aws_instance", name="web[bold]", provider=ProviderRef(local_name="aws"))
        mod.resources[web.map_key()] = web
        call = ModuleCall(name="net", source="./modules/[red]vpc")
        mod.module_calls[call.map_key()] = call
        output = _render(mod)
        assert "[bold]>= 1.0" in output
        assert "aws_instance.web[bold]" in output
        assert "./modules/[red]vpc" in output


class TestPrintDiagnostics:

    def test_no_diagnostics(self):
        assert "No diagnostics." in _render(diags_by_file={"main.tf": Diagnostics()})

    def test_diagnostics_are_escaped(self):
        diags = Diagnostics([error("Invalid provider reference", 'Got "[x]" here.')])
        output = _render(diags_by_file={"main.tf": diags})
        assert "Invalid provider reference" in output
        assert 'Got "[x]" here.' in output
