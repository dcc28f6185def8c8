"""Module capability inspection commands."""

import sys
import click
from pathlib import Path

from ..deps.capability_registry import CapabilityRegistry, validate_module_set
from ..discovery import discover_modules
from ..exceptions import ModBuildError
from ..utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _create_modules_table, _get_console
)


@click.group(help="🔗 Inspect module capabilities")
def deps():
    """Module capability commands."""
    pass


@deps.command(name="list", help="📋 List modules with exported and referenced capabilities")
@click.argument('modules_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
def list_modules(modules_dir):
    """Show every module with the capabilities it exports, requires and uses optionally."""
    try:
        discovery = discover_modules(modules_dir, verbose=False)
        if not discovery.modules:
            _rich_info(f"No modules found in {modules_dir}")
            return

        report = CapabilityRegistry(discovery.modules).build_report()
        rows = []
        for module in discovery.modules:
            node = report.get_node(module)
            optional = []
            for capability_id in module.optional_capabilities:
                mark = "✓" if node and capability_id in node.satisfied_optional else "✗"
                optional.append(f"{capability_id} {mark}")
            rows.append({
                'name': module.name,
                'exports': module.api_id or "-",
                'requires': ", ".join(module.required_capabilities) or "-",
                'optional': ", ".join(optional) or "-",
                'extension_points': ", ".join(ep.name for ep in module.extension_points) or "-",
            })

        _get_console().print(_create_modules_table(rows, title="Modules"))

        for error in report.resolution_errors:
            _rich_warning(error, symbol="warning")
    except (ModBuildError, OSError) as e:
        _rich_error(f"Error listing modules: {e}")
        sys.exit(1)


@deps.command(help="✅ Verify every required capability can be resolved")
@click.argument('modules_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
def verify(modules_dir):
    """Run the capability pre-flight check without generating or compiling."""
    try:
        discovery = discover_modules(modules_dir, verbose=False)
        validate_module_set(discovery.modules)
        report = CapabilityRegistry(discovery.modules).build_report()
        if report.has_errors():
            for error in report.resolution_errors:
                _rich_error(error)
            _rich_error(f"Capability verification failed with {len(report.resolution_errors)} error(s)")
            sys.exit(1)
        _rich_success(f"All capabilities of {len(discovery.modules)} module(s) resolved", symbol="check")
    except (ModBuildError, OSError) as e:
        _rich_error(f"Error verifying modules: {e}")
        sys.exit(1)
