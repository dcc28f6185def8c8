"""Command-line interface for the module build tool."""

import sys
import click
from pathlib import Path

from modbuild_cli.version import get_version
from modbuild_cli.config import get_config, get_default_syati_dir, set_default_syati_dir
from modbuild_cli.compilation.constants import REGIONS
from modbuild_cli.discovery import discover_modules
from modbuild_cli.deps.capability_registry import validate_module_set
from modbuild_cli.exceptions import ModBuildError
from modbuild_cli.models.module_info import validate_module
from modbuild_cli.pipeline import BuildConfig, BuildPipeline, PROJECT_CONFIG_FILENAME
from modbuild_cli.utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _rich_panel, _get_console
)
from modbuild_cli.commands.deps import deps


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    console = _get_console()
    if console:
        from rich.text import Text
        from rich.panel import Panel
        version_text = Text()
        version_text.append("Module Build Tool", style="bold cyan")
        version_text.append(f" version {get_version()}", style="white")
        console.print(Panel(version_text, border_style="cyan", padding=(0, 1)))
    else:
        click.echo(f"Module Build Tool version {get_version()}")

    ctx.exit()


@click.group(help="Module Build Tool: generate, compile and link community modules into one patch")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.pass_context
def cli(ctx):
    """Main entry point for the CLI."""
    ctx.ensure_object(dict)


# Register command groups
cli.add_command(deps)


@cli.command(help="🔨 Generate code, compile every module and link the final binary")
@click.argument('region', required=False, type=click.Choice(REGIONS))
@click.argument('modules_dir', required=False, type=click.Path(file_okay=False))
@click.argument('output_dir', required=False, type=click.Path(file_okay=False))
@click.option('--syati', 'syati_dir', type=click.Path(file_okay=False),
              help="Path to the Syati repository (defaults to modbuild.yml or stored config)")
@click.option('--unibuild', '-u', is_flag=True,
              help="Compile all modules as one translation unit (smaller binary, harder to debug)")
@click.option('--disc', 'copy_disc', is_flag=True, help="Copy module disc/ files into the output folder")
@click.option('--no-link', is_flag=True, help="Stop after compiling")
@click.pass_context
def build(ctx, region, modules_dir, output_dir, syati_dir, unibuild, copy_disc, no_link):
    """Run the full build.

    Phases run in order and stop at the first error: module loading,
    capability verification, code generation, compilation, linking.
    """
    try:
        config = BuildConfig.from_project_yml(
            PROJECT_CONFIG_FILENAME,
            region=region,
            syati_dir=syati_dir,
            modules_dir=modules_dir,
            output_dir=output_dir,
            unibuild=unibuild or None,
            copy_disc=copy_disc or None,
            link=False if no_link else None,
        )
        if config.syati_dir is None:
            config.syati_dir = get_default_syati_dir()

        if config.unibuild:
            _rich_info("UniBuild enabled: compiling all modules as one translation unit", symbol="hammer")

        result = BuildPipeline(config).run()
        if result.binary_path:
            _rich_info(f"Binary written to {result.binary_path}")
    except (ModBuildError, OSError) as e:
        _rich_error(f"Build failed: {e}")
        sys.exit(1)


@cli.command(help="⚙️  Run code generation only")
@click.argument('modules_dir', type=click.Path(exists=True, file_okay=False))
def codegen(modules_dir):
    """Verify capabilities and regenerate every extension point output."""
    try:
        config = BuildConfig(modules_dir=modules_dir)
        result = BuildPipeline(config).run(codegen_only=True)
        for path in result.generated_files:
            _rich_info(f"  • {path}")
        _rich_success(f"Generated {len(result.generated_files)} file(s)", symbol="sparkles")
    except (ModBuildError, OSError) as e:
        _rich_error(f"Code generation failed: {e}")
        sys.exit(1)


@cli.command(help="✅ Validate module declarations without building")
@click.argument('modules_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
def validate(modules_dir):
    """Validate each module folder and the module set as a whole."""
    error_count = 0
    try:
        discovery = discover_modules(modules_dir, verbose=False)
    except (ModBuildError, OSError) as e:
        _rich_error(f"Failed to load modules: {e}")
        sys.exit(1)

    for module in discovery.modules:
        result = validate_module(module.folder_path)
        _rich_info(f"{module.name}: {result.summary()}")
        for error in result.errors:
            _rich_error(f"  {error}")
        for warning in result.warnings:
            _rich_warning(f"  {warning}")
        error_count += len(result.errors)

    try:
        validate_module_set(discovery.modules)
    except ModBuildError as e:
        _rich_error(str(e))
        error_count += 1

    if error_count:
        _rich_error(f"Validation failed with {error_count} error(s)")
        sys.exit(1)
    _rich_success(f"All {len(discovery.modules)} module(s) validated successfully!", symbol="sparkles")


@cli.command(help="Configure the module build tool")
@click.option('--show', is_flag=True, help="Show current configuration")
@click.option('--set-syati', type=click.Path(exists=True, file_okay=False),
              help="Remember the Syati repository to build against")
def config(show, set_syati):
    """Show or update user-level settings."""
    try:
        if set_syati:
            set_default_syati_dir(set_syati)
            _rich_success(f"Default Syati folder set to {get_default_syati_dir()}", symbol="check")

        if show:
            lines = [f"{key}: {value}" for key, value in sorted(get_config().items())]
            if Path(PROJECT_CONFIG_FILENAME).exists():
                project = BuildConfig.from_project_yml(PROJECT_CONFIG_FILENAME)
                lines.append("")
                lines.append(f"{PROJECT_CONFIG_FILENAME}:")
                lines.extend(f"  {key}: {value}" for key, value in vars(project).items())
            lines.append("")
            lines.append(f"Version: {get_version()}")
            _rich_panel("\n".join(lines), title="Current Configuration")
        elif not set_syati:
            _rich_info("Use --show to display configuration")
    except (ModBuildError, OSError, ValueError) as e:
        _rich_error(f"Error updating configuration: {e}")
        sys.exit(1)


def main():
    """Main entry point for the CLI."""
    try:
        cli(obj={})
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
