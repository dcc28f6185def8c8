"""Main build orchestration: discover, verify, generate, compile, link.

Phases run strictly in sequence and nothing is rolled back when a later
phase fails.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Dict, Any

import yaml

from .codegen.driver import CodeGenerator
from .compilation.constants import REGIONS, validate_region
from .compilation.disc import copy_all_disc_files
from .compilation.linker import link
from .compilation.module_compiler import ModuleCompiler
from .compilation.toolchain import Toolchain
from .deps.capability_registry import validate_module_set, verify_capabilities
from .discovery import discover_modules
from .exceptions import ConfigurationError
from .utils.console import _rich_info, _rich_success

PROJECT_CONFIG_FILENAME = "modbuild.yml"


@dataclass
class BuildConfig:
    """Configuration for a module build."""
    region: Optional[str] = None
    syati_dir: Optional[str] = None
    modules_dir: Optional[str] = None
    output_dir: Optional[str] = None
    unibuild: bool = False
    copy_disc: bool = False
    link: bool = True

    @classmethod
    def from_project_yml(cls, path: str = PROJECT_CONFIG_FILENAME, **overrides) -> 'BuildConfig':
        """Create configuration from modbuild.yml with command-line overrides.

        Args:
            path: Project configuration file; a missing file means defaults.
            **overrides: Command-line values. ``None`` means "not given".

        Returns:
            BuildConfig: Configuration with file values and overrides applied.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed.
        """
        config = cls()

        config_path = Path(path)
        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    project_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}")
            if not isinstance(project_config, dict):
                raise ConfigurationError(f"{config_path} must contain a YAML object")

            build_config = project_config.get('build') or {}
            for key in ('region', 'syati_dir', 'modules_dir', 'output_dir'):
                if key in build_config:
                    setattr(config, key, str(build_config[key]))
            for key in ('unibuild', 'copy_disc', 'link'):
                if key in build_config:
                    setattr(config, key, bool(build_config[key]))

        # Command-line overrides have highest priority
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)

        return config

    def validate(self, require_toolchain: bool = True) -> None:
        """Check the configuration before any work starts.

        Raises:
            ConfigurationError: On an unknown region or a missing folder
        """
        if require_toolchain:
            if not self.region or not validate_region(self.region):
                raise ConfigurationError(
                    f"Invalid region {self.region} (expected one of: {', '.join(REGIONS)})"
                )
            if not self.syati_dir or not Path(self.syati_dir).is_dir():
                raise ConfigurationError(f"Syati folder not found: {self.syati_dir}")
            if not self.output_dir:
                raise ConfigurationError("No output folder given")
        if not self.modules_dir or not Path(self.modules_dir).is_dir():
            raise ConfigurationError(f"Modules folder not found: {self.modules_dir}")


@dataclass
class BuildResult:
    """Result of a module build."""
    modules: List[str] = field(default_factory=list)
    resolved_capabilities: Dict[str, List[str]] = field(default_factory=dict)
    generated_files: List[Path] = field(default_factory=list)
    object_files: List[Path] = field(default_factory=list)
    binary_path: Optional[Path] = None
    map_path: Optional[Path] = None
    disc_files: List[Path] = field(default_factory=list)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "modules": len(self.modules),
            "generated_files": len(self.generated_files),
            "object_files": len(self.object_files),
            "binary": str(self.binary_path) if self.binary_path else None,
            "disc_files": len(self.disc_files),
        }


class BuildPipeline:
    """Runs every build phase for one configuration."""

    def __init__(self, config: BuildConfig, toolchain: Optional[Toolchain] = None):
        self.config = config
        self.toolchain = toolchain

    def run(self, codegen_only: bool = False) -> BuildResult:
        """Run the build.

        Args:
            codegen_only: Stop after code generation.

        Returns:
            BuildResult: What each phase produced.
        """
        self.config.validate(require_toolchain=not codegen_only)
        result = BuildResult()

        _rich_info("Loading Modules...", symbol="folder")
        discovery = discover_modules(self.config.modules_dir)
        modules = discovery.modules
        result.modules = [module.name for module in modules]
        _rich_info(f"{discovery.count()} modules loaded!")

        validate_module_set(modules)
        result.resolved_capabilities = verify_capabilities(modules)

        codegen = CodeGenerator(modules).generate_all()
        result.generated_files = codegen.generated_files
        if codegen_only:
            return result

        toolchain = self.toolchain or Toolchain(Path(self.config.syati_dir))
        compiler = ModuleCompiler(toolchain, self.config.region, modules, codegen.include_paths)
        output_dir = Path(self.config.output_dir)
        if self.config.unibuild:
            result.object_files = compiler.compile_unibuild(output_dir)
        else:
            result.object_files = compiler.compile_all()

        # If we made it here, we have a successful compile
        if self.config.link:
            result.binary_path, result.map_path = link(
                toolchain, result.object_files, self.config.region, modules, output_dir
            )

        if self.config.copy_disc:
            result.disc_files = copy_all_disc_files(modules, output_dir)

        _rich_success("Complete!", symbol="sparkles")
        return result
