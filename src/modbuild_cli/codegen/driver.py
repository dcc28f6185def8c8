"""Runs code generation for every extension point of every loaded module.

Each extension point goes through Stage -> Aggregate -> Render -> Write and
finishes before the next one starts. Generation is not transactional: a
failure stops the run but files written for earlier extension points stay.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..exceptions import TemplateArrayMismatch
from ..models.module_info import ModuleInfo, ExtensionPoint
from ..utils.console import _rich_info
from .aggregator import IncludePathTable, aggregate
from .renderer import group_destinations, render_fixed, render_templated


@dataclass
class CodeGenResult:
    """Outcome of a code generation run."""
    generated_files: List[Path] = field(default_factory=list)
    include_paths: IncludePathTable = field(default_factory=IncludePathTable)
    modules_processed: int = 0


def stage_file(source_path: Path, destination_path: Path) -> None:
    """Replace ``destination_path`` with a verbatim copy of ``source_path``."""
    if destination_path.exists():
        destination_path.unlink()
    destination_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source_path, destination_path)


def read_text(path: Path) -> str:
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)


class CodeGenerator:
    """Cross-module code generator."""

    def __init__(self, modules: Sequence[ModuleInfo], include_paths: Optional[IncludePathTable] = None,
                 verbose: bool = True):
        """Initialize the generator.

        Args:
            modules: Every loaded module, in load order. All of them are
                potential contributors to every extension point.
            include_paths: Side table to fill; a new one is created if omitted.
            verbose: Report progress on the console.
        """
        self.modules = list(modules)
        self.include_paths = include_paths if include_paths is not None else IncludePathTable()
        self.verbose = verbose

    def generate_all(self) -> CodeGenResult:
        """Run code generation for all modules."""
        result = CodeGenResult(include_paths=self.include_paths)
        for module in self.modules:
            if not module.has_codegen():
                continue
            result.generated_files.extend(self.generate_module(module))
            result.modules_processed += 1
        return result

    def generate_module(self, module: ModuleInfo) -> List[Path]:
        """Generate every extension point ``module`` declares, in order."""
        if self.verbose:
            _rich_info(f"\"{module.name}\" requested CodeGen. Generating...", symbol="gear")
        written: List[Path] = []
        for extension_point in module.extension_points:
            written.extend(self.generate_extension_point(module, extension_point))
        return written

    def generate_extension_point(self, module: ModuleInfo, extension_point: ExtensionPoint) -> List[Path]:
        written: List[Path] = []
        if extension_point.is_templated:
            written.extend(self._generate_templated(module, extension_point))
        if extension_point.is_fixed:
            written.append(self._generate_fixed(module, extension_point))
        return written

    def _generate_fixed(self, module: ModuleInfo, extension_point: ExtensionPoint) -> Path:
        source_path = module.codegen_dir / extension_point.codegen_source
        destination_path = module.folder_path / extension_point.codegen_destination

        stage_file(source_path, destination_path)
        aggregated = aggregate(extension_point, self.modules, self.include_paths)
        template_text = read_text(destination_path)
        rendered = render_fixed(template_text, extension_point.placeholders, aggregated, extension_point)
        write_text(destination_path, rendered)
        return destination_path

    def _generate_templated(self, module: ModuleInfo, extension_point: ExtensionPoint) -> List[Path]:
        sources = extension_point.template_sources
        destinations = extension_point.template_destinations
        if len(sources) != len(destinations):
            raise TemplateArrayMismatch(extension_point.name, module.name, len(sources), len(destinations))

        aggregated = aggregate(extension_point, self.modules, self.include_paths)
        # Filenames depend on contributed data, so every group is known
        # before anything is staged.
        groups = group_destinations(extension_point, aggregated)

        written: List[Path] = []
        for group in groups.values():
            destination_path = module.folder_path / group.destination
            stage_file(module.codegen_dir / group.source, destination_path)
            template_text = read_text(destination_path)
            write_text(destination_path, render_templated(template_text, extension_point, group))
            written.append(destination_path)
        return written


def run_codegen(modules: Sequence[ModuleInfo], verbose: bool = True) -> CodeGenResult:
    """Convenience wrapper: run code generation for all modules."""
    return CodeGenerator(modules, verbose=verbose).generate_all()
