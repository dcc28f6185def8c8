"""Compiles loaded modules into object files.

Two strategies exist: one compile per source file of every module, or
UniBuild, which includes every module source into a single translation unit.
UniBuild can shrink the final binary at some cost in debuggability.
"""

import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..codegen.aggregator import IncludePathTable
from ..deps.capability_registry import CapabilityRegistry
from ..exceptions import ToolchainError
from ..models.module_info import ModuleInfo
from .constants import (
    ASM_PATTERN,
    CPP_PATTERN,
    OBJECT_SUFFIX,
    SYATI_INCLUDE_DIR,
    UNIBUILD_FILENAME,
)
from .toolchain import Toolchain

BuildTask = Tuple[Path, Path]  # (source, object)


def collect_module_flags(modules: Sequence[ModuleInfo]) -> List[str]:
    """Every compiler flag declared by any module, in load order."""
    flags: List[str] = []
    for module in modules:
        flags.extend(module.compiler_flags)
    return flags


def _add_unique(target: List[Path], paths: Sequence[Path]) -> None:
    for path in paths:
        if path not in target:
            target.append(path)


class ModuleCompiler:
    """Drives the toolchain over a set of modules."""

    def __init__(self, toolchain: Toolchain, region: str, modules: Sequence[ModuleInfo],
                 include_paths: Optional[IncludePathTable] = None):
        """Initialize the compiler.

        Args:
            toolchain: Toolchain of the Syati checkout to build against.
            region: Target region, exported to sources as ``-D<REGION>``.
            modules: Every loaded module, in load order.
            include_paths: Include directories granted during code generation.
        """
        self.toolchain = toolchain
        self.region = region
        self.modules = list(modules)
        self.include_paths = include_paths if include_paths is not None else IncludePathTable()
        self.registry = CapabilityRegistry(self.modules)

    def collect_flags(self) -> List[str]:
        return [f"-D{self.region}", *collect_module_flags(self.modules)]

    def dependency_include_dirs(self, module: ModuleInfo) -> List[Path]:
        """Include folders of the modules exporting what ``module`` uses."""
        dirs: List[Path] = []
        for exporter in self.registry.exporters_for(module):
            for candidate in (exporter.include_dir, exporter.codebuild_export_dir):
                if candidate.is_dir():
                    _add_unique(dirs, [candidate])
        return dirs

    def include_dirs_for(self, module: ModuleInfo) -> List[Path]:
        dirs: List[Path] = []
        _add_unique(dirs, [
            self.toolchain.syati_dir / SYATI_INCLUDE_DIR,
            module.include_dir,
            module.codebuild_dir,
            module.codebuild_export_dir,
        ])
        _add_unique(dirs, self.dependency_include_dirs(module))
        _add_unique(dirs, self.include_paths.for_module(module))
        return dirs

    def collect_tasks(self, module: ModuleInfo) -> Tuple[List[BuildTask], List[BuildTask]]:
        """Find (source, object) pairs for C++ and assembly sources.

        Raises:
            ToolchainError: If two sources would be compiled to the same object file
        """
        compile_tasks: List[BuildTask] = []
        assemble_tasks: List[BuildTask] = []
        owners: Dict[Path, Path] = {}
        for source_dir in (module.source_dir, module.codebuild_dir):
            if not source_dir.is_dir():
                continue
            for pattern, tasks in ((CPP_PATTERN, compile_tasks), (ASM_PATTERN, assemble_tasks)):
                for source in sorted(source_dir.rglob(pattern)):
                    relative = source.relative_to(source_dir).with_suffix(OBJECT_SUFFIX)
                    output = module.build_dir / relative
                    if output in owners:
                        raise ToolchainError(
                            f"Module \"{module.name}\": \"{owners[output]}\" and \"{source}\" "
                            f"both compile to {output}"
                        )
                    owners[output] = source
                    tasks.append((source, output))
        return compile_tasks, assemble_tasks

    def compile_module(self, module: ModuleInfo, flags: Optional[List[str]] = None) -> List[Path]:
        """Compile one module; its ``build`` folder is recreated from scratch."""
        flags = flags if flags is not None else self.collect_flags()
        include_dirs = self.include_dirs_for(module)
        compile_tasks, assemble_tasks = self.collect_tasks(module)

        if module.build_dir.exists():
            shutil.rmtree(module.build_dir)

        for source, output in compile_tasks:
            self.toolchain.compile_source(source, output, flags, include_dirs)
        for source, output in assemble_tasks:
            self.toolchain.assemble_source(source, output, flags, include_dirs)
        return [output for _, output in compile_tasks + assemble_tasks]

    def compile_all(self) -> List[Path]:
        """Compile every module separately. Returns object files in link order."""
        flags = self.collect_flags()
        objects: List[Path] = []
        for module in self.modules:
            objects.extend(self.compile_module(module, flags))
        return objects

    def write_unibuild_source(self, output_dir: Path) -> Tuple[Path, List[Path]]:
        """Write the UniBuild translation unit.

        Returns:
            Tuple of the written file and the include directories to build it with

        Raises:
            ToolchainError: If a module ships assembly sources
        """
        include_dirs: List[Path] = [self.toolchain.syati_dir / SYATI_INCLUDE_DIR]
        sources: List[Path] = []
        for module in self.modules:
            _add_unique(include_dirs, [module.include_dir, module.codebuild_dir])
            _add_unique(include_dirs, self.dependency_include_dirs(module))
            _add_unique(include_dirs, self.include_paths.for_module(module))

            if not module.source_dir.is_dir():
                continue
            sources.extend(sorted(module.source_dir.rglob(CPP_PATTERN)))
            if any(module.source_dir.rglob(ASM_PATTERN)):
                raise ToolchainError(
                    f"UniBuild does not support assembly sources (module \"{module.name}\")"
                )

        content = "".join(f"#include \"{source.as_posix()}\"\n" for source in sources)
        output_dir.mkdir(parents=True, exist_ok=True)
        unibuild_path = output_dir / UNIBUILD_FILENAME
        with open(unibuild_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        return unibuild_path, include_dirs

    def compile_unibuild(self, output_dir: Path) -> List[Path]:
        """Compile every module source as one translation unit."""
        unibuild_path, include_dirs = self.write_unibuild_source(Path(output_dir))
        output = unibuild_path.with_suffix(OBJECT_SUFFIX)
        self.toolchain.compile_source(unibuild_path, output, self.collect_flags(), include_dirs)
        return [output]
