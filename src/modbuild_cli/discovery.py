"""Discovery of module folders inside a modules directory."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from .models.module_info import ModuleInfo
from .utils.console import _rich_info, _rich_warning


MODULE_IGNORE_FILENAME = ".moduleignore"


@dataclass
class DiscoveryResult:
    """Modules found in a modules directory, in load order."""
    modules: List[ModuleInfo] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def count(self) -> int:
        return len(self.modules)


def read_module_ignore(modules_dir: Path) -> Set[str]:
    """Read folder names listed in ``.moduleignore`` (one per line)."""
    ignore_file = modules_dir / MODULE_IGNORE_FILENAME
    if not ignore_file.is_file():
        return set()
    lines = ignore_file.read_text(encoding='utf-8').splitlines()
    return {line.strip() for line in lines if line.strip()}


def find_link_files(modules_dir: Path) -> List[Path]:
    """Extension-less files at the top level; each line points to a module folder.

    Dotfiles (``.gitignore``, ``.moduleignore``...) are never link files.
    """
    return sorted(
        path for path in modules_dir.iterdir()
        if path.is_file() and not path.suffix and not path.name.startswith('.')
    )


def read_link_targets(link_file: Path, modules_dir: Path) -> List[Path]:
    """Resolve the module folders listed in a link file.

    Lines starting with ``.`` are relative to the modules directory.
    """
    targets = []
    for line in link_file.read_text(encoding='utf-8').splitlines():
        entry = line.strip()
        if not entry:
            continue
        target = Path(entry)
        if entry.startswith('.'):
            target = modules_dir / target
        targets.append(target)
    return targets


def discover_modules(modules_dir, verbose: bool = True) -> DiscoveryResult:
    """Find and load every module below ``modules_dir``.

    Sub-directories are loaded first (sorted by name), then the targets of
    link files. The same folder is never loaded twice, and folders named in
    ``.moduleignore`` are skipped.

    Args:
        modules_dir: Directory containing module folders and link files.
        verbose: Report progress on the console.

    Returns:
        DiscoveryResult: Loaded modules plus ignored names and warnings.

    Raises:
        ModuleLoadError: If a candidate folder has no valid declaration.
    """
    modules_dir = Path(modules_dir).resolve()
    result = DiscoveryResult()
    ignore = read_module_ignore(modules_dir)
    seen: Set[Path] = set()

    def try_load(folder: Path) -> None:
        folder = folder.resolve()
        if folder in seen:
            return
        if folder.name in ignore:
            result.ignored.append(folder.name)
            if verbose:
                _rich_info(f"{folder.name} Ignored by {MODULE_IGNORE_FILENAME}")
            return
        if not folder.is_dir():
            message = f"Failed to load module: \"{folder}\""
            result.warnings.append(message)
            if verbose:
                _rich_warning(message)
            return
        seen.add(folder)
        if verbose:
            _rich_info(f"Loading module from {folder}")
        result.modules.append(ModuleInfo.load(folder))

    for folder in sorted(path for path in modules_dir.iterdir() if path.is_dir()):
        try_load(folder)

    for link_file in find_link_files(modules_dir):
        try:
            targets = read_link_targets(link_file, modules_dir)
        except (OSError, UnicodeDecodeError) as e:
            message = f"Could not read link file {link_file.name}: {e}"
            result.warnings.append(message)
            if verbose:
                _rich_warning(message)
            continue
        for target in targets:
            try_load(target)

    return result
