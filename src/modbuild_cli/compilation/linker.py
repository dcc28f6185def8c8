"""Links compiled module objects into the final binary patch."""

from pathlib import Path
from typing import List, Sequence, Tuple

from ..exceptions import LinkerError
from ..models.module_info import ModuleInfo
from ..utils.console import _rich_info
from .constants import OUTPUT_BASENAME, SYATI_SYMBOLS_DIR
from .toolchain import Toolchain


def collect_symbol_dirs(syati_dir: Path, modules: Sequence[ModuleInfo]) -> List[Path]:
    """Syati's symbol folder followed by every module folder that ships symbols."""
    dirs = [Path(syati_dir) / SYATI_SYMBOLS_DIR]
    dirs.extend(module.symbols_dir for module in modules if module.symbols_dir.is_dir())
    return dirs


def output_paths(output_dir: Path, region: str) -> Tuple[Path, Path]:
    """Binary and map file paths for ``region``."""
    base = OUTPUT_BASENAME.format(region=region)
    return Path(output_dir) / f"{base}.bin", Path(output_dir) / f"{base}.map"


def link(toolchain: Toolchain, objects: Sequence[Path], region: str,
         modules: Sequence[ModuleInfo], output_dir: Path) -> Tuple[Path, Path]:
    """Link ``objects`` with Kamek.

    Returns:
        Tuple of the binary and map file paths

    Raises:
        LinkerError: If Kamek exits with a non-zero status
    """
    _rich_info("Linking...", symbol="link")
    binary_path, map_path = output_paths(output_dir, region)
    Path(output_dir).mkdir(parents=True, exist_ok=True)

    args = [str(obj) for obj in objects]
    args.extend(
        f"-externals={symbol_dir.as_posix()}/{region}.txt"
        for symbol_dir in collect_symbol_dirs(toolchain.syati_dir, modules)
    )
    args.append(f"-output-kamek={binary_path}")
    args.append(f"-output-map={map_path}")

    exit_code = toolchain.run(toolchain.linker, args)
    if exit_code != 0:
        raise LinkerError(exit_code)
    return binary_path, map_path
