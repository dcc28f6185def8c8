"""Copies auxiliary disc files shipped by modules into the output folder."""

import shutil
from pathlib import Path
from typing import List, Sequence

from ..models.module_info import ModuleInfo
from ..utils.console import _rich_info, _rich_warning


def copy_disc_files(module: ModuleInfo, output_dir: Path) -> List[Path]:
    """Copy ``<module>/disc/**`` into ``output_dir`` keeping relative paths.

    Files already present are replaced (with a notice). A file that cannot be
    copied is reported and skipped.
    """
    disc_dir = module.disc_dir
    if not disc_dir.is_dir():
        return []

    _rich_info(f"Copying files from {disc_dir}", symbol="folder")
    copied: List[Path] = []
    for source in sorted(path for path in disc_dir.rglob("*") if path.is_file()):
        target = Path(output_dir) / source.relative_to(disc_dir)
        try:
            if target.exists():
                _rich_info(f" - File will replace {target}")
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            copied.append(target)
        except OSError as e:
            _rich_warning(f"Error while copying {source}: {e}")
    return copied


def copy_all_disc_files(modules: Sequence[ModuleInfo], output_dir: Path) -> List[Path]:
    """Copy the disc files of every module, later modules overwriting earlier ones."""
    copied: List[Path] = []
    for module in modules:
        copied.extend(copy_disc_files(module, output_dir))
    return copied
