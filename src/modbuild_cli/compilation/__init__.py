"""Compilation and linking of loaded modules."""

from .constants import REGIONS, validate_region
from .toolchain import Toolchain, expand_flags, include_args
from .module_compiler import ModuleCompiler, collect_module_flags
from .linker import link, collect_symbol_dirs, output_paths
from .disc import copy_disc_files, copy_all_disc_files

__all__ = [
    'REGIONS',
    'validate_region',
    'Toolchain',
    'expand_flags',
    'include_args',
    'ModuleCompiler',
    'collect_module_flags',
    'link',
    'collect_symbol_dirs',
    'output_paths',
    'copy_disc_files',
    'copy_all_disc_files',
]
