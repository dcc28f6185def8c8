"""Thin wrapper over the external compiler, assembler and linker executables."""

import platform
import subprocess
from pathlib import Path
from typing import Iterable, List, Sequence

from ..exceptions import ToolchainError
from ..utils.console import _rich_echo, _rich_info
from .constants import (
    ASSEMBLER_FLAGS,
    ASSEMBLER_PATH,
    COMPILER_FLAGS,
    COMPILER_PATH,
    LINKER_PATH,
)


def expand_flags(flags: Iterable[str]) -> List[str]:
    """Split flag strings such as ``"-proc gekko"`` into argument tokens."""
    args: List[str] = []
    for flag in flags:
        args.extend(flag.split())
    return args


def include_args(include_dirs: Sequence[Path]) -> List[str]:
    """Build ``-i a -I- -i b ...`` include arguments."""
    args: List[str] = []
    for index, include_dir in enumerate(include_dirs):
        if index:
            args.append("-I-")
        args.extend(["-i", Path(include_dir).as_posix()])
    return args


class Toolchain:
    """Locates and runs the native build tools shipped in a Syati checkout."""

    def __init__(self, syati_dir: Path):
        self.syati_dir = Path(syati_dir)

    @property
    def compiler(self) -> Path:
        return self.syati_dir / COMPILER_PATH

    @property
    def assembler(self) -> Path:
        return self.syati_dir / ASSEMBLER_PATH

    @property
    def linker(self) -> Path:
        if platform.system() == "Windows":
            return self.syati_dir / (LINKER_PATH + ".exe")
        return self.syati_dir / LINKER_PATH

    def run(self, program: Path, args: Sequence[str]) -> int:
        """Run ``program`` with ``args``, echo its output and return the exit code.

        Raises:
            ToolchainError: If the executable cannot be started
        """
        try:
            completed = subprocess.run(
                [str(program), *args],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ToolchainError(f"Could not run {program}: {e}")

        for stream in (completed.stdout, completed.stderr):
            for line in (stream or "").splitlines():
                if line:
                    _rich_echo(line, color="white")
        return completed.returncode

    def compile_source(self, source: Path, output: Path, flags: Sequence[str],
                       include_dirs: Sequence[Path]) -> None:
        """Compile one C++ file into an object file.

        Raises:
            ToolchainError: If the compiler reports a failure
        """
        _rich_info(f"Compiling {source}")
        output.parent.mkdir(parents=True, exist_ok=True)
        args = [
            *expand_flags(COMPILER_FLAGS),
            *include_args(include_dirs),
            *expand_flags(flags),
            str(source),
            "-o",
            str(output),
        ]
        if self.run(self.compiler, args) != 0:
            raise ToolchainError(f"Failed to compile \"{source}\"")

    def assemble_source(self, source: Path, output: Path, flags: Sequence[str],
                        include_dirs: Sequence[Path]) -> None:
        """Assemble one assembly file into an object file.

        Raises:
            ToolchainError: If the assembler reports a failure
        """
        _rich_info(f"Assembling {source}")
        output.parent.mkdir(parents=True, exist_ok=True)
        args = [
            *expand_flags(ASSEMBLER_FLAGS),
            *include_args(include_dirs),
            *expand_flags(flags),
            str(source),
            "-o",
            str(output),
        ]
        if self.run(self.assembler, args) != 0:
            raise ToolchainError(f"Failed to assemble \"{source}\"")
