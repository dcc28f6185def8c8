"""Toolchain constants: supported regions, flags and executable locations."""

REGIONS = ("PAL", "USA", "JPN", "TWN", "KOR")

COMPILER_FLAGS = [
    "-c",
    "-Cpp_exceptions off",
    "-nodefaults",
    "-proc gekko",
    "-fp hard",
    "-lang=c++",
    "-O4,s",
    "-inline on",
    "-rtti off",
    "-sdata 0",
    "-sdata2 0",
    "-align powerpc",
    "-func_align 4",
    "-enum int",
    "-DGEKKO",
    "-DMTX_USE_PS",
]

ASSEMBLER_FLAGS = [
    "-c",
    "-proc gekko",
]

# Relative to the Syati checkout
COMPILER_PATH = "deps/CodeWarrior/mwcceppc.exe"
ASSEMBLER_PATH = "deps/CodeWarrior/mwasmeppc.exe"
LINKER_PATH = "deps/Kamek/Kamek"
SYATI_INCLUDE_DIR = "include"
SYATI_SYMBOLS_DIR = "symbols"

UNIBUILD_FILENAME = "UniBuild.cpp"
OUTPUT_BASENAME = "CustomCode_{region}"

CPP_PATTERN = "*.cpp"
ASM_PATTERN = "*.s"
OBJECT_SUFFIX = ".o"


def validate_region(region: str) -> bool:
    return region in REGIONS
