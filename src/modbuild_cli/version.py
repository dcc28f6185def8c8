"""Version management for the module build tool."""

import re
import sys
from pathlib import Path

# Build-time version constant (will be injected during build)
__BUILD_VERSION__ = None


def get_version() -> str:
    """
    Get the current version.

    First tries the build-time constant, then installed package metadata,
    then falls back to reading pyproject.toml in a development checkout.

    Returns:
        str: Version string
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    try:
        from importlib.metadata import version, PackageNotFoundError
        try:
            return version("modbuild")
        except PackageNotFoundError:
            pass

        if getattr(sys, 'frozen', False):
            # Running in PyInstaller bundle
            pyproject_path = Path(sys._MEIPASS) / 'pyproject.toml'
        else:
            pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

        if pyproject_path.exists():
            content = pyproject_path.read_text(encoding='utf-8')
            match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
            if match:
                version_str = match.group(1)
                if re.match(r'^\d+\.\d+\.\d+(a\d+|b\d+|rc\d+)?$', version_str):
                    return version_str
    except Exception:
        pass

    return "unknown"


__version__ = get_version()
