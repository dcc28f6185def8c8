"""Shared fixtures: helpers that lay out module folders on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from modbuild_cli.models.module_info import ModuleInfo


@pytest.fixture
def modules_dir(tmp_path: Path) -> Path:
    path = tmp_path / "modules"
    path.mkdir()
    return path


@pytest.fixture
def make_module(modules_dir: Path) -> Callable[..., Path]:
    """Create ``modules/<folder>`` with a ModuleInfo.json and extra files.

    ``files`` maps paths relative to the module folder to text content.
    """

    def _make(folder: str, info: Dict, files: Optional[Dict[str, str]] = None) -> Path:
        module_path = modules_dir / folder
        module_path.mkdir(parents=True)
        info = dict(info)
        info.setdefault("Name", folder)
        (module_path / "ModuleInfo.json").write_text(json.dumps(info, indent=2), encoding="utf-8")
        for relative, content in (files or {}).items():
            target = module_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return module_path

    return _make


def build_module(name: str, tmp_path: Path, **info) -> ModuleInfo:
    """In-memory module built from declaration keys (no file needed)."""
    data = {"Name": name, **info}
    return ModuleInfo.from_dict(data, tmp_path / name)


@pytest.fixture
def module_factory(tmp_path: Path) -> Callable[..., ModuleInfo]:
    def _factory(name: str, **info) -> ModuleInfo:
        return build_module(name, tmp_path, **info)

    return _factory
