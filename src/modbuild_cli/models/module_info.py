"""Module declaration data models and validation logic."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Dict, Any, Tuple

from ..exceptions import ModuleLoadError


MODULE_INFO_FILENAME = "ModuleInfo.json"

# Sub-folders of a module folder
INCLUDE_DIR = "include"
SOURCE_DIR = "source"
CODEGEN_DIR = "codegen"
CODEBUILD_DIR = "codebuild"
CODEBUILD_EXPORT_DIR = "codebuildexport"
SYMBOLS_DIR = "symbols"
BUILD_DIR = "build"
DISC_DIR = "disc"

ContributedRecord = Dict[str, str]


@dataclass(frozen=True)
class Placeholder:
    """A named substitution marker and the format used to fill it."""
    name: str
    format: str

    @property
    def token(self) -> str:
        """The literal marker matched in template text, e.g. ``{{Name}}``."""
        return "{{" + self.name + "}}"

    def __str__(self) -> str:
        return f"{self.name} ({self.format})"


@dataclass(frozen=True)
class ExtensionPoint:
    """A named hook declared by one module that other modules feed data into."""
    name: str
    codegen_source: Optional[str] = None
    codegen_destination: Optional[str] = None
    template_sources: Optional[Tuple[str, ...]] = None
    template_destinations: Optional[Tuple[str, ...]] = None
    variables: Tuple[str, ...] = ()
    placeholders: Tuple[Placeholder, ...] = ()

    @property
    def is_fixed(self) -> bool:
        """True when the extension point writes one fixed destination file."""
        return self.codegen_source is not None and self.codegen_destination is not None

    @property
    def is_templated(self) -> bool:
        """True when destination filenames are computed from contributed data."""
        return self.template_sources is not None and self.template_destinations is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtensionPoint":
        """Build an extension point from its declaration entry.

        Raises:
            ValueError: If the entry is not a mapping or has no name
        """
        if not isinstance(data, dict):
            raise ValueError(f"Extension point declaration must be an object, got {type(data).__name__}")
        name = data.get('Name')
        if not name:
            raise ValueError("Missing required field 'Name' in extension point declaration")

        placeholders = []
        for entry in data.get('CodeGenData') or []:
            if not isinstance(entry, dict) or 'ReplaceTargetName' not in entry:
                raise ValueError(f"Invalid CodeGenData entry in extension point '{name}': {entry!r}")
            placeholders.append(Placeholder(
                name=str(entry['ReplaceTargetName']),
                format=str(entry.get('ReplaceFormatData') or ""),
            ))

        return cls(
            name=str(name),
            codegen_source=data.get('CodeGenSource'),
            codegen_destination=data.get('CodeGenDestination'),
            template_sources=_optional_str_tuple(data.get('CodeGenTemplateSources')),
            template_destinations=_optional_str_tuple(data.get('CodeGenTemplateDestinations')),
            variables=_optional_str_tuple(data.get('Variables')) or (),
            placeholders=tuple(placeholders),
        )

    def __str__(self) -> str:
        return f"{self.name}, {self.codegen_source}"


@dataclass(frozen=True)
class ModuleInfo:
    """A unit of contributed source code plus its declaration."""
    name: str
    folder_path: Path
    author: Optional[str] = None
    description: Optional[str] = None
    api_id: Optional[str] = None
    supported_games: Tuple[str, ...] = ()
    required_capabilities: Tuple[str, ...] = ()
    optional_capabilities: Tuple[str, ...] = ()
    compiler_flags: Tuple[str, ...] = ()
    extension_points: Tuple[ExtensionPoint, ...] = ()
    contributed_data: Dict[str, List[ContributedRecord]] = field(default_factory=dict)

    @classmethod
    def load(cls, folder_path: Path) -> "ModuleInfo":
        """Load a module from the ModuleInfo.json inside its folder.

        Args:
            folder_path: Path to the module folder

        Returns:
            ModuleInfo: Loaded module

        Raises:
            ModuleLoadError: If the declaration is missing or invalid
        """
        folder_path = Path(folder_path).resolve()
        info_path = folder_path / MODULE_INFO_FILENAME
        if not info_path.is_file():
            raise ModuleLoadError(
                f"Missing {MODULE_INFO_FILENAME} for module {folder_path.name}.", info_path
            )

        try:
            with open(info_path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ModuleLoadError(f"Invalid declaration format in {info_path}: {e}", info_path)

        if not isinstance(data, dict):
            raise ModuleLoadError(
                f"{MODULE_INFO_FILENAME} must contain an object, got {type(data).__name__}", info_path
            )

        try:
            return cls.from_dict(data, folder_path)
        except ValueError as e:
            raise ModuleLoadError(f"Invalid {info_path}: {e}", info_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], folder_path: Path) -> "ModuleInfo":
        """Build a module from an already-parsed declaration.

        Raises:
            ValueError: If required fields are missing or malformed
        """
        if not data.get('Name'):
            raise ValueError("Missing required field 'Name'")

        extension_points = tuple(
            ExtensionPoint.from_dict(entry)
            for entry in data.get('ModuleExtensionDefinition') or []
        )

        return cls(
            name=str(data['Name']),
            folder_path=Path(folder_path),
            author=data.get('Author'),
            description=data.get('Description'),
            api_id=data.get('APIId') or None,
            supported_games=_optional_str_tuple(data.get('SupportedGames')) or (),
            required_capabilities=_optional_str_tuple(data.get('ModuleDependancies')) or (),
            optional_capabilities=_optional_str_tuple(data.get('ModuleOptionalDependancies')) or (),
            compiler_flags=_optional_str_tuple(data.get('CompilerFlags')) or (),
            extension_points=extension_points,
            contributed_data=_parse_module_data(data.get('ModuleData')),
        )

    def get_contributions(self, extension_point_name: str) -> List[ContributedRecord]:
        """Get the records this module contributes to an extension point."""
        return self.contributed_data.get(extension_point_name, [])

    def has_codegen(self) -> bool:
        """Check if this module declares any extension points."""
        return bool(self.extension_points)

    @property
    def include_dir(self) -> Path:
        return self.folder_path / INCLUDE_DIR

    @property
    def source_dir(self) -> Path:
        return self.folder_path / SOURCE_DIR

    @property
    def codegen_dir(self) -> Path:
        return self.folder_path / CODEGEN_DIR

    @property
    def codebuild_dir(self) -> Path:
        return self.folder_path / CODEBUILD_DIR

    @property
    def codebuild_export_dir(self) -> Path:
        return self.folder_path / CODEBUILD_EXPORT_DIR

    @property
    def symbols_dir(self) -> Path:
        return self.folder_path / SYMBOLS_DIR

    @property
    def build_dir(self) -> Path:
        return self.folder_path / BUILD_DIR

    @property
    def disc_dir(self) -> Path:
        return self.folder_path / DISC_DIR

    def __str__(self) -> str:
        return (
            "=== Module Information ===\n"
            f"Name: {self.name}\n"
            f"Author(s): {self.author or ''}\n"
            "\n"
            f"{self.description or ''}\n"
            "--------------------------"
        )


def _optional_str_tuple(value: Any) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        raise ValueError(f"Expected a list of strings, got string '{value}'")
    if not isinstance(value, list):
        raise ValueError(f"Expected a list of strings, got {type(value).__name__}")
    return tuple(str(item) for item in value)


def _record_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_module_data(value: Any) -> Dict[str, List[ContributedRecord]]:
    """Normalize ModuleData into {extension point name: [record, ...]}.

    ModuleData may be a single object or a list of objects. When several
    objects name the same extension point, the first one wins.
    """
    if value is None:
        return {}
    documents = value if isinstance(value, list) else [value]

    result: Dict[str, List[ContributedRecord]] = {}
    for document in documents:
        if not isinstance(document, dict):
            raise ValueError(f"ModuleData entries must be objects, got {type(document).__name__}")
        for extension_name, records in document.items():
            if extension_name in result:
                continue
            if not isinstance(records, list):
                raise ValueError(f"ModuleData for '{extension_name}' must be a list of objects")
            parsed = []
            for record in records:
                if not isinstance(record, dict):
                    raise ValueError(f"ModuleData record for '{extension_name}' must be an object")
                parsed.append({
                    str(key): text
                    for key, text in ((key, _record_value(val)) for key, val in record.items())
                    if text is not None
                })
            result[str(extension_name)] = parsed
    return result


@dataclass
class ValidationResult:
    """Result of module validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
    module: Optional[ModuleInfo] = None

    def __init__(self):
        self.is_valid = True
        self.errors = []
        self.warnings = []
        self.module = None

    def add_error(self, error: str) -> None:
        """Add a validation error."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a validation warning."""
        self.warnings.append(warning)

    def has_issues(self) -> bool:
        """Check if there are any errors or warnings."""
        return bool(self.errors or self.warnings)

    def summary(self) -> str:
        """Get a summary of validation results."""
        if self.is_valid and not self.warnings:
            return "✅ Module is valid"
        elif self.is_valid and self.warnings:
            return f"⚠️ Module is valid with {len(self.warnings)} warning(s)"
        else:
            return f"❌ Module is invalid with {len(self.errors)} error(s)"


def validate_module(folder_path: Path) -> ValidationResult:
    """Validate that a directory contains a usable module.

    Args:
        folder_path: Path to the module folder

    Returns:
        ValidationResult: Validation results with any errors/warnings
    """
    result = ValidationResult()

    if not folder_path.exists():
        result.add_error(f"Module directory does not exist: {folder_path}")
        return result

    if not folder_path.is_dir():
        result.add_error(f"Module path is not a directory: {folder_path}")
        return result

    try:
        module = ModuleInfo.load(folder_path)
        result.module = module
    except ModuleLoadError as e:
        result.add_error(str(e))
        return result

    for extension_point in module.extension_points:
        label = f"Extension point '{extension_point.name}'"
        if not extension_point.is_fixed and not extension_point.is_templated:
            result.add_error(
                f"{label} needs CodeGenSource/CodeGenDestination or "
                "CodeGenTemplateSources/CodeGenTemplateDestinations"
            )
        if extension_point.is_fixed:
            source = module.codegen_dir / extension_point.codegen_source
            if not source.is_file():
                result.add_error(f"{label} template source not found: {source.relative_to(module.folder_path)}")
        if extension_point.is_templated and (
                len(extension_point.template_sources) != len(extension_point.template_destinations)):
            result.add_error(
                f"{label} has a desynchronized template array "
                f"({len(extension_point.template_sources)} : {len(extension_point.template_destinations)})"
            )
        if extension_point.placeholders and not extension_point.variables:
            result.add_warning(f"{label} declares placeholders but no Variables")

    if not module.source_dir.is_dir():
        result.add_warning(f"No {SOURCE_DIR}/ directory found; nothing to compile")

    return result
