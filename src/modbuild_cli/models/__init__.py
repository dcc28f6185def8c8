"""Models for module build tool data structures."""

from .module_info import (
    ModuleInfo,
    ExtensionPoint,
    Placeholder,
    ContributedRecord,
    ValidationResult,
    validate_module,
    MODULE_INFO_FILENAME,
)

__all__ = [
    "ModuleInfo",
    "ExtensionPoint",
    "Placeholder",
    "ContributedRecord",
    "ValidationResult",
    "validate_module",
    "MODULE_INFO_FILENAME",
]
