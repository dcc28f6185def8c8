"""Error types raised by the module build tool."""

from pathlib import Path
from typing import Optional, Union


class ModBuildError(Exception):
    """Base class for every error the build tool raises on purpose."""


class ModuleLoadError(ModBuildError):
    """A module declaration is missing or cannot be parsed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class ConfigurationError(ModBuildError):
    """Build configuration is invalid (unknown region, missing folder...)."""


class DuplicateCapability(ModBuildError):
    """Two loaded modules export the same capability identifier."""

    def __init__(self, capability_id: str, first_module: str, second_module: str):
        self.capability_id = capability_id
        self.first_module = first_module
        self.second_module = second_module
        super().__init__(
            f"API with ID \"{capability_id}\" is exported by both "
            f"\"{first_module}\" and \"{second_module}\""
        )


class DuplicateExtensionPoint(ModBuildError):
    """Two extension point declarations share a name."""

    def __init__(self, name: str, first_module: str, second_module: str):
        self.name = name
        self.first_module = first_module
        self.second_module = second_module
        super().__init__(
            f"Extension point \"{name}\" is declared by both "
            f"\"{first_module}\" and \"{second_module}\""
        )


class CapabilityNotFound(ModBuildError):
    """A required capability is not exported by any other loaded module."""

    def __init__(self, capability_id: str, module_name: str):
        self.capability_id = capability_id
        self.module_name = module_name
        super().__init__(
            f"API with ID \"{capability_id}\" could not be found "
            f"(required by module \"{module_name}\")"
        )


class TemplateArrayMismatch(ModBuildError):
    """Template source and destination arrays have different lengths."""

    def __init__(self, extension_point: str, module_name: str, sources: int, destinations: int):
        self.extension_point = extension_point
        self.module_name = module_name
        self.sources = sources
        self.destinations = destinations
        super().__init__(
            f"Module \"{module_name}\" has a desynchronized template array in "
            f"extension point \"{extension_point}\". ({sources} : {destinations})"
        )


class ConflictingScalarValue(ModBuildError):
    """Contributors disagree on the value of a non-list placeholder."""

    def __init__(self, placeholder: str, format_template: str, extension_point: str,
                 existing: str, conflicting: str):
        self.placeholder = placeholder
        self.format_template = format_template
        self.extension_point = extension_point
        self.existing = existing
        self.conflicting = conflicting
        super().__init__(
            f"The placeholder \"{placeholder}\" ({format_template}) is not a List and "
            f"cannot have multiple entries (the value across all modules must be identical). "
            f"Got \"{existing}\" and \"{conflicting}\".\n"
            f"Extension point:\t{extension_point}"
        )


class InvalidFormatTemplate(ModBuildError):
    """A format template cannot be applied to a projected record."""

    def __init__(self, format_template: str, extension_point: str, reason: str):
        self.format_template = format_template
        self.extension_point = extension_point
        super().__init__(
            f"Cannot apply format \"{format_template}\" in extension point "
            f"\"{extension_point}\": {reason}"
        )


class ToolchainError(ModBuildError):
    """The compiler or assembler is missing or reported a failure."""


class LinkerError(ModBuildError):
    """The linker exited with a non-zero status."""

    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(f"Linker failure (exit code {exit_code})")
