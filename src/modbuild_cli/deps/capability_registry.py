"""Capability resolution between loaded modules.

A module may export one capability identifier (its ``APIId``) and reference
others as required or optional. Matching is by presence only; there is no
notion of versions.
"""

from typing import Dict, List, Optional, Sequence

from ..exceptions import CapabilityNotFound, DuplicateCapability, DuplicateExtensionPoint
from ..models.module_info import ModuleInfo
from .capability_graph import CapabilityNode, CapabilityReport


def validate_module_set(modules: Sequence[ModuleInfo]) -> None:
    """Check identifiers that must be unique across every loaded module.

    Raises:
        DuplicateCapability: If two modules export the same capability id
        DuplicateExtensionPoint: If two extension points share a name
    """
    exporters: Dict[str, ModuleInfo] = {}
    declarers: Dict[str, ModuleInfo] = {}
    for module in modules:
        if module.api_id:
            if module.api_id in exporters:
                raise DuplicateCapability(module.api_id, exporters[module.api_id].name, module.name)
            exporters[module.api_id] = module
        for extension_point in module.extension_points:
            if extension_point.name in declarers:
                raise DuplicateExtensionPoint(
                    extension_point.name, declarers[extension_point.name].name, module.name
                )
            declarers[extension_point.name] = module


class CapabilityRegistry:
    """Looks up which loaded module exports a capability identifier."""

    def __init__(self, modules: Sequence[ModuleInfo]):
        self.modules = list(modules)

    def exporter_of(self, capability_id: str, requester: Optional[ModuleInfo] = None) -> Optional[ModuleInfo]:
        """Find the module exporting ``capability_id``, never the requester itself."""
        for module in self.modules:
            if module is requester:
                continue
            if module.api_id is not None and module.api_id == capability_id:
                return module
        return None

    def require(self, capability_id: str, requester: ModuleInfo) -> ModuleInfo:
        """Like :meth:`exporter_of` but absence is fatal.

        Raises:
            CapabilityNotFound: If no other module exports ``capability_id``
        """
        exporter = self.exporter_of(capability_id, requester)
        if exporter is None:
            raise CapabilityNotFound(capability_id, requester.name)
        return exporter

    def resolve(self, module: ModuleInfo) -> List[str]:
        """Return the capability ids ``module`` can use.

        Required ids come first in declaration order, followed by the optional
        ids some other module exports. Duplicates are collapsed.

        Raises:
            CapabilityNotFound: If a required id has no exporter
        """
        resolved: List[str] = []
        for capability_id in module.required_capabilities:
            self.require(capability_id, module)
            if capability_id not in resolved:
                resolved.append(capability_id)

        # Optional APIs are optional: modules check for them with compiler flags
        for capability_id in module.optional_capabilities:
            if capability_id in resolved:
                continue
            if self.exporter_of(capability_id, module) is not None:
                resolved.append(capability_id)
        return resolved

    def exporters_for(self, module: ModuleInfo) -> List[ModuleInfo]:
        """Modules exporting the capabilities ``module`` resolved, in resolution order."""
        return [self.require(capability_id, module) for capability_id in self.resolve(module)]

    def build_report(self) -> CapabilityReport:
        """Resolve every module without stopping at the first failure."""
        report = CapabilityReport()
        for module in self.modules:
            if module.api_id:
                report.exporters.setdefault(module.api_id, module.name)
        for module in self.modules:
            node = CapabilityNode(module=module)
            try:
                node.resolved = self.resolve(module)
            except CapabilityNotFound as e:
                report.add_error(str(e))
            node.missing_optional = [
                cap for cap in module.optional_capabilities
                if self.exporter_of(cap, module) is None
            ]
            report.add_node(node)
        return report


def resolve(module: ModuleInfo, all_modules: Sequence[ModuleInfo]) -> List[str]:
    """Resolve the capability ids usable by ``module`` among ``all_modules``."""
    return CapabilityRegistry(all_modules).resolve(module)


def verify_capabilities(modules: Sequence[ModuleInfo]) -> Dict[str, List[str]]:
    """Pre-flight pass run once over the whole module set before codegen.

    Returns:
        Dict mapping module name to its resolved capability ids

    Raises:
        CapabilityNotFound: On the first module with an unresolved requirement
    """
    registry = CapabilityRegistry(modules)
    return {module.name: registry.resolve(module) for module in modules}
