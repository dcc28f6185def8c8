"""Data structures describing how module capabilities resolved."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ..models.module_info import ModuleInfo


@dataclass
class CapabilityNode:
    """Resolution outcome for a single module."""
    module: ModuleInfo
    resolved: List[str] = field(default_factory=list)
    missing_optional: List[str] = field(default_factory=list)

    def get_id(self) -> str:
        """Get unique identifier for this node."""
        return str(self.module.folder_path)

    def get_display_name(self) -> str:
        """Get display name for this module."""
        return self.module.name

    @property
    def satisfied_optional(self) -> List[str]:
        return [cap for cap in self.module.optional_capabilities if cap in self.resolved]


@dataclass
class CapabilityReport:
    """Complete capability resolution information for a module set."""
    nodes: Dict[str, CapabilityNode] = field(default_factory=dict)
    exporters: Dict[str, str] = field(default_factory=dict)  # capability id -> module name
    resolution_errors: List[str] = field(default_factory=list)

    def add_node(self, node: CapabilityNode) -> None:
        """Add a module's resolution outcome."""
        self.nodes[node.get_id()] = node

    def get_node(self, module: ModuleInfo) -> Optional[CapabilityNode]:
        """Get the node recorded for a module."""
        return self.nodes.get(str(module.folder_path))

    def add_error(self, error: str) -> None:
        """Add a resolution error."""
        self.resolution_errors.append(error)

    def has_errors(self) -> bool:
        """Check if there are any resolution errors."""
        return bool(self.resolution_errors)

    def is_valid(self) -> bool:
        return not self.has_errors()

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the capability resolution."""
        return {
            "total_modules": len(self.nodes),
            "exported_capabilities": len(self.exporters),
            "has_errors": self.has_errors(),
            "error_count": len(self.resolution_errors),
            "is_valid": self.is_valid(),
        }
