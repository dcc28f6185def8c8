"""Capability resolution package for the module build tool."""

from .capability_registry import (
    CapabilityRegistry,
    resolve,
    verify_capabilities,
    validate_module_set,
)
from .capability_graph import CapabilityNode, CapabilityReport

__all__ = [
    'CapabilityRegistry',
    'resolve',
    'verify_capabilities',
    'validate_module_set',
    'CapabilityNode',
    'CapabilityReport',
]
