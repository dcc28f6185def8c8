"""Collects the records other modules contribute to an extension point."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from ..models.module_info import ModuleInfo, ExtensionPoint
from .constants import INCLUDE_VARIABLE

# One slot per declared variable, "" where the contributor left a field out
ProjectedRecord = Tuple[str, ...]


@dataclass
class ContributorRecords:
    """Projected records one contributor supplied, in source order."""
    module_name: str
    records: List[ProjectedRecord] = field(default_factory=list)


class IncludePathTable:
    """Include directories granted to extension points during aggregation.

    Kept apart from the (immutable) declarations and keyed by extension point
    name, which is unique across loaded modules.
    """

    def __init__(self):
        self._paths: Dict[str, List[Path]] = {}

    def add(self, extension_point_name: str, path: Path) -> bool:
        """Append ``path`` unless already present. Returns True if added."""
        paths = self._paths.setdefault(extension_point_name, [])
        if path in paths:
            return False
        paths.append(path)
        return True

    def get(self, extension_point_name: str) -> List[Path]:
        return list(self._paths.get(extension_point_name, []))

    def for_module(self, module: ModuleInfo) -> List[Path]:
        """All include paths granted to ``module``'s extension points."""
        result: List[Path] = []
        for extension_point in module.extension_points:
            for path in self._paths.get(extension_point.name, []):
                if path not in result:
                    result.append(path)
        return result

    def __len__(self) -> int:
        return sum(len(paths) for paths in self._paths.values())


def project_record(record: Dict[str, str], variables: Sequence[str]) -> ProjectedRecord:
    """Reduce a contributed record to the declared variables, in order."""
    return tuple(record.get(variable, "") for variable in variables)


def aggregate(extension_point: ExtensionPoint, contributors: Sequence[ModuleInfo],
              include_paths: IncludePathTable) -> List[ContributorRecords]:
    """Gather every contributor's projected records for ``extension_point``.

    Contributors without an entry for the extension point are skipped. A
    module may contribute to its own extension point.

    Args:
        extension_point: Declaration whose name keys the contributions
        contributors: All loaded modules, in load order
        include_paths: Side table receiving include directories of
            contributors that supplied an ``Include`` value

    Returns:
        List[ContributorRecords]: One entry per participating contributor
    """
    aggregated: List[ContributorRecords] = []
    for contributor in contributors:
        records = contributor.get_contributions(extension_point.name)
        if not records:
            continue

        projected = ContributorRecords(module_name=contributor.name)
        for record in records:
            projected.records.append(project_record(record, extension_point.variables))
            if INCLUDE_VARIABLE in extension_point.variables and INCLUDE_VARIABLE in record:
                include_paths.add(extension_point.name, contributor.include_dir)
        aggregated.append(projected)
    return aggregated
