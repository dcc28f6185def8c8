"""Placeholder rendering for fixed and filename-templated extension points."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..exceptions import ConflictingScalarValue, InvalidFormatTemplate
from ..models.module_info import ExtensionPoint, Placeholder
from .aggregator import ContributorRecords, ProjectedRecord
from .constants import (
    EMPTY_QUOTES,
    INCLUDE_DIRECTIVE,
    LINE_SEPARATOR,
    LIST_SUFFIX,
    PLACEHOLDER_CLOSE,
    PLACEHOLDER_OPEN,
)


@dataclass
class DestinationGroup:
    """Records that format to the same destination filename."""
    destination: str
    source: str  # Paired template source, taken from the first record seen
    records: List[ProjectedRecord] = field(default_factory=list)

    def add(self, record: ProjectedRecord) -> None:
        if record not in self.records:
            self.records.append(record)


def format_record(template: str, record: ProjectedRecord, extension_point: ExtensionPoint) -> str:
    """Apply a positional format template (``{0}``, ``{1}``...) to a record."""
    try:
        return template.format(*record)
    except IndexError:
        raise InvalidFormatTemplate(
            template, extension_point.name,
            f"references a slot beyond the {len(record)} declared variable(s)"
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise InvalidFormatTemplate(template, extension_point.name, str(e))


def is_vacuous_include(line: str) -> bool:
    """True for an include directive whose target came out empty."""
    return line.startswith(INCLUDE_DIRECTIVE) and EMPTY_QUOTES in line


def is_list_placeholder(placeholder: Placeholder) -> bool:
    return placeholder.name.endswith(LIST_SUFFIX)


def substitute(template_text: str, values: Dict[str, str]) -> str:
    """Replace every ``{{Name}}`` token in one pass over the template text.

    Replacement text is not scanned again, so placeholder-shaped data coming
    from contributors is written out literally. Unknown tokens are kept.

    Args:
        template_text: Pristine template text
        values: Placeholder name to replacement text
    """
    if not values:
        return template_text
    tokens = {PLACEHOLDER_OPEN + name + PLACEHOLDER_CLOSE: value for name, value in values.items()}
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: tokens[match.group(0)], template_text)


def _collect_values(placeholders: Sequence[Placeholder], collected: Dict[str, str]) -> Dict[str, str]:
    # A repeated placeholder name keeps its first declaration
    values: Dict[str, str] = {}
    for placeholder in placeholders:
        values.setdefault(placeholder.name, collected.get(placeholder.name, ""))
    return values


def render_fixed(template_text: str, placeholders: Sequence[Placeholder],
                 aggregated: Sequence[ContributorRecords], extension_point: ExtensionPoint) -> str:
    """Render a fixed-destination extension point.

    Every record of every contributor produces one line per placeholder, in
    aggregation order; each line ends with a line separator. Placeholders
    nobody contributed to become the empty string.
    """
    collected: Dict[str, str] = {}
    for placeholder in placeholders:
        if placeholder.name in collected:
            continue
        lines = []
        for contributor in aggregated:
            for record in contributor.records:
                line = format_record(placeholder.format, record, extension_point)
                if is_vacuous_include(line):
                    continue  # nothing to include
                lines.append(line + LINE_SEPARATOR)
        collected[placeholder.name] = "".join(lines)
    return substitute(template_text, _collect_values(placeholders, collected))


def group_destinations(extension_point: ExtensionPoint,
                       aggregated: Sequence[ContributorRecords]) -> Dict[str, DestinationGroup]:
    """First pass of templated mode: compute every destination filename.

    Each record is formatted with every (source, destination) pattern pair.
    Records landing on the same destination string share a group no matter
    which module contributed them. A destination keeps the source it was
    first paired with.

    Returns:
        Dict[str, DestinationGroup]: Groups keyed by destination, first-seen order
    """
    groups: Dict[str, DestinationGroup] = {}
    pairs = list(zip(extension_point.template_sources or (), extension_point.template_destinations or ()))
    for contributor in aggregated:
        for record in contributor.records:
            for source_pattern, destination_pattern in pairs:
                destination = format_record(destination_pattern, record, extension_point)
                group = groups.get(destination)
                if group is None:
                    source = format_record(source_pattern, record, extension_point)
                    group = groups[destination] = DestinationGroup(destination=destination, source=source)
                group.add(record)
    return groups


def render_group_values(extension_point: ExtensionPoint, group: DestinationGroup) -> Dict[str, str]:
    """Compute the replacement text of every placeholder for one destination.

    ``...List`` placeholders keep each distinct value once, one per line.
    Other placeholders must produce the same value for every record.

    Raises:
        ConflictingScalarValue: If two records disagree on a scalar placeholder
    """
    collected: Dict[str, str] = {}
    for placeholder in extension_point.placeholders:
        if placeholder.name in collected:
            continue
        parts: List[str] = []
        for record in group.records:
            value = format_record(placeholder.format, record, extension_point)
            if is_vacuous_include(value):
                continue
            if is_list_placeholder(placeholder):
                if value not in parts:
                    parts.append(value)
            elif not parts:
                parts.append(value)
            elif value != parts[0]:
                raise ConflictingScalarValue(
                    placeholder.name, placeholder.format, extension_point.name, parts[0], value
                )
        collected[placeholder.name] = LINE_SEPARATOR.join(parts)
    return _collect_values(extension_point.placeholders, collected)


def render_templated(template_text: str, extension_point: ExtensionPoint, group: DestinationGroup) -> str:
    """Render one destination of a filename-templated extension point."""
    return substitute(template_text, render_group_values(extension_point, group))
