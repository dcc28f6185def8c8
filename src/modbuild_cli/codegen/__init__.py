"""Cross-module code generation engine."""

from .aggregator import aggregate, project_record, ContributorRecords, IncludePathTable
from .renderer import (
    DestinationGroup,
    format_record,
    group_destinations,
    is_vacuous_include,
    render_fixed,
    render_group_values,
    render_templated,
    substitute,
)
from .driver import CodeGenerator, CodeGenResult, run_codegen

__all__ = [
    # Main entry point
    'CodeGenerator',
    'CodeGenResult',
    'run_codegen',

    # Aggregation
    'aggregate',
    'project_record',
    'ContributorRecords',
    'IncludePathTable',

    # Rendering
    'DestinationGroup',
    'format_record',
    'group_destinations',
    'is_vacuous_include',
    'render_fixed',
    'render_group_values',
    'render_templated',
    'substitute',
]
