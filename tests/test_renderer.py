"""Tests for placeholder rendering in both generation modes."""

from __future__ import annotations

import pytest

from modbuild_cli.codegen.aggregator import ContributorRecords
from modbuild_cli.codegen.renderer import (
    DestinationGroup,
    group_destinations,
    is_list_placeholder,
    is_vacuous_include,
    render_fixed,
    render_group_values,
    render_templated,
    substitute,
)
from modbuild_cli.exceptions import ConflictingScalarValue, InvalidFormatTemplate
from modbuild_cli.models.module_info import ExtensionPoint, Placeholder


def _fixed(*placeholders):
    return ExtensionPoint(
        name="Hooks",
        codegen_source="Hooks.h",
        codegen_destination="codebuild/Hooks.h",
        variables=("Name", "Include"),
        placeholders=tuple(Placeholder(name, fmt) for name, fmt in placeholders),
    )


def _templated(sources, destinations, *placeholders):
    return ExtensionPoint(
        name="Actors",
        template_sources=tuple(sources),
        template_destinations=tuple(destinations),
        variables=("Name", "Category", "Include"),
        placeholders=tuple(Placeholder(name, fmt) for name, fmt in placeholders),
    )


class TestHelpers:

    def test_vacuous_include(self):
        assert is_vacuous_include('#include ""')
        assert not is_vacuous_include('#include "a.h"')
        assert not is_vacuous_include('CALL("")')

    def test_list_placeholder(self):
        assert is_list_placeholder(Placeholder("HookList", "{0}"))
        assert not is_list_placeholder(Placeholder("Listing", "{0}"))

    def test_substitute_is_single_pass(self):
        text = substitute("A={{A}} B={{B}}", {"A": "{{B}}", "B": "b"})
        assert text == "A={{B}} B=b"

    def test_substitute_keeps_unknown_tokens(self):
        assert substitute("{{Other}} {{A}}", {"A": "x"}) == "{{Other}} x"

    def test_substitute_every_occurrence(self):
        assert substitute("{{A}}-{{A}}", {"A": "x"}) == "x-x"


class TestRenderFixed:

    def test_lines_in_aggregation_order(self):
        extension_point = _fixed(("HookList", "CALL({0})"))
        aggregated = [
            ContributorRecords("B", [("OnInit", "")]),
            ContributorRecords("C", [("OnExit", "")]),
        ]
        rendered = render_fixed("{{HookList}}", extension_point.placeholders, aggregated, extension_point)
        assert rendered == "CALL(OnInit)\nCALL(OnExit)\n"

    def test_no_contributors_renders_empty(self):
        extension_point = _fixed(("HookList", "CALL({0})"))
        rendered = render_fixed("begin\n{{HookList}}end\n", extension_point.placeholders, [], extension_point)
        assert rendered == "begin\nend\n"

    def test_vacuous_include_lines_are_dropped(self):
        extension_point = _fixed(("Includes", '#include "{1}"'))
        aggregated = [ContributorRecords("B", [("OnInit", "b.h"), ("OnExit", "")])]
        rendered = render_fixed("{{Includes}}", extension_point.placeholders, aggregated, extension_point)
        assert rendered == '#include "b.h"\n'

    def test_contributed_tokens_are_written_literally(self):
        extension_point = _fixed(("HookList", "{0}"), ("Other", "x"))
        aggregated = [ContributorRecords("B", [("{{Other}}", "")])]
        rendered = render_fixed("{{HookList}}", extension_point.placeholders, aggregated, extension_point)
        assert rendered == "{{Other}}\n"

    def test_first_declaration_of_a_name_wins(self):
        extension_point = _fixed(("HookList", "A({0})"), ("HookList", "B({0})"))
        aggregated = [ContributorRecords("B", [("x", "")])]
        rendered = render_fixed("{{HookList}}", extension_point.placeholders, aggregated, extension_point)
        assert rendered == "A(x)\n"

    def test_out_of_range_slot(self):
        extension_point = _fixed(("HookList", "{5}"))
        aggregated = [ContributorRecords("B", [("x", "")])]
        with pytest.raises(InvalidFormatTemplate, match="Hooks"):
            render_fixed("{{HookList}}", extension_point.placeholders, aggregated, extension_point)

    @pytest.mark.parametrize("template", ["{0[x]}", "{0.foo}", "{name}", "{0"])
    def test_malformed_template_reports_extension_point(self, template):
        extension_point = _fixed(("HookList", template))
        aggregated = [ContributorRecords("B", [("value", "")])]
        with pytest.raises(InvalidFormatTemplate) as excinfo:
            render_fixed("{{HookList}}", extension_point.placeholders, aggregated, extension_point)
        assert excinfo.value.extension_point == "Hooks"
        assert excinfo.value.format_template == template


class TestGroupDestinations:

    def test_records_with_same_destination_share_a_group(self):
        extension_point = _templated(["Template.h"], ["codebuild/{1}.h"])
        aggregated = [
            ContributorRecords("B", [("Goomba", "Enemy", ""), ("Star", "Item", "")]),
            ContributorRecords("C", [("Koopa", "Enemy", ""), ("Goomba", "Enemy", "")]),
        ]
        groups = group_destinations(extension_point, aggregated)

        assert list(groups) == ["codebuild/Enemy.h", "codebuild/Item.h"]
        assert groups["codebuild/Enemy.h"].records == [("Goomba", "Enemy", ""), ("Koopa", "Enemy", "")]
        assert groups["codebuild/Enemy.h"].source == "Template.h"

    def test_every_pattern_pair_is_used(self):
        extension_point = _templated(["Header.h", "Source.cpp"], ["codebuild/{0}.h", "codebuild/{0}.cpp"])
        aggregated = [ContributorRecords("B", [("Goomba", "Enemy", "")])]
        groups = group_destinations(extension_point, aggregated)

        assert groups["codebuild/Goomba.h"].source == "Header.h"
        assert groups["codebuild/Goomba.cpp"].source == "Source.cpp"

    def test_missing_destination_field_formats_as_empty(self):
        extension_point = _templated(["Template.h"], ["codebuild/{1}.h"])
        aggregated = [
            ContributorRecords("B", [("Goomba", "", "")]),
            ContributorRecords("C", [("Koopa", "", "")]),
        ]
        groups = group_destinations(extension_point, aggregated)
        assert list(groups) == ["codebuild/.h"]
        assert groups["codebuild/.h"].records == [("Goomba", "", ""), ("Koopa", "", "")]

    def test_source_pattern_may_use_fields(self):
        extension_point = _templated(["{1}.tmpl"], ["codebuild/{0}.h"])
        aggregated = [ContributorRecords("B", [("Goomba", "Enemy", "")])]
        assert group_destinations(extension_point, aggregated)["codebuild/Goomba.h"].source == "Enemy.tmpl"


class TestRenderTemplated:

    def test_list_values_are_distinct_and_newline_joined(self):
        extension_point = _templated(
            ["T.h"], ["{1}.h"],
            ("NameList", "REGISTER({0})"),
            ("IncludeList", '#include "{2}"'),
        )
        group = DestinationGroup("Enemy.h", "T.h", [
            ("Goomba", "Enemy", "g.h"),
            ("Koopa", "Enemy", "g.h"),
            ("Boo", "Enemy", ""),
        ])
        values = render_group_values(extension_point, group)
        assert values["NameList"] == "REGISTER(Goomba)\nREGISTER(Koopa)\nREGISTER(Boo)"
        assert values["IncludeList"] == '#include "g.h"'

    def test_scalar_values_must_agree(self):
        extension_point = _templated(["T.h"], ["{1}.h"], ("Category", "{1}"))
        group = DestinationGroup("Enemy.h", "T.h", [("Goomba", "Enemy", ""), ("Koopa", "Enemy", "")])
        assert render_templated("// {{Category}}", extension_point, group) == "// Enemy"

    def test_conflicting_scalar_value(self):
        extension_point = _templated(["T.h"], ["{1}.h"], ("Name", "{0}"))
        group = DestinationGroup("Enemy.h", "T.h", [("Goomba", "Enemy", ""), ("Koopa", "Enemy", "")])
        with pytest.raises(ConflictingScalarValue) as excinfo:
            render_group_values(extension_point, group)
        assert excinfo.value.placeholder == "Name"
        assert excinfo.value.existing == "Goomba"
        assert excinfo.value.conflicting == "Koopa"

    def test_group_add_deduplicates(self):
        group = DestinationGroup("a", "b")
        group.add(("x",))
        group.add(("x",))
        assert group.records == [("x",)]
