"""Tests for contribution aggregation."""

from __future__ import annotations

from modbuild_cli.codegen.aggregator import IncludePathTable, aggregate, project_record


def _declaring(module_factory, variables):
    return module_factory("Declarer", ModuleExtensionDefinition=[{
        "Name": "Hooks",
        "CodeGenSource": "Hooks.h",
        "CodeGenDestination": "codebuild/Hooks.h",
        "Variables": variables,
    }])


def test_project_record_fills_missing_fields_with_empty_string():
    assert project_record({"Name": "OnInit", "Extra": "x"}, ["Name", "Include"]) == ("OnInit", "")


def test_contributors_without_entry_yield_nothing(module_factory):
    declarer = _declaring(module_factory, ["Name"])
    bystander = module_factory("Bystander", ModuleData={"Actors": [{"Name": "Goomba"}]})

    assert aggregate(declarer.extension_points[0], [declarer, bystander], IncludePathTable()) == []


def test_order_follows_module_list_then_record_order(module_factory):
    declarer = _declaring(module_factory, ["Name"])
    module_b = module_factory("B", ModuleData={"Hooks": [{"Name": "B1"}, {"Name": "B2"}]})
    module_c = module_factory("C", ModuleData={"Hooks": [{"Name": "C1"}]})

    aggregated = aggregate(declarer.extension_points[0], [declarer, module_c, module_b], IncludePathTable())

    assert [entry.module_name for entry in aggregated] == ["C", "B"]
    assert aggregated[1].records == [("B1",), ("B2",)]


def test_module_may_contribute_to_its_own_extension_point(module_factory):
    declarer = module_factory("Self", ModuleExtensionDefinition=[{
        "Name": "Hooks", "Variables": ["Name"],
    }], ModuleData={"Hooks": [{"Name": "Mine"}]})

    aggregated = aggregate(declarer.extension_points[0], [declarer], IncludePathTable())
    assert aggregated[0].records == [("Mine",)]


def test_include_values_grant_contributor_include_dir(module_factory):
    declarer = _declaring(module_factory, ["Name", "Include"])
    module_b = module_factory("B", ModuleData={"Hooks": [
        {"Name": "B1", "Include": "b.h"},
        {"Name": "B2", "Include": "b2.h"},
    ]})
    module_c = module_factory("C", ModuleData={"Hooks": [{"Name": "C1"}]})
    include_paths = IncludePathTable()

    aggregate(declarer.extension_points[0], [module_b, module_c], include_paths)
    aggregate(declarer.extension_points[0], [module_b, module_c], include_paths)

    assert include_paths.get("Hooks") == [module_b.include_dir]
    assert include_paths.for_module(declarer) == [module_b.include_dir]
    assert len(include_paths) == 1


def test_include_not_declared_as_variable_grants_nothing(module_factory):
    declarer = _declaring(module_factory, ["Name"])
    module_b = module_factory("B", ModuleData={"Hooks": [{"Name": "B1", "Include": "b.h"}]})
    include_paths = IncludePathTable()

    aggregate(declarer.extension_points[0], [module_b], include_paths)
    assert include_paths.get("Hooks") == []
