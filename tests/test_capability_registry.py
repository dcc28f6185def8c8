"""Tests for capability resolution between modules."""

from __future__ import annotations

import pytest

from modbuild_cli.deps.capability_registry import (
    CapabilityRegistry,
    resolve,
    validate_module_set,
    verify_capabilities,
)
from modbuild_cli.exceptions import CapabilityNotFound, DuplicateCapability, DuplicateExtensionPoint


class TestResolve:

    def test_missing_required_capability_names_both(self, module_factory):
        module_a = module_factory("A", ModuleDependancies=["Physics_API"])
        other = module_factory("B", APIId="Render_API")

        with pytest.raises(CapabilityNotFound) as excinfo:
            resolve(module_a, [module_a, other])

        assert excinfo.value.capability_id == "Physics_API"
        assert excinfo.value.module_name == "A"
        assert "Physics_API" in str(excinfo.value)
        assert "\"A\"" in str(excinfo.value)

    def test_required_and_satisfied_optional(self, module_factory):
        physics = module_factory("Physics", APIId="Physics_API")
        audio = module_factory("Audio", APIId="Audio_API")
        module_a = module_factory(
            "A",
            ModuleDependancies=["Physics_API"],
            ModuleOptionalDependancies=["Audio_API", "Network_API"],
        )
        assert resolve(module_a, [module_a, physics, audio]) == ["Physics_API", "Audio_API"]

    def test_absent_optional_is_not_an_error(self, module_factory):
        module_a = module_factory("A", ModuleOptionalDependancies=["Network_API"])
        assert resolve(module_a, [module_a]) == []

    def test_duplicates_are_collapsed(self, module_factory):
        physics = module_factory("Physics", APIId="Physics_API")
        module_a = module_factory(
            "A",
            ModuleDependancies=["Physics_API", "Physics_API"],
            ModuleOptionalDependancies=["Physics_API"],
        )
        assert resolve(module_a, [module_a, physics]) == ["Physics_API"]

    def test_self_reference_is_excluded(self, module_factory):
        module_a = module_factory("A", APIId="A_API", ModuleDependancies=["A_API"])
        with pytest.raises(CapabilityNotFound):
            resolve(module_a, [module_a])

    def test_self_reference_optional_is_skipped(self, module_factory):
        module_a = module_factory("A", APIId="A_API", ModuleOptionalDependancies=["A_API"])
        assert resolve(module_a, [module_a]) == []

    def test_exporters_for(self, module_factory):
        physics = module_factory("Physics", APIId="Physics_API")
        module_a = module_factory("A", ModuleDependancies=["Physics_API"])
        registry = CapabilityRegistry([module_a, physics])
        assert registry.exporters_for(module_a) == [physics]
        assert registry.exporter_of("Physics_API") is physics
        assert registry.exporter_of("Nope_API") is None


class TestVerifyCapabilities:

    def test_every_module_is_checked(self, module_factory):
        physics = module_factory("Physics", APIId="Physics_API")
        module_a = module_factory("A", ModuleDependancies=["Physics_API"])
        module_b = module_factory("B", ModuleDependancies=["Missing_API"])

        assert verify_capabilities([physics, module_a]) == {"Physics": [], "A": ["Physics_API"]}
        with pytest.raises(CapabilityNotFound, match="Missing_API"):
            verify_capabilities([physics, module_a, module_b])

    def test_report_collects_every_error(self, module_factory):
        module_a = module_factory("A", ModuleDependancies=["X_API"], ModuleOptionalDependancies=["Y_API"])
        module_b = module_factory("B", ModuleDependancies=["Z_API"])
        report = CapabilityRegistry([module_a, module_b]).build_report()

        assert not report.is_valid()
        assert len(report.resolution_errors) == 2
        assert report.get_node(module_a).missing_optional == ["Y_API"]
        assert report.get_summary()["total_modules"] == 2


class TestValidateModuleSet:

    def test_duplicate_capability(self, module_factory):
        first = module_factory("First", APIId="Shared_API")
        second = module_factory("Second", APIId="Shared_API")
        with pytest.raises(DuplicateCapability) as excinfo:
            validate_module_set([first, second])
        assert excinfo.value.first_module == "First"
        assert excinfo.value.second_module == "Second"

    def test_duplicate_extension_point(self, module_factory):
        first = module_factory("First", ModuleExtensionDefinition=[{"Name": "Hooks"}])
        second = module_factory("Second", ModuleExtensionDefinition=[{"Name": "Hooks"}])
        with pytest.raises(DuplicateExtensionPoint, match="Hooks"):
            validate_module_set([first, second])

    def test_unique_set_passes(self, module_factory):
        first = module_factory("First", APIId="A_API", ModuleExtensionDefinition=[{"Name": "Hooks"}])
        second = module_factory("Second", APIId="B_API", ModuleExtensionDefinition=[{"Name": "Actors"}])
        validate_module_set([first, second])
