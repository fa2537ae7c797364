"""Unit tests for PropertyIntrospector grouping/ordering and PropertyGridModel."""

from dataclasses import dataclass

import pytest

from conftest import Settings
from propgrid import (
    EditorKind,
    PropertyDescriptor,
    PropertyGridModel,
    PropertyIntrospector,
    TableDescriptorProvider,
    TypeCoercionBridge,
    grid_field,
)


def _shape(groups):
    return [(g.name, [e.display_name for e in g.entries]) for g in groups]


@dataclass
class Mixed:
    first: int = grid_field(1, category="b", display_name="First")
    second: int = grid_field(2, category="A", display_name="Second")
    third: int = grid_field(3, category="a", display_name="Third")


class TestPropertyIntrospector:

    def test_none_instance_gives_no_groups(self):
        assert PropertyIntrospector().build(None) == []

    def test_settings_layout(self, settings):
        groups = PropertyIntrospector().build(settings)

        assert _shape(groups) == [
            ("Advanced", ["Cascader Value", "Log Level", "Retry Count"]),
            ("Design", ["Font Size"]),
            ("General", ["Auto Save Interval (min)", "Enable Feature", "Theme", "User Name"]),
            ("Misc", ["Language", "Notes"]),
        ]

    def test_non_browsable_properties_are_excluded(self, settings):
        names = {e.name for g in PropertyIntrospector().build(settings) for e in g.entries}

        assert "cascader_source" not in names
        assert "languages" not in names
        assert len(names) == 10

    def test_categories_merge_case_insensitively(self):
        groups = PropertyIntrospector().build(Mixed())

        assert _shape(groups) == [
            ("A", ["Second", "Third"]),
            ("b", ["First"]),
        ]

    def test_build_is_deterministic(self, settings):
        introspector = PropertyIntrospector()
        assert _shape(introspector.build(settings)) == _shape(introspector.build(settings))

    def test_entries_are_classified(self, settings):
        entries = {e.name: e for g in PropertyIntrospector().build(settings) for e in g.entries}

        assert entries["enable_feature"].editor_kind is EditorKind.BOOL
        assert entries["theme"].editor_kind is EditorKind.ENUM
        assert entries["cascader_value"].editor_kind is EditorKind.CASCADER
        assert entries["language"].editor_kind is EditorKind.LIST_PICKER
        assert entries["retry_count"].editor_kind is EditorKind.TEXT
        assert entries["user_name"].description == "The display name of the current user."

    def test_each_entry_owns_its_bridge(self, settings):
        created = []

        def factory():
            bridge = TypeCoercionBridge()
            created.append(bridge)
            return bridge

        groups = PropertyIntrospector(bridge_factory=factory).build(settings)
        assert len(created) == sum(len(g.entries) for g in groups)

    def test_explicit_provider(self):
        class Opaque:
            pass

        provider = TableDescriptorProvider([
            PropertyDescriptor(name="z", declared_type=str, display_name="zeta",
                               getter=lambda instance: "z", is_read_only=True),
            PropertyDescriptor(name="a", declared_type=str, display_name="Alpha",
                               getter=lambda instance: "a", is_read_only=True),
            PropertyDescriptor(name="h", declared_type=str, browsable=False,
                               getter=lambda instance: "h", is_read_only=True),
        ])
        groups = PropertyIntrospector(provider=provider).build(Opaque())

        assert _shape(groups) == [("Misc", ["Alpha", "zeta"])]

    def test_equal_display_names_keep_enumeration_order(self):
        provider = TableDescriptorProvider([
            PropertyDescriptor(name="second", declared_type=str, display_name="Same",
                               getter=lambda instance: ""),
            PropertyDescriptor(name="first", declared_type=str, display_name="same",
                               getter=lambda instance: ""),
        ])
        groups = PropertyIntrospector(provider=provider).build(object())

        assert [e.name for e in groups[0].entries] == ["second", "first"]


class TestPropertyGridModel:

    @pytest.fixture
    def model(self):
        return PropertyGridModel()

    def test_selecting_object_publishes_groups(self, model, settings):
        emitted = []
        model.groups_changed.connect(lambda: emitted.append(True))

        model.selected_object = settings

        assert [g.name for g in model.groups] == ["Advanced", "Design", "General", "Misc"]
        assert emitted == [True]

    def test_same_object_does_not_rebuild(self, model, settings):
        model.selected_object = settings
        groups = model.groups

        model.selected_object = settings
        assert model.groups is groups

        model.refresh()
        assert model.groups is not groups

    def test_clearing_object_is_not_reported_as_inspection(self, model, settings, caplog):
        model.selected_object = settings

        with caplog.at_level("DEBUG", logger="propgrid.core.introspector"):
            model.selected_object = None

        assert "NoneType" not in caplog.text
        assert "Inspection cleared" in caplog.text

    def test_clearing_object_empties_groups(self, model, settings):
        model.selected_object = settings
        model.selected_object = None

        assert model.groups == ()
        assert model.find_entry("retry_count") is None

    def test_selection_is_cleared_on_rebuild(self, model, settings):
        changes = []
        model.selected_entry_changed.connect(lambda entry: changes.append(entry))

        model.selected_object = settings
        entry = model.find_entry("retry_count")
        model.selected_entry = entry
        assert model.selected_entry is entry

        model.selected_object = Settings()

        assert model.selected_entry is None
        assert changes == [entry, None]

    def test_selection_outside_groups_is_ignored(self, model, settings):
        model.selected_object = settings
        stale = model.find_entry("theme")
        model.refresh()

        model.selected_entry = stale
        assert model.selected_entry is None

    def test_toggle_group(self, model, settings):
        model.selected_object = settings
        group = model.groups[0]
        names = []
        group.property_changed.connect(lambda name: names.append(name))

        assert group.expanded is True
        model.toggle_group(group)
        assert group.expanded is False
        model.toggle_group(group)
        assert group.expanded is True
        assert names == ["expanded", "expanded"]

    def test_edits_through_model_entries_reach_instance(self, model, settings):
        model.selected_object = settings
        model.find_entry("font_size").string_value = "14.5"

        assert settings.font_size == 14.5
