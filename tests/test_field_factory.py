"""
Tests for field factory
Tests para la fabrica de campos
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formtext.errors import InvalidDescriptor
from formtext.field_factory import FieldFactory
from formtext.state_store import StateStore
from formtext.tree import ERROR_MESSAGE, SUB_TEXT, Node

BLOOD = ["O", "A", "B"]


@pytest.fixture
def state():
    return StateStore()


@pytest.fixture
def factory(state):
    return FieldFactory(Node("form", classes=["form-group"]), state)


class TestDescriptorValidation:
    """Tests for rejected descriptors"""

    def test_missing_name(self, factory):
        with pytest.raises(InvalidDescriptor):
            factory.create_field({"type": "text", "label": "No name"})

    def test_blank_name(self, factory):
        with pytest.raises(InvalidDescriptor):
            factory.create_field({"name": "   "})

    def test_unknown_type(self, factory):
        with pytest.raises(InvalidDescriptor):
            factory.create_field({"name": "x", "type": "slider"})

    def test_failure_leaves_state_untouched(self, factory, state):
        factory.create_field({"name": "kept", "value": "1"})
        with pytest.raises(InvalidDescriptor):
            factory.create_field({"name": ""})
        assert state.snapshot_all() == {"kept": "1"}
        assert len(factory.form.children) == 1

    def test_wire_format_aliases(self, factory, state):
        control = factory.create_field({
            "type": "text",
            "name": "talla",
            "initialValue": "180",
            "subText": "cm",
        })
        assert control.value == "180"
        assert control.parent.find_first(lambda n: n.has_class(SUB_TEXT)).text == "cm"


class TestSeeding:
    """Every created field registers exactly one state entry"""

    @pytest.mark.parametrize("descriptor", [
        {"type": "text", "name": "f"},
        {"type": "number", "name": "f", "value": 3},
        {"type": "textarea", "name": "f", "value": "long"},
        {"type": "datalist", "name": "f", "options": ["a"]},
        {"type": "checkbox", "name": "f", "checked": True},
        {"type": "radio", "name": "f"},
        {"type": "select", "name": "f", "options": BLOOD},
        {"type": "select", "name": "f", "options": BLOOD, "value": "A"},
        {"type": "select", "name": "f", "options": BLOOD, "value": 2},
    ])
    def test_single_entry(self, factory, state, descriptor):
        factory.create_field(descriptor)
        assert state.names() == ["f"]

    def test_text_default_empty(self, factory, state):
        factory.create_field({"name": "f"})
        assert state.get("f") == ""

    def test_number_value_as_text(self, factory, state):
        control = factory.create_field({"type": "number", "name": "f", "value": 3})
        assert control.value == "3"
        assert state.get("f") == "3"

    def test_checkbox_boolean(self, factory, state):
        factory.create_field({"type": "checkbox", "name": "on", "checked": True})
        factory.create_field({"type": "radio", "name": "off"})
        assert state.get("on") is True
        assert state.get("off") is False

    def test_duplicate_name_overwrites(self, factory, state):
        factory.create_field({"name": "dup", "value": "first"})
        second = factory.create_field({"name": "dup", "value": "second"})
        assert state.get("dup") == "second"
        assert factory.get_control("dup") is second


class TestSelect:
    """Tests for select default selection"""

    def test_no_value_selects_first(self, factory, state):
        control = factory.create_field({"type": "select", "name": "blood", "options": BLOOD})
        assert control.selected_index == 0
        assert control.selected_text() == "O"
        assert state.get("blood") == "O"

    def test_value_selects_matching_option(self, factory, state):
        control = factory.create_field({"type": "select", "name": "blood", "options": BLOOD, "value": "A"})
        assert control.selected_index == 1
        assert state.get("blood") == "A"

    def test_index_selects_option(self, factory, state):
        control = factory.create_field({"type": "select", "name": "blood", "options": BLOOD, "value": 2})
        assert control.selected_index == 2
        assert control.selected_text() == "B"
        assert state.get("blood") == "B"

    def test_out_of_range_index_falls_back(self, factory):
        control = factory.create_field({"type": "select", "name": "blood", "options": BLOOD, "value": 9})
        assert control.selected_index == 0

    def test_out_of_range_index_not_matched_as_value(self, factory):
        options = ["1", "2", "3", "4", "5"]
        control = factory.create_field({"type": "select", "name": "score", "options": options, "value": 5})
        assert control.selected_index == 0

    def test_numeric_string_matches_value(self, factory):
        options = ["1", "2", "3", "4", "5"]
        control = factory.create_field({"type": "select", "name": "score", "options": options, "value": "5"})
        assert control.selected_index == 4

    def test_value_text_pairs(self, factory, state):
        control = factory.create_field({
            "type": "select",
            "name": "rh",
            "options": [{"value": "+", "text": "+ (positivo)"}, {"value": "-", "text": "- (negativo)"}],
            "value": "-",
        })
        assert control.selected_text() == "- (negativo)"
        assert state.get("rh") == "-"

    def test_input_selects_by_value(self, factory, state):
        control = factory.create_field({"type": "select", "name": "blood", "options": BLOOD})
        factory.handle_input("blood", "B")
        assert control.selected_index == 2
        assert state.get("blood") == "B"


class TestStructure:
    """Tests for the built field group"""

    def test_group_layout(self, factory):
        control = factory.create_field({
            "name": "peso", "label": "Peso:", "value": "70", "sub_text": "kg", "class_name": "wide",
        })
        group = control.parent
        assert group.classes == ["field-group", "peso-group", "wide", "required-field"]
        assert [child.tag for child in group.children] == ["label", "input", "div", "span"]
        assert group.children[2].has_class(ERROR_MESSAGE)
        assert group.children[2].hidden is True

    def test_optional_field_class(self, factory):
        control = factory.create_field({"name": "opt", "required": False})
        assert not control.parent.has_class("required-field")

    def test_datalist_suggestions_use_text(self, factory):
        control = factory.create_field({
            "type": "datalist",
            "name": "hist",
            "options": [{"value": "hta", "text": "Hipertension"}, "Diabetes"],
        })
        group = control.parent
        datalist = group.find_first(lambda n: n.tag == "datalist")
        assert [option.value for option in datalist.children] == ["Hipertension", "Diabetes"]
        assert control.attrs["list"] == "hist-options"
        assert group.children.index(control) < group.children.index(datalist)

    def test_target_container(self, factory):
        column = factory.form.append(Node("div", classes=["flex-left"]))
        control = factory.create_field({"name": "inside", "container": column})
        assert control.parent.parent is column


class TestEvents:
    """Tests for input and blur handling"""

    def test_input_updates_state(self, factory, state):
        factory.create_field({"name": "f"})
        factory.handle_input("f", "typed")
        assert state.get("f") == "typed"

    def test_checkbox_input(self, factory, state):
        control = factory.create_field({"type": "checkbox", "name": "c"})
        factory.handle_input("c", True)
        assert control.checked is True
        assert state.get("c") is True

    def test_blur_flags_required_empty(self, factory):
        control = factory.create_field({"name": "f", "validation_message": "Obligatorio"})
        factory.handle_input("f", "   ")
        assert factory.handle_blur("f") is True
        assert control.flagged is True
        assert factory.errors() == {"f": "Obligatorio"}

    def test_input_clears_flag(self, factory):
        control = factory.create_field({"name": "f"})
        factory.handle_blur("f")
        factory.handle_input("f", "x")
        assert control.flagged is False
        assert factory.errors() == {}

    def test_blur_with_value_not_flagged(self, factory):
        factory.create_field({"name": "f", "value": "ok"})
        assert factory.handle_blur("f") is False

    def test_optional_never_flagged(self, factory):
        factory.create_field({"name": "f", "required": False})
        assert factory.handle_blur("f") is False

    def test_unknown_field_ignored(self, factory, state):
        factory.handle_input("ghost", "x")
        assert "ghost" not in state
        assert factory.handle_blur("ghost") is False


class TestInputList:
    """Tests for growable entry lists"""

    def test_initial_values_non_blank(self, factory, state):
        factory.create_input_list("meds", ["a", "  ", "b"])
        assert state.get("meds") == ["a", "b"]
        assert len(factory.list_items("meds")) == 3

    def test_default_single_empty_entry(self, factory, state):
        factory.create_input_list("meds")
        assert state.get("meds") == []
        assert len(factory.list_items("meds")) == 1

    def test_add_input_remove(self, factory, state):
        factory.create_input_list("meds", ["a", "b"])
        new = factory.add_list_item("meds")
        assert state.get("meds") == ["a", "b"]

        factory.handle_list_input("meds", new.attrs["data-id"], "c")
        assert state.get("meds") == ["a", "b", "c"]

        first = factory.list_items("meds")[0]
        assert factory.remove_list_item("meds", first.attrs["data-id"]) is True
        assert state.get("meds") == ["b", "c"]

    def test_entry_names(self, factory):
        factory.create_input_list("meds", ["a"])
        assert factory.list_items("meds")[0].name == "meds[]"

    def test_remove_unknown_item(self, factory):
        factory.create_input_list("meds", ["a"])
        assert factory.remove_list_item("meds", -1) is False

    def test_unknown_list(self, factory):
        with pytest.raises(KeyError):
            factory.add_list_item("nothing")


class TestRemoval:
    """Tests for field removal"""

    def test_remove_field(self, factory, state):
        factory.create_field({"name": "gone", "value": "x"})
        assert factory.remove_field("gone") is True
        assert "gone" not in state
        assert factory.form.children == []
        assert factory.get_control("gone") is None

    def test_remove_missing(self, factory):
        assert factory.remove_field("missing") is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
