"""
Tests for container builder
Tests para el constructor de contenedores
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formtext.container_builder import RULE, ContainerBuilder, ContainerType, validate_config
from formtext.errors import InvalidDescriptor
from formtext.tree import Node


def make_builder(**config):
    return ContainerBuilder(Node("div", classes=["form-container"]), validate_config(config))


class TestConfig:
    """Tests for configuration validation"""

    def test_defaults(self):
        config = validate_config()
        assert config.form_class == "form-group"
        assert config.init_type == ContainerType.FORM
        assert config.storage_key == "formData"

    def test_invalid_container_kind(self):
        with pytest.raises(InvalidDescriptor):
            validate_config({"init_type": "table"})

    def test_blank_form_class(self):
        with pytest.raises(InvalidDescriptor):
            validate_config({"form_class": "  "})


class TestContainer:
    """Tests for root container resolution"""

    @pytest.mark.parametrize("kind", ["form", "div", "section", "article"])
    def test_created_by_kind(self, kind):
        builder = make_builder(init_type=kind)
        assert builder.form.tag == kind
        assert builder.form.classes == ["form-group"]
        assert builder.form.parent is builder.host

    def test_existing_container_reused(self):
        host = Node("div")
        existing = host.append(Node("section", classes=["consulta"]))
        builder = ContainerBuilder(host, validate_config({"form_class": "consulta"}))
        assert builder.form is existing
        assert len(host.children) == 1

    def test_unsupported_factory_kind(self):
        builder = make_builder()
        with pytest.raises(InvalidDescriptor):
            builder.create_container_by_type("table")


class TestStructuralHelpers:
    """Tests for elements, headers, separators and spacers"""

    def test_create_element_adds_proc_class(self):
        builder = make_builder()
        element = builder.create_element("div", name="status", class_name="custom", text="Activo")
        assert element.classes == ["custom", "proc-status"]
        assert element.parent is builder.form
        assert element.text == "Activo"

    def test_create_element_without_auto_proc(self):
        builder = make_builder()
        element = builder.create_element("span", name="status", auto_proc=False)
        assert element.classes == []

    def test_create_element_in_parent(self):
        builder = make_builder()
        column = builder.add_div("flex-left")
        element = builder.create_element("p", name="x", parent=column)
        assert element.parent is column

    def test_add_div_attributes(self):
        builder = make_builder()
        div = builder.add_div("flex-container", element_id="main", attrs={"data-role": "vitals"})
        assert div.attrs == {"data-role": "vitals", "id": "main"}

    def test_header_level_bounds(self):
        builder = make_builder()
        for level in (0, 7):
            with pytest.raises(InvalidDescriptor):
                builder.add_header("Bad", level)

    def test_header_before_form(self):
        builder = make_builder()
        header = builder.add_header("Consulta", 1)
        assert builder.host.children == [header, builder.form]
        assert header.classes == ["form-header", "form-header--1"]
        assert header.tag == "h1"

    def test_header_in_container(self):
        builder = make_builder()
        header = builder.add_header("Exploracion", 3, builder.form)
        assert header.parent is builder.form

    def test_separator_and_spacer(self):
        builder = make_builder()
        separator = builder.add_separator()
        spacer = builder.add_spacer()
        assert separator.has_class("separator")
        assert [child.tag for child in separator.children] == ["hr"]
        assert spacer.has_class("line-spacer")
        assert spacer.text == RULE
        assert len(RULE) == 120


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
