"""
Form Renderer - Renders a built page tree as Streamlit widgets
Renderizador de formularios - Muestra el arbol de la pagina como widgets
"""

import streamlit as st
from typing import Any

from formtext.field_factory import INPUT_LIST_CONTAINER
from formtext.page import Page
from formtext.tree import (
    ERROR_MESSAGE,
    FORM_HEADER,
    LINE_SPACER,
    PROC_PREFIX,
    SEPARATOR,
    SUB_TEXT,
    Control,
    Node,
    is_control,
    is_field_group,
)

from .state_store import get_stable_key

COLUMN_CLASSES = ("flex-container",)


class FormRenderer:
    """
    Renders page nodes and forwards widget changes to the page
    Renderiza nodos de la pagina y reenvia los cambios de widgets
    """

    def __init__(self, page: Page):
        self.page = page

    def render_form(self) -> None:
        """
        Render the complete form
        Renderizar el formulario completo
        """
        for node in self.page.host.children:
            if node is self.page.form:
                self._render_children(node)
            else:
                self._render_node(node)

    def _render_children(self, node: Node) -> None:
        for child in node.children:
            self._render_node(child)

    def _render_node(self, node: Node) -> None:
        if node.has_class(SEPARATOR):
            st.markdown("---")

        elif node.has_class(LINE_SPACER):
            st.divider()

        elif node.has_class(FORM_HEADER):
            level = int(node.tag[1:]) if node.tag[1:].isdigit() else 2
            st.markdown(f"{'#' * min(level + 1, 6)} {node.text_content()}")

        elif node.has_class_prefix(PROC_PREFIX + "-"):
            st.markdown(f"**{node.text_content()}**")

        elif is_field_group(node):
            self._render_field_group(node)

        elif node.has_class(INPUT_LIST_CONTAINER):
            self._render_input_list(node.attrs["data-name"])

        elif any(node.has_class(c) for c in COLUMN_CLASSES) and node.children:
            columns = st.columns(len(node.children))
            for column, child in zip(columns, node.children):
                with column:
                    self._render_node(child)

        else:
            self._render_children(node)

    def _render_field_group(self, group: Node) -> None:
        """
        Render a single field group
        Renderizar un grupo de campo individual
        """
        control = group.find_first(is_control)
        if control is None:
            return

        label_node = group.find_first(lambda n: n.tag == "label")
        label = label_node.text_content() if label_node else control.name
        if control.required:
            label = f"{label} *"

        self._render_control(control, label)

        error_node = group.find_first(lambda n: n.has_class(ERROR_MESSAGE))
        if error_node is not None and not error_node.hidden:
            st.error(error_node.text)

        sub_text_node = group.find_first(lambda n: n.has_class(SUB_TEXT))
        if sub_text_node is not None:
            st.caption(sub_text_node.text_content())

    def _render_control(self, control: Control, label: str) -> Any:
        name = control.name
        key = get_stable_key(name)

        # No index to seed a selectbox with
        if control.is_select and not control.options:
            st.caption(f"{label} (sin opciones)")
            return None

        if key not in st.session_state:
            st.session_state[key] = (
                control.selected_index if control.is_select else control.current_value()
            )

        on_change = self._on_change
        args = (name, key)

        if control.is_checkable:
            return st.checkbox(label, key=key, on_change=on_change, args=args)

        if control.is_select:
            options = control.options
            return st.selectbox(
                label,
                options=list(range(len(options))),
                format_func=lambda i: options[i].text,
                key=key,
                on_change=on_change,
                args=args,
            )

        if control.tag == "textarea":
            return st.text_area(label, key=key, on_change=on_change, args=args)

        value = st.text_input(label, key=key, on_change=on_change, args=args)
        if control.list_id:
            datalist = self.page.form.find_first(
                lambda n: n.tag == "datalist" and n.attrs.get("id") == control.list_id
            )
            if datalist is not None and datalist.children:
                st.caption("Sugerencias: " + " | ".join(o.text for o in datalist.children))
        return value

    def _on_change(self, name: str, key: str) -> None:
        """Widget change: input event followed by focus loss"""
        self.page.handle_input(name, st.session_state[key])
        self.page.handle_blur(name)

    def _render_input_list(self, name: str) -> None:
        """
        Render a growable list of entries
        Renderizar una lista ampliable de entradas
        """
        fields = self.page.fields
        for index, control in enumerate(fields.list_items(name)):
            item_id = control.attrs["data-id"]
            key = get_stable_key(name, item_id)
            if key not in st.session_state:
                st.session_state[key] = control.value

            cols = st.columns([10, 1])
            with cols[0]:
                st.text_input(
                    f"{index + 1}",
                    key=key,
                    label_visibility="collapsed",
                    on_change=lambda n=name, i=item_id, k=key: fields.handle_list_input(
                        n, i, st.session_state[k]
                    ),
                )
            with cols[1]:
                st.button(
                    "×",
                    key=f"remove_{key}",
                    on_click=fields.remove_list_item,
                    args=(name, item_id),
                )

        st.button("+ Añadir", key=f"add_{name}", on_click=fields.add_list_item, args=(name,))
