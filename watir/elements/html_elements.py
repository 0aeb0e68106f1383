# watir/elements/html_elements.py
from __future__ import annotations

from watir.elements.element import Element, attribute_property
from watir.elements.user_editable import UserEditable


class HTMLElement(Element):
    """Any HTML element; resolved to a concrete subtype when fetched through a collection."""

    accesskey = attribute_property("accesskey")
    hidden = attribute_property("hidden", bool)
    tabindex = attribute_property("tabindex", int)


class Anchor(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "a"}

    href = attribute_property("href")
    target = attribute_property("target")
    rel = attribute_property("rel")


class Body(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "body"}


class Div(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "div"}


class Form(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "form"}

    action = attribute_property("action")
    method = attribute_property("method")
    name = attribute_property("name")

    def submit(self) -> "Form":
        self._element_call(lambda n: n.submit())
        return self


class Heading(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": ["h1", "h2", "h3", "h4", "h5", "h6"]}


class Image(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "img"}

    alt = attribute_property("alt")
    src = attribute_property("src")

    @property
    def width(self) -> int:
        return self._element_call(lambda n: int(n.size["width"]))

    @property
    def height(self) -> int:
        return self._element_call(lambda n: int(n.size["height"]))

    @property
    def loaded(self) -> bool:
        return bool(self._element_call(
            lambda n: self.driver.execute_script(
                "return arguments[0].complete && arguments[0].naturalWidth > 0", n
            )
        ))


class Label(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "label"}

    for_ = attribute_property("for")


class ListItem(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "li"}


class List(HTMLElement):
    """<ol> or <ul>."""

    DEFAULT_SELECTOR = {"tag_name": ["ol", "ul"]}

    def list_items(self):
        return self.lis(xpath="./li")

    items = list_items


class Paragraph(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "p"}


class Span(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "span"}


class Table(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "table"}

    def rows(self):
        return self.trs(xpath="./tr | ./thead/tr | ./tbody/tr | ./tfoot/tr")

    def strings(self) -> list:
        """Cell text, row by row."""
        return [[cell.text for cell in row.cells()] for row in self.rows()]


class TableRow(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "tr"}

    def cells(self):
        from watir.elements.collection import ElementCollection

        return ElementCollection(self, {"xpath": "./th | ./td"}, TableCell)


class TableCell(HTMLElement):
    """<td> or <th>."""

    DEFAULT_SELECTOR = {"tag_name": ["td", "th"]}

    colspan = attribute_property("colspan", int)
    rowspan = attribute_property("rowspan", int)


class TextArea(UserEditable, HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "textarea"}

    name = attribute_property("name")
    placeholder = attribute_property("placeholder")
    readonly = attribute_property("readonly", bool)
    maxlength = attribute_property("maxlength", int)
