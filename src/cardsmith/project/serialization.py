"""XML persistence for projects.

File layout::

    <Project>
      <Layout Name="Default" Width="825" Height="1125" Dpi="300" DefaultCount="1">
        <Element Name="title" Type="formattedtext" X="40" Y="40" ...>
          <Variable>&lt;b&gt;@[name]&lt;/b&gt;</Variable>
        </Element>
        <Reference RelativePath="cards.csv" Default="true"/>
      </Layout>
    </Project>
"""

import logging
import os
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Union

from cardsmith.formatting.colors import translate_color_string
from cardsmith.formatting.state import Alignment, VerticalAlignment
from cardsmith.project.model import (
    ElementType,
    Project,
    ProjectLayout,
    ProjectLayoutElement,
    ProjectLayoutReference,
    parse_font_string,
)

logger = logging.getLogger(__name__)

PROJECT_TAG = "Project"
LAYOUT_TAG = "Layout"
ELEMENT_TAG = "Element"
VARIABLE_TAG = "Variable"
REFERENCE_TAG = "Reference"


class ProjectFormatError(Exception):
    """Project XML could not be read as a project."""

    pass


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise ProjectFormatError(f"Invalid boolean: {value!r}")


def _format_number(value: float) -> str:
    return f"{value:g}"


class ProjectSerializer:
    """Convert projects to and from XML.

    Reading is strict: the root must be an un-namespaced ``Project``
    element, every child must be known and numeric attributes must parse.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def to_xml_bytes(self, project: Project) -> bytes:
        root = ET.Element(PROJECT_TAG)
        for layout in project.layouts:
            root.append(self._layout_to_xml(layout))
        ET.indent(root)
        return ET.tostring(root, encoding=self.encoding, xml_declaration=True)

    def _layout_to_xml(self, layout: ProjectLayout) -> ET.Element:
        node = ET.Element(
            LAYOUT_TAG,
            {
                "Name": layout.name,
                "Width": str(layout.width),
                "Height": str(layout.height),
                "Dpi": str(layout.dpi),
                "DefaultCount": str(layout.default_count),
            },
        )
        for element in layout.elements:
            child = ET.SubElement(
                node,
                ELEMENT_TAG,
                {
                    "Name": element.name,
                    "Type": element.type.value,
                    "X": _format_number(element.x),
                    "Y": _format_number(element.y),
                    "Width": _format_number(element.width),
                    "Height": _format_number(element.height),
                    "Font": element.font,
                    "Color": element.color,
                    "Align": element.align,
                    "VerticalAlign": element.vertical_align,
                    "LineSpacing": _format_number(element.line_spacing),
                    "Enabled": _format_bool(element.enabled),
                },
            )
            ET.SubElement(child, VARIABLE_TAG).text = element.variable
        for reference in layout.references:
            ET.SubElement(
                node,
                REFERENCE_TAG,
                {
                    "RelativePath": reference.relative_path,
                    "Default": _format_bool(reference.default),
                },
            )
        return node

    def save(self, project: Project, path: Union[str, Path]) -> None:
        """Write the project, replacing the target only once fully written.

        Raises:
            OSError: If the file cannot be written
        """
        target = Path(path)
        payload = self.to_xml_bytes(project)
        fd, temp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(temp_name, target)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def from_xml_bytes(self, content: bytes) -> Project:
        """Parse project XML.

        Raises:
            ProjectFormatError: If the content is not a valid project
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ProjectFormatError(f"Malformed XML: {e}") from e

        if root.tag != PROJECT_TAG:
            raise ProjectFormatError(f"Unexpected root element: {root.tag}")

        project = Project()
        for child in root:
            if child.tag != LAYOUT_TAG:
                raise ProjectFormatError(f"Unexpected element in project: {child.tag}")
            project.layouts.append(self._layout_from_xml(child))
        return project

    def load(self, path: Union[str, Path]) -> Project:
        """Read a project file.

        Raises:
            OSError: If the file cannot be read
            ProjectFormatError: If the content is not a valid project
        """
        return self.from_xml_bytes(Path(path).read_bytes())

    def _layout_from_xml(self, node: ET.Element) -> ProjectLayout:
        layout = ProjectLayout(
            name=self._required(node, "Name"),
            width=self._int(node, "Width", 825),
            height=self._int(node, "Height", 1125),
            dpi=self._int(node, "Dpi", 300),
            default_count=self._int(node, "DefaultCount", 1),
        )
        for child in node:
            if child.tag == ELEMENT_TAG:
                layout.elements.append(self._element_from_xml(child))
            elif child.tag == REFERENCE_TAG:
                layout.references.append(
                    ProjectLayoutReference(
                        relative_path=self._required(child, "RelativePath"),
                        default=_parse_bool(child.get("Default", "false")),
                    )
                )
            else:
                raise ProjectFormatError(f"Unexpected element in layout: {child.tag}")
        return layout

    def _element_from_xml(self, node: ET.Element) -> ProjectLayoutElement:
        type_name = node.get("Type", ElementType.FORMATTED_TEXT.value)
        try:
            element_type = ElementType(type_name.lower())
        except ValueError as e:
            raise ProjectFormatError(f"Unknown element type: {type_name!r}") from e

        variable_node = node.find(VARIABLE_TAG)
        variable = ""
        if variable_node is not None and variable_node.text:
            variable = variable_node.text

        name = self._required(node, "Name")
        font = node.get("Font", "")
        color = node.get("Color", "")
        align = node.get("Align", "left")
        vertical_align = node.get("VerticalAlign", "top")
        self._check_style(name, font, color, align, vertical_align)

        return ProjectLayoutElement(
            name=name,
            type=element_type,
            x=self._float(node, "X", 0.0),
            y=self._float(node, "Y", 0.0),
            width=self._float(node, "Width", 100.0),
            height=self._float(node, "Height", 100.0),
            variable=variable,
            font=font,
            color=color,
            align=align,
            vertical_align=vertical_align,
            line_spacing=self._float(node, "LineSpacing", 0.0),
            enabled=_parse_bool(node.get("Enabled", "true")),
        )

    @staticmethod
    def _check_style(name: str, font: str, color: str, align: str, vertical_align: str) -> None:
        """Reject element style attributes the renderer cannot use."""
        checks = [
            ("Font", font, lambda value: parse_font_string(value, "", 1.0)),
            ("Align", align, Alignment.parse),
            ("VerticalAlign", vertical_align, VerticalAlignment.parse),
        ]
        if color:
            checks.append(("Color", color, translate_color_string))
        for attribute, value, parse in checks:
            try:
                parse(value)
            except ValueError as e:
                raise ProjectFormatError(
                    f"Invalid {attribute} on element {name!r}: {value!r}"
                ) from e

    @staticmethod
    def _required(node: ET.Element, name: str) -> str:
        value = node.get(name)
        if value is None:
            raise ProjectFormatError(f"<{node.tag}> is missing attribute {name}")
        return value

    @staticmethod
    def _int(node: ET.Element, name: str, default: int) -> int:
        value = node.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError as e:
            raise ProjectFormatError(f"Invalid {name} on <{node.tag}>: {value!r}") from e

    @staticmethod
    def _float(node: ET.Element, name: str, default: float) -> float:
        value = node.get(name)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError as e:
            raise ProjectFormatError(f"Invalid {name} on <{node.tag}>: {value!r}") from e
