"""Project model, persistence and session."""

from cardsmith.project.model import (
    ElementType,
    Project,
    ProjectLayout,
    ProjectLayoutElement,
    ProjectLayoutReference,
    parse_font_string,
)
from cardsmith.project.serialization import ProjectFormatError, ProjectSerializer
from cardsmith.project.session import ProjectEvent, ProjectSession, load_project

__all__ = [
    "ElementType",
    "Project",
    "ProjectLayout",
    "ProjectLayoutElement",
    "ProjectLayoutReference",
    "parse_font_string",
    "ProjectFormatError",
    "ProjectSerializer",
    "ProjectEvent",
    "ProjectSession",
    "load_project",
]
