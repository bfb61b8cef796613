"""Project session: the loaded project, its file location and change events."""

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from cardsmith.config import get_settings
from cardsmith.project.model import Project
from cardsmith.project.paths import get_relative_path, same_directory, update_relative_path
from cardsmith.project.serialization import ProjectFormatError, ProjectSerializer

logger = logging.getLogger(__name__)

# Namespace declaration written by old versions of the project format
LEGACY_NAMESPACE = 'xmlns="http://tempuri.org/Project.xsd"'


@dataclass
class ProjectEvent:
    """Payload passed to project callbacks."""

    project: Optional[Project]
    file_path: Optional[Path]


ProjectCallback = Callable[["ProjectSession", ProjectEvent], None]


def load_project(
    file_path: Union[str, Path], serializer: Optional[ProjectSerializer] = None
) -> Optional[Project]:
    """Load a project file without touching any session.

    A path with no file yields a new default project. A file that fails
    strict reading is retried with the legacy namespace removed. Returns
    None if the file cannot be read as a project at all.
    """
    serializer = serializer or ProjectSerializer(get_settings().xml_encoding)
    path = Path(file_path)

    if not path.is_file():
        logger.info("No existing file specified. Loading defaults...")
        return Project.default()

    try:
        return serializer.load(path)
    except (OSError, ProjectFormatError) as e:
        logger.info(
            "Failed to load project (%s). Attempting upgrade from previous version.", e
        )

    try:
        contents = path.read_text(encoding=serializer.encoding)
        contents = contents.replace(LEGACY_NAMESPACE, "")
        project = serializer.from_xml_bytes(contents.encode(serializer.encoding))
    except (OSError, UnicodeDecodeError, ProjectFormatError) as e:
        logger.error("Failed to load project. The project file appears to be corrupt: %s", e)
        return None

    logger.warning(
        "This project file is in an older format. Please save it using this version."
    )
    return project


class ProjectSession:
    """Holds the open project and notifies registered callbacks.

    Callbacks run synchronously in registration order.
    """

    def __init__(self, serializer: Optional[ProjectSerializer] = None) -> None:
        self.serializer = serializer or ProjectSerializer(get_settings().xml_encoding)
        self.loaded_project: Optional[Project] = None
        self.project_file_path: Optional[Path] = None
        self.project_path: Optional[Path] = None
        self._opened_callbacks: list[ProjectCallback] = []
        self._updated_callbacks: list[ProjectCallback] = []

    def on_project_opened(self, callback: ProjectCallback) -> ProjectCallback:
        """Register a callback fired after a project is opened."""
        self._opened_callbacks.append(callback)
        return callback

    def on_project_updated(self, callback: ProjectCallback) -> ProjectCallback:
        """Register a callback fired when the project changes."""
        self._updated_callbacks.append(callback)
        return callback

    def _fire(self, callbacks: list[ProjectCallback]) -> None:
        event = ProjectEvent(self.loaded_project, self.project_file_path)
        for callback in list(callbacks):
            callback(self, event)

    def open_project(self, file_path: Union[str, Path]) -> Optional[Project]:
        """Load a project and make it the session's project."""
        self.loaded_project = load_project(file_path, self.serializer)
        self._set_loaded_project_file(file_path)
        self._fire(self._opened_callbacks)
        return self.loaded_project

    def fire_project_updated(self) -> None:
        self._fire(self._updated_callbacks)

    def save(
        self,
        file_path: Union[str, Path],
        old_file_path: Optional[Union[str, Path]] = None,
    ) -> bool:
        """Save the project, keeping reference paths relative to the new location.

        Args:
            file_path: Target project file
            old_file_path: Previous project file; defaults to the current one

        Returns:
            True on success. On failure the session is left unchanged.
        """
        if self.loaded_project is None:
            logger.error("No project is loaded.")
            return False

        target = Path(file_path)
        if old_file_path is None:
            old_file_path = self.project_file_path
        new_dir = target.parent
        old_dir = Path(old_file_path).parent if old_file_path else None

        # work on a copy so a failed write leaves the loaded project untouched
        project = copy.deepcopy(self.loaded_project)
        if old_dir is None or not same_directory(new_dir, old_dir):
            for layout in project.layouts:
                for reference in layout.references:
                    if old_dir is not None:
                        reference.relative_path = update_relative_path(
                            old_dir, reference.relative_path, new_dir
                        )
                    else:
                        reference.relative_path = get_relative_path(
                            new_dir, reference.relative_path
                        )

        try:
            self.serializer.save(project, target)
        except OSError as e:
            logger.error("Failed to save project to %s: %s", target, e)
            return False

        for layout, saved_layout in zip(self.loaded_project.layouts, project.layouts):
            for reference, saved in zip(layout.references, saved_layout.references):
                reference.relative_path = saved.relative_path

        self._set_loaded_project_file(target)
        logger.info("Saved project to %s", target)
        return True

    def _set_loaded_project_file(self, file_path: Optional[Union[str, Path]]) -> None:
        if file_path:
            self.project_file_path = Path(file_path)
            self.project_path = self.project_file_path.parent
        else:
            self.project_file_path = None
            self.project_path = None
