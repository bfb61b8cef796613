"""Card data: rows read from a layout's reference file."""

import csv
import logging
import re
from pathlib import Path
from typing import Optional

from cardsmith.project.model import ProjectLayout

logger = logging.getLogger(__name__)

# @[column] placeholders in element text
PLACEHOLDER_PATTERN = re.compile(r"@\[([^\[\]]+)\]")


def resolve_text(template: str, row: dict[str, str]) -> str:
    """Substitute ``@[column]`` placeholders from a card row.

    Unknown columns are left as written so they show up on the card.
    """

    def replace(match: re.Match) -> str:
        return row.get(match.group(1).strip(), match.group(0))

    return PLACEHOLDER_PATTERN.sub(replace, template)


class Deck:
    """The cards of one layout.

    With a reference, each CSV row is a card (column names from the header
    row). Without one the deck holds ``default_count`` cards with no data.
    """

    def __init__(self, layout: ProjectLayout, project_dir: Optional[Path] = None) -> None:
        self.layout = layout
        self.project_dir = project_dir
        self.rows: list[dict[str, str]] = []
        self.reload()

    @property
    def reference_path(self) -> Optional[Path]:
        reference = self.layout.get_default_reference()
        if reference is None:
            return None
        path = Path(reference.relative_path)
        if self.project_dir is not None and not path.is_absolute():
            path = self.project_dir / path
        return path

    def reload(self) -> None:
        """Re-read the reference file.

        Raises:
            OSError: If the reference file cannot be read
        """
        path = self.reference_path
        if path is None:
            self.rows = [{} for _ in range(max(0, self.layout.default_count))]
            return

        with path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.DictReader(handle)
            self.rows = [
                {key.strip(): (value or "") for key, value in row.items() if key}
                for row in reader
            ]
        logger.debug("Loaded %d cards from %s", len(self.rows), path)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)
