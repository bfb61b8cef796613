"""Card exporters."""

from cardsmith.export.base import Exporter
from cardsmith.export.png_exporter import PNGExporter
from cardsmith.export.pdf_exporter import PDFExporter

__all__ = [
    "Exporter",
    "PNGExporter",
    "PDFExporter",
    "EXPORTER_MAP",
    "SUPPORTED_EXTENSIONS",
    "get_exporter",
]

# Map file extensions to exporters
EXPORTER_MAP: dict[str, type[Exporter]] = {
    ".png": PNGExporter,
    ".pdf": PDFExporter,
}

SUPPORTED_EXTENSIONS = tuple(EXPORTER_MAP.keys())


def get_exporter(extension: str) -> type[Exporter]:
    """Get the appropriate exporter class for a file extension."""
    ext = extension.lower()
    if ext not in EXPORTER_MAP:
        raise ValueError(
            f"Unsupported export format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return EXPORTER_MAP[ext]
