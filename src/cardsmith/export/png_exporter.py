"""PNG exporter: one image file per card."""

from pathlib import Path

from PIL import Image

from cardsmith.export.base import Exporter


class PNGExporter(Exporter):
    """Writes each card to its own PNG.

    A single card is written to the target path as given; several cards
    get a zero-padded index appended to the file stem
    (``deck_001.png``, ``deck_002.png``...).
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".png",)

    def write(self, cards: list[Image.Image], path: Path, dpi: int) -> list[Path]:
        path.parent.mkdir(parents=True, exist_ok=True)
        if len(cards) == 1:
            cards[0].save(path, dpi=(dpi, dpi))
            return [path]

        width = max(3, len(str(len(cards))))
        written: list[Path] = []
        for index, card in enumerate(cards, start=1):
            card_path = path.with_name(f"{path.stem}_{index:0{width}d}{path.suffix}")
            card.save(card_path, dpi=(dpi, dpi))
            written.append(card_path)
        return written
