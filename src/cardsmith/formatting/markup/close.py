"""Close tag markup."""

from cardsmith.formatting.markup.base import MarkupBase


class CloseTagMarkup(MarkupBase):
    """Ends the scope of the markup element it closes.

    The opener is bound by the tokenizer; later passes match it by
    identity, never by tag name.
    """

    tag_name = "close"

    def __init__(self, markup_to_close: MarkupBase) -> None:
        super().__init__()
        self.markup_to_close = markup_to_close

    def process_markup(self, element, data, process_data, surface) -> bool:
        self.markup_to_close.close_markup(process_data)
        return True

    def to_markup(self) -> str:
        return f"</{self.markup_to_close.tag_name}>"
