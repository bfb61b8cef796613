"""Tokenizer turning raw element text into a flat list of markup elements."""

import re
from typing import Optional

from cardsmith.formatting.markup import (
    CLOSE_TAG,
    TAG_REGISTRY,
    CloseTagMarkup,
    MarkupBase,
    MarkupParseError,
    NewlineMarkup,
    SpaceMarkup,
    TextMarkup,
)

__all__ = ["Tokenizer", "MarkupParseError", "TAG_PATTERN"]


class Tokenizer:
    """Split formatted text into markup elements.

    Tags have the form ``<name>``, ``<name:arg1;arg2>`` and ``</name>``;
    ``<close>`` ends the innermost open scope whatever its name. Anything
    else, including a ``<`` that does not start a well-formed tag, is
    literal text, split into words, space runs and newlines.

    Scopes left open at the end of the text are closed implicitly.
    Nesting different scoped tags is allowed; opening a scope with the same
    name as one that is still open is an error.
    """

    TAG_PATTERN = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9_]*)(?::([^<>]*))?>")
    LITERAL_PATTERN = re.compile(r"\r?\n|[ \t]+|[^ \t\r\n]+")

    def __init__(self, registry: Optional[dict[str, type[MarkupBase]]] = None) -> None:
        self.registry = TAG_REGISTRY if registry is None else registry

    def tokenize(self, text: str, literal: bool = False) -> list[MarkupBase]:
        """Convert text to markup elements in text order.

        Args:
            text: Raw element text
            literal: Treat the whole text as literal (no tag recognition)

        Returns:
            The ordered markup elements

        Raises:
            MarkupParseError: For unknown tags, bad arguments or bad closes
        """
        markups: list[MarkupBase] = []
        if literal:
            self._add_literal(text, markups)
            return markups

        open_scopes: list[MarkupBase] = []
        pos = 0
        for match in self.TAG_PATTERN.finditer(text):
            self._add_literal(text[pos : match.start()], markups)
            pos = match.end()

            tag = match.group(0)
            is_close = match.group(1) == "/"
            name = match.group(2).lower()
            arguments = match.group(3)

            if name == CLOSE_TAG and not is_close:
                if arguments is not None:
                    raise MarkupParseError("Close tag takes no arguments", tag=tag)
                markups.append(self._close(open_scopes, None, tag))
                continue

            if is_close:
                if arguments is not None:
                    raise MarkupParseError("Close tag takes no arguments", tag=tag)
                markups.append(self._close(open_scopes, name, tag))
                continue

            markup = self._create(name, arguments or "", tag)
            if markup.scoped:
                if any(s.tag_name == markup.tag_name for s in open_scopes):
                    raise MarkupParseError(
                        f"Nested <{markup.tag_name}> scopes are not supported", tag=tag
                    )
                open_scopes.append(markup)
            markups.append(markup)

        self._add_literal(text[pos:], markups)
        return markups

    def _create(self, name: str, arguments: str, tag: str) -> MarkupBase:
        markup_class = self.registry.get(name)
        if markup_class is None:
            raise MarkupParseError(f"Unknown markup tag: {name}", tag=tag)
        try:
            return markup_class(arguments)
        except MarkupParseError as e:
            if e.tag is None:
                e.tag = tag
            raise

    def _close(
        self, open_scopes: list[MarkupBase], name: Optional[str], tag: str
    ) -> CloseTagMarkup:
        """Bind a close tag to the innermost matching open scope."""
        canonical = None
        if name is not None:
            markup_class = self.registry.get(name)
            if markup_class is None:
                raise MarkupParseError(f"Unknown markup tag: {name}", tag=tag)
            if not markup_class.scoped:
                raise MarkupParseError(f"<{name}> is not a scoped tag", tag=tag)
            canonical = markup_class.tag_name

        for position in range(len(open_scopes) - 1, -1, -1):
            opener = open_scopes[position]
            if canonical is None or opener.tag_name == canonical:
                del open_scopes[position]
                return CloseTagMarkup(opener)

        raise MarkupParseError("Close tag without a matching open tag", tag=tag)

    def _add_literal(self, text: str, markups: list[MarkupBase]) -> None:
        for piece in self.LITERAL_PATTERN.findall(text):
            if piece in ("\n", "\r\n"):
                markups.append(NewlineMarkup())
            elif piece.isspace():
                markups.append(SpaceMarkup(piece.replace("\t", " ")))
            else:
                markups.append(TextMarkup(piece))
