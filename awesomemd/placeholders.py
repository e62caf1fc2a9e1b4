"""
# Awesome-Markdown: placeholders.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Placeholder protection.
"""

import re
import warnings


class PlaceholderLedger:
    """
    Ledger of the regions protected from a single rewrite pass.

    Some regions of a document must survive a rewrite pass untouched,
    e.g. code spans and fenced code in front of the `$$$«name»` icon shorthand,
    or comparison blocks in front of the image-to-dialog expansion.
    Each such region is recorded in the ledger and replaced in the document by a placeholder
    `«marker»«index_digits»«marker»`, where «marker» is `U+F8FF`,
    and «index_digits» spell the ledger index of the region in base 256,
    using the code points `U+E000` to `U+E0FF` as digits.
    No component pattern matches Private Use Area code points.

    A ledger belongs to one pass: protect, rewrite, then `restore(...)`.
    Occurrences of «marker» already in the document are protected first (`protect_markers(...)`),
    so that they are not mistaken for placeholder delimiters.
    """
    MARKER = chr(0xF8FF)
    _DIGIT_CODE_POINT_MIN = 0xE000
    _DIGIT_BASE = 0x100
    _REPLACEMENT_CHARACTER = chr(0xFFFD)

    _PLACEHOLDER_PATTERN_COMPILED = re.compile(
        pattern=''.join([
            MARKER,
            ' (?P<index_digits> [',
            chr(_DIGIT_CODE_POINT_MIN),
            '-',
            chr(_DIGIT_CODE_POINT_MIN + _DIGIT_BASE - 1),
            ']+ ) ',
            MARKER,
        ]),
        flags=re.VERBOSE,
    )

    _regions: list[str]

    def __init__(self):
        self._regions = []

    @property
    def regions(self) -> list[str]:
        return list(self._regions)

    @staticmethod
    def _encode_index(index: int) -> str:
        digits = []
        while True:
            index, digit = divmod(index, PlaceholderLedger._DIGIT_BASE)
            digits.append(chr(PlaceholderLedger._DIGIT_CODE_POINT_MIN + digit))
            if index == 0:
                break

        return ''.join(reversed(digits))

    @staticmethod
    def _decode_index(index_digits: str) -> int:
        index = 0
        for character in index_digits:
            index = index * PlaceholderLedger._DIGIT_BASE + ord(character) - PlaceholderLedger._DIGIT_CODE_POINT_MIN

        return index

    def _restore_substitute_function(self, placeholder_match: re.Match) -> str:
        index = PlaceholderLedger._decode_index(placeholder_match.group('index_digits'))
        if index >= len(self._regions):
            warnings.warn(
                f'warning: placeholder encountered with index {index} '
                f'not in ledger of {len(self._regions)} regions; '
                f'substituted with U+FFFD REPLACEMENT CHARACTER'
            )
            return PlaceholderLedger._REPLACEMENT_CHARACTER

        return self._regions[index]

    def protect(self, region: str) -> str:
        """
        Record a region and return its placeholder.

        Placeholders already inside the region are restored first,
        so that a single `restore(...)` gives back the region verbatim.
        """
        region = self.restore(region)
        index = len(self._regions)
        self._regions.append(region)
        marker = PlaceholderLedger.MARKER

        return f'{marker}{PlaceholderLedger._encode_index(index)}{marker}'

    def protect_markers(self, string: str) -> str:
        if PlaceholderLedger.MARKER not in string:
            return string

        return string.replace(PlaceholderLedger.MARKER, self.protect(PlaceholderLedger.MARKER))

    def protect_matches(self, string: str, pattern: re.Pattern) -> str:
        return pattern.sub(lambda match: self.protect(match.group()), string)

    def restore(self, string: str) -> str:
        """
        Restore every placeholder in a string to its recorded region.
        """
        return PlaceholderLedger._PLACEHOLDER_PATTERN_COMPILED.sub(self._restore_substitute_function, string)
