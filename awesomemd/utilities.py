"""
# Awesome-Markdown: utilities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common utility functions.
"""

import re
from typing import Optional


def escape_attribute_value_html(value: str) -> str:
    """
    Escape an attribute value that will be delimited by double quotes.

    Ampersands already starting a character reference are left alone,
    where a character reference is taken to be
    an entity name of up to 31 letters, up to 7 decimal digits, or up to 6 hexadecimal digits.
    """
    value = re.sub(
        pattern='''
            [&]
            (?!
                (?:
                    [a-zA-Z]{1,31}
                        |
                    [#] (?: [0-9]{1,7} | [xX] [0-9a-fA-F]{1,6} )
                )
                [;]
            )
        ''',
        repl='&amp;',
        string=value,
        flags=re.VERBOSE,
    )
    value = value.replace('<', '&lt;')
    value = value.replace('>', '&gt;')
    value = value.replace('"', '&quot;')

    return value


def escape_html(text: str) -> str:
    """
    Escape text for use as element content or inside a single- or double-quoted attribute.
    """
    text = text.replace('&', '&amp;')
    text = text.replace('<', '&lt;')
    text = text.replace('>', '&gt;')
    text = text.replace('"', '&quot;')
    text = text.replace("'", '&#39;')

    return text


def escape_alt_text(text: str) -> str:
    text = text.replace('&', '&amp;')
    text = text.replace('"', '&quot;')
    text = text.replace('<', '&lt;')
    text = text.replace('>', '&gt;')

    return text


def escape_quotes(text: str) -> str:
    """
    Escape quotes only, so that ampersands and angle brackets survive verbatim in a copied value.
    """
    return text.replace('"', '&quot;').replace("'", '&#39;')


def sanitise_css_value(value: str) -> str:
    return re.sub(pattern=r'''["'<>;]''', repl='', string=value)


def unwrap_paragraph(html: str) -> str:
    """
    Remove the `<p>` wrapper that a markdown renderer puts around a lone paragraph.
    """
    return re.sub(
        pattern=r'\A <p> (?P<inner> .* ) </p> \Z',
        repl=r'\g<inner>',
        string=html,
        flags=re.DOTALL | re.VERBOSE,
    )


def use_non_breaking_spaces_after_closing_tags(html: str) -> str:
    """
    Turn whitespace after a closing tag into `&nbsp;`.

    Inline components collapse ordinary whitespace between a formatted run and the text after it.
    """
    return re.sub(
        pattern=r'(?P<closing_tag> </ [\w]+ > ) [\s]+',
        repl=r'\g<closing_tag>&nbsp;',
        string=html,
        flags=re.VERBOSE,
    )


def normalise_line_endings(text: str) -> str:
    return text.replace('\r\n', '\n')


def none_to_empty_string(string: Optional[str]) -> str:
    if string is None:
        return ''

    return string
