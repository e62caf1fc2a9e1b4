"""
# Awesome-Markdown: idioms.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common idioms: the parameter micro-language and the delimiter regex builders.

A parameter string is the free-form text after an opening delimiter, e.g. `brand filled pill icon:gear`
in `!!!brand filled pill icon:gear`. It is interpreted in up to three passes:
- quoted `«name»="«value»"` attributes are extracted by name (they may contain whitespace);
- `icon:«name»` and `icon:«slot»:«name»` tokens are resolved to icon slots;
- the remaining tokens are resolved against a component schema (rightmost wins per attribute).
"""

import re
from typing import Iterable, NamedTuple, Optional

from awesomemd.utilities import escape_attribute_value_html


Schema = dict[str, tuple[str, ...]]

ICON_TOKEN_PREFIX = 'icon:'
CONTENT_SLOT = 'content'

NEWLINE_REGEX = r' \r? \n '
LINE_END_LOOKAHEAD_REGEX = r' (?= [^\S\n]* $ ) '
HORIZONTAL_WHITESPACE_REGEX = r'[^\S\n]'


class IconResolution(NamedTuple):
    icons: dict[str, str]
    remaining: str


def scan_tokens(parameters: Optional[str]) -> list[str]:
    """
    Split a parameter string into tokens.

    Leading and trailing whitespace is ignored, and runs of whitespace separate tokens.
    No quoting is recognised here; see `extract_quoted_attributes(...)`.
    """
    if parameters is None:
        return []

    return parameters.split()


def resolve_attributes(tokens: Iterable[str], schema: Schema) -> dict[str, str]:
    """
    Resolve tokens against a schema.

    A schema maps «attribute_name» to the tuple of tokens legal for that attribute,
    a boolean flag being an attribute with exactly one legal token.
    Each token is given to the first attribute (in schema order) that allows it,
    overwriting any value set by an earlier token, so the rightmost token wins.
    Tokens allowed by no attribute are dropped.
    """
    resolved: dict[str, str] = {}
    for token in tokens:
        for attribute_name, allowed_values in schema.items():
            if token in allowed_values:
                resolved[attribute_name] = token
                break

    return resolved


def is_flag_attribute(allowed_values: tuple[str, ...]) -> bool:
    return len(allowed_values) == 1


def resolve_icons(parameters: Optional[str], default_slot: Optional[str], legal_slots: Iterable[str]) -> IconResolution:
    """
    Extract icon slot assignments from a parameter string.

    - `icon:«slot»:«name»` assigns «name» to «slot» if «slot» is legal.
    - `icon:«name»` assigns «name» to the default slot if there is one.
    Icon tokens that cannot be assigned are dropped, and the last assignment to a slot wins.
    All other tokens are rejoined (single-space separated, original order) as `remaining`.
    """
    legal_slots = tuple(legal_slots)
    icons: dict[str, str] = {}
    remaining_tokens: list[str] = []

    for token in scan_tokens(parameters):
        if not token.startswith(ICON_TOKEN_PREFIX):
            remaining_tokens.append(token)
            continue

        parts = token.split(':', 2)
        if len(parts) == 3:
            _, slot, name = parts
            if slot in legal_slots and name != '':
                icons[slot] = name
        else:
            name = parts[1]
            if default_slot is not None and name != '':
                icons[default_slot] = name

    return IconResolution(icons=icons, remaining=' '.join(remaining_tokens))


def build_icons_html(icons: dict[str, str], slot_map: Optional[dict[str, str]] = None) -> str:
    """
    Render icon slot assignments as `<wa-icon>` elements.

    Slot names are translated through `slot_map` where present.
    The `content` slot is not a real slot, so its icon carries no slot attribute.
    """
    if slot_map is None:
        slot_map = {}

    icon_elements = []
    for slot, name in icons.items():
        html_slot = slot_map.get(slot, slot)
        name = escape_attribute_value_html(name)
        if html_slot == CONTENT_SLOT:
            icon_elements.append(f'<wa-icon name="{name}"></wa-icon>')
        else:
            icon_elements.append(f'<wa-icon slot="{html_slot}" name="{name}"></wa-icon>')

    return ''.join(icon_elements)


def extract_quoted_attributes(parameters: Optional[str], names: Iterable[str]) -> tuple[dict[str, str], str]:
    """
    Extract quoted `«name»="«value»"` or `«name»='«value»'` attributes by literal name.

    Returns the values found (rightmost wins per name)
    and the parameter string with every quoted attribute removed.
    """
    if parameters is None:
        return {}, ''

    names_regex = '|'.join(re.escape(name) for name in sorted(names, key=len, reverse=True))
    quoted_attribute_pattern = re.compile(
        pattern=rf'''
            (?<! \S )
            (?P<name> {names_regex} )
            =
            (?:
                "(?P<double_quoted_value> [^"]* )"
                    |
                '(?P<single_quoted_value> [^']* )'
            )
        ''',
        flags=re.VERBOSE,
    )

    values: dict[str, str] = {}
    for match in quoted_attribute_pattern.finditer(parameters):
        value = match.group('double_quoted_value')
        if value is None:
            value = match.group('single_quoted_value')
        values[match.group('name')] = value

    remaining = quoted_attribute_pattern.sub(' ', parameters)

    return values, remaining


def build_attribute_sequence(pairs: Iterable[tuple[str, Optional[str]]]) -> str:
    """
    Build an attribute sequence (with leading spaces) from («name», «value») pairs.

    A «value» of None gives a boolean attribute.
    """
    sequence = ''
    for name, value in pairs:
        if value is None:
            sequence += f' {name}'
        else:
            sequence += f' {name}="{value}"'

    return sequence


def build_resolved_attributes_sequence(resolved: dict[str, str], schema: Schema) -> str:
    """
    Build an attribute sequence from resolved attributes, in schema order.
    """
    pairs = []
    for attribute_name, allowed_values in schema.items():
        if attribute_name not in resolved:
            continue

        if is_flag_attribute(allowed_values):
            pairs.append((attribute_name, None))
        else:
            pairs.append((attribute_name, resolved[attribute_name]))

    return build_attribute_sequence(pairs)


def compute_attribute_specification_matches(attribute_specifications: str) -> Iterable[re.Match]:
    return re.finditer(
        pattern=r'''
            (?P<name> [^\s=#.'"]+ ) =
            (?:
                "(?P<double_quoted_value> [^"]* )"
                    |
                '(?P<single_quoted_value> [^']* )'
                    |
                (?P<bare_value> [\S]* )
            )
                |
            [#] (?P<id_> [^\s"']+ )
                |
            [.] (?P<class_> [^\s"']+ )
                |
            (?P<boolean_name> [^\s=#.'"]+ )
        ''',
        string=attribute_specifications,
        flags=re.VERBOSE,
    )


def build_attribute_specifications_sequence(attribute_specifications: Optional[str]) -> str:
    """
    Convert attribute specifications (as written after a custom component name) to an attribute sequence.

    Attribute specifications are of the following forms:
    ````
    «name»="«quoted_value»"
    «name»='«quoted_value»'
    «name»=«bare_value»
    #«id»
    .«class»
    «boolean_name»
    ````
    If an attribute is specified more than once, the latest specification prevails,
    except for `class`, whose values accumulate.
    For example, `id=x #y .a .b name=value class=c open` is converted to
    ` id="y" class="a b c" name="value" open`.
    """
    if attribute_specifications is None:
        return ''

    value_from_name: dict[str, Optional[str]] = {}
    class_values: list[str] = []

    for match in compute_attribute_specification_matches(attribute_specifications):
        name = match.group('name')
        if name is not None:
            value = next(
                group_value
                for group_value in (
                    match.group('double_quoted_value'),
                    match.group('single_quoted_value'),
                    match.group('bare_value'),
                )
                if group_value is not None
            )
            if name == 'class':
                class_values.append(value)
                value_from_name.setdefault('class', None)
            else:
                value_from_name[name] = value
            continue

        id_ = match.group('id_')
        if id_ is not None:
            value_from_name['id'] = id_
            continue

        class_ = match.group('class_')
        if class_ is not None:
            class_values.append(class_)
            value_from_name.setdefault('class', None)
            continue

        value_from_name[match.group('boolean_name')] = None

    pairs = []
    for name, value in value_from_name.items():
        if name == 'class':
            value = ' '.join(class_values)
        if value is not None:
            value = escape_attribute_value_html(value)
        pairs.append((name, value))

    return build_attribute_sequence(pairs)


def build_parameters_regex(requires_separation: bool) -> str:
    """
    Build regex for the parameter string following an opening delimiter.

    Primary delimiters may be followed immediately by parameters (`!!!brand`),
    whereas a component name must be separated from its parameters (`:::wa-badge brand`).
    """
    if requires_separation:
        return rf'(?P<parameters> (?: {HORIZONTAL_WHITESPACE_REGEX} [^\n]* )? )'

    return r'(?P<parameters> [^\n]* )'


def build_primary_opening_regex(delimiter: str) -> str:
    return re.escape(delimiter) + build_parameters_regex(requires_separation=False)


def build_alternative_opening_regex(component_name: str) -> str:
    return ':::' + re.escape(component_name) + build_parameters_regex(requires_separation=True)


def build_body_regex(group_name: str = 'body') -> str:
    """
    Build regex for a body region, the shortest span up to the next terminator.
    """
    return f'(?P<{group_name}> .*? )'


def build_separated_bodies_regex(first_group_name: str, second_group_name: str, separator: str = '>>>') -> str:
    """
    Build regex for two body regions separated by a separator on its own line.
    """
    return ''.join([
        build_body_regex(first_group_name),
        NEWLINE_REGEX,
        '^ ', re.escape(separator), f' {HORIZONTAL_WHITESPACE_REGEX}* ',
        NEWLINE_REGEX,
        build_body_regex(second_group_name),
    ])


def build_closing_regex(delimiter: str) -> str:
    return '^ ' + re.escape(delimiter) + LINE_END_LOOKAHEAD_REGEX


def build_block_regex(opening_regex: str, closing_delimiter: str, body_regex: Optional[str] = None) -> str:
    """
    Build regex for a block: an opening line, a body, and a closing delimiter on its own line.

    The opening regex is anchored to the start of a line.
    """
    if body_regex is None:
        body_regex = build_body_regex()

    return ''.join([
        '^ ',
        opening_regex,
        NEWLINE_REGEX,
        body_regex,
        NEWLINE_REGEX,
        build_closing_regex(closing_delimiter),
    ])
