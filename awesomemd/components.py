"""
# Awesome-Markdown: components.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Component transformers.

Each transformer rewrites one family of delimiter-fenced blocks into web-component markup
and leaves every other byte of the document as written.
A block that does not match (e.g. an unterminated block) is never an error.
"""

import hashlib
import re
from typing import Optional

from awesomemd.bases import DualSyntaxTransformer, Transformer
from awesomemd.configuration import ImageDialogOptions
from awesomemd.constants import (
    CSS_LENGTH_REGEX,
    DIALOG_ID_HASH_LENGTH,
    DIALOG_ID_PREFIX,
    DIALOG_IMAGE_TRIGGER_STYLE_TEMPLATE,
    IMAGE_DIALOG_CONTENT_STYLE,
    IMAGE_DIALOG_FALLBACK_LABEL,
    IMAGE_DIALOG_OPT_OUT_KEYWORD,
    IMAGE_DIALOG_TRIGGER_STYLE,
)
from awesomemd.exceptions import CommittedMutateException, MissingAttributeException
from awesomemd.idioms import (
    NEWLINE_REGEX,
    Schema,
    build_alternative_opening_regex,
    build_attribute_sequence,
    build_attribute_specifications_sequence,
    build_block_regex,
    build_closing_regex,
    build_icons_html,
    build_parameters_regex,
    build_primary_opening_regex,
    build_resolved_attributes_sequence,
    build_separated_bodies_regex,
    extract_quoted_attributes,
    resolve_attributes,
    resolve_icons,
    scan_tokens,
)
from awesomemd.matchers import PatternTransform, apply_many, apply_with_protection, compile_block_pattern
from awesomemd.rendering import render_inline
from awesomemd.utilities import (
    escape_alt_text,
    escape_attribute_value_html,
    escape_html,
    escape_quotes,
    none_to_empty_string,
    normalise_line_endings,
    sanitise_css_value,
    use_non_breaking_spaces_after_closing_tags,
)

VARIANTS = ('brand', 'success', 'neutral', 'warning', 'danger')
SIZES = ('small', 'medium', 'large')

MARKDOWN_IMAGE_REGEX = r'! \[ (?P<alt> [^\]]* ) \] \( (?P<src> [^)]+ ) \)'
CODE_FENCE_REGEX = r'^ ``` .*? ^ ``` [^\S\n]* $ | ^ ~~~ .*? ^ ~~~ [^\S\n]* $'
CODE_SPAN_REGEX = r'` [^`\n]+ `'


class LayoutTransformer(DualSyntaxTransformer):
    """
    Layout utility container.

    ````
    ::::«type» «parameters»
    «content»
    ::::
    ````
    where «type» is one of `grid`, `stack`, `cluster`, `split`, `flank`, `frame`,
    or the same prefixed with `wa-`.
    «content» is emitted raw, so that the blocks inside it are transformed by the later stages.
    """
    TYPE_REGEX = r'(?P<layout_type> grid | stack | cluster | split | flank | frame )'
    PRIMARY_REGEX = build_block_regex(
        ':::: ' + TYPE_REGEX + build_parameters_regex(requires_separation=True),
        '::::',
    )
    ALTERNATIVE_REGEX = build_block_regex(
        ':::: wa- ' + TYPE_REGEX + build_parameters_regex(requires_separation=True),
        '::::',
    )

    CLASS_FROM_KEY = {
        'gap': (('0', '3xs', '2xs', 'xs', 's', 'm', 'l', 'xl', '2xl', '3xl'), 'wa-gap-'),
        'align': (('start', 'end', 'center', 'stretch', 'baseline'), 'wa-align-items-'),
        'justify': (
            ('start', 'end', 'center', 'space-between', 'space-around', 'space-evenly'),
            'wa-justify-content-',
        ),
    }
    STYLE_PROPERTY_FROM_TYPE_KEY = {
        ('grid', 'min'): '--min-column-size',
        ('flank', 'size'): '--flank-size',
        ('flank', 'content'): '--content-percentage',
    }
    FRAME_RADII = ('s', 'm', 'l', 'pill', 'circle', 'square')
    MODIFIERS_FROM_TYPE = {
        'split': ('row', 'column'),
        'flank': ('start', 'end'),
        'frame': ('landscape', 'portrait', 'square'),
    }

    def _transform_match(self, match: re.Match) -> str:
        layout_type = match.group('layout_type')
        classes = [f'wa-{layout_type}']
        styles = []

        for token in scan_tokens(match.group('parameters')):
            if ':' not in token:
                if token in self.MODIFIERS_FROM_TYPE.get(layout_type, ()):
                    classes[0] = f'wa-{layout_type}:{token}'
                continue

            key, value = token.split(':', 1)
            if value == '':
                continue

            if key in self.CLASS_FROM_KEY:
                allowed_values, class_prefix = self.CLASS_FROM_KEY[key]
                if value in allowed_values:
                    classes.append(class_prefix + value)
            elif (layout_type, key) in self.STYLE_PROPERTY_FROM_TYPE_KEY:
                style_property = self.STYLE_PROPERTY_FROM_TYPE_KEY[(layout_type, key)]
                styles.append(f'{style_property}: {sanitise_css_value(value)}')
            elif layout_type == 'frame' and key == 'radius' and value in self.FRAME_RADII:
                classes.append(f'wa-border-radius-{value}')

        attribute_pairs = [('class', ' '.join(classes))]
        if styles:
            attribute_pairs.append(('style', '; '.join(styles)))

        return f'<div{build_attribute_sequence(attribute_pairs)}>\n{match.group("body")}\n</div>'


class BadgeTransformer(DualSyntaxTransformer):
    """
    Badge.

    ````
    !!!«parameters»
    «content»
    !!!
    ````
    """
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('!!!'), '!!!')
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-badge'), ':::')
    SCHEMA: Schema = {
        'variant': VARIANTS,
        'appearance': ('accent', 'filled', 'outlined', 'filled-outlined'),
        'attention': ('none', 'pulse', 'bounce'),
        'pill': ('pill',),
    }

    def _transform_match(self, match: re.Match) -> str:
        attributes = resolve_attributes(scan_tokens(match.group('parameters')), self.SCHEMA)
        attribute_sequence = build_resolved_attributes_sequence(attributes, self.SCHEMA)

        content = match.group('body').strip()
        content_html = render_inline(content, self._configuration.renderer)
        content_html = use_non_breaking_spaces_after_closing_tags(content_html)

        return f'<wa-badge{attribute_sequence}>{content_html}</wa-badge>'


class ButtonTransformer(DualSyntaxTransformer):
    """
    Button, or link button if the content is a lone markdown link.

    ````
    %%%«parameters»
    «label» | [«label»](«href»)
    %%%
    ````
    """
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('%%%'), '%%%')
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-button'), ':::')
    SCHEMA: Schema = {
        'variant': VARIANTS,
        'appearance': ('accent', 'filled', 'outlined', 'filled-outlined', 'plain'),
        'size': SIZES,
        'pill': ('pill',),
        'with-caret': ('caret',),
        'loading': ('loading',),
        'disabled': ('disabled',),
    }
    DEFAULT_ICON_SLOT = 'start'
    ICON_SLOTS = ('start', 'end')
    LINK_REGEX = r'\[ (?P<text> [^\]]+ ) \] \( (?P<href> [^)]+ ) \)'

    def _transform_match(self, match: re.Match) -> str:
        icon_resolution = resolve_icons(match.group('parameters'), self.DEFAULT_ICON_SLOT, self.ICON_SLOTS)
        attributes = resolve_attributes(scan_tokens(icon_resolution.remaining), self.SCHEMA)
        attribute_sequence = build_resolved_attributes_sequence(attributes, self.SCHEMA)
        icons_html = build_icons_html(icon_resolution.icons)

        content = match.group('body').strip()
        link_match = re.fullmatch(pattern=self.LINK_REGEX, string=content, flags=re.VERBOSE)
        if link_match is not None:
            label = link_match.group('text')
            href = escape_attribute_value_html(link_match.group('href'))
            attribute_sequence += f' href="{href}"'
        else:
            label = content

        label_html = render_inline(label, self._configuration.renderer)
        label_html = use_non_breaking_spaces_after_closing_tags(label_html)

        return f'<wa-button{attribute_sequence}>{icons_html}{label_html}</wa-button>'


class CalloutTransformer(DualSyntaxTransformer):
    """
    Callout.

    ````
    :::«variant» «parameters»
    «content»
    :::
    ````
    where «variant» is one of `info`, `brand`, `success`, `neutral`, `warning`, `danger`
    (`info` being an alias of `brand`).
    The icon is taken from the configuration unless overridden by `icon:«name»`.
    """
    VARIANT_REGEX = r'(?P<variant> info | brand | success | neutral | warning | danger )'
    PRIMARY_REGEX = build_block_regex(
        '::: ' + VARIANT_REGEX + build_parameters_regex(requires_separation=True),
        ':::',
    )
    ALTERNATIVE_REGEX = build_block_regex(
        r':::wa-callout [^\S\n]+ ' + VARIANT_REGEX + build_parameters_regex(requires_separation=True),
        ':::',
    )
    SCHEMA: Schema = {
        'appearance': ('accent', 'filled', 'outlined', 'plain', 'filled-outlined'),
        'size': SIZES,
    }
    ICON_SLOT = 'icon'

    def _transform_match(self, match: re.Match) -> str:
        variant = match.group('variant')
        icon_resolution = resolve_icons(match.group('parameters'), self.ICON_SLOT, [self.ICON_SLOT])
        attributes = resolve_attributes(scan_tokens(icon_resolution.remaining), self.SCHEMA)
        attribute_sequence = build_resolved_attributes_sequence(attributes, self.SCHEMA)

        icon_name = icon_resolution.icons.get(self.ICON_SLOT, self._configuration.get_callout_icon(variant))
        if variant == 'info':
            variant = 'brand'

        content_html = self._configuration.renderer(match.group('body').strip())

        return (
            f'<wa-callout variant="{variant}"{attribute_sequence}>'
            f'<wa-icon slot="icon" name="{escape_attribute_value_html(icon_name)}" variant="solid"></wa-icon>'
            f'{content_html}'
            f'</wa-callout>'
        )


class CardTransformer(DualSyntaxTransformer):
    """
    Card.

    ````
    ===«parameters»
    ![«alt»](«src»)
    # «header»
    «content»
    [«footer_text»](«footer_href»)
    ===
    ````
    The media image, header heading, and trailing footer link are each optional.
    """
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('==='), '===')
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-card'), ':::')
    SCHEMA: Schema = {
        'appearance': ('outlined', 'filled', 'filled-outlined', 'plain', 'accent'),
        'orientation': ('horizontal', 'vertical'),
    }
    DEFAULT_ATTRIBUTES = {
        'appearance': 'outlined',
        'orientation': 'vertical',
    }

    MEDIA_REGEX = rf'^ {MARKDOWN_IMAGE_REGEX} [^\S\n]* \n?'
    HEADER_REGEX = r'^ [#] [ ] (?P<header> [^\n]+ ) $ \n?'
    FOOTER_REGEX = r'\n \[ (?P<text> [^\]]+ ) \] \( (?P<href> [^)]+ ) \) [\s]* \Z'

    def _transform_match(self, match: re.Match) -> str:
        attributes = resolve_attributes(scan_tokens(match.group('parameters')), self.SCHEMA)
        for attribute_name, default_value in self.DEFAULT_ATTRIBUTES.items():
            if attributes.get(attribute_name) == default_value:
                del attributes[attribute_name]
        attribute_sequence = build_resolved_attributes_sequence(attributes, self.SCHEMA)

        renderer = self._configuration.renderer
        content = normalise_line_endings(match.group('body')).strip()
        parts = []

        media_match = re.search(pattern=self.MEDIA_REGEX, string=content, flags=re.MULTILINE | re.VERBOSE)
        if media_match is not None:
            attribute_sequence += ' with-media'
            src = escape_attribute_value_html(media_match.group('src'))
            alt = escape_attribute_value_html(media_match.group('alt'))
            parts.append(f'<img slot="media" src="{src}" alt="{alt}">')
            content = content[:media_match.start()] + content[media_match.end():]

        header_match = re.search(pattern=self.HEADER_REGEX, string=content, flags=re.MULTILINE | re.VERBOSE)
        if header_match is not None:
            attribute_sequence += ' with-header'
            parts.append(f'<div slot="header">{renderer(header_match.group("header").strip())}</div>')
            content = content[:header_match.start()] + content[header_match.end():]

        footer_html = ''
        footer_match = re.search(pattern=self.FOOTER_REGEX, string=content, flags=re.VERBOSE)
        if footer_match is not None:
            attribute_sequence += ' with-footer'
            href = escape_attribute_value_html(footer_match.group('href'))
            text = escape_html(footer_match.group('text'))
            footer_html = f'<div slot="footer"><wa-button href="{href}">{text}</wa-button></div>'
            content = content[:footer_match.start()]

        content = content.strip()
        if content != '':
            parts.append(renderer(content))
        parts.append(footer_html)

        return f'<wa-card{attribute_sequence}>{"".join(parts)}</wa-card>'


class CarouselTransformer(DualSyntaxTransformer):
    """
    Carousel.

    ````
    ~~~~~~«parameters»
    ~~~
    «slide_content»
    ~~~
    [...]
    ~~~~~~
    ````
    Parameters are bare integers (slides per page, then slides per move), flags,
    `autoplay-interval:«ms»`, and the CSS custom properties
    `scroll-hint:«value»`, `aspect-ratio:«value»`, `slide-gap:«value»`.
    """
    SLIDES_REGEX = r'(?P<body> (?: ~~~ \r? \n (?: (?! ^ ~~~ ) . )* ^ ~~~ (?: \r? \n )? )+ )'
    PRIMARY_REGEX = ''.join([
        '^ ',
        build_primary_opening_regex('~~~~~~'),
        NEWLINE_REGEX,
        SLIDES_REGEX,
        build_closing_regex('~~~~~~'),
    ])
    ALTERNATIVE_REGEX = ''.join([
        '^ ',
        build_alternative_opening_regex('wa-carousel'),
        NEWLINE_REGEX,
        SLIDES_REGEX,
        build_closing_regex(':::'),
    ])
    SLIDE_REGEX = r'^ ~~~ \r? \n (?P<slide> (?: (?! ^ ~~~ ) . )* ) ^ ~~~'

    FLAGS = ('loop', 'navigation', 'pagination', 'autoplay', 'mouse-dragging')
    ATTRIBUTE_ORDER = (
        'slides-per-page',
        'slides-per-move',
        'loop',
        'navigation',
        'pagination',
        'autoplay',
        'autoplay-interval',
        'mouse-dragging',
        'orientation',
    )
    STYLE_PROPERTIES = ('scroll-hint', 'aspect-ratio', 'slide-gap')

    def _transform_match(self, match: re.Match) -> str:
        attribute_value_from_name: dict[str, Optional[str]] = {}
        style_value_from_property: dict[str, str] = {}
        integer_count = 0

        for token in scan_tokens(match.group('parameters')):
            if ':' in token:
                key, value = token.split(':', 1)
                if key == 'autoplay-interval':
                    attribute_value_from_name[key] = escape_attribute_value_html(value)
                elif key in self.STYLE_PROPERTIES:
                    style_value_from_property[f'--{key}'] = sanitise_css_value(value)
            elif re.fullmatch(pattern='[0-9]+', string=token):
                integer_count += 1
                if integer_count == 1:
                    attribute_value_from_name['slides-per-page'] = token
                elif integer_count == 2:
                    attribute_value_from_name['slides-per-move'] = token
            elif token in self.FLAGS:
                attribute_value_from_name[token] = None
            elif token == 'vertical':
                attribute_value_from_name['orientation'] = 'vertical'

        attribute_sequence = build_attribute_sequence(
            (name, attribute_value_from_name[name])
            for name in self.ATTRIBUTE_ORDER
            if name in attribute_value_from_name
        )
        if style_value_from_property:
            style = '; '.join(f'{css_property}: {value}' for css_property, value in style_value_from_property.items())
            attribute_sequence += f' style="{style}"'

        renderer = self._configuration.renderer
        item_elements = [
            f'<wa-carousel-item>{renderer(slide_match.group("slide").strip())}</wa-carousel-item>'
            for slide_match in re.finditer(
                pattern=self.SLIDE_REGEX,
                string=match.group('body'),
                flags=re.MULTILINE | re.DOTALL | re.VERBOSE,
            )
        ]

        return f'<wa-carousel{attribute_sequence}>{"".join(item_elements)}</wa-carousel>'


class ComparisonTransformer(DualSyntaxTransformer):
    """
    Before/after image comparison.

    ````
    |||«position»
    ![«before_alt»](«before_src»)
    ![«after_alt»](«after_src»)
    |||
    ````
    A block not containing exactly two images is left as written.
    """
    POSITION_REGEX = r'(?P<position> [0-9]+ )? [^\S\n]*'
    PRIMARY_REGEX = build_block_regex(r'\|\|\| ' + POSITION_REGEX, '|||')
    ALTERNATIVE_REGEX = build_block_regex(
        rf':::wa-comparison (?: [^\S\n]+ {POSITION_REGEX} )?',
        ':::',
    )

    def _transform_match(self, match: re.Match) -> str:
        image_matches = list(
            re.finditer(pattern=MARKDOWN_IMAGE_REGEX, string=match.group('body'), flags=re.VERBOSE)
        )
        if len(image_matches) != 2:
            return match.group()

        position = match.group('position')
        if position is None:
            attribute_sequence = ''
        else:
            attribute_sequence = f' position="{position}"'

        image_elements = [
            f'<img slot="{slot}" src="{escape_attribute_value_html(image_match.group("src"))}" '
            f'alt="{escape_alt_text(image_match.group("alt"))}" />'
            for slot, image_match in zip(('before', 'after'), image_matches)
        ]

        return f'<wa-comparison{attribute_sequence}>{"".join(image_elements)}</wa-comparison>'


class CopyButtonTransformer(DualSyntaxTransformer):
    """
    Copy-to-clipboard button.

    ````
    <<<«parameters»
    «value»
    <<<
    ````
    «value» is copied verbatim (not rendered).
    Labels and `from` are given as quoted attributes, e.g. `copy-label="Copy code"`,
    and a bare integer is the feedback duration in milliseconds.
    """
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('<<<'), '<<<')
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-copy-button'), ':::')
    SCHEMA: Schema = {
        'tooltip-placement': ('top', 'right', 'bottom', 'left'),
        'disabled': ('disabled',),
    }
    QUOTED_ATTRIBUTE_NAMES = ('copy-label', 'success-label', 'error-label', 'from')
    LABEL_NAMES = ('copy-label', 'success-label', 'error-label')

    def _transform_match(self, match: re.Match) -> str:
        quoted_values, remaining = extract_quoted_attributes(match.group('parameters'), self.QUOTED_ATTRIBUTE_NAMES)
        tokens = scan_tokens(remaining)
        attributes = resolve_attributes(tokens, self.SCHEMA)

        feedback_duration = None
        for token in tokens:
            if re.fullmatch(pattern='[0-9]+', string=token):
                feedback_duration = token

        attribute_pairs = []
        if 'from' in quoted_values:
            attribute_pairs.append(('from', escape_quotes(quoted_values['from'])))
        else:
            value = normalise_line_endings(match.group('body')).strip()
            attribute_pairs.append(('value', escape_quotes(value)))

        if 'tooltip-placement' in attributes:
            attribute_pairs.append(('tooltip-placement', attributes['tooltip-placement']))
        for label_name in self.LABEL_NAMES:
            if label_name in quoted_values:
                attribute_pairs.append((label_name, escape_quotes(quoted_values[label_name])))
        if feedback_duration is not None:
            attribute_pairs.append(('feedback-duration', feedback_duration))
        if 'disabled' in attributes:
            attribute_pairs.append(('disabled', None))

        return f'<wa-copy-button{build_attribute_sequence(attribute_pairs)}></wa-copy-button>'


class DetailsTransformer(DualSyntaxTransformer):
    """
    Disclosure.

    ````
    ^^^«parameters»
    «summary»
    >>>
    «details»
    ^^^
    ````
    """
    BODIES_REGEX = build_separated_bodies_regex('summary', 'details')
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('^^^'), '^^^', BODIES_REGEX)
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-details'), ':::', BODIES_REGEX)
    SCHEMA: Schema = {
        'appearance': ('outlined', 'filled', 'filled-outlined', 'plain'),
        'icon-placement': ('start', 'end'),
        'disabled': ('disabled',),
        'open': ('open',),
    }
    APPEARANCE_FROM_TOKEN = {
        'filled-outlined': 'filled outlined',
    }
    ICON_SLOTS = ('expand', 'collapse')
    HTML_SLOT_FROM_ICON_SLOT = {
        'expand': 'expand-icon',
        'collapse': 'collapse-icon',
    }
    NAME_TOKEN_PREFIX = 'name:'

    def _transform_match(self, match: re.Match) -> str:
        icon_resolution = resolve_icons(match.group('parameters'), None, self.ICON_SLOTS)
        tokens = scan_tokens(icon_resolution.remaining)
        attributes = resolve_attributes(tokens, self.SCHEMA)

        name = None
        for token in tokens:
            if token.startswith(self.NAME_TOKEN_PREFIX) and len(token) > len(self.NAME_TOKEN_PREFIX):
                name = token[len(self.NAME_TOKEN_PREFIX):]

        appearance_token = attributes.get('appearance', 'outlined')
        appearance = self.APPEARANCE_FROM_TOKEN.get(appearance_token, appearance_token)
        icon_placement = attributes.get('icon-placement', 'end')

        attribute_sequence = f" appearance='{appearance}' icon-placement='{icon_placement}'"
        if 'disabled' in attributes:
            attribute_sequence += ' disabled'
        if 'open' in attributes:
            attribute_sequence += ' open'
        if name is not None:
            attribute_sequence += f" name='{escape_html(name)}'"

        renderer = self._configuration.renderer
        icons_html = build_icons_html(icon_resolution.icons, self.HTML_SLOT_FROM_ICON_SLOT)
        summary_html = renderer(match.group('summary').strip())
        details_html = renderer(match.group('details').strip())

        return (
            f'<wa-details{attribute_sequence}>'
            f'{icons_html}'
            f"<span slot='summary'>{summary_html}</span>"
            f'{details_html}'
            f'</wa-details>'
        )


class ImageDialogTransformer(Transformer):
    """
    Automatic image-to-dialog expansion.

    Rewrites each markdown image `![«alt»](«src» "«title»")` into dialog syntax
    (for `DialogTransformer` to transform subsequently),
    with the image itself as the trigger and a full-size copy as the content.
    An image whose title contains `nodialog` is left alone,
    and a CSS length in the title sets the dialog width.
    Images inside code or comparison blocks are left alone.
    """
    IMAGE_REGEX = r'! \[ (?P<alt> [^\]]* ) \] \( (?P<src> [^)]+? ) (?: [\s]+ " (?P<title> [^"]* ) " )? \)'
    PROTECTED_REGEXES = (
        CODE_FENCE_REGEX,
        CODE_SPAN_REGEX,
        r'^ \|\|\| [^\n]* \n .*? \n \|\|\| (?= [^\S\n]* $ )',
        r'^ :::wa-comparison [^\n]* \n .*? \n ::: (?= [^\S\n]* $ )',
        r'<wa-comparison [^>]* > .*? </wa-comparison>',
    )

    _options: Optional[ImageDialogOptions]
    _image_pattern_compiled: re.Pattern
    _protected_patterns_compiled: list[re.Pattern]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._options = None

    @property
    def options(self) -> Optional[ImageDialogOptions]:
        return self._options

    @options.setter
    def options(self, value: ImageDialogOptions):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `options` after `commit()`')

        self._options = value

    def _validate_mandatory_attributes(self):
        super()._validate_mandatory_attributes()
        if self._options is None:
            raise MissingAttributeException('options')

    def _set_apply_method_variables(self):
        self._image_pattern_compiled = re.compile(pattern=self.IMAGE_REGEX, flags=re.VERBOSE)
        self._protected_patterns_compiled = [compile_block_pattern(regex) for regex in self.PROTECTED_REGEXES]

    def _transform_image_match(self, match: re.Match) -> str:
        alt = match.group('alt')
        src = match.group('src').strip()
        title = none_to_empty_string(match.group('title'))

        if IMAGE_DIALOG_OPT_OUT_KEYWORD in title:
            return match.group()

        title_width_match = re.search(pattern=CSS_LENGTH_REGEX, string=title, flags=re.VERBOSE)

        if title_width_match is not None:
            width = title_width_match.group()
        else:
            width = self._options.default_width

        parameters = 'light-dismiss'
        if width is not None:
            parameters += f' {width}'

        title_attribute = ''
        if title != '' and title_width_match is None:
            title_attribute = f' title="{escape_attribute_value_html(title)}"'

        label = alt if alt != '' else IMAGE_DIALOG_FALLBACK_LABEL
        src = escape_attribute_value_html(src)
        alt = escape_attribute_value_html(alt)

        return '\n'.join([
            f'???{parameters}',
            f'<img src="{src}" alt="{alt}" style="{IMAGE_DIALOG_TRIGGER_STYLE}"{title_attribute} />',
            '>>>',
            f'# {label}',
            '',
            f'<img src="{src}" alt="{alt}" style="{IMAGE_DIALOG_CONTENT_STYLE}" />',
            '???',
        ])

    def _rewrite_images(self, string: str) -> str:
        return self._image_pattern_compiled.sub(self._transform_image_match, string)

    def _apply(self, string: str) -> str:
        return apply_with_protection(string, self._protected_patterns_compiled, self._rewrite_images)


class DialogTransformer(DualSyntaxTransformer):
    """
    Dialog with a trigger button.

    ````
    ???«parameters»
    «trigger»
    >>>
    «content»
    ???
    ````
    The dialog label is the first `# «label»` heading of «content» (removed from the content),
    or else «trigger».
    A trigger containing `<img` is rendered as a borderless image button.
    """
    BODIES_REGEX = build_separated_bodies_regex('trigger', 'content')
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('???'), '???', BODIES_REGEX)
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-dialog'), ':::', BODIES_REGEX)
    SCHEMA: Schema = {
        'light-dismiss': ('light-dismiss',),
    }
    LABEL_HEADING_REGEX = r'^ [#] [^\S\n]+ (?P<label> [^\n]+? ) [^\S\n]* $ \n?'

    def _transform_match(self, match: re.Match) -> str:
        tokens = scan_tokens(match.group('parameters'))
        attributes = resolve_attributes(tokens, self.SCHEMA)

        width = None
        for token in tokens:
            if re.fullmatch(pattern=CSS_LENGTH_REGEX, string=token, flags=re.VERBOSE):
                width = token

        trigger = normalise_line_endings(match.group('trigger')).strip()
        content = normalise_line_endings(match.group('content')).strip()
        dialog_id = compute_dialog_id(trigger, content)

        label_match = re.search(pattern=self.LABEL_HEADING_REGEX, string=content, flags=re.MULTILINE | re.VERBOSE)
        if label_match is not None:
            label = label_match.group('label').strip()
            content = (content[:label_match.start()] + content[label_match.end():]).strip()
        else:
            label = trigger

        lines = []
        if '<img' in trigger:
            button_id = f'{dialog_id}-btn'
            lines.append(DIALOG_IMAGE_TRIGGER_STYLE_TEMPLATE.format(button_id=button_id))
            lines.append(f"<wa-button id='{button_id}' variant='text' data-dialog='open {dialog_id}'>{trigger}</wa-button>")
        else:
            lines.append(f"<wa-button data-dialog='open {dialog_id}'>{escape_html(trigger)}</wa-button>")

        dialog_attribute_sequence = f" id='{dialog_id}' label='{escape_html(label)}'"
        if 'light-dismiss' in attributes:
            dialog_attribute_sequence += ' light-dismiss'
        if width is not None:
            dialog_attribute_sequence += f" style='--width: {width}'"

        lines.append(f'<wa-dialog{dialog_attribute_sequence}>')
        lines.append(self._configuration.renderer(content))
        lines.append("<wa-button slot='footer' variant='primary' data-dialog='close'>Close</wa-button>")
        lines.append('</wa-dialog>')

        return '\n'.join(lines)


def compute_dialog_id(trigger: str, content: str) -> str:
    """
    Compute a dialog id that is stable for identical trigger and content.
    """
    digest = hashlib.md5((trigger + content).encode()).hexdigest()
    return DIALOG_ID_PREFIX + digest[:DIALOG_ID_HASH_LENGTH]


class IconTransformer(Transformer):
    """
    Icon shorthand.

    `$$$«name»` anywhere in running text, or the block
    ````
    :::wa-icon «name»
    :::
    ````
    Code spans and fenced code are left alone.
    A shorthand followed by the word `name` (as in `$$$icon name`) is left alone too.
    """
    PRIMARY_REGEX = r'[$]{3} (?P<name> [a-zA-Z0-9_-]+ ) (?! [a-zA-Z0-9_-] | [\s]+ name \b )'
    ALTERNATIVE_REGEX = r'^ :::wa-icon [^\S\n]+ (?P<name> [a-zA-Z0-9_-]+ ) [^\S\n]* \r? \n ::: (?= [^\S\n]* $ )'
    PROTECTED_REGEXES = (
        CODE_FENCE_REGEX,
        CODE_SPAN_REGEX,
        r'<code [^>]* > .*? </code>',
    )

    _pattern_transforms: list[PatternTransform]
    _protected_patterns_compiled: list[re.Pattern]

    def _set_apply_method_variables(self):
        self._pattern_transforms = [
            PatternTransform(compile_block_pattern(self.PRIMARY_REGEX), IconTransformer._transform_match),
            PatternTransform(compile_block_pattern(self.ALTERNATIVE_REGEX), IconTransformer._transform_match),
        ]
        self._protected_patterns_compiled = [compile_block_pattern(regex) for regex in self.PROTECTED_REGEXES]

    @staticmethod
    def _transform_match(match: re.Match) -> str:
        return f'<wa-icon name="{match.group("name")}"></wa-icon>'

    def _rewrite_icons(self, string: str) -> str:
        return apply_many(string, self._pattern_transforms)

    def _apply(self, string: str) -> str:
        return apply_with_protection(string, self._protected_patterns_compiled, self._rewrite_icons)


class TagTransformer(DualSyntaxTransformer):
    """
    Tag, in inline or block form.

    ````
    @@@ «parameters» «content» @@@
    ````
    or
    ````
    @@@«parameters»
    «content»
    @@@
    ````
    In the inline form, leading tokens recognised as parameters are parameters
    and the rest is content.
    """
    INLINE_REGEX = r'@@@ [^\S\r\n]+ (?P<inner> [^@\r\n]+? ) [^\S\r\n]+ @@@'
    PRIMARY_REGEX = build_block_regex(build_primary_opening_regex('@@@'), '@@@')
    ALTERNATIVE_REGEX = build_block_regex(build_alternative_opening_regex('wa-tag'), ':::')
    SCHEMA: Schema = {
        'variant': VARIANTS,
        'appearance': ('accent', 'filled', 'outlined', 'filled-outlined'),
        'size': SIZES,
        'pill': ('pill',),
        'with-remove': ('with-remove',),
    }
    ICON_SLOT = 'content'

    _inline_pattern_compiled: re.Pattern

    def _set_apply_method_variables(self):
        super()._set_apply_method_variables()
        self._inline_pattern_compiled = re.compile(pattern=self.INLINE_REGEX, flags=re.VERBOSE)

    def _apply(self, string: str) -> str:
        string = self._inline_pattern_compiled.sub(self._transform_inline_match, string)
        return super()._apply(string)

    def _is_parameter_token(self, token: str) -> bool:
        if token.startswith('icon:'):
            return True

        return any(token in allowed_values for allowed_values in self.SCHEMA.values())

    def _transform_inline_match(self, match: re.Match) -> str:
        inner = match.group('inner')
        token_matches = list(re.finditer(pattern=r'\S+', string=inner))
        if not token_matches:
            return match.group()

        parameter_count = 0
        while (
            parameter_count < len(token_matches) - 1
            and self._is_parameter_token(token_matches[parameter_count].group())
        ):
            parameter_count += 1

        parameters = ' '.join(token_match.group() for token_match in token_matches[:parameter_count])
        content = inner[token_matches[parameter_count].start():].strip()

        return self._build_tag(parameters, content)

    def _transform_match(self, match: re.Match) -> str:
        content = normalise_line_endings(match.group('body')).strip()
        return self._build_tag(match.group('parameters'), content)

    def _build_tag(self, parameters: str, content: str) -> str:
        icon_resolution = resolve_icons(parameters, self.ICON_SLOT, [self.ICON_SLOT])
        attributes = resolve_attributes(scan_tokens(icon_resolution.remaining), self.SCHEMA)
        attribute_sequence = build_resolved_attributes_sequence(attributes, self.SCHEMA)
        icons_html = build_icons_html(icon_resolution.icons)
        content_html = render_inline(content, self._configuration.renderer)

        return f'<wa-tag{attribute_sequence}>{icons_html}{content_html}</wa-tag>'


class TabsTransformer(DualSyntaxTransformer):
    """
    Tab group.

    ````
    ++++++«parameters»
    +++ «title»
    «panel_content»
    +++
    [...]
    ++++++
    ````
    A token not recognised as a parameter names the initially active panel.
    """
    TABS_REGEX = r'(?P<body> (?: [+]{3} [ ] [^\n]+ \n (?: (?! ^ [+]{3} ) . )* ^ [+]{3} (?: \r? \n )? )+ )'
    PRIMARY_REGEX = ''.join([
        '^ ',
        build_primary_opening_regex('++++++'),
        NEWLINE_REGEX,
        TABS_REGEX,
        build_closing_regex('++++++'),
    ])
    ALTERNATIVE_REGEX = ''.join([
        '^ ',
        '::: (?: wa-tabs | wa-tab-group )',
        build_parameters_regex(requires_separation=True),
        NEWLINE_REGEX,
        TABS_REGEX,
        build_closing_regex(':::'),
    ])
    TAB_REGEX = r'^ [+]{3} [ ] (?P<title> [^\n]+ ) \n (?P<panel> (?: (?! ^ [+]{3} ) . )* ) ^ [+]{3}'
    SCHEMA: Schema = {
        'placement': ('top', 'bottom', 'start', 'end'),
        'activation': ('manual', 'auto'),
        'without-scroll-controls': ('no-scroll-controls',),
    }

    def _transform_match(self, match: re.Match) -> str:
        tokens = scan_tokens(match.group('parameters'))
        attributes = resolve_attributes(tokens, self.SCHEMA)

        active_panel = None
        for token in tokens:
            if not any(token in allowed_values for allowed_values in self.SCHEMA.values()):
                active_panel = token

        attribute_pairs = [
            ('placement', attributes.get('placement', 'top')),
        ]
        if 'activation' in attributes:
            attribute_pairs.append(('activation', attributes['activation']))
        if active_panel is not None:
            attribute_pairs.append(('active', escape_attribute_value_html(active_panel)))
        if 'without-scroll-controls' in attributes:
            attribute_pairs.append(('without-scroll-controls', None))

        renderer = self._configuration.renderer
        tab_elements = []
        panel_elements = []
        for index, tab_match in enumerate(
            re.finditer(pattern=self.TAB_REGEX, string=match.group('body'), flags=re.MULTILINE | re.DOTALL | re.VERBOSE),
            start=1,
        ):
            panel_name = f'tab-{index}'
            title = tab_match.group('title').strip()
            panel_html = renderer(normalise_line_endings(tab_match.group('panel')).strip())
            tab_elements.append(f'<wa-tab panel="{panel_name}">{title}</wa-tab>')
            panel_elements.append(f'<wa-tab-panel name="{panel_name}">{panel_html}</wa-tab-panel>')

        return (
            f'<wa-tab-group{build_attribute_sequence(attribute_pairs)}>'
            f'{"".join(tab_elements)}'
            f'{"".join(panel_elements)}'
            f'</wa-tab-group>'
        )


class CustomComponentTransformer(Transformer):
    """
    User-registered components.

    ````
    :::«name» «attribute_specifications»
    «content»
    :::
    ````
    becomes `<«element»«attribute_sequence»>«content_html»</«element»>`
    for each «name» --> «element» mapping in the configuration.
    """
    _element_from_name: dict[str, str]
    _pattern_compiled: re.Pattern

    def _set_apply_method_variables(self):
        self._element_from_name = self._configuration.custom_components
        names = sorted(self._element_from_name, key=len, reverse=True)
        names_regex = '|'.join(re.escape(name) for name in names)
        self._pattern_compiled = compile_block_pattern(
            build_block_regex(
                f'::: (?P<component_name> {names_regex} )' + build_parameters_regex(requires_separation=True),
                ':::',
            )
        )

    def _transform_match(self, match: re.Match) -> str:
        element = self._element_from_name[match.group('component_name')]
        attribute_sequence = build_attribute_specifications_sequence(match.group('parameters'))
        content_html = self._configuration.renderer(match.group('body').strip())

        return f'<{element}{attribute_sequence}>{content_html}</{element}>'

    def _apply(self, string: str) -> str:
        if not self._element_from_name:
            return string

        return self._pattern_compiled.sub(self._transform_match, string)
