"""
# Awesome-Markdown: configuration.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Per-call configuration.

A configuration is built once, passed explicitly to `process(...)`, and never mutated afterwards,
so that concurrent calls with different configurations cannot interfere.
"""

import copy
import re
import warnings
from typing import Optional, Union

from awesomemd.constants import CALLOUT_VARIANTS, CSS_LENGTH_REGEX, DEFAULT_CALLOUT_ICONS
from awesomemd.exceptions import InvalidOptionException
from awesomemd import rendering
from awesomemd.rendering import Renderer

CUSTOM_COMPONENT_NAME_REGEX = r'[a-zA-Z] [a-zA-Z0-9-]*'


class Configuration:
    """
    Immutable configuration for a conversion.

    - callout_icons: overrides of the default icon per callout variant (`brand` uses the `info` icon)
    - custom_components: mapping of «name» to «element», enabling the syntax `:::«name»` --> `<«element»>`
    - render_markdown: the markdown-to-HTML function used for component bodies
    """
    _callout_icons: dict[str, str]
    _custom_components: dict[str, str]
    _renderer: Renderer

    def __init__(self, callout_icons: Optional[dict[str, str]] = None,
                 custom_components: Optional[dict[str, str]] = None,
                 render_markdown: Optional[Renderer] = None):
        self._callout_icons = Configuration._merge_callout_icons(callout_icons)
        self._custom_components = Configuration._validate_custom_components(custom_components)
        if render_markdown is None:
            render_markdown = rendering.render_markdown
        self._renderer = render_markdown

    @staticmethod
    def _merge_callout_icons(callout_icons: Optional[dict[str, str]]) -> dict[str, str]:
        merged_icons = copy.copy(DEFAULT_CALLOUT_ICONS)
        if callout_icons is None:
            return merged_icons

        for variant, icon_name in callout_icons.items():
            if variant not in CALLOUT_VARIANTS:
                warnings.warn(f'warning: unknown callout variant `{variant}` in callout icons (ignored)')
                continue
            merged_icons[variant] = icon_name

        return merged_icons

    @staticmethod
    def _validate_custom_components(custom_components: Optional[dict[str, str]]) -> dict[str, str]:
        if custom_components is None:
            return {}

        for name, element in custom_components.items():
            if not re.fullmatch(pattern=CUSTOM_COMPONENT_NAME_REGEX, string=name, flags=re.VERBOSE):
                raise InvalidOptionException(f'error: invalid custom component name `{name}`')
            if not re.fullmatch(pattern=CUSTOM_COMPONENT_NAME_REGEX, string=element, flags=re.VERBOSE):
                raise InvalidOptionException(f'error: invalid element name `{element}` for `{name}`')

        return copy.copy(custom_components)

    @property
    def callout_icons(self) -> dict[str, str]:
        return copy.copy(self._callout_icons)

    @property
    def custom_components(self) -> dict[str, str]:
        return copy.copy(self._custom_components)

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    def get_callout_icon(self, variant: str) -> str:
        if variant == 'brand':
            variant = 'info'

        return self._callout_icons[variant]


class ImageDialogOptions:
    """
    Options for the automatic image-to-dialog expansion.

    - default_width: CSS length used as the dialog width when an image title specifies none
    """
    _default_width: Optional[str]

    def __init__(self, default_width: Optional[str] = None):
        if default_width is not None and not re.fullmatch(pattern=CSS_LENGTH_REGEX, string=default_width,
                                                          flags=re.VERBOSE):
            raise InvalidOptionException(f'error: default width `{default_width}` is not a CSS length')

        self._default_width = default_width

    @property
    def default_width(self) -> Optional[str]:
        return self._default_width


def normalise_image_dialog_option(image_dialog: Union[bool, ImageDialogOptions, None]) -> Optional[ImageDialogOptions]:
    """
    Normalise the image dialog argument of `process(...)`.

    None and False disable the expansion, True enables it with default options.
    """
    if image_dialog is None or image_dialog is False:
        return None

    if image_dialog is True:
        return ImageDialogOptions()

    if isinstance(image_dialog, ImageDialogOptions):
        return image_dialog

    raise InvalidOptionException(f'error: invalid image dialog option `{image_dialog!r}`')
