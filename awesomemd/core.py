"""
# Awesome-Markdown: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core conversion logic.

Markdown extended with delimiter-fenced component blocks (e.g. `!!!brand` ... `!!!` for a badge)
is converted to markdown interleaved with web-component markup.
Everything outside a recognised block is left byte-for-byte as written,
for a downstream markdown renderer to handle.
"""

from typing import Optional, Union

from awesomemd.authorities import TransformerAuthority
from awesomemd.configuration import Configuration, ImageDialogOptions, normalise_image_dialog_option


def process(content: str, configuration: Optional[Configuration] = None,
            image_dialog: Union[bool, ImageDialogOptions, None] = None,
            verbose_mode_enabled: bool = False) -> str:
    """
    Transform every component block in a document.

    - configuration: callout icons, custom components, and the body renderer (defaults if None)
    - image_dialog: True or `ImageDialogOptions` to expand markdown images into dialogs
    """
    if configuration is None:
        configuration = Configuration()
    image_dialog_options = normalise_image_dialog_option(image_dialog)

    transformer_authority = TransformerAuthority(configuration, image_dialog_options, verbose_mode_enabled)
    transformer_authority.legislate()

    return transformer_authority.execute(content)
