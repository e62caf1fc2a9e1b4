"""
# Awesome-Markdown: authorities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The higher power that governs the conversion logic.
"""

from typing import Optional

from awesomemd.bases import Transformer
from awesomemd.components import (
    BadgeTransformer,
    ButtonTransformer,
    CalloutTransformer,
    CardTransformer,
    CarouselTransformer,
    ComparisonTransformer,
    CopyButtonTransformer,
    CustomComponentTransformer,
    DetailsTransformer,
    DialogTransformer,
    IconTransformer,
    ImageDialogTransformer,
    LayoutTransformer,
    TabsTransformer,
    TagTransformer,
)
from awesomemd.configuration import Configuration, ImageDialogOptions


class TransformerAuthority:
    """
    Object governing the queueing and application of component transformers.

    ## `legislate`

    Commits one transformer per component and queues them in the fixed stage order:
    layout, badge, button, callout, card, carousel, comparison, copy-button, details,
    image-dialog (only if enabled), dialog, icon, tag, tabs, custom (only if configured).
    Layout runs first since its content is emitted raw for the later stages,
    and image-dialog runs immediately before dialog since it emits dialog syntax.

    ## `execute`

    Applies the queued transformers in order.
    """
    _configuration: Configuration
    _image_dialog_options: Optional[ImageDialogOptions]
    _transformer_queue: list[Transformer]
    _verbose_mode_enabled: bool

    def __init__(self, configuration: Configuration, image_dialog_options: Optional[ImageDialogOptions],
                 verbose_mode_enabled: bool):
        self._configuration = configuration
        self._image_dialog_options = image_dialog_options
        self._transformer_queue = []
        self._verbose_mode_enabled = verbose_mode_enabled

    @property
    def transformer_ids(self) -> list[str]:
        return [transformer.id_ for transformer in self._transformer_queue]

    def commit(self, transformer: Transformer):
        transformer.configuration = self._configuration
        transformer.commit()
        self._transformer_queue.append(transformer)

    def legislate(self):
        if self._transformer_queue:
            return

        verbose_mode_enabled = self._verbose_mode_enabled

        self.commit(LayoutTransformer('layout', verbose_mode_enabled))
        self.commit(BadgeTransformer('badge', verbose_mode_enabled))
        self.commit(ButtonTransformer('button', verbose_mode_enabled))
        self.commit(CalloutTransformer('callout', verbose_mode_enabled))
        self.commit(CardTransformer('card', verbose_mode_enabled))
        self.commit(CarouselTransformer('carousel', verbose_mode_enabled))
        self.commit(ComparisonTransformer('comparison', verbose_mode_enabled))
        self.commit(CopyButtonTransformer('copy-button', verbose_mode_enabled))
        self.commit(DetailsTransformer('details', verbose_mode_enabled))

        if self._image_dialog_options is not None:
            image_dialog_transformer = ImageDialogTransformer('image-dialog', verbose_mode_enabled)
            image_dialog_transformer.options = self._image_dialog_options
            self.commit(image_dialog_transformer)

        self.commit(DialogTransformer('dialog', verbose_mode_enabled))
        self.commit(IconTransformer('icon', verbose_mode_enabled))
        self.commit(TagTransformer('tag', verbose_mode_enabled))
        self.commit(TabsTransformer('tabs', verbose_mode_enabled))

        if self._configuration.custom_components:
            self.commit(CustomComponentTransformer('custom', verbose_mode_enabled))

    def execute(self, string: str) -> str:
        if self._verbose_mode_enabled:
            transformer_queue_ids = [f'#{transformer_id}' for transformer_id in self.transformer_ids]
            print(f'Transformer queue: {transformer_queue_ids}\n\n\n\n')

        for transformer in self._transformer_queue:
            string = transformer.apply(string)

        return string
