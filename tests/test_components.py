"""
# Awesome-Markdown: test_components.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `components.py`.
"""

import time
import unittest
from typing import Optional

from awesomemd.bases import Transformer
from awesomemd.configuration import Configuration, ImageDialogOptions
from awesomemd.constants import IMAGE_DIALOG_CONTENT_STYLE, IMAGE_DIALOG_TRIGGER_STYLE
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
    compute_dialog_id,
)
from awesomemd.matchers import compile_block_pattern


def render_paragraph(text: str) -> str:
    return f'<p>{text}</p>'


def build_committed(transformer_class: type, configuration: Optional[Configuration] = None,
                    image_dialog_options: Optional[ImageDialogOptions] = None) -> Transformer:
    if configuration is None:
        configuration = Configuration(render_markdown=render_paragraph)

    transformer = transformer_class('test', verbose_mode_enabled=False)
    transformer.configuration = configuration
    if image_dialog_options is not None:
        transformer.options = image_dialog_options
    transformer.commit()

    return transformer


class TestComponents(unittest.TestCase):
    def test_layout_transformer(self):
        layout = build_committed(LayoutTransformer)

        self.assertEqual(
            layout.apply('::::grid gap:l min:200px\nA\n::::'),
            '<div class="wa-grid wa-gap-l" style="--min-column-size: 200px">\nA\n</div>',
        )
        self.assertEqual(
            layout.apply('::::wa-split column align:center\nA\nB\n::::'),
            '<div class="wa-split:column wa-align-items-center">\nA\nB\n</div>',
        )
        self.assertEqual(
            layout.apply('::::flank end size:10rem content:"70%";\nX\n::::'),
            '<div class="wa-flank:end" style="--flank-size: 10rem; --content-percentage: 70%">\nX\n</div>',
        )
        self.assertEqual(
            layout.apply('::::frame square radius:pill gap:huge\nX\n::::'),
            '<div class="wa-frame:square wa-border-radius-pill">\nX\n</div>',
        )
        self.assertEqual(
            layout.apply('::::stack justify:space-between min:5rem row\n**Raw** body\n::::'),
            '<div class="wa-stack wa-justify-content-space-between">\n**Raw** body\n</div>',
        )
        self.assertEqual(layout.apply('::::grid\nA'), '::::grid\nA')
        self.assertEqual(layout.apply('::::gridx\nA\n::::'), '::::gridx\nA\n::::')

    def test_badge_transformer(self):
        badge = build_committed(BadgeTransformer)

        self.assertEqual(badge.apply('!!!brand pill\nNew\n!!!'), '<wa-badge variant="brand" pill>New</wa-badge>')
        self.assertEqual(badge.apply('!!!pill brand\nNew\n!!!'), badge.apply('!!!brand pill\nNew\n!!!'))
        self.assertEqual(badge.apply('!!!success warning\nX\n!!!'), '<wa-badge variant="warning">X</wa-badge>')
        self.assertEqual(
            badge.apply('!!!pulse outlined danger\nX\n!!!'),
            '<wa-badge variant="danger" appearance="outlined" attention="pulse">X</wa-badge>',
        )
        self.assertEqual(badge.apply('!!!\n  Spaced  \n!!!'), '<wa-badge>Spaced</wa-badge>')
        self.assertEqual(badge.apply(':::wa-badge danger\nAlert\n:::'), '<wa-badge variant="danger">Alert</wa-badge>')
        self.assertEqual(badge.apply(':::wa-badgex\nA\n:::'), ':::wa-badgex\nA\n:::')
        self.assertEqual(
            badge.apply('Before\n!!!\nA\n!!!\n!!!\nB\n!!!\nAfter'),
            'Before\n<wa-badge>A</wa-badge>\n<wa-badge>B</wa-badge>\nAfter',
        )
        self.assertEqual(badge.apply('!!!\nContent without closing'), '!!!\nContent without closing')

        badge = build_committed(BadgeTransformer, Configuration())
        self.assertEqual(
            badge.apply('!!!\n**Bold** text\n!!!'),
            '<wa-badge><strong>Bold</strong>&nbsp;text</wa-badge>',
        )

    def test_button_transformer(self):
        button = build_committed(ButtonTransformer)

        self.assertEqual(
            button.apply('%%%brand icon:gear\nSettings\n%%%'),
            '<wa-button variant="brand"><wa-icon slot="start" name="gear"></wa-icon>Settings</wa-button>',
        )
        self.assertEqual(
            button.apply('%%%brand disabled\n[Link](https://example.com)\n%%%'),
            '<wa-button variant="brand" disabled href="https://example.com">Link</wa-button>',
        )
        self.assertEqual(
            button.apply('%%%large caret pill outlined\nMenu\n%%%'),
            '<wa-button appearance="outlined" size="large" pill with-caret>Menu</wa-button>',
        )
        self.assertEqual(
            button.apply('%%%icon:end:arrow-right icon:end:chevron-right\nNext\n%%%'),
            '<wa-button><wa-icon slot="end" name="chevron-right"></wa-icon>Next</wa-button>',
        )
        self.assertEqual(
            button.apply(':::wa-button plain loading\nWait\n:::'),
            '<wa-button appearance="plain" loading>Wait</wa-button>',
        )
        self.assertEqual(
            button.apply('%%%icon:x"onclick="alert(1)\nGo\n%%%'),
            '<wa-button><wa-icon slot="start" name="x&quot;onclick=&quot;alert(1)"></wa-icon>Go</wa-button>',
        )
        self.assertEqual(
            button.apply('%%%\nSee [docs](https://example.com) here\n%%%'),
            '<wa-button>See [docs](https://example.com) here</wa-button>',
        )

    def test_callout_transformer(self):
        callout = build_committed(CalloutTransformer)

        self.assertEqual(
            callout.apply(':::info\nNote\n:::'),
            '<wa-callout variant="brand">'
            '<wa-icon slot="icon" name="circle-info" variant="solid"></wa-icon>'
            '<p>Note</p>'
            '</wa-callout>',
        )
        self.assertEqual(
            callout.apply(':::warning small filled icon:bolt\nCareful\n:::'),
            '<wa-callout variant="warning" appearance="filled" size="small">'
            '<wa-icon slot="icon" name="bolt" variant="solid"></wa-icon>'
            '<p>Careful</p>'
            '</wa-callout>',
        )
        self.assertEqual(
            callout.apply(':::wa-callout success\nDone\n:::'),
            '<wa-callout variant="success">'
            '<wa-icon slot="icon" name="circle-check" variant="solid"></wa-icon>'
            '<p>Done</p>'
            '</wa-callout>',
        )
        self.assertEqual(callout.apply(':::infox\nNote\n:::'), ':::infox\nNote\n:::')
        self.assertEqual(callout.apply(':::info\nNo closing'), ':::info\nNo closing')

        callout = build_committed(
            CalloutTransformer,
            Configuration(callout_icons={'danger': 'skull', 'info': 'lightbulb'}, render_markdown=render_paragraph),
        )
        self.assertEqual(
            callout.apply(':::wa-callout danger\nX\n:::'),
            '<wa-callout variant="danger"><wa-icon slot="icon" name="skull" variant="solid"></wa-icon><p>X</p></wa-callout>',
        )
        self.assertEqual(
            callout.apply(':::brand\nX\n:::'),
            '<wa-callout variant="brand"><wa-icon slot="icon" name="lightbulb" variant="solid"></wa-icon><p>X</p></wa-callout>',
        )

    def test_card_transformer(self):
        card = build_committed(CardTransformer)

        self.assertEqual(
            card.apply('===filled\n![Hero](hero.jpg)\n# Title\nBody text\n[Go](https://example.com)\n==='),
            '<wa-card appearance="filled" with-media with-header with-footer>'
            '<img slot="media" src="hero.jpg" alt="Hero">'
            '<div slot="header"><p>Title</p></div>'
            '<p>Body text</p>'
            '<div slot="footer"><wa-button href="https://example.com">Go</wa-button></div>'
            '</wa-card>',
        )
        self.assertEqual(card.apply('===outlined vertical\nJust content\n==='), '<wa-card><p>Just content</p></wa-card>')
        self.assertEqual(
            card.apply('===\n![A "b"](x.png)\nBody\n[Read & more](https://e.com/?a=1&b=2)\n==='),
            '<wa-card with-media with-footer>'
            '<img slot="media" src="x.png" alt="A &quot;b&quot;">'
            '<p>Body</p>'
            '<div slot="footer"><wa-button href="https://e.com/?a=1&amp;b=2">Read &amp; more</wa-button></div>'
            '</wa-card>',
        )
        self.assertEqual(
            card.apply(':::wa-card horizontal accent\n![Photo](p.png)\nCaption\n:::'),
            '<wa-card appearance="accent" orientation="horizontal" with-media>'
            '<img slot="media" src="p.png" alt="Photo">'
            '<p>Caption</p>'
            '</wa-card>',
        )

    def test_carousel_transformer(self):
        carousel = build_committed(CarouselTransformer)

        self.assertEqual(
            carousel.apply(
                '~~~~~~3 2 loop navigation vertical autoplay-interval:3000 aspect-ratio:16/9\n'
                '~~~\nSlide 1\n~~~\n'
                '~~~\nSlide 2\n~~~\n'
                '~~~~~~'
            ),
            '<wa-carousel slides-per-page="3" slides-per-move="2" loop navigation autoplay-interval="3000" '
            'orientation="vertical" style="--aspect-ratio: 16/9">'
            '<wa-carousel-item><p>Slide 1</p></wa-carousel-item>'
            '<wa-carousel-item><p>Slide 2</p></wa-carousel-item>'
            '</wa-carousel>',
        )
        self.assertEqual(
            carousel.apply(':::wa-carousel pagination\n~~~\nOnly\n~~~\n:::'),
            '<wa-carousel pagination><wa-carousel-item><p>Only</p></wa-carousel-item></wa-carousel>',
        )
        self.assertEqual(
            carousel.apply('~~~~~~\n~~~\n~~~\n~~~~~~'),
            '<wa-carousel><wa-carousel-item><p></p></wa-carousel-item></wa-carousel>',
        )
        self.assertEqual(carousel.apply('~~~~~~\n~~~\nA\n~~~\n'), '~~~~~~\n~~~\nA\n~~~\n')

        unterminated_carousel = '~~~~~~\n' + '~~~\nx\n~~~\n' * 30 + 'no close'
        start_time = time.perf_counter()
        self.assertEqual(carousel.apply(unterminated_carousel), unterminated_carousel)
        self.assertLess(time.perf_counter() - start_time, 2)

    def test_comparison_transformer(self):
        comparison = build_committed(ComparisonTransformer)

        self.assertEqual(
            comparison.apply('|||25\n![Before](a.jpg)\n![After "x"](b.jpg)\n|||'),
            '<wa-comparison position="25">'
            '<img slot="before" src="a.jpg" alt="Before" />'
            '<img slot="after" src="b.jpg" alt="After &quot;x&quot;" />'
            '</wa-comparison>',
        )
        self.assertEqual(
            comparison.apply(':::wa-comparison\n![A](a.jpg)\n![B](b.jpg)\n:::'),
            '<wa-comparison><img slot="before" src="a.jpg" alt="A" /><img slot="after" src="b.jpg" alt="B" /></wa-comparison>',
        )
        self.assertEqual(comparison.apply('|||\n![Only](a.jpg)\n|||'), '|||\n![Only](a.jpg)\n|||')
        self.assertIn(
            '<img slot="before" src="a&quot;.jpg" alt="A" />',
            comparison.apply('|||\n![A](a".jpg)\n![B](b.jpg)\n|||'),
        )

    def test_copy_button_transformer(self):
        copy_button = build_committed(CopyButtonTransformer)

        self.assertEqual(
            copy_button.apply('<<<top 2000 copy-label="Copy it" success-label=\'Done!\'\nnpm install "x" & y\n<<<'),
            '<wa-copy-button value="npm install &quot;x&quot; & y" tooltip-placement="top" '
            'copy-label="Copy it" success-label="Done!" feedback-duration="2000"></wa-copy-button>',
        )
        self.assertEqual(
            copy_button.apply('<<<from="code-1" disabled\nignored\n<<<'),
            '<wa-copy-button from="code-1" disabled></wa-copy-button>',
        )
        self.assertEqual(copy_button.apply('<<<\n   \n<<<'), '<wa-copy-button value=""></wa-copy-button>')
        self.assertEqual(
            copy_button.apply(':::wa-copy-button\nIt\'s **raw**\n:::'),
            '<wa-copy-button value="It&#39;s **raw**"></wa-copy-button>',
        )

    def test_details_transformer(self):
        details = build_committed(DetailsTransformer)

        self.assertEqual(
            details.apply(
                '^^^filled-outlined start open name:faq icon:expand:plus icon:collapse:minus\n'
                'Question\n>>>\nAnswer\n^^^'
            ),
            "<wa-details appearance='filled outlined' icon-placement='start' open name='faq'>"
            '<wa-icon slot="expand-icon" name="plus"></wa-icon>'
            '<wa-icon slot="collapse-icon" name="minus"></wa-icon>'
            "<span slot='summary'><p>Question</p></span>"
            '<p>Answer</p>'
            '</wa-details>',
        )
        self.assertEqual(
            details.apply('^^^icon:plus\nQ\n>>>\nA\n^^^'),
            "<wa-details appearance='outlined' icon-placement='end'><span slot='summary'><p>Q</p></span><p>A</p></wa-details>",
        )
        self.assertEqual(
            details.apply(':::wa-details plain disabled\nQ\n>>>\nA\n:::'),
            "<wa-details appearance='plain' icon-placement='end' disabled>"
            "<span slot='summary'><p>Q</p></span><p>A</p></wa-details>",
        )
        self.assertEqual(details.apply('^^^\nQ\nA\n^^^'), '^^^\nQ\nA\n^^^')

    def test_dialog_transformer(self):
        dialog = build_committed(DialogTransformer)

        content = '# Title with "quotes" and \'apostrophes\'\nBody'
        dialog_id = compute_dialog_id('Open', content)
        self.assertEqual(
            dialog.apply(f'???light-dismiss 600px\nOpen\n>>>\n{content}\n???'),
            f"<wa-button data-dialog='open {dialog_id}'>Open</wa-button>\n"
            f"<wa-dialog id='{dialog_id}' label='Title with &quot;quotes&quot; and &#39;apostrophes&#39;' "
            f"light-dismiss style='--width: 600px'>\n"
            f'<p>Body</p>\n'
            f"<wa-button slot='footer' variant='primary' data-dialog='close'>Close</wa-button>\n"
            f'</wa-dialog>',
        )

        output = dialog.apply(':::wa-dialog 45.5em\nClick <me>\n>>>\nText\n:::')
        self.assertIn("<wa-button data-dialog='open dialog-", output)
        self.assertIn(">Click &lt;me&gt;</wa-button>", output)
        self.assertIn("label='Click &lt;me&gt;'", output)
        self.assertIn("style='--width: 45.5em'", output)
        self.assertNotIn('light-dismiss', output)

        self.assertEqual(dialog.apply('???\nOpen\nText\n???'), '???\nOpen\nText\n???')

    def test_compute_dialog_id(self):
        self.assertRegex(compute_dialog_id('Open', 'Content'), r'\Adialog-[0-9a-f]{8}\Z')
        self.assertEqual(compute_dialog_id('Open', 'Content'), compute_dialog_id('Open', 'Content'))
        self.assertNotEqual(compute_dialog_id('Open', 'Content'), compute_dialog_id('Open', 'Other'))

    def test_image_dialog_transformer(self):
        image_dialog = build_committed(ImageDialogTransformer, image_dialog_options=ImageDialogOptions())

        output = image_dialog.apply('![Alt](img.png)')
        self.assertEqual(
            output,
            '???light-dismiss\n'
            f'<img src="img.png" alt="Alt" style="{IMAGE_DIALOG_TRIGGER_STYLE}" />\n'
            '>>>\n'
            '# Alt\n'
            '\n'
            f'<img src="img.png" alt="Alt" style="{IMAGE_DIALOG_CONTENT_STYLE}" />\n'
            '???',
        )
        self.assertIsNotNone(compile_block_pattern(DialogTransformer.PRIMARY_REGEX).search(output))

        output = image_dialog.apply('![Chart](c.png "Sales 80vw")')
        self.assertTrue(output.startswith('???light-dismiss 80vw\n'))
        self.assertNotIn('title=', output)

        output = image_dialog.apply('![](a.png "A photo")')
        self.assertIn(' title="A photo" />', output)
        self.assertIn('# Image\n', output)

        self.assertEqual(image_dialog.apply('![Logo](logo.png "nodialog")'), '![Logo](logo.png "nodialog")')
        self.assertEqual(image_dialog.apply('```\n![A](a.png)\n```'), '```\n![A](a.png)\n```')
        self.assertEqual(image_dialog.apply('Inline `![A](a.png)` code'), 'Inline `![A](a.png)` code')
        self.assertEqual(image_dialog.apply('|||\n![A](a.png)\n|||'), '|||\n![A](a.png)\n|||')

        image_dialog = build_committed(ImageDialogTransformer, image_dialog_options=ImageDialogOptions('50vw'))
        self.assertTrue(image_dialog.apply('![A](a.png)').startswith('???light-dismiss 50vw\n'))

        output = image_dialog.apply('![Alt "x"](img.png)')
        self.assertIn('alt="Alt &quot;x&quot;"', output)
        self.assertNotIn('alt="Alt "x""', output)
        self.assertIn('# Alt "x"\n', output)

        output = image_dialog.apply('![A](a&b.png "x<y")')
        self.assertIn('<img src="a&amp;b.png" alt="A" ', output)
        self.assertIn(' title="x&lt;y" />', output)

    def test_icon_transformer(self):
        icon = build_committed(IconTransformer)

        self.assertEqual(
            icon.apply('Use $$$gear here, not `$$$home`.\n```\n$$$code\n```\n:::wa-icon star\n:::'),
            'Use <wa-icon name="gear"></wa-icon> here, not `$$$home`.\n```\n$$$code\n```\n<wa-icon name="star"></wa-icon>',
        )
        self.assertEqual(icon.apply('$$$a-b_c.'), '<wa-icon name="a-b_c"></wa-icon>.')
        self.assertEqual(icon.apply('<code>$$$raw</code>'), '<code>$$$raw</code>')
        self.assertEqual(icon.apply('$$$ nothing'), '$$$ nothing')
        self.assertEqual(icon.apply('$$$icon name'), '$$$icon name')

    def test_tag_transformer(self):
        tag = build_committed(TagTransformer)

        self.assertEqual(
            tag.apply('Text @@@  brand   Version   @@@  end'),
            'Text <wa-tag variant="brand">Version</wa-tag>  end',
        )
        self.assertEqual(
            tag.apply('Status: @@@ success icon:check Approved today @@@'),
            'Status: <wa-tag variant="success"><wa-icon name="check"></wa-icon>Approved today</wa-tag>',
        )
        self.assertEqual(tag.apply('@@@ brand @@@'), '<wa-tag>brand</wa-tag>')
        self.assertEqual(tag.apply('@@@brand\nVersion\n@@@'), '<wa-tag variant="brand">Version</wa-tag>')
        self.assertEqual(
            tag.apply('@@@neutral\r\nLine one\r\nLine two\r\n@@@'),
            '<wa-tag variant="neutral">Line one\nLine two</wa-tag>',
        )
        self.assertEqual(tag.apply('@@@invalid\nText\n@@@'), '<wa-tag>Text</wa-tag>')
        self.assertEqual(
            tag.apply(':::wa-tag large pill with-remove\nRemovable\n:::'),
            '<wa-tag size="large" pill with-remove>Removable</wa-tag>',
        )

    def test_tabs_transformer(self):
        tabs = build_committed(TabsTransformer)

        self.assertEqual(
            tabs.apply(
                '++++++bottom manual second no-scroll-controls\n'
                '+++ First\nOne\n+++\n'
                '+++ Second\nTwo\n+++\n'
                '++++++'
            ),
            '<wa-tab-group placement="bottom" activation="manual" active="second" without-scroll-controls>'
            '<wa-tab panel="tab-1">First</wa-tab>'
            '<wa-tab panel="tab-2">Second</wa-tab>'
            '<wa-tab-panel name="tab-1"><p>One</p></wa-tab-panel>'
            '<wa-tab-panel name="tab-2"><p>Two</p></wa-tab-panel>'
            '</wa-tab-group>',
        )
        expected_single_tab_html = (
            '<wa-tab-group placement="top">'
            '<wa-tab panel="tab-1">A</wa-tab>'
            '<wa-tab-panel name="tab-1"><p>X</p></wa-tab-panel>'
            '</wa-tab-group>'
        )
        self.assertEqual(tabs.apply(':::wa-tab-group\n+++ A\nX\n+++\n:::'), expected_single_tab_html)
        self.assertEqual(tabs.apply(':::wa-tabs\n+++ A\nX\n+++\n:::'), expected_single_tab_html)
        self.assertEqual(tabs.apply('++++++\n+++ A\nX\n+++\n'), '++++++\n+++ A\nX\n+++\n')

        unterminated_tabs = '++++++\n' + '+++ T\nx\n+++\n' * 30 + 'no close'
        start_time = time.perf_counter()
        self.assertEqual(tabs.apply(unterminated_tabs), unterminated_tabs)
        self.assertLess(time.perf_counter() - start_time, 2)

    def test_custom_component_transformer(self):
        custom = build_committed(
            CustomComponentTransformer,
            Configuration(custom_components={'note': 'my-note'}, render_markdown=render_paragraph),
        )

        self.assertEqual(
            custom.apply(':::note #n1 .wide open\nHi\n:::'),
            '<my-note id="n1" class="wide" open><p>Hi</p></my-note>',
        )
        self.assertEqual(custom.apply(':::note\nHi\n:::'), '<my-note><p>Hi</p></my-note>')
        self.assertEqual(custom.apply(':::notes\nHi\n:::'), ':::notes\nHi\n:::')
        self.assertEqual(custom.apply(':::other\nHi\n:::'), ':::other\nHi\n:::')

        custom = build_committed(CustomComponentTransformer)
        self.assertEqual(custom.apply(':::note\nHi\n:::'), ':::note\nHi\n:::')

    def test_unchanged_text(self):
        document = 'Plain *markdown* with [a link](https://example.com)\n\n- item\n'
        for transformer_class in (
            LayoutTransformer,
            BadgeTransformer,
            ButtonTransformer,
            CalloutTransformer,
            CardTransformer,
            CarouselTransformer,
            ComparisonTransformer,
            CopyButtonTransformer,
            DetailsTransformer,
            DialogTransformer,
            IconTransformer,
            TagTransformer,
            TabsTransformer,
        ):
            self.assertEqual(build_committed(transformer_class).apply(document), document)

if __name__ == '__main__':
    unittest.main()
