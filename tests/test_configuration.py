"""
# Awesome-Markdown: test_configuration.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `configuration.py`.
"""

import unittest

from awesomemd import rendering
from awesomemd.configuration import Configuration, ImageDialogOptions, normalise_image_dialog_option
from awesomemd.constants import DEFAULT_CALLOUT_ICONS
from awesomemd.exceptions import InvalidOptionException


class TestConfiguration(unittest.TestCase):
    def test_configuration_defaults(self):
        configuration = Configuration()
        self.assertEqual(configuration.callout_icons, DEFAULT_CALLOUT_ICONS)
        self.assertEqual(configuration.custom_components, {})
        self.assertIs(configuration.renderer, rendering.render_markdown)

    def test_configuration_callout_icons(self):
        configuration = Configuration(callout_icons={'warning': 'bolt'})
        self.assertEqual(configuration.get_callout_icon('warning'), 'bolt')
        self.assertEqual(configuration.get_callout_icon('danger'), DEFAULT_CALLOUT_ICONS['danger'])
        self.assertEqual(configuration.get_callout_icon('brand'), DEFAULT_CALLOUT_ICONS['info'])

        with self.assertWarns(UserWarning):
            configuration = Configuration(callout_icons={'bogus': 'x'})
        self.assertNotIn('bogus', configuration.callout_icons)

    def test_configuration_is_not_mutated_through_properties(self):
        custom_components = {'note': 'my-note'}
        configuration = Configuration(custom_components=custom_components)

        custom_components['other'] = 'my-other'
        configuration.custom_components['third'] = 'my-third'
        configuration.callout_icons['info'] = 'changed'

        self.assertEqual(configuration.custom_components, {'note': 'my-note'})
        self.assertEqual(configuration.get_callout_icon('info'), DEFAULT_CALLOUT_ICONS['info'])

    def test_configuration_custom_components_validation(self):
        self.assertRaises(InvalidOptionException, Configuration, custom_components={'1note': 'my-note'})
        self.assertRaises(InvalidOptionException, Configuration, custom_components={'note': 'my note'})
        self.assertRaises(InvalidOptionException, Configuration, custom_components={'': 'my-note'})

    def test_image_dialog_options(self):
        self.assertIsNone(ImageDialogOptions().default_width)
        self.assertEqual(ImageDialogOptions('80vw').default_width, '80vw')
        self.assertEqual(ImageDialogOptions(default_width='12.5rem').default_width, '12.5rem')
        self.assertRaises(InvalidOptionException, ImageDialogOptions, 'wide')
        self.assertRaises(InvalidOptionException, ImageDialogOptions, '80')

    def test_normalise_image_dialog_option(self):
        self.assertIsNone(normalise_image_dialog_option(None))
        self.assertIsNone(normalise_image_dialog_option(False))
        self.assertIsNone(normalise_image_dialog_option(True).default_width)

        image_dialog_options = ImageDialogOptions('50%')
        self.assertIs(normalise_image_dialog_option(image_dialog_options), image_dialog_options)

        self.assertRaises(InvalidOptionException, normalise_image_dialog_option, 'yes')
        self.assertRaises(InvalidOptionException, normalise_image_dialog_option, 1)


if __name__ == '__main__':
    unittest.main()
