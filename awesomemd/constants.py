"""
# Awesome-Markdown: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

CSS_LENGTH_REGEX = r'[0-9]+ (?: [.] [0-9]+ )? (?: px | em | rem | vw | vh | % | ch )'

CALLOUT_VARIANTS = ('info', 'success', 'neutral', 'warning', 'danger')
DEFAULT_CALLOUT_ICONS = {
    'info': 'circle-info',
    'success': 'circle-check',
    'neutral': 'gear',
    'warning': 'triangle-exclamation',
    'danger': 'circle-exclamation',
}

IMAGE_DIALOG_TRIGGER_STYLE = 'cursor: zoom-in; display: block; width: 100%; height: auto;'
IMAGE_DIALOG_CONTENT_STYLE = 'max-width: 100%; height: auto; display: block; margin: 0 auto;'
IMAGE_DIALOG_OPT_OUT_KEYWORD = 'nodialog'
IMAGE_DIALOG_FALLBACK_LABEL = 'Image'

DIALOG_ID_PREFIX = 'dialog-'
DIALOG_ID_HASH_LENGTH = 8
DIALOG_IMAGE_TRIGGER_STYLE_TEMPLATE = '''\
<style>
  #{button_id}::part(base) {{
    padding: 0;
    margin: 0;
    border: none;
    background: transparent;
    box-shadow: none;
    color: inherit;
    min-width: 0;
    height: auto;
  }}
  #{button_id}::part(base):hover {{
    background: transparent;
    border-color: transparent;
  }}
  #{button_id}::part(base):active {{
    background: transparent;
    border-color: transparent;
  }}
</style>'''
