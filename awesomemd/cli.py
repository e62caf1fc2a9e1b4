"""
# Awesome-Markdown: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import os
import re
import sys
from typing import Optional

from awesomemd._version import __version__
from awesomemd.configuration import Configuration, ImageDialogOptions
from awesomemd.constants import COMMAND_LINE_ERROR_EXIT_CODE, GENERIC_ERROR_EXIT_CODE
from awesomemd.core import process
from awesomemd.exceptions import InvalidOptionException

DESCRIPTION = '''
    Transform Awesome-Markdown component blocks into web-component markup.
'''
MARKDOWN_FILE_NAME_HELP = '''
    name of markdown file to be transformed
    (can be abbreviated as `file` or `file.` for increased productivity)
'''
ALL_MODE_HELP = '''
    transform all markdown files under the working directory
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints every transformation applied)
'''
IMAGE_DIALOG_HELP = '''
    expand markdown images into click-to-enlarge dialogs
'''
DEFAULT_WIDTH_HELP = '''
    default dialog width (CSS length) for expanded images (implies --image-dialog)
'''
CALLOUT_ICON_HELP = '''
    icon for a callout variant, e.g. `warning=bolt` (may be repeated)
'''
CUSTOM_COMPONENT_HELP = '''
    custom component, e.g. `note=my-note` for `:::note` --> `<my-note>` (may be repeated)
'''
OUTPUT_EXTENSION = '.html'


def is_markdown_file(file_name: str) -> bool:
    return file_name.endswith('.md')


def extract_markdown_name(markdown_file_name_argument: str) -> str:
    """
    Extract name-without-extension from a markdown file name argument.

    Here, markdown file name argument may be of the form `«name».md`, `«name».`, or `«name»`.
    The path is normalised by resolving `./` and `../`.
    """
    markdown_file_name_argument = os.path.normpath(markdown_file_name_argument)
    markdown_name = re.sub(pattern=r'[.](md)? \Z', repl='', string=markdown_file_name_argument, flags=re.VERBOSE)

    return markdown_name


def parse_key_value_argument(argument: str, option_name: str) -> tuple[str, str]:
    """
    Parse a `«key»=«value»` option argument.
    """
    match = re.fullmatch(pattern=r'(?P<key> [^=\s]+ ) = (?P<value> [^=\s]+ )', string=argument, flags=re.VERBOSE)
    if match is None:
        raise InvalidOptionException(f'error: argument {option_name}: expected `KEY=VALUE`, got `{argument}`')

    return match.group('key'), match.group('value')


def parse_command_line_arguments() -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-a', '--all',
        dest='all_mode_enabled',
        action='store_true',
        help=ALL_MODE_HELP,
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        '--image-dialog',
        dest='image_dialog_enabled',
        action='store_true',
        help=IMAGE_DIALOG_HELP,
    )
    argument_parser.add_argument(
        '--default-width',
        dest='default_width',
        default=None,
        help=DEFAULT_WIDTH_HELP,
        metavar='WIDTH',
    )
    argument_parser.add_argument(
        '--callout-icon',
        dest='callout_icon_arguments',
        action='append',
        default=[],
        help=CALLOUT_ICON_HELP,
        metavar='VARIANT=ICON',
    )
    argument_parser.add_argument(
        '--custom-component',
        dest='custom_component_arguments',
        action='append',
        default=[],
        help=CUSTOM_COMPONENT_HELP,
        metavar='NAME=ELEMENT',
    )
    argument_parser.add_argument(
        'markdown_file_name_arguments',
        default=[],
        help=MARKDOWN_FILE_NAME_HELP,
        metavar='file.md',
        nargs='*',
    )

    return argument_parser.parse_args()


def build_configuration(parsed_arguments: argparse.Namespace) -> Configuration:
    callout_icons = dict(
        parse_key_value_argument(argument, '--callout-icon')
        for argument in parsed_arguments.callout_icon_arguments
    )
    custom_components = dict(
        parse_key_value_argument(argument, '--custom-component')
        for argument in parsed_arguments.custom_component_arguments
    )

    return Configuration(callout_icons=callout_icons, custom_components=custom_components)


def build_image_dialog_options(parsed_arguments: argparse.Namespace) -> Optional[ImageDialogOptions]:
    default_width = parsed_arguments.default_width
    if not parsed_arguments.image_dialog_enabled and default_width is None:
        return None

    return ImageDialogOptions(default_width=default_width)


def generate_html_file(markdown_file_name_argument: str, configuration: Configuration,
                       image_dialog_options: Optional[ImageDialogOptions], verbose_mode_enabled: bool,
                       uses_command_line_argument: bool):
    markdown_name = extract_markdown_name(markdown_file_name_argument)
    markdown_file_name = f'{markdown_name}.md'
    try:
        with open(markdown_file_name, 'r', encoding='utf-8') as markdown_file:
            content = markdown_file.read()
    except FileNotFoundError as file_not_found_error:
        if uses_command_line_argument:
            print(f'error: argument `{markdown_file_name_argument}`: file `{markdown_file_name}` not found',
                  file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)
        else:
            error_message = f'file `{markdown_file_name}` not found for `{markdown_file_name}` in markdown_file_names'
            raise FileNotFoundError(error_message) from file_not_found_error

    output = process(content, configuration, image_dialog_options, verbose_mode_enabled)

    output_file_name = f'{markdown_name}{OUTPUT_EXTENSION}'
    try:
        with open(output_file_name, 'w', encoding='utf-8') as output_file:
            output_file.write(output)
        print(f'success: wrote to `{output_file_name}`')
    except IOError:
        print(f'error: cannot write to `{output_file_name}`', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def main():
    parsed_arguments = parse_command_line_arguments()
    markdown_file_name_arguments = parsed_arguments.markdown_file_name_arguments
    all_mode_enabled = parsed_arguments.all_mode_enabled
    verbose_mode_enabled = parsed_arguments.verbose_mode_enabled

    try:
        configuration = build_configuration(parsed_arguments)
        image_dialog_options = build_image_dialog_options(parsed_arguments)
    except InvalidOptionException as invalid_option_exception:
        print(invalid_option_exception, file=sys.stderr)
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    if all_mode_enabled:
        if len(markdown_file_name_arguments) > 0:
            print('error: option -a (or --all) cannot be used with positional argument', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

        markdown_file_names = [
            os.path.join(path, file_name)
            for path, _, file_names in os.walk(os.curdir)
            for file_name in file_names
            if is_markdown_file(file_name)
        ]
        for markdown_file_name in sorted(markdown_file_names):
            generate_html_file(markdown_file_name, configuration, image_dialog_options, verbose_mode_enabled,
                               uses_command_line_argument=False)

    else:
        for markdown_file_name_argument in markdown_file_name_arguments:
            generate_html_file(markdown_file_name_argument, configuration, image_dialog_options,
                               verbose_mode_enabled, uses_command_line_argument=True)


if __name__ == '__main__':
    main()
