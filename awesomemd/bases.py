"""
# Awesome-Markdown: bases.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Base classes for component transformers.
"""

import abc
import re
from typing import Optional

from awesomemd.configuration import Configuration
from awesomemd.constants import VERBOSE_MODE_DIVIDER_SYMBOL_COUNT
from awesomemd.exceptions import CommittedMutateException, MissingAttributeException, UncommittedApplyException
from awesomemd.matchers import apply_dual, compile_block_pattern


class Transformer(abc.ABC):
    """
    Base class for a component transformer.

    A transformer rewrites every occurrence of one component's syntax in a document
    and leaves all other text byte-for-byte unchanged.
    Attributes are set between construction and `commit()`, and are frozen thereafter.
    """
    _is_committed: bool
    _id: str
    _configuration: Optional[Configuration]
    _verbose_mode_enabled: bool

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        self._is_committed = False
        self._id = id_
        self._configuration = None
        self._verbose_mode_enabled = verbose_mode_enabled

    @property
    def id_(self) -> str:
        return self._id

    @property
    def configuration(self) -> Optional[Configuration]:
        return self._configuration

    @configuration.setter
    def configuration(self, value: Configuration):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `configuration` after `commit()`')

        self._configuration = value

    def commit(self):
        self._validate_mandatory_attributes()
        self._set_apply_method_variables()
        self._is_committed = True

    def apply(self, string: str) -> str:
        if not self._is_committed:
            raise UncommittedApplyException('error: cannot call `apply(string)` before `commit()`')

        string_before = string
        string = self._apply(string)
        string_after = string

        if self._verbose_mode_enabled:
            if string_before == string_after:
                no_change_indicator = ' (no change)'
            else:
                no_change_indicator = ''

            print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BEFORE #{self._id}')
            print(string_before)
            print('=' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + no_change_indicator)
            print(string_after)
            print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' AFTER #{self._id}')
            print('\n\n\n\n')

        return string_after

    def _validate_mandatory_attributes(self):
        """
        Ensure all mandatory attributes have been set.
        """
        if self._configuration is None:
            raise MissingAttributeException('configuration')

    @abc.abstractmethod
    def _set_apply_method_variables(self):
        """
        Set variables used in `self._apply(string)`.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _apply(self, string: str) -> str:
        """
        Apply the transformation to a string.
        """
        raise NotImplementedError


class DualSyntaxTransformer(Transformer, abc.ABC):
    """
    Base class for a transformer with a primary syntax and an alternative syntax.

    The primary syntax uses a distinctive delimiter (e.g. `!!!`),
    the alternative syntax uses `:::wa-«component»`.
    Both passes share `self._transform_match(match)`,
    and a block written in either syntax gives identical output.
    """
    PRIMARY_REGEX: str
    ALTERNATIVE_REGEX: str

    _primary_pattern_compiled: re.Pattern
    _alternative_pattern_compiled: re.Pattern

    def _set_apply_method_variables(self):
        self._primary_pattern_compiled = compile_block_pattern(self.PRIMARY_REGEX)
        self._alternative_pattern_compiled = compile_block_pattern(self.ALTERNATIVE_REGEX)

    def _apply(self, string: str) -> str:
        return apply_dual(
            string,
            self._primary_pattern_compiled,
            self._alternative_pattern_compiled,
            self._transform_match,
        )

    @abc.abstractmethod
    def _transform_match(self, match: re.Match) -> str:
        """
        Build the replacement for a matched block, or return `match.group()` to leave it as written.
        """
        raise NotImplementedError
