"""
# Awesome-Markdown: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.

None of these are raised for malformed markup, which is always left as written.
"""


class CommittedMutateException(Exception):
    pass


class InvalidOptionException(Exception):
    pass


class MissingAttributeException(Exception):
    _missing_attribute: str

    def __init__(self, missing_attribute: str):
        super().__init__(f'error: mandatory attribute `{missing_attribute}` not set')
        self._missing_attribute = missing_attribute

    @property
    def missing_attribute(self) -> str:
        return self._missing_attribute


class UncommittedApplyException(Exception):
    pass
