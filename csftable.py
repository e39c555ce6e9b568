# -*- coding: utf-8 -*-
"""
In-memory string table shared by the .csf and .ini readers and writers.

A table maps label names to values. Label names are compared ignoring case:
"GUI:Foo" and "gui:foo" are the same label, and the table keeps whichever
casing was written last.
"""
import enum
from collections import namedtuple

from icu import Collator, Locale, UCollAttribute, UCollAttributeValue

from csfconst import CSF_DEFAULT_VERSION, LABEL_CHAR_MAX, LABEL_CHAR_MIN
from csferrors import InvalidLabelName


class CsfLang(enum.IntEnum):
    """The language field in the string table file."""
    EnglishUS = 0
    EnglishUK = 1
    German = 2
    French = 3
    Spanish = 4
    Italian = 5
    Japanese = 6
    Jabberwockie = 7
    Korean = 8
    Chinese = 9
    Unknown = -1  # any value that is not from 0 to 9


def get_csf_lang(value):
    """
    Convert an integer to CsfLang. Integers outside 0-9 give CsfLang.Unknown.

    Args:
        value (int): The language field read from a file.

    Returns:
        CsfLang: The matching language.
    """
    try:
        return CsfLang(int(value))
    except ValueError:
        return CsfLang.Unknown


# encoding_1252_read_workaround: convert 1252 glyphs to U+0080-U+009F when loading a .csf file.
# encoding_1252_write_workaround: convert U+0080-U+009F back to 1252 glyphs when saving a .csf file.
#   Off by default. Apart from the Trade Mark Sign, the game.fnt glyphs at the
#   Unicode code points are already correct.
# order_by_key: sort labels by name, naturally and ignoring case.
CsfFileOptions = namedtuple(
    'CsfFileOptions',
    ['encoding_1252_read_workaround', 'encoding_1252_write_workaround', 'order_by_key'],
    defaults=[True, False, False],
)


def validate_label_name(labelName):
    """
    Check whether a label name is valid: a non-empty ASCII string whose
    characters are all printable (32-126, space included).

    Args:
        labelName (str): The name of a label to be checked.

    Returns:
        bool: Whether the name is valid or not.
    """
    if not isinstance(labelName, str) or not labelName:
        return False
    return all(LABEL_CHAR_MIN <= ord(char) <= LABEL_CHAR_MAX for char in labelName)


def check_label_name(labelName, offset=None):
    """Raise InvalidLabelName when validate_label_name() rejects the name."""
    if not validate_label_name(labelName):
        raise InvalidLabelName("Invalid characters found in label name", offset=offset, label=labelName)


def natural_sort_key():
    """
    Return a sort key callable ordering label names naturally ("Label2" before
    "Label10") and ignoring case.
    """
    collator = Collator.createInstance(Locale.getRoot())
    collator.setStrength(Collator.PRIMARY)
    collator.setAttribute(UCollAttribute.CASE_LEVEL, UCollAttributeValue.OFF)
    collator.setAttribute(UCollAttribute.NUMERIC_COLLATION, UCollAttributeValue.ON)
    return collator.getSortKey


class CsfTable:
    """
    A string table: labels, language, version and options.

    Args:
        options (CsfFileOptions, optional): Behaviour of the readers and writers.
        language (CsfLang, optional): Defaults to CsfLang.EnglishUS.
        version (int, optional): Defaults to 3.
    """

    def __init__(self, options=None, language=CsfLang.EnglishUS, version=CSF_DEFAULT_VERSION):
        self.options = options if options is not None else CsfFileOptions()
        self.language = language
        self.version = version
        # lowercased name -> (name as last written, value)
        self._labels = {}

    @property
    def language(self):
        return self._language

    @language.setter
    def language(self, value):
        self._language = get_csf_lang(value)

    @property
    def labels(self):
        """A snapshot dict of label name -> value, in table order."""
        return dict(self._labels.values())

    def add_label(self, labelName, labelValue):
        """
        Add a label, or replace the value of an existing one.

        Args:
            labelName (str): The label name. Matched ignoring case.
            labelValue (str): The value. Lines are separated by '\\n'.

        Returns:
            bool: True if a label with that name already existed and was replaced.
        """
        check_label_name(labelName)
        if not isinstance(labelValue, str):
            raise TypeError(f"Label value must be str, not {type(labelValue).__name__}")

        key = labelName.lower()
        replaced = key in self._labels
        self._labels[key] = (labelName, labelValue)
        return replaced

    def remove_label(self, labelName):
        """
        Remove a label.

        Returns:
            bool: True if the label existed.
        """
        if not isinstance(labelName, str):
            return False
        return self._labels.pop(labelName.lower(), None) is not None

    def get_label(self, labelName, default=None):
        entry = self._labels.get(labelName.lower())
        return entry[1] if entry is not None else default

    def items(self):
        """Iterate (name, value) pairs in table order."""
        return iter(self._labels.values())

    def copy(self):
        clone = CsfTable(self.options, self.language, self.version)
        clone._labels = dict(self._labels)
        return clone

    def order_by_key(self):
        """Return a copy with labels ordered naturally by name, ignoring case."""
        sort_key = natural_sort_key()
        clone = CsfTable(self.options, self.language, self.version)
        for key in sorted(self._labels, key=sort_key):
            clone._labels[key] = self._labels[key]
        return clone

    def __contains__(self, labelName):
        return isinstance(labelName, str) and labelName.lower() in self._labels

    def __getitem__(self, labelName):
        return self._labels[labelName.lower()][1]

    def __len__(self):
        return len(self._labels)

    def __iter__(self):
        return (name for name, _ in self._labels.values())

    def __eq__(self, other):
        if not isinstance(other, CsfTable):
            return NotImplemented
        if (self.language, self.version, self.options) != (other.language, other.version, other.options):
            return False
        if self._labels.keys() != other._labels.keys():
            return False
        return all(self._labels[key][1] == other._labels[key][1] for key in self._labels)

    __hash__ = None

    def __repr__(self):
        return (f"CsfTable(labels={len(self._labels)}, language={self.language.name}, "
                f"version={self.version}, options={self.options})")
