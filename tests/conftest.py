"""Helpers building .csf content by hand for the tests."""
import struct

import pytest


def obfuscate(text):
    """UTF-16LE bytes of text with every byte complemented, as stored in .csf files."""
    return bytes(b ^ 0xFF for b in text.encode('utf-16-le'))


def csf_header(numLabels, numStrings=None, version=3, language=0):
    if numStrings is None:
        numStrings = numLabels
    return b' FSC' + struct.pack('<iiiii', version, numLabels, numStrings, 0, language)


def label_record(name, numValues):
    rawName = name if isinstance(name, bytes) else name.encode('ascii')
    return b' LBL' + struct.pack('<ii', numValues, len(rawName)) + rawName


def value_record(text=None, raw=None, length=None, extra=None):
    """
    A " RTS" value, or a "WRTS" value when extra is given.

    raw and length override the obfuscated bytes and the declared character count.
    """
    if raw is None:
        raw = obfuscate(text)
    if length is None:
        length = len(raw) // 2
    if extra is None:
        return b' RTS' + struct.pack('<i', length) + raw
    return b'WRTS' + struct.pack('<i', length) + raw + struct.pack('<i', len(extra)) + extra


@pytest.fixture
def simple_csf_bytes():
    """Two labels, the first one spanning two lines."""
    return (
        csf_header(2, version=3, language=2)
        + label_record("GUI:Hello", 1) + value_record("Hello\nWorld")
        + label_record("NAME:Tank", 1) + value_record("Grizzly Tank")
    )
