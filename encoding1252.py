# -*- coding: utf-8 -*-
"""
Windows-1252 workaround for code points 128-159 (0x80-0x9F).

The original game.fnt of RA2 renders these code points with the Windows-1252
glyphs instead of the Unicode (ISO-8859-1) C1 control characters. A .csf file
made for the game therefore stores U+0085 where a translator meant the
ellipsis that 1252 places on byte 0x85.

to_unicode() turns the 1252 characters into the U+0080-U+009F code points the
game expects; to_legacy() reverses it.
"""
import unicodedata


def _is_control(char):
    return unicodedata.category(char) == 'Cc'


def build_1252_tables():
    """
    Build the substitution tables between 1252 glyphs and U+0080-U+009F.

    Bytes left undefined by code page 1252 (0x81, 0x8D, 0x8F, 0x90, 0x9D) map
    to C1 control characters and are skipped, leaving 27 pairs.

    Returns:
        dict, dict: 1252 character to Unicode character, and the reverse.
    """
    encoding1252ToUnicode = {}
    unicodeToEncoding1252 = {}
    for i in range(128, 160):
        unicodeChar = bytes([i, 0]).decode('utf-16-le')
        try:
            encoding1252Char = bytes([i]).decode('cp1252')
        except UnicodeDecodeError:
            encoding1252Char = unicodeChar

        if not _is_control(encoding1252Char):
            encoding1252ToUnicode[encoding1252Char] = unicodeChar
            unicodeToEncoding1252[unicodeChar] = encoding1252Char

    return encoding1252ToUnicode, unicodeToEncoding1252


ENCODING_1252_TO_UNICODE, UNICODE_TO_ENCODING_1252 = build_1252_tables()

# str.translate tables, keyed by code point
_TO_UNICODE_TABLE = str.maketrans(ENCODING_1252_TO_UNICODE)
_TO_LEGACY_TABLE = str.maketrans(UNICODE_TO_ENCODING_1252)


def to_unicode(text):
    """Replace 1252 glyphs such as '…' with their U+0080-U+009F code point."""
    return text.translate(_TO_UNICODE_TABLE)


def to_legacy(text):
    """Replace U+0080-U+009F code points with the 1252 glyph the game shows."""
    return text.translate(_TO_LEGACY_TABLE)
