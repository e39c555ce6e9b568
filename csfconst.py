# -*- coding: utf-8 -*-
"""
Format constants shared by the .csf and .ini readers and writers.

See https://modenc.renegadeprojects.com/CSF_File_Format for the binary layout.
"""

# Binary .csf markers, stored as 4 ASCII bytes
CSF_MAGIC = b' FSC'
CSF_LABEL_MARKER = b' LBL'
CSF_VALUE_MARKER = b' RTS'
CSF_EXTRA_VALUE_MARKER = b'WRTS'

# RA2, YR, Generals, ZH and the BFME series use version 3. Nox uses version 2.
CSF_DEFAULT_VERSION = 3

# Lowest and highest values of a signed 32-bit header field
INT32_MIN = -0x80000000
INT32_MAX = 0x7FFFFFFF

# Line break used inside a label value
LINE_BREAK = '\n'

# Label names are ASCII without control characters
LABEL_CHAR_MIN = 32
LABEL_CHAR_MAX = 126

# .ini header section, named after the SadPencil.Ra2CsfFile .ini format so
# existing .ini string tables load unchanged.
INI_TYPE_NAME = 'SadPencil.Ra2CsfFile.Ini'
INI_HEADER_SECTION_NAME = 'SadPencil.Ra2CsfFile.Ini'
INI_HEADER_INI_VERSION_KEY = 'IniVersion'
INI_HEADER_CSF_VERSION_KEY = 'CsfVersion'
INI_HEADER_CSF_LANGUAGE_KEY = 'CsfLang'
INI_VERSION = 2

# Keys holding the lines of a label value: Value, ValueLine2, ValueLine3, ...
INI_VALUE_KEY = 'Value'
INI_VALUE_LINE_SUFFIX = 'Line'
