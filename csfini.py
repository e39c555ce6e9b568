# -*- coding: utf-8 -*-
"""
Read and write the .ini representation of a string table.

The .ini file is a replacement of the .csf file that can be edited by hand:

    [SadPencil.Ra2CsfFile.Ini]
    IniVersion=2
    CsfVersion=3
    CsfLang=0

    [GUI:Example]
    Value=This is the first line.
    ValueLine2=This is the second line =-;#!

Section and key names are matched ignoring case. There is no comment syntax,
so '#' and ';' are ordinary characters. A value is everything after the first
'=' of its line, whitespace included.
"""
import itertools
import logging
import re
from collections import namedtuple

import chardet

from csfconst import (INI_HEADER_CSF_LANGUAGE_KEY, INI_HEADER_CSF_VERSION_KEY, INI_HEADER_INI_VERSION_KEY,
                      INI_HEADER_SECTION_NAME, INI_TYPE_NAME, INI_VALUE_KEY, INI_VALUE_LINE_SUFFIX, INI_VERSION,
                      INT32_MAX, INT32_MIN, LINE_BREAK)
from csferrors import EncodingError, FormatError, InvalidLabelName, VersionMismatch
from csftable import CsfFileOptions, CsfTable, check_label_name, get_csf_lang, validate_label_name

logger = logging.getLogger(__name__)

# Matches a section header in the format [name], the name is kept verbatim
reIniSection = re.compile(r'^[ \t]*\[(.*)\][ \t]*$')

# Matches a key=value line, the value is everything after the first '='
reIniKeyValue = re.compile(r'^([^=]*)=(.*)$')

# Matches an integer header value such as 3 or -1
reIniInteger = re.compile(r'^[ \t]*([+-]?\d+)[ \t]*$')

IniSection = namedtuple('IniSection', ['name', 'keys', 'line'])


def value_key_name(lineIndex):
    """Key of the given 1-based line of a value: Value, ValueLine2, ValueLine3, ..."""
    if lineIndex == 1:
        return INI_VALUE_KEY
    return f"{INI_VALUE_KEY}{INI_VALUE_LINE_SUFFIX}{lineIndex}"


def is_crlf_document(text):
    """True when the document has line breaks and all of them are CRLF."""
    numLineBreaks = text.count('\n')
    return numLineBreaks > 0 and text.count('\r\n') == numLineBreaks


def parse_ini_document(text):
    """
    Split an .ini document into sections.

    Sections whose names differ only in case are merged, keeping the first
    casing. When a key appears twice in a section the first value wins.

    CRLF line endings are accepted when every line of the document uses them.
    A document with any bare LF keeps its carriage returns, so values
    holding carriage returns survive a write and read back.

    Args:
        text (str): The document.

    Returns:
        dict: Lowercased section name -> IniSection, in document order.
              IniSection.keys maps lowercased key names to values.
    """
    sections = {}
    currentKeys = None
    isCrlf = is_crlf_document(text)

    for lineNumber, line in enumerate(text.split('\n'), start=1):
        if isCrlf and line.endswith('\r'):
            line = line[:-1]
        if not line.strip():
            continue

        maSection = reIniSection.match(line)
        if maSection:
            sectionName = maSection.group(1)
            section = sections.get(sectionName.lower())
            if section is None:
                section = IniSection(sectionName, {}, lineNumber)
                sections[sectionName.lower()] = section
            currentKeys = section.keys
            continue

        maKeyValue = reIniKeyValue.match(line)
        if not maKeyValue:
            raise FormatError(f"Invalid {INI_TYPE_NAME} file. Unable to parse line {line!r}", line=lineNumber)
        if currentKeys is None:
            raise FormatError(f"Invalid {INI_TYPE_NAME} file. Key found before the first section", line=lineNumber)

        keyName = maKeyValue.group(1).strip()
        if not keyName:
            raise FormatError(f"Invalid {INI_TYPE_NAME} file. Empty key name", line=lineNumber)
        currentKeys.setdefault(keyName.lower(), maKeyValue.group(2))

    return sections


def decode_ini_bytes(data):
    """
    Decode the bytes of an .ini file. UTF-8 (with or without BOM) is expected;
    anything else goes through chardet.
    """
    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(data)
    encoding = detected.get('encoding')
    if not encoding:
        raise FormatError(f"Invalid {INI_TYPE_NAME} file. Unable to detect the text encoding")

    logger.warning("Ini file is not UTF-8, decoding it as %s (confidence %.2f)",
                   encoding, detected.get('confidence') or 0.0)
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise FormatError(f"Invalid {INI_TYPE_NAME} file. Unable to decode it as {encoding}") from e


def readHeaderInt(header, keyName):
    value = header.keys.get(keyName.lower())
    if value is None:
        raise FormatError(f"Invalid {INI_TYPE_NAME} file. Missing key \"{keyName}\" "
                          f"in section [{INI_HEADER_SECTION_NAME}].", line=header.line)

    maInteger = reIniInteger.match(value)
    if not maInteger:
        raise FormatError(f"Invalid {INI_TYPE_NAME} file. Key \"{keyName}\" is not an integer: {value!r}",
                          line=header.line)
    return int(maInteger.group(1))


def load_ini_text(text, options=None):
    """
    Load a string table from the text of an .ini file.

    Args:
        text (str): The document.
        options (CsfFileOptions, optional): Defaults to CsfFileOptions(). Only
            order_by_key affects loading; the options are stored in the table.

    Returns:
        CsfTable: The loaded table. Nothing is returned if an error is raised.
    """
    if options is None:
        options = CsfFileOptions()
    csf = CsfTable(options)

    sections = parse_ini_document(text)
    headerKey = INI_HEADER_SECTION_NAME.lower()
    header = sections.get(headerKey)
    if header is None:
        raise FormatError(f"Invalid {INI_TYPE_NAME} file. Missing section [{INI_HEADER_SECTION_NAME}].")

    # load header
    iniVersion = readHeaderInt(header, INI_HEADER_INI_VERSION_KEY)
    if iniVersion != INI_VERSION:
        raise VersionMismatch(f"Unknown {INI_TYPE_NAME} file version {iniVersion}. The version should be "
                              f"{INI_VERSION}. Is this a {INI_TYPE_NAME} file from future?", line=header.line)

    csfVersion = readHeaderInt(header, INI_HEADER_CSF_VERSION_KEY)
    if not INT32_MIN <= csfVersion <= INT32_MAX:
        raise FormatError(f"Invalid {INI_TYPE_NAME} file. CSF version {csfVersion} does not fit in 32 bits",
                          line=header.line)
    csf.version = csfVersion
    csf.language = get_csf_lang(readHeaderInt(header, INI_HEADER_CSF_LANGUAGE_KEY))

    # load all labels
    for sectionKey, section in sections.items():
        if sectionKey == headerKey:
            continue

        labelName = section.name
        if not validate_label_name(labelName):
            raise InvalidLabelName("Invalid characters found in label name", label=labelName, line=section.line)

        valueSplited = []
        for iLine in itertools.count(1):
            value = section.keys.get(value_key_name(iLine).lower())
            if value is None:
                break
            valueSplited.append(value)

        if not valueSplited:
            logger.debug("Section [%s] has no value and is skipped", labelName)
            continue
        csf.add_label(labelName, LINE_BREAK.join(valueSplited))

    if options.order_by_key:
        csf = csf.order_by_key()

    logger.debug("[load_ini_text]: Version: %d, Language: %s", csf.version, csf.language.name)
    logger.debug("[load_ini_text]: Number of labels: %d", len(csf))
    return csf


def load_ini_file(stream, options=None):
    """
    Load a string table from an .ini file.

    Args:
        stream (file object): A binary stream, or a text stream already decoded.
        options (CsfFileOptions, optional): Defaults to CsfFileOptions().

    Returns:
        CsfTable: The loaded table.
    """
    data = stream.read()
    if isinstance(data, (bytes, bytearray)):
        data = decode_ini_bytes(bytes(data))
    return load_ini_text(data, options)


def iter_ini_chunks(csf):
    """
    Yield the .ini document of a string table one section at a time.

    Labels are checked as they are reached, so a bad label raises after the
    sections before it have been produced.
    """
    yield (f"[{INI_HEADER_SECTION_NAME}]\n"
           f"{INI_HEADER_INI_VERSION_KEY}={INI_VERSION}\n"
           f"{INI_HEADER_CSF_VERSION_KEY}={csf.version}\n"
           f"{INI_HEADER_CSF_LANGUAGE_KEY}={int(csf.language)}\n")

    csfLabels = csf.order_by_key() if csf.options.order_by_key else csf
    headerKey = INI_HEADER_SECTION_NAME.lower()

    for labelName, labelValue in csfLabels.items():
        check_label_name(labelName)
        if labelName.lower() == headerKey:
            raise InvalidLabelName(f"Label name is reserved for the [{INI_HEADER_SECTION_NAME}] section",
                                   label=labelName)

        lines = ["", f"[{labelName}]"]
        valueSplited = labelValue.split(LINE_BREAK)
        for iLine, keyValue in enumerate(valueSplited, start=1):
            lines.append(f"{value_key_name(iLine)}={keyValue}")
        yield "\n".join(lines) + "\n"


def dump_ini_text(csf):
    """Return the .ini document of a string table."""
    return "".join(iter_ini_chunks(csf))


def write_ini_file(csf, stream):
    """
    Write a string table as an .ini file, UTF-8 without BOM.

    Args:
        csf (CsfTable): The table to write.
        stream (file object): A writable binary stream.
    """
    numSections = 0
    for chunk in iter_ini_chunks(csf):
        try:
            data = chunk.encode('utf-8')
        except UnicodeEncodeError as e:
            raise EncodingError(f"Label value is not valid Unicode text: {e.reason}") from e
        stream.write(data)
        numSections += 1

    logger.debug("[write_ini_file]: Number of labels: %d", numSections - 1)
