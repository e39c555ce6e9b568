# -*- coding: utf-8 -*-
"""
Read and write the binary string table file (.csf) used by RA2/YR.

Layout, little-endian throughout:

    " FSC"  version  numLabels  numStrings  unused  language
    then for every label:
    " LBL"  numValues  nameLength  name
    then for every value:
    " RTS" or "WRTS"  valueLength  ~(UTF-16LE value, valueLength * 2 bytes)
    and for "WRTS" only:
    extraLength  extra value (ASCII)

The extra value of a label has no effect on gaming and is discarded. Only the
first value of a label is kept, so written files always hold one " RTS" value
per label.
"""
import io
import logging
import struct

import encoding1252
from csfconst import (CSF_EXTRA_VALUE_MARKER, CSF_LABEL_MARKER, CSF_MAGIC, CSF_VALUE_MARKER,
                      INT32_MAX, INT32_MIN)
from csferrors import EncodingError, FormatError, InvalidLabelName, InvariantViolation, UnexpectedEndOfInput
from csftable import CsfFileOptions, CsfTable, check_label_name, get_csf_lang

logger = logging.getLogger(__name__)

# Bitwise NOT of every byte value, for bytes.translate()
BITWISE_NOT_TABLE = bytes(0xFF - i for i in range(256))


def bitwise_not(data):
    """Complement every byte. Values are stored this way in .csf files."""
    return bytes(data).translate(BITWISE_NOT_TABLE)


def truncate_at_null_pair(rawValue):
    """
    Cut a raw value at the first 0x00 0x00 pair on an even offset.

    Some files declare a value length that runs past a null terminated value.
    The check is made on the raw bytes, before the bitwise NOT.
    """
    position = rawValue.find(b'\x00\x00')
    while position != -1 and position % 2:
        position = rawValue.find(b'\x00\x00', position + 1)
    if position == -1:
        return rawValue
    return rawValue[:position]


# Read and write binary structs
def readExact(file, size):
    offset = file.tell()
    chunk = file.read(size)
    if len(chunk) != size:
        raise UnexpectedEndOfInput(f"Unexpected end of file, expected {size} bytes but found {len(chunk)}",
                                   offset=offset)
    return chunk


def readInt32(file): return struct.unpack('<i', readExact(file, 4))[0]


def writeInt32(file, value): file.write(struct.pack('<i', value))


def readLength(file, fieldName, labelName=None):
    offset = file.tell()
    value = readInt32(file)
    if value < 0:
        raise FormatError(f"Negative {fieldName} {value}", offset=offset, label=labelName)
    return value


def skipToLabelMarker(file):
    """
    Read 4-byte chunks until the " LBL" marker, tolerating stray bytes
    between label records.
    """
    start = file.tell()
    while True:
        labelId = file.read(4)
        if labelId == CSF_LABEL_MARKER:
            break
        if len(labelId) != 4:
            raise UnexpectedEndOfInput("Unexpected end of file while looking for a label", offset=file.tell())

    skipped = file.tell() - 4 - start
    if skipped:
        logger.warning("Skipped %d bytes before the label at position %d", skipped, start + skipped)


def decode_value(rawValue, options, labelName=None, offset=None):
    """
    Turn the raw bytes of a value into text.

    Args:
        rawValue (bytes): valueLength * 2 bytes as stored in the file.
        options (CsfFileOptions): encoding_1252_read_workaround is honoured.
        labelName (str, optional): Used in error messages.
        offset (int, optional): Position of rawValue in the file, for error messages.

    Returns:
        str: The value.
    """
    truncated = truncate_at_null_pair(rawValue)
    if len(truncated) != len(rawValue):
        logger.debug("Value of label \"%s\" truncated from %d to %d bytes", labelName, len(rawValue), len(truncated))

    try:
        value = bitwise_not(truncated).decode('utf-16-le')
    except UnicodeDecodeError as e:
        errorOffset = offset + e.start if offset is not None else None
        raise EncodingError(f"Invalid label value string: {e.reason}", offset=errorOffset, label=labelName) from e

    if options.encoding_1252_read_workaround:
        value = encoding1252.to_unicode(value)
    return value


def encode_value(value, options, labelName=None):
    """Turn a value into the bytes stored after its " RTS" marker and length."""
    if options.encoding_1252_write_workaround:
        value = encoding1252.to_legacy(value)

    try:
        valueBytes = value.encode('utf-16-le')
    except UnicodeEncodeError as e:
        raise EncodingError(f"Label value is not valid UTF-16 text: {e.reason}", label=labelName) from e

    valueBytes = bitwise_not(valueBytes)
    if len(valueBytes) % 2 != 0:
        raise InvariantViolation(f"Odd number of UTF-16LE bytes ({len(valueBytes)}) for a label value",
                                 label=labelName)
    return valueBytes


def readLabel(file, options):
    """
    Read one label record, starting anywhere before its " LBL" marker.

    Returns:
        str, str: The label name, and its first value or None if it has no value.
    """
    skipToLabelMarker(file)

    numValues = readLength(file, "value count")
    nameLength = readLength(file, "label name length")
    nameOffset = file.tell()
    rawName = readExact(file, nameLength)
    try:
        labelName = rawName.decode('ascii')
    except UnicodeDecodeError:
        raise InvalidLabelName("Invalid label name", offset=nameOffset, label=rawName.decode('latin-1')) from None
    check_label_name(labelName, offset=nameOffset)

    labelValue = None
    for iValue in range(numValues):
        typeOffset = file.tell()
        labelValueType = readExact(file, 4)
        if labelValueType == CSF_VALUE_MARKER:
            labelHasExtraValue = False
        elif labelValueType == CSF_EXTRA_VALUE_MARKER:
            labelHasExtraValue = True
        else:
            raise FormatError(f"Invalid label value type {labelValueType!r}", offset=typeOffset, label=labelName)

        valueLength = readLength(file, "value length", labelName)
        valueOffset = file.tell()
        rawValue = readExact(file, valueLength * 2)
        value = decode_value(rawValue, options, labelName, valueOffset)

        if labelHasExtraValue:
            extLength = readLength(file, "extra value length", labelName)
            readExact(file, extLength)
            logger.debug("Discarded %d bytes of extra value for label \"%s\"", extLength, labelName)

        if iValue == 0:
            labelValue = value

    if numValues > 1:
        logger.warning("Label \"%s\" has %d values, only the first one is kept", labelName, numValues)
    return labelName, labelValue


def load_csf_bytes(data, options=None):
    """
    Load a string table from the content of a .csf file.

    Args:
        data (bytes): The whole file.
        options (CsfFileOptions, optional): Defaults to CsfFileOptions().

    Returns:
        CsfTable: The loaded table. Nothing is returned if an error is raised.
    """
    if options is None:
        options = CsfFileOptions()
    csf = CsfTable(options)
    file = io.BytesIO(data)

    headerId = readExact(file, 4)
    if headerId != CSF_MAGIC:
        raise FormatError(f"Invalid CSF file header {headerId!r}", offset=0)

    csf.version = readInt32(file)
    numLabels = readInt32(file)
    numStrings = readInt32(file)
    _ = readInt32(file)  # unused
    csf.language = get_csf_lang(readInt32(file))

    for iLabel in range(numLabels):
        labelName, labelValue = readLabel(file, options)
        if labelValue is None:
            # an .ini file cannot hold a label without value
            logger.warning("Label \"%s\" has no value and is dropped", labelName)
            continue
        csf.add_label(labelName, labelValue)

    if options.order_by_key:
        csf = csf.order_by_key()

    logger.debug("[load_csf_bytes]: Version: %d, Language: %s", csf.version, csf.language.name)
    logger.debug("[load_csf_bytes]: Number of labels: %d (header: %d labels, %d strings)",
                 len(csf), numLabels, numStrings)
    return csf


def load_csf_file(stream, options=None):
    """
    Load a string table from a .csf file.

    Args:
        stream (file object): A binary stream positioned at the start of the file.
        options (CsfFileOptions, optional): Defaults to CsfFileOptions().

    Returns:
        CsfTable: The loaded table.
    """
    return load_csf_bytes(stream.read(), options)


def write_csf_file(csf, stream):
    """
    Write a string table as a .csf file.

    Labels are written one at a time. If a label turns out to be invalid the
    stream is left partially written.

    Args:
        csf (CsfTable): The table to write.
        stream (file object): A writable binary stream.
    """
    if not INT32_MIN <= csf.version <= INT32_MAX:
        raise FormatError(f"CSF version {csf.version} does not fit in 32 bits")

    options = csf.options
    numLabels = len(csf)

    stream.write(CSF_MAGIC)
    writeInt32(stream, csf.version)
    writeInt32(stream, numLabels)
    writeInt32(stream, numLabels)  # one value per label
    writeInt32(stream, 0)  # unused
    writeInt32(stream, int(csf.language))

    for labelName, labelValue in csf.items():
        check_label_name(labelName)
        labelNameBytes = labelName.encode('ascii')
        valueBytes = encode_value(labelValue, options, labelName)

        stream.write(CSF_LABEL_MARKER)
        writeInt32(stream, 1)
        writeInt32(stream, len(labelNameBytes))
        stream.write(labelNameBytes)

        stream.write(CSF_VALUE_MARKER)
        writeInt32(stream, len(valueBytes) // 2)
        stream.write(valueBytes)

    logger.debug("[write_csf_file]: Number of labels: %d", numLabels)


def dump_csf_bytes(csf):
    """Return the content of the .csf file for a string table."""
    output = io.BytesIO()
    write_csf_file(csf, output)
    return output.getvalue()
