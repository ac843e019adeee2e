#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Implementation of ubisys converters for the Zigbee plugin.
#
# This file is part of Zigbee for Domoticz plugin. https://github.com/zigbeefordomoticz/Domoticz-Zigbee
# (C) 2015-2024
#
# Initial authors: zaraki673 & pipiche38
#
# SPDX-License-Identifier:    GPL-3.0 license

"""
    Module: ubisysOutputCodec.py

    Description: Encode / Decode of the LD6 OutputConfigurations attribute (0xfc00/0x0010)

    Wire format:
        0x48 0x41 <count LE 16 bits>                       Array of Octet Strings
        6 x [ 0x06, EpFunc, Flux, xLo, xHi, yLo, yHi ]     EpFunc = ( endpoint << 4 ) | function code

    decode() reports "partial" ( less than 6 channels ) and "header_valid" ( 0x48 0x41 type bytes ).

"""

import zigpy.types as t

from Modules.ubisysExceptions import (BufferTooShortError,
                                      ChannelIndexOutOfRangeError,
                                      InvalidCalibrationInputError,
                                      InvalidChannelCountError,
                                      InvalidParameterValueError)
from Modules.ubisysOutputCatalog import (CHANNELS_PER_CONFIGURATION,
                                         CUSTOM_MODE, DEFAULT, FUNCTION_CODES,
                                         FUNCTION_NAMES, OUTPUT_CONFIGURATIONS,
                                         UNKNOWN_FUNCTION, get)

ZCL_ARRAY = 0x48
ZCL_OCTET_STRING = 0x41
HEADER_LENGTH = 4
ELEMENT_LENGTH = 6

DEFAULT_FLUX = 0xFF
DEFAULT_CHROMATICITY = 0xFFFF


def fraction_to_raw(value):
    """ CIE coordinate in [0,1] to its 16 bits fixed point value, clamped to 0..0xfffe ( 0xffff is the default marker ) """
    return max(0, min(DEFAULT_CHROMATICITY - 1, int(round(value * 65536))))


def _raw_to_fraction(raw):
    return DEFAULT if raw == DEFAULT_CHROMATICITY else raw / 65536


def _encode_flux(channel):
    flux = channel.get("flux", DEFAULT)
    if flux == DEFAULT:
        return t.uint8_t(DEFAULT_FLUX).serialize()
    if not isinstance(flux, int) or not 0 <= flux <= 254:
        raise InvalidParameterValueError("flux must be between 0 and 254, got %s" % (flux,), field="flux")
    return t.uint8_t(flux).serialize()


def _encode_chromaticity(channel, field):
    value = channel.get(field, DEFAULT)
    if value == DEFAULT:
        return t.uint16_t(DEFAULT_CHROMATICITY).serialize()
    if not isinstance(value, (int, float)) or not 0 <= value <= 1:
        raise InvalidParameterValueError("%s must be between 0 and 1, got %s" % (field, value), field=field)
    return t.uint16_t(fraction_to_raw(value)).serialize()


def _encode_endpoint_function(channel):
    endpoint = channel.get("endpoint", 0)
    if not isinstance(endpoint, int) or not 0 <= endpoint <= 0x0F:
        raise InvalidParameterValueError("endpoint must be between 0 and 15, got %s" % (endpoint,), field="endpoint")

    function = channel.get("function")
    if function == UNKNOWN_FUNCTION and "code" in channel:
        code = channel["code"]
    elif function in FUNCTION_CODES:
        code = FUNCTION_CODES[function]
    else:
        raise InvalidParameterValueError("unknown channel function %s" % (function,), field="function")

    return t.uint8_t((endpoint << 4) | (code & 0x0F)).serialize()


def encode_channel(channel):
    element = _encode_endpoint_function(channel) + _encode_flux(channel) + _encode_chromaticity(channel, "x") + _encode_chromaticity(channel, "y")
    if len(element) != ELEMENT_LENGTH:
        raise InvalidParameterValueError("channel payload must be %s bytes, got %s" % (ELEMENT_LENGTH, len(element)), field="channel")
    return element


def encode(channels):
    """ Encode 6 channels into the OutputConfigurations array buffer ( 46 bytes ) """

    if len(channels) != CHANNELS_PER_CONFIGURATION:
        raise InvalidChannelCountError(len(channels), CHANNELS_PER_CONFIGURATION)

    buffer = t.uint8_t(ZCL_ARRAY).serialize() + t.uint8_t(ZCL_OCTET_STRING).serialize() + t.uint16_t(len(channels)).serialize()
    for channel in channels:
        buffer += t.uint8_t(ELEMENT_LENGTH).serialize() + encode_channel(channel)
    return buffer


def decode_channel(element):
    endpoint = element[0] >> 4
    code = element[0] & 0x0F
    channel = {"endpoint": endpoint}

    if code == 0x00:
        channel["function"] = "unused" if endpoint == 0 else "mono"
    elif code in FUNCTION_NAMES:
        channel["function"] = FUNCTION_NAMES[code]
    else:
        channel["function"] = UNKNOWN_FUNCTION
        channel["code"] = code

    channel["flux"] = DEFAULT if element[1] == DEFAULT_FLUX else element[1]
    x, remaining = t.uint16_t.deserialize(element[2:])
    y, _ = t.uint16_t.deserialize(remaining)
    channel["x"] = _raw_to_fraction(x)
    channel["y"] = _raw_to_fraction(y)
    return channel


def _walk_elements(buffer):
    """ Yield ( offset, element ) of each complete length prefixed element, up to 6 """

    count, _ = t.uint16_t.deserialize(buffer[2:HEADER_LENGTH])
    offset = HEADER_LENGTH
    for _ in range(min(count, CHANNELS_PER_CONFIGURATION)):
        if offset >= len(buffer):
            return
        length = buffer[offset]
        if length < ELEMENT_LENGTH or offset + 1 + length > len(buffer):
            return
        yield offset, buffer[offset + 1 : offset + 1 + length]
        offset += 1 + length


def decode(buffer):
    """
    Decode an OutputConfigurations buffer.
    Return { "channels": [...], "partial": bool, "header_valid": bool }
        partial is True when less than 6 channels could be decoded
        header_valid is True when the buffer starts with the Array ( 0x48 ) of Octet Strings ( 0x41 ) type bytes
    """

    buffer = bytes(buffer)
    if len(buffer) < HEADER_LENGTH:
        raise BufferTooShortError(len(buffer), HEADER_LENGTH)

    channels = [decode_channel(element) for _, element in _walk_elements(buffer)]
    return {
        "channels": channels,
        "partial": len(channels) < CHANNELS_PER_CONFIGURATION,
        "header_valid": buffer[0] == ZCL_ARRAY and buffer[1] == ZCL_OCTET_STRING,
    }


def patch_channel(buffer, channel_index, patch):
    """
    Overwrite flux, x and/or y of one channel ( 1..6 ) in an existing buffer.
    Every other byte is left untouched.
    """

    if not isinstance(channel_index, int) or not 1 <= channel_index <= CHANNELS_PER_CONFIGURATION:
        raise ChannelIndexOutOfRangeError(channel_index)

    buffer = bytes(buffer)
    if len(buffer) < HEADER_LENGTH:
        raise BufferTooShortError(len(buffer), HEADER_LENGTH)

    elements = list(_walk_elements(buffer))
    if len(elements) < channel_index:
        raise BufferTooShortError(len(buffer), HEADER_LENGTH + channel_index * (ELEMENT_LENGTH + 1))

    offset = elements[channel_index - 1][0] + 1
    patched = bytearray(buffer)
    if patch.get("flux") is not None:
        flux = patch["flux"]
        if not isinstance(flux, int) or not 0 <= flux <= 254:
            raise InvalidCalibrationInputError("Calibration flux must be an integer between 0 and 254", field="flux")
        patched[offset + 1] = flux
    for field, position in (("x", offset + 2), ("y", offset + 4)):
        coordinate = patch.get(field)
        if coordinate is None:
            continue
        if isinstance(coordinate, bool) or not isinstance(coordinate, (int, float)) or not 0 <= coordinate <= 1:
            raise InvalidCalibrationInputError('Calibration "%s" must be a number between 0 and 1, got %s' % (field, coordinate), field=field)
        patched[position : position + 2] = t.uint16_t(fraction_to_raw(coordinate)).serialize()
    return bytes(patched)


def identify(buffer):
    """ Return the catalog configuration whose canonical encoding is byte identical to buffer, or "custom" """

    buffer = bytes(buffer)
    for name, configuration in OUTPUT_CONFIGURATIONS.items():
        if encode(configuration["channels"]) == buffer:
            return get(name)
    return CUSTOM_MODE


def buffer_from_hex(value):
    """ Accept "48410600...", "0x4841..." or space separated hex """

    value = value.strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    return bytes.fromhex(value.replace(" ", ""))
