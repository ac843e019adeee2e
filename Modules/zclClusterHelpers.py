#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Implementation of Zigbee for Domoticz plugin.
#
# This file is part of Zigbee for Domoticz plugin. https://github.com/zigbeefordomoticz/Domoticz-Zigbee
# (C) 2015-2024
#
# Initial authors: zaraki673 & pipiche38
#
# SPDX-License-Identifier:    GPL-3.0 license

import binascii

from Modules.tools import get_deviceconf_parameter_value

# Numerical data types: ( length in bytes, signed )
NUMERIC_DATA_TYPES = {
    0x18: (1, False),  # 8-bit bitmap
    0x19: (2, False),  # 16-bit bitmap
    0x20: (1, False),
    0x21: (2, False),
    0x22: (3, False),
    0x23: (4, False),
    0x25: (6, False),
    0x28: (1, True),
    0x29: (2, True),
    0x2A: (3, True),
    0x2B: (4, True),
    0x30: (1, False),  # 8-bit enum
    0x31: (2, False),  # 16-bit enum
}


def decode_numeric(data_type_id, attribute_value):
    length, signed = NUMERIC_DATA_TYPES[data_type_id]
    data = attribute_value[:2 * length].zfill(2 * length)
    return int.from_bytes(bytes.fromhex(data), "big", signed=signed)


def _decode_caracter_string(attribute_value, handleErrors):
    try:
        decode = binascii.unhexlify(attribute_value).decode("utf-8")

    except (UnicodeDecodeError, binascii.Error):
        if handleErrors:
            decode = ""
        else:
            decode = binascii.unhexlify(attribute_value).decode("utf-8", errors="ignore").replace("\x00", "").strip()

    return decode.strip("\x00").strip() if decode else ""


def decoding_attribute_data(AttType, attribute_value, handleErrors=False):
    """
    Decode attribute values based on their attribute type.
    Numerical values are big-endian hex strings, Arrays (0x48) and Octet Strings (0x41) are returned as received.
    """

    if len(attribute_value) == 0:
        return ""

    data_type_id = int(AttType, 16)
    if data_type_id == 0x10:  # Boolean
        return attribute_value[:2]

    if data_type_id in NUMERIC_DATA_TYPES:
        return decode_numeric(data_type_id, attribute_value)

    if data_type_id in {0x42, 0x43}:  # CharacterString
        return _decode_caracter_string(attribute_value, handleErrors)

    return attribute_value


# Used by Cluster 0x0702 and 0x0b04

def compute_divided_value(self, NwkId, MsgSrcEp, MsgClusterId, MsgAttrID, raw_value, custom, default_divisor=1):
    """ raw_value / divisor, where divisor can be overwritten by the Device Configuration parameter custom """

    if isinstance(raw_value, str):
        raw_value = int(raw_value, 16)

    divisor = None
    if "Model" in self.ListOfDevices[NwkId]:
        divisor = get_deviceconf_parameter_value(self, self.ListOfDevices[NwkId]["Model"], custom)
    if divisor is None or int(divisor) == 0:
        divisor = default_divisor

    value = round(raw_value / int(divisor), 3)
    self.log.logging("ZclClusters", "Debug", "compute_divided_value - %s/%s %s %s Divisor: %s (%s), raw: %s result: %s" % (
        NwkId, MsgSrcEp, MsgClusterId, MsgAttrID, divisor, custom, raw_value, value), NwkId)
    return value


# Used by Cluster 0x0102

def CurrentPositionLiftPercentage(self, NwkId, MsgSrcEp, MsgClusterId, MsgAttrID, raw_value):
    if isinstance(raw_value, str):
        raw_value = int(raw_value, 16)

    value = raw_value
    if get_deviceconf_parameter_value(self, self.ListOfDevices[NwkId]["Model"], "WindowsCoverringInverted"):
        value = 0 if raw_value > 100 else 100 - raw_value

    self.log.logging("ZclClusters", "Debug", "CurrentPositionLiftPercentage - %s - %s/%s - Shutter after correction value: %s" % (
        MsgClusterId, NwkId, MsgSrcEp, value), NwkId)

    return value
