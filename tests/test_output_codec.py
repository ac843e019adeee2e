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

import pytest

from Modules.ubisysExceptions import (BufferTooShortError,
                                      ChannelIndexOutOfRangeError,
                                      InvalidCalibrationInputError,
                                      InvalidChannelCountError,
                                      InvalidParameterValueError)
from Modules.ubisysOutputCatalog import (CUSTOM_MODE, DEFAULT, OUTPUT_MODES,
                                         get)
from Modules.ubisysOutputCodec import (buffer_from_hex, decode, encode,
                                       identify, patch_channel)

# 1x CCT as reported by the device
CCT_BUFFER = bytes.fromhex(
    "48410600"
    "0611fe4250d952"
    "0612feb9751d69"
    "0600ffffffffff"
    "0600ffffffffff"
    "0600ffffffffff"
    "0600ffffffffff"
)


def test_encode_cct_is_bit_exact():
    buffer = encode(get("1x_cct")["channels"])
    assert len(buffer) == 46
    assert buffer == CCT_BUFFER


def test_encode_rejects_wrong_channel_count():
    channels = get("1x_rgb")["channels"]
    with pytest.raises(InvalidChannelCountError):
        encode(channels[:5])
    with pytest.raises(InvalidChannelCountError):
        encode(channels + [channels[0]])


def test_encode_rejects_out_of_range_flux():
    channels = get("1x_rgb")["channels"]
    channels[0]["flux"] = 300
    with pytest.raises(InvalidParameterValueError) as excinfo:
        encode(channels)
    assert excinfo.value.field == "flux"


def test_catalog_round_trip():
    for mode in OUTPUT_MODES:
        configuration = get(mode)
        buffer = encode(configuration["channels"])
        result = decode(buffer)
        assert not result["partial"]
        assert result["header_valid"]
        assert result["channels"] == configuration["channels"]
        assert identify(buffer)["key"] == mode


def test_identify_returns_custom_on_any_byte_change():
    buffer = bytearray(encode(get("1x_rgbw")["channels"]))
    buffer[12] ^= 0x01
    assert identify(bytes(buffer)) == CUSTOM_MODE


def test_decode_sentinels_and_function_code_zero():
    channels = decode(CCT_BUFFER)["channels"]
    assert channels[0]["function"] == "coolWhite"
    assert channels[0]["flux"] == 0xFE
    assert channels[2] == {"endpoint": 0, "function": "unused", "flux": DEFAULT, "x": DEFAULT, "y": DEFAULT}

    mono = decode(encode(get("1x_dimmable")["channels"]))["channels"][0]
    assert mono["function"] == "mono"
    assert mono["endpoint"] == 1


def test_decode_reserved_function_code():
    buffer = bytearray(CCT_BUFFER)
    buffer[5] = 0x19
    channel = decode(bytes(buffer))["channels"][0]
    assert channel["function"] == "unknown"
    assert channel["code"] == 9
    assert channel["endpoint"] == 1


def test_decode_header_only_is_partial():
    result = decode(CCT_BUFFER[:4])
    assert result["channels"] == []
    assert result["partial"]


def test_decode_truncated_element_stops_early():
    result = decode(CCT_BUFFER[:20])
    assert len(result["channels"]) == 2
    assert result["partial"]


def test_decode_flags_wrong_array_header():
    result = decode(b"\x48\x20" + CCT_BUFFER[2:])
    assert not result["header_valid"]
    assert len(result["channels"]) == 6


def test_decode_too_short():
    with pytest.raises(BufferTooShortError):
        decode(b"\x48\x41")


def test_patch_channel_flux_only_touches_one_byte():
    patched = patch_channel(CCT_BUFFER, 3, {"flux": 200})
    differences = [i for i in range(len(CCT_BUFFER)) if CCT_BUFFER[i] != patched[i]]
    # header 4 + 2 channels of 7 bytes + length + endpoint/function
    assert differences == [4 + 2 * 7 + 2]
    assert patched[20] == 200


def test_patch_channel_chromaticity():
    patched = patch_channel(CCT_BUFFER, 2, {"x": 0.3127, "y": 0.3290})
    channel = decode(patched)["channels"][1]
    assert channel["x"] == pytest.approx(0.3127, abs=1 / 65536)
    assert channel["y"] == pytest.approx(0.3290, abs=1 / 65536)
    assert channel["function"] == "warmWhite"
    assert channel["flux"] == 0xFE
    assert patched[:11] == CCT_BUFFER[:11]
    assert patched[18:] == CCT_BUFFER[18:]


def test_patch_channel_out_of_range():
    with pytest.raises(ChannelIndexOutOfRangeError):
        patch_channel(CCT_BUFFER, 0, {"flux": 1})
    with pytest.raises(ChannelIndexOutOfRangeError):
        patch_channel(CCT_BUFFER, 7, {"flux": 1})


@pytest.mark.parametrize("patch, field", [
    ({"x": -0.5}, "x"),
    ({"y": 1.2}, "y"),
    ({"x": "0.3"}, "x"),
    ({"flux": 255}, "flux"),
])
def test_patch_channel_rejects_out_of_range_values(patch, field):
    with pytest.raises(InvalidCalibrationInputError) as excinfo:
        patch_channel(CCT_BUFFER, 1, patch)
    assert excinfo.value.field == field


def test_patch_channel_full_scale_is_not_the_default_marker():
    patched = patch_channel(CCT_BUFFER, 1, {"x": 1.0, "y": 0})
    channel = decode(patched)["channels"][0]
    assert channel["x"] == pytest.approx(1.0, abs=2 / 65536)
    assert channel["x"] != DEFAULT
    assert channel["y"] == 0


def test_buffer_from_hex_accepts_prefix_and_spaces():
    assert buffer_from_hex("0x48 41 06 00") == bytes.fromhex("48410600")
    assert buffer_from_hex(" 48410600 ") == bytes.fromhex("48410600")
