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
    Module: ubisysOutputCatalog.py

    Description: LD6 output configurations (ubisys LD6 Technical Reference, OutputConfigurations attribute)

    An output configuration describes the 6 PWM channels of the LD6. Each channel is a dict:
        endpoint : light endpoint (1, 5, 6, 7, 8, 9) driven by the channel, 0 when unassigned
        function : one of FUNCTION_CODES keys, or "unknown" for reserved codes
        flux     : relative luminous flux 0..254, or DEFAULT
        x, y     : CIE 1931 chromaticity as a fraction of 65536, or DEFAULT

"""

from Modules.ubisysExceptions import UnknownModeError

DEFAULT = "default"
UNKNOWN_FUNCTION = "unknown"
CUSTOM_MODE = "custom"

# Low nibble of the endpoint/function byte. Code 0 is shared between an unused channel
# (endpoint 0) and a monochrome channel (endpoint != 0)
FUNCTION_CODES = {
    "unused": 0x00,
    "mono": 0x00,
    "coolWhite": 0x01,
    "warmWhite": 0x02,
    "red": 0x03,
    "green": 0x04,
    "blue": 0x05,
    "amber": 0x06,
    "turquoise": 0x07,
    "violet": 0x08,
}
FUNCTION_NAMES = {code: name for name, code in FUNCTION_CODES.items() if code}

CHANNELS_PER_CONFIGURATION = 6


def _primary(endpoint, function, flux, x, y):
    return {"endpoint": endpoint, "function": function, "flux": flux, "x": x / 65536, "y": y / 65536}


def _mono(endpoint):
    return {"endpoint": endpoint, "function": "mono", "flux": DEFAULT, "x": DEFAULT, "y": DEFAULT}


def _unused():
    return {"endpoint": 0, "function": "unused", "flux": DEFAULT, "x": DEFAULT, "y": DEFAULT}


def _cool_white(endpoint):
    return _primary(endpoint, "coolWhite", 0xFE, 0x5042, 0x52D9)


def _warm_white(endpoint):
    return _primary(endpoint, "warmWhite", 0xFE, 0x75B9, 0x691D)


def _rgbw_white(endpoint):
    return _primary(endpoint, "coolWhite", 0xFE, 0x6164, 0x6072)


def _rgb(endpoint):
    return [
        _primary(endpoint, "red", 0x47, 0xB106, 0x4EEF),
        _primary(endpoint, "green", 0xA0, 0x1D39, 0xD382),
        _primary(endpoint, "blue", 0x42, 0x1FC6, 0x0ECC),
    ]


def _cct(endpoint):
    return [_cool_white(endpoint), _warm_white(endpoint)]


def _configuration(description, channels):
    channels = list(channels)
    channels += [_unused() for _ in range(CHANNELS_PER_CONFIGURATION - len(channels))]
    return {"description": description, "channels": tuple(channels)}


OUTPUT_CONFIGURATIONS = {
    "1x_dimmable": _configuration("1x Dimmable (mono)", [_mono(1)]),
    "1x_cct": _configuration("1x CCT / Tunable White", _cct(1)),
    "1x_rgb": _configuration("1x RGB Color", _rgb(1)),
    "1x_rgbw": _configuration("1x RGBW", _rgb(1) + [_rgbw_white(1)]),
    "1x_rgbww": _configuration("1x RGBWW", _rgb(1) + _cct(1)),
    "2x_dimmable": _configuration("2x Dimmable (mono)", [_mono(1), _mono(5)]),
    "2x_cct": _configuration("2x CCT / Tunable White", _cct(1) + _cct(5)),
    "1x_rgb_1x_cct": _configuration("1x RGB + 1x CCT", _rgb(1) + _cct(5)),
    "1x_cct_1x_rgb": _configuration("1x CCT + 1x RGB", _cct(1) + _rgb(5)),
    "2x_rgb": _configuration("2x RGB Color", _rgb(1) + _rgb(5)),
    "1x_rgbw_1x_cct": _configuration("1x RGBW + 1x CCT", _rgb(1) + [_rgbw_white(1)] + _cct(5)),
    "3x_dimmable": _configuration("3x Dimmable (mono)", [_mono(1), _mono(5), _mono(6)]),
    "4x_dimmable": _configuration("4x Dimmable (mono)", [_mono(1), _mono(5), _mono(6), _mono(7)]),
    "5x_dimmable": _configuration("5x Dimmable (mono)", [_mono(1), _mono(5), _mono(6), _mono(7), _mono(8)]),
    "6x_dimmable": _configuration("6x Dimmable (mono)", [_mono(1), _mono(5), _mono(6), _mono(7), _mono(8), _mono(9)]),
}

OUTPUT_MODES = tuple(OUTPUT_CONFIGURATIONS)


def get(name):
    """ Return a copy of the named output configuration { key, description, channels }, UnknownModeError if not in the catalog """

    if name not in OUTPUT_CONFIGURATIONS:
        raise UnknownModeError(name, OUTPUT_MODES)
    configuration = OUTPUT_CONFIGURATIONS[name]
    return {
        "key": name,
        "description": configuration["description"],
        "channels": [dict(channel) for channel in configuration["channels"]],
    }


def list_configurations():
    return [get(name) for name in OUTPUT_MODES]
