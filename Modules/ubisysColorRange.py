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
    Module: ubisysColorRange.py

    Description: Colour temperature range of an LD6 light, derived from the chromaticity of
                 its cool white and warm white channels ( McCamy approximation ).

"""

import math

from Modules.ubisysOutputCatalog import DEFAULT

# Fallback when no cool/warm white pair is available: ~6500K .. ~1800K
DEFAULT_MIN_MIREDS = 153
DEFAULT_MAX_MIREDS = 555


def xy_to_cct(x, y):
    """ Correlated colour temperature in Kelvin, None when it cannot be computed """

    if y == 0.1858:
        return None
    n = (x - 0.3320) / (0.1858 - y)
    cct = 449 * n ** 3 + 3525 * n ** 2 + 6823.3 * n + 5520.33
    if not math.isfinite(cct) or cct <= 0:
        return None
    return cct


def xy_to_mireds(x, y):
    cct = xy_to_cct(x, y)
    if cct is None:
        return None
    return int(round(1000000 / cct))


def _channel_mireds(channels, endpoint, function):
    for channel in channels:
        if channel.get("endpoint") != endpoint or channel.get("function") != function:
            continue
        if channel.get("x") == DEFAULT or channel.get("y") == DEFAULT:
            return None
        return xy_to_mireds(channel["x"], channel["y"])
    return None


def color_range(channels, endpoint, fallback=(DEFAULT_MIN_MIREDS, DEFAULT_MAX_MIREDS)):
    """ Return { "min_mireds", "max_mireds", "derived" } for the light on endpoint """

    cool = _channel_mireds(channels, endpoint, "coolWhite")
    warm = _channel_mireds(channels, endpoint, "warmWhite")
    if cool is None or warm is None:
        return {"min_mireds": fallback[0], "max_mireds": fallback[1], "derived": False}

    return {"min_mireds": min(cool, warm), "max_mireds": max(cool, warm), "derived": True}


def color_ranges(channels, fallback=(DEFAULT_MIN_MIREDS, DEFAULT_MAX_MIREDS)):
    """ Colour range of every endpoint driving at least one white channel """

    endpoints = sorted({channel["endpoint"] for channel in channels if channel.get("function") in ("coolWhite", "warmWhite") and channel.get("endpoint")})
    return {endpoint: color_range(channels, endpoint, fallback) for endpoint in endpoints}
