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

from Modules.ubisysExceptions import UnknownModeError
from Modules.ubisysOutputCatalog import (CHANNELS_PER_CONFIGURATION, DEFAULT,
                                         OUTPUT_MODES, get,
                                         list_configurations)


def test_every_configuration_has_six_channels():
    for configuration in list_configurations():
        assert len(configuration["channels"]) == CHANNELS_PER_CONFIGURATION


def test_get_returns_key_and_description():
    configuration = get("1x_cct")
    assert configuration["key"] == "1x_cct"
    assert configuration["description"] == "1x CCT / Tunable White"
    assert [x["function"] for x in configuration["channels"]] == ["coolWhite", "warmWhite", "unused", "unused", "unused", "unused"]
    assert [x["endpoint"] for x in configuration["channels"]] == [1, 1, 0, 0, 0, 0]


def test_get_returns_a_copy():
    configuration = get("1x_rgb")
    configuration["channels"][0]["flux"] = 1
    assert get("1x_rgb")["channels"][0]["flux"] == 0x47


def test_mono_and_unused_channels_carry_default_values():
    channels = get("2x_dimmable")["channels"]
    assert channels[0] == {"endpoint": 1, "function": "mono", "flux": DEFAULT, "x": DEFAULT, "y": DEFAULT}
    assert channels[1]["endpoint"] == 5
    assert channels[2] == {"endpoint": 0, "function": "unused", "flux": DEFAULT, "x": DEFAULT, "y": DEFAULT}


def test_unknown_mode_lists_every_valid_mode():
    with pytest.raises(UnknownModeError) as excinfo:
        get("nonexistent_mode")

    message = str(excinfo.value)
    assert "nonexistent_mode" in message
    for mode in OUTPUT_MODES:
        assert mode in message
    assert excinfo.value.code == "UNKNOWN_MODE"
