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
    Module: custom_ubisys_c4.py

    Description: ubisys C4 4 inputs control unit. Inputs are configured through the Device Setup cluster.

"""

from Modules.ubisysDeviceSetup import (has_setup_endpoint,
                                       ubisys_configure_device_setup)

C4_MODEL = "C4"


def ubisys_c4_configure(self, nwkid):
    if not has_setup_endpoint(self, nwkid):
        self.log.logging("Ubisys", "Status", "ubisys C4 %s: Failed to read setup attributes, endpoint 232 not found" % nwkid, nwkid)
        return
    ubisys_configure_device_setup(self, nwkid)


def ubisys_c4_exposes(self, nwkid):
    return [
        {
            "type": "list", "name": "input_configurations", "access": "all", "item_type": "numeric",
            "description": "Input configurations: bit 7: disable, bit 6: invert (NC). Example: [0, 0, 0, 0]",
        },
        {
            "type": "list", "name": "input_actions", "access": "all", "item_type": "text",
            "description": "Input actions: raw hex strings mapping inputs to clusters and commands.",
        },
    ]
