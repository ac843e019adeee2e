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


from Modules.basicOutputs import read_attribute, write_attribute
from Modules.sendRawCommand import PLUGIN_EP
from Modules.tools import getEpForCluster
from Modules.ubisysConsts import BALLAST_CLUSTER, UINT8
from Modules.ubisysExceptions import (InvalidParameterValueError,
                                      UnsupportedParameterError)

BALLAST_CONFIG_SET = {
    "PhysicalMinLevel": ("0000", UINT8),
    "PhysicalMaxLevel": ("0001", UINT8),
    "BallastStatus": ("0002", "18"),
    "MinLevel": ("0010", UINT8),
    "MaxLevel": ("0011", UINT8),
    "PowerOnLevel": ("0012", UINT8),
    "PowerOnFadeTime": ("0013", "21"),
    "IntrinsicBallastFactor": ("0014", UINT8),
    "BallastFactorAdjustment": ("0015", UINT8),
}

# MinLevel and MaxLevel are in the 1..254 range
BALLAST_LEVEL_RANGE = (1, 254)


def _ballast_endpoints(self, nwkid):
    return getEpForCluster(self, nwkid, BALLAST_CLUSTER, strict=True) or []


def _check_level(key, value):
    if isinstance(value, bool) or not isinstance(value, int) or not BALLAST_LEVEL_RANGE[0] <= value <= BALLAST_LEVEL_RANGE[1]:
        raise InvalidParameterValueError("%s must be an integer between %s and %s, got %s" % (key, BALLAST_LEVEL_RANGE[0], BALLAST_LEVEL_RANGE[1], value), field=key)
    return value


def ballast_configuration_level(self, nwkid, setting, value):
    attribute, datatype = BALLAST_CONFIG_SET[setting]
    endpoints = _ballast_endpoints(self, nwkid)
    if not endpoints:
        raise UnsupportedParameterError(setting, self.ListOfDevices[nwkid].get("Model"))

    for EPout in endpoints:
        self.log.logging("Ubisys", "Debug", "ballast_configuration_level %s/%s %s: %s" % (nwkid, EPout, setting, value), nwkid)
        write_attribute(self, nwkid, PLUGIN_EP, EPout, BALLAST_CLUSTER, "0000", "00", attribute, datatype, "%02x" % value, ackIsDisabled=False)
        read_attribute(self, nwkid, PLUGIN_EP, EPout, BALLAST_CLUSTER, "00", "00", "0000", 1, attribute, ackIsDisabled=False)


def ballast_configuration_read(self, nwkid, settings=("PhysicalMinLevel", "PhysicalMaxLevel", "MinLevel", "MaxLevel")):
    attributes = [BALLAST_CONFIG_SET[x][0] for x in settings]
    for EPout in _ballast_endpoints(self, nwkid):
        read_attribute(self, nwkid, PLUGIN_EP, EPout, BALLAST_CLUSTER, "00", "00", "0000", len(attributes), attributes, ackIsDisabled=False)


def Ballast_max_level(self, nwkid, max_level):
    ballast_configuration_level(self, nwkid, "MaxLevel", _check_level("ballast_max_level", max_level))


def Ballast_min_level(self, nwkid, min_level):
    ballast_configuration_level(self, nwkid, "MinLevel", _check_level("ballast_min_level", min_level))


def get_ballast_max_level(self, nwkid):
    ballast_configuration_read(self, nwkid, ("MaxLevel",))


def get_ballast_min_level(self, nwkid):
    ballast_configuration_read(self, nwkid, ("MinLevel",))


BALLAST_DEVICE_PARAMETERS = {
    "ballast_max_level": {
        "callable": Ballast_max_level,
        "getter": get_ballast_max_level,
        "description": "The MaxLevel attribute is 8 bits in length and specifies the light output of the ballast according to the dimming light curve",
    },
    "ballast_min_level": {
        "callable": Ballast_min_level,
        "getter": get_ballast_min_level,
        "description": "The MinLevel attribute is 8 bits in length and specifies the light output of the ballast according to the dimming light curve",
    },
}
