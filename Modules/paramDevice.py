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


from DevicesModules.custom_ubisys_j1 import UBISYS_J1_DEVICE_PARAMETERS
from DevicesModules.custom_ubisys_ld6 import UBISYS_LD6_DEVICE_PARAMETERS
from Modules.ballast_settings import BALLAST_DEVICE_PARAMETERS
from Modules.stateMaj import MajDeviceStates, getDeviceState
from Modules.ubisysDeviceSetup import UBISYS_SETUP_DEVICE_PARAMETERS
from Modules.ubisysExceptions import UbisysException, UnsupportedParameterError


def initialize_device_settings(self):
    self.device_settings = {}

    # Load specific settings
    self.device_settings.update(UBISYS_SETUP_DEVICE_PARAMETERS)
    self.device_settings.update(BALLAST_DEVICE_PARAMETERS)

    # Load Manufacturer specific settings
    self.device_settings.update(UBISYS_LD6_DEVICE_PARAMETERS)
    self.device_settings.update(UBISYS_J1_DEVICE_PARAMETERS)


def _lookup_parameter(self, nwkid, key, operation):
    model_name = self.ListOfDevices.get(nwkid, {}).get("Model", "")
    entry = self.device_settings.get(key)
    if entry is None or operation not in entry:
        raise UnsupportedParameterError(key, model_name)
    if "models" in entry and model_name not in entry["models"]:
        raise UnsupportedParameterError(key, model_name)
    return entry


def set_device_parameter(self, nwkid, key, value):
    """ Apply a user setting, publish and return the resulting state keys """

    self.log.logging("Plugin", "Debug", "set_device_parameter %s %s: %s" % (nwkid, key, value), nwkid)
    try:
        entry = _lookup_parameter(self, nwkid, key, "callable")
        published = entry["callable"](self, nwkid, value)
    except UbisysException as e:
        self.log.logging("Plugin", "Error", "set_device_parameter - %s %s failed: %s" % (nwkid, key, e), nwkid, {
            "NwkId": nwkid, "Key": key, "Value": value, "Error": str(e), "Code": e.code})
        raise

    if published is None:
        published = {key: value}
    return MajDeviceStates(self, nwkid, published)


def get_device_parameter(self, nwkid, key):
    """ Request a refresh of key from the device and return the currently published value """

    self.log.logging("Plugin", "Debug", "get_device_parameter %s %s" % (nwkid, key), nwkid)
    try:
        entry = _lookup_parameter(self, nwkid, key, "getter")
        entry["getter"](self, nwkid)
    except UbisysException as e:
        self.log.logging("Plugin", "Error", "get_device_parameter - %s %s failed: %s" % (nwkid, key, e), nwkid, {
            "NwkId": nwkid, "Key": key, "Error": str(e), "Code": e.code})
        raise
    return getDeviceState(self, nwkid, key)
