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
    Module: custom_ubisys_ld6.py

    Description: ubisys LD6 6 channels LED controller

        - output_mode / output_configuration / calibration on the Device Setup cluster ( 0xfc00/0x0010 )
        - advanced options ( 0x0300/0x0000 ) and minimum on level ( 0x0008/0x0000 ), both manufacturer specific
        - exposed light features rebuilt from the colour capabilities and the current output configuration

"""

import json
import time

from Modules.basicOutputs import read_attribute, write_attribute
from Modules.sendRawCommand import PLUGIN_EP
from Modules.stateMaj import MajDeviceState, getDeviceState
from Modules.tools import (checkAndStoreAttributeValue, getAttributeValue,
                           get_request_datastruct)
from Modules.ubisysColorRange import color_ranges
from Modules.ubisysConsts import (ARRAY, BITMAP8, COLOR_CLUSTER,
                                  LEVEL_CONTROL_CLUSTER, ONOFF_CLUSTER,
                                  UBISYS_DEVICE_SETUP_CLUSTER,
                                  UBISYS_INPUT_ACTIONS,
                                  UBISYS_INPUT_CONFIGURATIONS,
                                  UBISYS_MANUFACTURER_CODE,
                                  UBISYS_OUTPUT_CONFIGURATIONS, UINT8)
from Modules.ubisysDeviceSetup import (get_setup_endpoint, has_setup_endpoint,
                                       ubisys_configure_device_setup,
                                       ubisys_device_setup)
from Modules.ubisysExceptions import (BufferTooShortError,
                                      ConfigurationNotAvailableError,
                                      InvalidCalibrationInputError,
                                      InvalidParameterValueError)
from Modules.ubisysOutputCatalog import CUSTOM_MODE, OUTPUT_MODES, get
from Modules.ubisysOutputCodec import (buffer_from_hex, decode, encode,
                                       identify, patch_channel)

LD6_MODEL = "LD6"

# Light endpoints and their user facing names
LD6_LIGHT_ENDPOINTS = {"01": "l1", "05": "l2", "06": "l3", "07": "l4", "08": "l5", "09": "l6"}

COLOR_CAPABILITIES = "400a"
COLOR_CAPABILITY_XY = 0x08
COLOR_CAPABILITY_COLOR_TEMPERATURE = 0x10
COLOR_TEMPERATURE = "0007"
CURRENT_X = "0003"

ADVANCED_OPTIONS = "0000"
MINIMUM_ON_LEVEL = "0000"
MINIMUM_ON_LEVEL_RANGE = (1, 254)

ADVANCED_OPTIONS_BITS = (
    ("advanced_options_no_color_white", 0x01),
    ("advanced_options_no_first_white_color", 0x02),
    ("advanced_options_no_second_white_color", 0x04),
    ("advanced_options_ignore_color_temp_range", 0x08),
    ("advanced_options_constant_luminous_flux", 0x10),
)

CALIBRATION_FORMAT = 'Expected format: {"channel": 1..6, "x": 0..1, "y": 0..1, "flux": 0..254}'


# Inbound

def ubisys_ld6_device_setup(self, nwkid, ep, cluster, attribut, value):
    self.log.logging("Ubisys", "Debug", "ubisys_ld6_device_setup %s/%s %s %s %s" % (nwkid, ep, cluster, attribut, value), nwkid)

    if attribut in (UBISYS_INPUT_CONFIGURATIONS, UBISYS_INPUT_ACTIONS):
        ubisys_device_setup(self, nwkid, ep, cluster, attribut, value)
        return

    if attribut != UBISYS_OUTPUT_CONFIGURATIONS:
        self.log.logging("Ubisys", "Debug", "ubisys_ld6_device_setup - unhandled attribute %s value %s" % (attribut, value), nwkid)
        return

    try:
        buffer = bytes.fromhex(ARRAY + value)
        result = decode(buffer)

    except (ValueError, TypeError, BufferTooShortError) as e:
        self.log.logging("Ubisys", "Error", "ubisys_ld6_device_setup - cannot decode OutputConfigurations %s: %s" % (value, e), nwkid, {"NwkId": nwkid, "Value": value})
        return

    checkAndStoreAttributeValue(self, nwkid, ep, cluster, attribut, value)
    MajDeviceState(self, nwkid, "output_configuration_raw", buffer.hex())

    if result["partial"] or not result["header_valid"]:
        self.log.logging("Ubisys", "Status", "LD6 %s reported an incomplete output configuration (%s channels) %s" % (
            nwkid, len(result["channels"]), buffer.hex()), nwkid)
        return

    configuration = identify(buffer)
    MajDeviceState(self, nwkid, "output_mode", configuration if configuration == CUSTOM_MODE else configuration["key"])

    for endpoint, color_range in color_ranges(result["channels"], _fallback_range(self)).items():
        ep_name = LD6_LIGHT_ENDPOINTS.get("%02x" % endpoint)
        if ep_name is None:
            continue
        MajDeviceState(self, nwkid, "color_temp_range_%s" % ep_name, [color_range["min_mireds"], color_range["max_mireds"]])


def ubisys_ld6_advanced_options(self, nwkid, ep, cluster, attribut, value):
    self.log.logging("Ubisys", "Debug", "ubisys_ld6_advanced_options %s/%s %s" % (nwkid, ep, value), nwkid)
    if isinstance(value, str):
        value = int(value, 16)
    for key, mask in ADVANCED_OPTIONS_BITS:
        MajDeviceState(self, nwkid, key, bool(value & mask))


def ubisys_ld6_write_response(self, nwkid, ep, cluster, attribut, status):
    """ Once a new output configuration is accepted, read it back after the mode switch settled """

    if attribut != UBISYS_OUTPUT_CONFIGURATIONS or status != "00":
        return

    # The accepted buffer becomes the current layout until the device reports it
    request = get_request_datastruct(self, "WriteAttributes", nwkid, ep, cluster, attribut)
    if request and request.get("data"):
        checkAndStoreAttributeValue(self, nwkid, ep, cluster, attribut, request["data"])

    delay = self.pluginconf.pluginConf["ubisysModeSwitchSettlingDelay"]
    self.ListOfDevices[nwkid].setdefault("Ubisys", {})["ReadOutputConfigurationAfter"] = int(time.time()) + delay
    self.log.logging("Ubisys", "Debug", "ubisys_ld6_write_response %s OutputConfigurations accepted, read back in %ss" % (nwkid, delay), nwkid)


def ubisys_ld6_heartbeat(self, nwkid, now):
    pending = self.ListOfDevices[nwkid].get("Ubisys", {})
    if "ReadOutputConfigurationAfter" not in pending or pending["ReadOutputConfigurationAfter"] > now:
        return
    del pending["ReadOutputConfigurationAfter"]
    ubisys_ld6_read_output_configurations(self, nwkid)


# Outbound

def _fallback_range(self):
    return (self.pluginconf.pluginConf["ubisysDefaultMinMireds"], self.pluginconf.pluginConf["ubisysDefaultMaxMireds"])


def _light_endpoints(self, nwkid, cluster):
    """ Light endpoints of the device hosting cluster, endpoint 1 when the device has not been discovered yet """

    endpoints = [ep for ep in LD6_LIGHT_ENDPOINTS if cluster in self.ListOfDevices[nwkid].get("Ep", {}).get(ep, {})]
    return endpoints or ["01"]


def _write_output_configurations(self, nwkid, buffer):
    ep = get_setup_endpoint(self, nwkid)
    # Layout is unknown until the write is acknowledged
    checkAndStoreAttributeValue(self, nwkid, ep, UBISYS_DEVICE_SETUP_CLUSTER, UBISYS_OUTPUT_CONFIGURATIONS, {})
    # Array header goes as the attribute data type, the payload starts with the element type
    return write_attribute(self, nwkid, PLUGIN_EP, ep, UBISYS_DEVICE_SETUP_CLUSTER, "0000", "00", UBISYS_OUTPUT_CONFIGURATIONS, ARRAY, buffer[1:].hex(), ackIsDisabled=False)


def ubisys_ld6_read_output_configurations(self, nwkid):
    ep = get_setup_endpoint(self, nwkid)
    return read_attribute(self, nwkid, PLUGIN_EP, ep, UBISYS_DEVICE_SETUP_CLUSTER, "00", "00", "0000", 1, UBISYS_OUTPUT_CONFIGURATIONS, ackIsDisabled=False)


def ubisys_ld6_output_mode(self, nwkid, value):
    configuration = get(value)
    self.log.logging("Ubisys", "Debug", "ubisys_ld6_output_mode %s %s (%s)" % (nwkid, value, configuration["description"]), nwkid)
    _write_output_configurations(self, nwkid, encode(configuration["channels"]))
    return {"output_mode": value}


def ubisys_ld6_output_configuration(self, nwkid, value):
    if not isinstance(value, str):
        raise InvalidParameterValueError("output_configuration must be a hex string", field="output_configuration")
    try:
        buffer = buffer_from_hex(value)

    except ValueError as e:
        raise InvalidParameterValueError("output_configuration is not a valid hex string: %s" % e, field="output_configuration") from e

    result = decode(buffer)
    if result["partial"] or not result["header_valid"]:
        raise InvalidParameterValueError(
            "output_configuration must be a complete 6 channels array (48 41 06 00 ...), got %s channels" % len(result["channels"]), field="output_configuration")

    self.log.logging("Ubisys", "Debug", "ubisys_ld6_output_configuration %s %s" % (nwkid, buffer.hex()), nwkid)
    _write_output_configurations(self, nwkid, buffer)
    return {"output_configuration_raw": buffer.hex()}


def parse_calibration(value):
    """ Return { "channel", "flux", "x", "y" } from a JSON string or a dict """

    try:
        if value is None or (isinstance(value, str) and value.strip() == ""):
            raise ValueError("Empty or missing calibration value")
        calibration = json.loads(value) if isinstance(value, str) else value

    except ValueError as e:
        raise InvalidCalibrationInputError("Invalid calibration JSON: %s. %s" % (e, CALIBRATION_FORMAT), field="calibration") from e

    if not isinstance(calibration, dict):
        raise InvalidCalibrationInputError("Calibration must be a JSON object", field="calibration")

    channel = calibration.get("channel")
    if isinstance(channel, bool) or not isinstance(channel, int) or not 1 <= channel <= 6:
        raise InvalidCalibrationInputError('Calibration must specify a "channel" between 1 and 6', field="channel")

    for field in ("x", "y"):
        coordinate = calibration.get(field)
        if coordinate is None:
            continue
        if isinstance(coordinate, bool) or not isinstance(coordinate, (int, float)) or not 0 <= coordinate <= 1:
            raise InvalidCalibrationInputError('Calibration "%s" must be a number between 0 and 1, got %s' % (field, coordinate), field=field)

    flux = calibration.get("flux")
    if flux is not None and (isinstance(flux, bool) or not isinstance(flux, int) or not 0 <= flux <= 254):
        raise InvalidCalibrationInputError('Calibration "flux" must be an integer between 0 and 254, got %s' % (flux,), field="flux")

    return {"channel": channel, "flux": flux, "x": calibration.get("x"), "y": calibration.get("y")}


def ubisys_ld6_calibration(self, nwkid, value):
    calibration = parse_calibration(value)

    ep = get_setup_endpoint(self, nwkid)
    current = getAttributeValue(self, nwkid, ep, UBISYS_DEVICE_SETUP_CLUSTER, UBISYS_OUTPUT_CONFIGURATIONS)
    if current is None:
        ubisys_ld6_read_output_configurations(self, nwkid)
        raise ConfigurationNotAvailableError(nwkid)

    buffer = patch_channel(bytes.fromhex(ARRAY + current), calibration["channel"], calibration)
    self.log.logging("Ubisys", "Debug", "ubisys_ld6_calibration %s channel %s -> %s" % (nwkid, calibration["channel"], buffer.hex()), nwkid)
    _write_output_configurations(self, nwkid, buffer)
    return {"calibration_status": "Updated channel %s" % calibration["channel"]}


def ubisys_ld6_advanced_option(self, nwkid, key, value):
    """ Read-modify-write of the advanced options bitmap, the other bits come from the published state """

    if not isinstance(value, bool):
        raise InvalidParameterValueError("%s must be true or false, got %s" % (key, value), field=key)

    mask = 0
    for option, bit in ADVANCED_OPTIONS_BITS:
        enabled = value if option == key else getDeviceState(self, nwkid, option, False)
        if enabled:
            mask |= bit

    for EPout in _light_endpoints(self, nwkid, COLOR_CLUSTER):
        self.log.logging("Ubisys", "Debug", "ubisys_ld6_advanced_option %s/%s %s: %s -> 0x%02x" % (nwkid, EPout, key, value, mask), nwkid)
        write_attribute(self, nwkid, PLUGIN_EP, EPout, COLOR_CLUSTER, UBISYS_MANUFACTURER_CODE, "01", ADVANCED_OPTIONS, BITMAP8, "%02x" % mask, ackIsDisabled=False)
    return {key: value}


def ubisys_ld6_read_advanced_options(self, nwkid):
    for EPout in _light_endpoints(self, nwkid, COLOR_CLUSTER):
        read_attribute(self, nwkid, PLUGIN_EP, EPout, COLOR_CLUSTER, "00", "01", UBISYS_MANUFACTURER_CODE, 1, ADVANCED_OPTIONS, ackIsDisabled=False)


def ubisys_ld6_minimum_on_level(self, nwkid, value):
    if isinstance(value, bool) or not isinstance(value, int) or not MINIMUM_ON_LEVEL_RANGE[0] <= value <= MINIMUM_ON_LEVEL_RANGE[1]:
        raise InvalidParameterValueError("minimum_on_level must be an integer between 1 and 254, got %s" % (value,), field="minimum_on_level")

    for EPout in _light_endpoints(self, nwkid, LEVEL_CONTROL_CLUSTER):
        write_attribute(self, nwkid, PLUGIN_EP, EPout, LEVEL_CONTROL_CLUSTER, UBISYS_MANUFACTURER_CODE, "01", MINIMUM_ON_LEVEL, UINT8, "%02x" % value, ackIsDisabled=False)
    return {"minimum_on_level": value}


def ubisys_ld6_read_minimum_on_level(self, nwkid):
    for EPout in _light_endpoints(self, nwkid, LEVEL_CONTROL_CLUSTER):
        read_attribute(self, nwkid, PLUGIN_EP, EPout, LEVEL_CONTROL_CLUSTER, "00", "01", UBISYS_MANUFACTURER_CODE, 1, MINIMUM_ON_LEVEL, ackIsDisabled=False)


def _advanced_option_setter(key):
    def setter(self, nwkid, value):
        return ubisys_ld6_advanced_option(self, nwkid, key, value)
    setter.__name__ = "ubisys_ld6_%s" % key
    return setter


# Exposes

def _light_feature(self, nwkid, ep, channels):
    device_ep = self.ListOfDevices[nwkid].get("Ep", {}).get(ep)
    if device_ep is None:
        return None

    capabilities = getAttributeValue(self, nwkid, ep, COLOR_CLUSTER, COLOR_CAPABILITIES)
    if capabilities is not None:
        has_color_temp = bool(capabilities & COLOR_CAPABILITY_COLOR_TEMPERATURE)
        has_color_xy = bool(capabilities & COLOR_CAPABILITY_XY)
    else:
        has_color_temp = getAttributeValue(self, nwkid, ep, COLOR_CLUSTER, COLOR_TEMPERATURE) is not None
        has_color_xy = getAttributeValue(self, nwkid, ep, COLOR_CLUSTER, CURRENT_X) is not None

    feature = {"type": "light", "endpoint": LD6_LIGHT_ENDPOINTS[ep]}
    if has_color_temp:
        color_range = color_ranges(channels, _fallback_range(self)).get(int(ep, 16))
        if color_range is None:
            color_range = {"min_mireds": _fallback_range(self)[0], "max_mireds": _fallback_range(self)[1]}
        feature["features"] = ["state", "brightness", "color_temp", "color_xy"] if has_color_xy else ["state", "brightness", "color_temp"]
        feature["color_temp_range"] = [color_range["min_mireds"], color_range["max_mireds"]]
    elif has_color_xy:
        feature["features"] = ["state", "brightness", "color_xy"]
    elif LEVEL_CONTROL_CLUSTER in device_ep:
        feature["features"] = ["state", "brightness"]
    elif ONOFF_CLUSTER in device_ep:
        feature["features"] = ["state"]
    else:
        return None
    return feature


def _current_channels(self, nwkid):
    if not has_setup_endpoint(self, nwkid):
        return []
    current = getAttributeValue(self, nwkid, get_setup_endpoint(self, nwkid), UBISYS_DEVICE_SETUP_CLUSTER, UBISYS_OUTPUT_CONFIGURATIONS)
    if current is None:
        return []
    try:
        return decode(bytes.fromhex(ARRAY + current))["channels"]

    except (ValueError, BufferTooShortError):
        return []


def ubisys_ld6_exposes(self, nwkid):
    exposes = [
        {"type": "enum", "name": "output_mode", "access": "set", "values": list(OUTPUT_MODES)},
        {"type": "text", "name": "output_configuration", "access": "set"},
        {"type": "text", "name": "output_configuration_raw", "access": "state"},
        {"type": "numeric", "name": "ballast_min_level", "access": "all", "value_min": 1, "value_max": 254},
        {"type": "numeric", "name": "ballast_max_level", "access": "all", "value_min": 1, "value_max": 254},
    ]
    exposes += [{"type": "binary", "name": key, "access": "all"} for key, _ in ADVANCED_OPTIONS_BITS]
    exposes += [
        {"type": "numeric", "name": "minimum_on_level", "access": "all", "value_min": 1, "value_max": 254},
        {"type": "list", "name": "input_configurations", "access": "all", "item_type": "numeric"},
        {"type": "list", "name": "input_actions", "access": "all", "item_type": "text"},
        {"type": "text", "name": "calibration", "access": "set"},
        {"type": "text", "name": "calibration_status", "access": "state"},
    ]

    channels = _current_channels(self, nwkid)
    for ep in LD6_LIGHT_ENDPOINTS:
        feature = _light_feature(self, nwkid, ep, channels)
        if feature is not None:
            exposes.append(feature)
    return exposes


def ubisys_ld6_configure(self, nwkid):
    """ Best effort reads, so the exposes can derive the colour temperature range """

    if self.pluginconf.pluginConf["ubisysReadOutputConfigurationAtConfigure"] and has_setup_endpoint(self, nwkid):
        ubisys_ld6_read_output_configurations(self, nwkid)
    ubisys_configure_device_setup(self, nwkid)

    for ep in LD6_LIGHT_ENDPOINTS:
        if COLOR_CLUSTER in self.ListOfDevices[nwkid].get("Ep", {}).get(ep, {}):
            read_attribute(self, nwkid, PLUGIN_EP, ep, COLOR_CLUSTER, "00", "00", "0000", 1, COLOR_CAPABILITIES, ackIsDisabled=False)


UBISYS_LD6_DEVICE_PARAMETERS = {
    "output_mode": {
        "callable": ubisys_ld6_output_mode,
        "getter": ubisys_ld6_read_output_configurations,
        "models": (LD6_MODEL,),
        "description": "Select one of the predefined LD6 output configurations",
    },
    "output_configuration": {
        "callable": ubisys_ld6_output_configuration,
        "getter": ubisys_ld6_read_output_configurations,
        "models": (LD6_MODEL,),
        "description": "Raw OutputConfigurations array as a hex string",
    },
    "calibration": {
        "callable": ubisys_ld6_calibration,
        "models": (LD6_MODEL,),
        "description": "Chromaticity and flux calibration of one channel",
    },
    "minimum_on_level": {
        "callable": ubisys_ld6_minimum_on_level,
        "getter": ubisys_ld6_read_minimum_on_level,
        "models": (LD6_MODEL,),
        "description": "Minimum level of the light when switched on",
    },
}

for _key, _ in ADVANCED_OPTIONS_BITS:
    UBISYS_LD6_DEVICE_PARAMETERS[_key] = {
        "callable": _advanced_option_setter(_key),
        "getter": ubisys_ld6_read_advanced_options,
        "models": (LD6_MODEL,),
        "description": "LD6 colour control advanced option",
    }
