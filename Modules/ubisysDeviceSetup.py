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
    Module: ubisysDeviceSetup.py

    Description: ubisys Device Setup cluster (0xfc00) on the management endpoint 232.
                 InputConfigurations (0x0000) and InputActions (0x0001) are shared by all ubisys devices.

"""

import zigpy.types as t

from Modules.basicOutputs import read_attribute, write_attribute
from Modules.sendRawCommand import PLUGIN_EP
from Modules.stateMaj import MajDeviceState
from Modules.tools import checkAndStoreAttributeValue, is_hex
from Modules.ubisysConsts import (ARRAY, BITMAP8, DATA8, ENUM8,
                                  OCTET_STRING, UBISYS_DEVICE_SETUP_CLUSTER,
                                  UBISYS_INPUT_ACTIONS,
                                  UBISYS_INPUT_CONFIGURATIONS, UBISYS_SETUP_EP,
                                  UINT8)
from Modules.ubisysExceptions import (InvalidParameterValueError,
                                      SetupEndpointNotFoundError)

SINGLE_BYTE_ELEMENTS = (int(DATA8, 16), int(UINT8, 16), int(BITMAP8, 16), int(ENUM8, 16))


def get_setup_endpoint(self, nwkid):
    if nwkid in self.ListOfDevices and UBISYS_SETUP_EP in self.ListOfDevices[nwkid].get("Ep", {}):
        return UBISYS_SETUP_EP
    raise SetupEndpointNotFoundError(nwkid)


def has_setup_endpoint(self, nwkid):
    return nwkid in self.ListOfDevices and UBISYS_SETUP_EP in self.ListOfDevices[nwkid].get("Ep", {})


# Array encoders. The returned hex excludes the leading array data type (0x48), which goes in the Write Attribute record
def encode_array_of_data8(values):
    payload = t.uint8_t(int(DATA8, 16)).serialize() + t.uint16_t(len(values)).serialize()
    for value in values:
        payload += t.uint8_t(value).serialize()
    return payload.hex()


def encode_array_of_octet_strings(elements):
    payload = t.uint8_t(int(OCTET_STRING, 16)).serialize() + t.uint16_t(len(elements)).serialize()
    for element in elements:
        payload += t.LVBytes(element).serialize()
    return payload.hex()


def _array_elements(data):
    """ Return ( element type, [ element bytes ] ) from an array value ( element type + count + elements ) """

    buffer = bytes.fromhex(data)
    if len(buffer) < 3:
        return None, []

    element_type = buffer[0]
    count, remaining = t.uint16_t.deserialize(buffer[1:])
    elements = []
    for _ in range(count):
        if element_type in SINGLE_BYTE_ELEMENTS:
            if not remaining:
                break
            elements.append(remaining[:1])
            remaining = remaining[1:]
        elif element_type == int(OCTET_STRING, 16):
            try:
                element, remaining = t.LVBytes.deserialize(remaining)
            except ValueError:
                break
            elements.append(element)
        else:
            return element_type, None
    return element_type, elements


def decode_input_configurations(data):
    element_type, elements = _array_elements(data)
    if elements is None:
        return None
    return [element[0] for element in elements if element]


def decode_input_actions(data):
    element_type, elements = _array_elements(data)
    if elements is None or (elements and element_type != int(OCTET_STRING, 16)):
        return None
    return [element.hex() for element in elements]


def _check_input_configurations(value):
    if not isinstance(value, (list, tuple)):
        raise InvalidParameterValueError("input_configurations must be a list of integers", field="input_configurations")
    for item in value:
        if not isinstance(item, int) or isinstance(item, bool) or not 0 <= item <= 255:
            raise InvalidParameterValueError("input_configurations entries must be integers between 0 and 255, got %s" % (item,), field="input_configurations")
    return list(value)


def _check_input_actions(value):
    if not isinstance(value, (list, tuple)):
        raise InvalidParameterValueError("input_actions must be a list of hex strings", field="input_actions")
    actions = []
    for item in value:
        if not isinstance(item, str):
            raise InvalidParameterValueError("input_actions entries must be hex strings, got %s" % (item,), field="input_actions")
        action = item.strip().lower().replace(" ", "")
        if action.startswith("0x"):
            action = action[2:]
        if not is_hex(action) or len(action) % 2:
            raise InvalidParameterValueError("input_actions entry '%s' is not a valid hex string" % item, field="input_actions")
        actions.append(action)
    return actions


def ubisys_set_input_configurations(self, nwkid, value):
    configurations = _check_input_configurations(value)
    ep = get_setup_endpoint(self, nwkid)
    self.log.logging("Ubisys", "Debug", "ubisys_set_input_configurations %s %s" % (nwkid, configurations), nwkid)
    write_attribute(self, nwkid, PLUGIN_EP, ep, UBISYS_DEVICE_SETUP_CLUSTER, "0000", "00", UBISYS_INPUT_CONFIGURATIONS, ARRAY, encode_array_of_data8(configurations), ackIsDisabled=False)
    return {"input_configurations": configurations}


def ubisys_set_input_actions(self, nwkid, value):
    actions = _check_input_actions(value)
    ep = get_setup_endpoint(self, nwkid)
    self.log.logging("Ubisys", "Debug", "ubisys_set_input_actions %s %s" % (nwkid, actions), nwkid)
    write_attribute(self, nwkid, PLUGIN_EP, ep, UBISYS_DEVICE_SETUP_CLUSTER, "0000", "00", UBISYS_INPUT_ACTIONS, ARRAY, encode_array_of_octet_strings([bytes.fromhex(x) for x in actions]), ackIsDisabled=False)
    return {"input_actions": actions}


def ubisys_read_setup_attributes(self, nwkid, attributes):
    ep = get_setup_endpoint(self, nwkid)
    return read_attribute(self, nwkid, PLUGIN_EP, ep, UBISYS_DEVICE_SETUP_CLUSTER, "00", "00", "0000", len(attributes), attributes, ackIsDisabled=False)


def ubisys_get_input_configurations(self, nwkid):
    return ubisys_read_setup_attributes(self, nwkid, [UBISYS_INPUT_CONFIGURATIONS])


def ubisys_get_input_actions(self, nwkid):
    return ubisys_read_setup_attributes(self, nwkid, [UBISYS_INPUT_ACTIONS])


def ubisys_configure_device_setup(self, nwkid):
    """ Best effort read of the input configuration, a device without endpoint 232 is logged and skipped """

    if not has_setup_endpoint(self, nwkid):
        self.log.logging("Ubisys", "Log", "ubisys_configure_device_setup - %s has no setup endpoint, skip input configuration read" % nwkid, nwkid)
        return None
    return ubisys_read_setup_attributes(self, nwkid, [UBISYS_INPUT_CONFIGURATIONS, UBISYS_INPUT_ACTIONS])


def ubisys_device_setup(self, nwkid, ep, cluster, attribut, value):
    self.log.logging("Ubisys", "Debug", "ubisys_device_setup %s/%s %s %s %s" % (nwkid, ep, cluster, attribut, value), nwkid)
    checkAndStoreAttributeValue(self, nwkid, ep, cluster, attribut, value)

    if attribut == UBISYS_INPUT_CONFIGURATIONS:
        configurations = decode_input_configurations(value)
        if configurations is None:
            self.log.logging("Ubisys", "Error", "ubisys_device_setup - cannot decode InputConfigurations %s" % value, nwkid, {"NwkId": nwkid, "Value": value})
            return
        MajDeviceState(self, nwkid, "input_configurations", configurations)

    elif attribut == UBISYS_INPUT_ACTIONS:
        actions = decode_input_actions(value)
        if actions is None:
            self.log.logging("Ubisys", "Error", "ubisys_device_setup - cannot decode InputActions %s" % value, nwkid, {"NwkId": nwkid, "Value": value})
            return
        MajDeviceState(self, nwkid, "input_actions", actions)

    else:
        self.log.logging("Ubisys", "Debug", "ubisys_device_setup - unhandled attribute %s value %s" % (attribut, value), nwkid)


UBISYS_SETUP_DEVICE_PARAMETERS = {
    "input_configurations": {
        "callable": ubisys_set_input_configurations,
        "getter": ubisys_get_input_configurations,
        "description": "InputConfigurations of the Device Setup cluster, one data8 per physical input",
    },
    "input_actions": {
        "callable": ubisys_set_input_actions,
        "getter": ubisys_get_input_actions,
        "description": "InputActions micro-code of the Device Setup cluster, one hex string per action",
    },
}
