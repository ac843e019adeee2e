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
    Module: custom_ubisys_j1.py

    Description: ubisys J1 / J1-R shutter control with integrated smart meter

        Endpoint 1   : Window Covering ( standard and manufacturer specific calibration attributes )
        Endpoint 3   : Metering and Electrical Measurement
        Endpoint 232 : Device Setup

"""

import json

from Modules.basicOutputs import (configure_reporting, read_attribute,
                                  window_covering_command, write_attribute)
from Modules.sendRawCommand import PLUGIN_EP
from Modules.stateMaj import MajDeviceState
from Modules.tools import (checkAndStoreAttributeValue, getAttributeValue,
                           is_endpoint_available)
from Modules.ubisysConsts import (BITMAP8, ELECTRICAL_MEASUREMENT_CLUSTER,
                                  ENUM8, METERING_CLUSTER,
                                  UBISYS_MANUFACTURER_CODE, UINT8, UINT16,
                                  WINDOW_COVERING_CLUSTER)
from Modules.ubisysDeviceSetup import ubisys_configure_device_setup
from Modules.ubisysExceptions import (ConfigurationNotAvailableError,
                                      InvalidParameterValueError)
from Modules.zclClusterHelpers import (CurrentPositionLiftPercentage,
                                       compute_divided_value)

J1_MODEL = "J1"
J1_WINDOW_COVERING_EP = "01"
J1_METERING_EP = "03"

WINDOW_COVERING_TYPES = {
    0: "Roller Shade",
    1: "Roller Shade (2 motors)",
    2: "Roller Shade (exterior)",
    3: "Roller Shade (2 motors, exterior)",
    4: "Drapery",
    5: "Awning",
    6: "Shutter",
    7: "Tilt Blind (tilt only)",
    8: "Tilt Blind (lift & tilt)",
    9: "Projector Screen",
}

CONFIG_STATUS_CLOSED_LOOP_LIFT = 0x08
CONFIG_STATUS_CLOSED_LOOP_TILT = 0x10

MODE_MOTOR_REVERSED = 0x01
MODE_CALIBRATION = 0x02

# Window Covering attributes
WINDOW_COVERING_TYPE = "0000"
CONFIG_STATUS = "0007"
CURRENT_POSITION_LIFT_PERCENTAGE = "0008"
CURRENT_POSITION_TILT_PERCENTAGE = "0009"
OPERATIONAL_STATUS = "000a"
INSTALLED_OPEN_LIMIT_LIFT = "0010"
INSTALLED_CLOSED_LIMIT_LIFT = "0011"
INSTALLED_OPEN_LIMIT_TILT = "0012"
INSTALLED_CLOSED_LIMIT_TILT = "0013"
MODE = "0017"

INSTALLED_LIMITS = {
    INSTALLED_OPEN_LIMIT_LIFT: "installed_open_limit_lift_cm",
    INSTALLED_CLOSED_LIMIT_LIFT: "installed_closed_limit_lift_cm",
    INSTALLED_OPEN_LIMIT_TILT: "installed_open_limit_tilt_ddeg",
    INSTALLED_CLOSED_LIMIT_TILT: "installed_closed_limit_tilt_ddeg",
}

# Manufacturer specific calibration attributes
TURNAROUND_GUARD_TIME = "1000"
LIFT_TO_TILT_TRANSITION_STEPS = "1001"
TOTAL_STEPS = "1002"
LIFT_TO_TILT_TRANSITION_STEPS_2 = "1003"
TOTAL_STEPS_2 = "1004"
ADDITIONAL_STEPS = "1005"
INACTIVE_POWER_THRESHOLD = "1006"
STARTUP_STEPS = "1007"

CALIBRATION_ATTRIBUTES = {
    TURNAROUND_GUARD_TIME: ("turnaround_guard_time", UINT8),
    LIFT_TO_TILT_TRANSITION_STEPS: ("lift_to_tilt_transition_steps", UINT16),
    TOTAL_STEPS: ("total_steps", UINT16),
    LIFT_TO_TILT_TRANSITION_STEPS_2: ("lift_to_tilt_transition_steps_2", UINT16),
    TOTAL_STEPS_2: ("total_steps_2", UINT16),
    ADDITIONAL_STEPS: ("additional_steps", UINT8),
    INACTIVE_POWER_THRESHOLD: ("inactive_power_threshold", UINT16),
    STARTUP_STEPS: ("startup_steps", UINT16),
}

STANDARD_CONFIGURATION_ATTRIBUTES = [
    WINDOW_COVERING_TYPE, CONFIG_STATUS, MODE,
    INSTALLED_OPEN_LIMIT_LIFT, INSTALLED_CLOSED_LIMIT_LIFT, INSTALLED_OPEN_LIMIT_TILT, INSTALLED_CLOSED_LIMIT_TILT,
]

# Metering and Electrical Measurement, state key -> ( cluster, attribute )
METER_ATTRIBUTES = {
    "energy": (METERING_CLUSTER, "0000"),
    "power": (METERING_CLUSTER, "0400"),
    "ac_frequency": (ELECTRICAL_MEASUREMENT_CLUSTER, "0300"),
    "voltage": (ELECTRICAL_MEASUREMENT_CLUSTER, "0505"),
    "current": (ELECTRICAL_MEASUREMENT_CLUSTER, "0508"),
    "active_power": (ELECTRICAL_MEASUREMENT_CLUSTER, "050b"),
    "reactive_power": (ELECTRICAL_MEASUREMENT_CLUSTER, "050e"),
    "apparent_power": (ELECTRICAL_MEASUREMENT_CLUSTER, "050f"),
    "power_factor": (ELECTRICAL_MEASUREMENT_CLUSTER, "0510"),
}

WINDOW_COVERING_STATES = {"open": "Up", "close": "Down", "stop": "Stop"}


# Inbound

def ubisys_j1_window_covering(self, nwkid, ep, cluster, attribut, value):
    self.log.logging("Ubisys", "Debug", "ubisys_j1_window_covering %s/%s %s %s" % (nwkid, ep, attribut, value), nwkid)
    if isinstance(value, str):
        value = int(value, 16)
    checkAndStoreAttributeValue(self, nwkid, ep, cluster, attribut, value)

    if attribut == CURRENT_POSITION_LIFT_PERCENTAGE:
        MajDeviceState(self, nwkid, "position", CurrentPositionLiftPercentage(self, nwkid, ep, cluster, attribut, value))

    elif attribut == CURRENT_POSITION_TILT_PERCENTAGE:
        MajDeviceState(self, nwkid, "tilt", CurrentPositionLiftPercentage(self, nwkid, ep, cluster, attribut, value))

    elif attribut == WINDOW_COVERING_TYPE:
        MajDeviceState(self, nwkid, "window_covering_type", WINDOW_COVERING_TYPES.get(value, "Unknown (%s)" % value))
        MajDeviceState(self, nwkid, "window_covering_type_raw", value)

    elif attribut == CONFIG_STATUS:
        MajDeviceState(self, nwkid, "config_status", value)
        MajDeviceState(self, nwkid, "config_status_lift_closed_loop", bool(value & CONFIG_STATUS_CLOSED_LOOP_LIFT))
        MajDeviceState(self, nwkid, "config_status_tilt_closed_loop", bool(value & CONFIG_STATUS_CLOSED_LOOP_TILT))

    elif attribut == OPERATIONAL_STATUS:
        MajDeviceState(self, nwkid, "operational_status", value)
        MajDeviceState(self, nwkid, "moving", value != 0)
        if value & 0x03 == 0x01:
            MajDeviceState(self, nwkid, "movement", "opening")
        elif value & 0x03 == 0x02:
            MajDeviceState(self, nwkid, "movement", "closing")
        else:
            MajDeviceState(self, nwkid, "movement", "stopped")

    elif attribut == MODE:
        MajDeviceState(self, nwkid, "mode", value)
        MajDeviceState(self, nwkid, "calibration_mode", bool(value & MODE_CALIBRATION))
        MajDeviceState(self, nwkid, "motor_reversed", bool(value & MODE_MOTOR_REVERSED))

    elif attribut in INSTALLED_LIMITS:
        MajDeviceState(self, nwkid, INSTALLED_LIMITS[attribut], value)

    elif attribut == TURNAROUND_GUARD_TIME:
        # 50ms units
        MajDeviceState(self, nwkid, "turnaround_guard_time", value * 50)

    elif attribut in CALIBRATION_ATTRIBUTES:
        MajDeviceState(self, nwkid, CALIBRATION_ATTRIBUTES[attribut][0], value)

    else:
        self.log.logging("Ubisys", "Debug", "ubisys_j1_window_covering - unhandled attribute %s value %s" % (attribut, value), nwkid)


def ubisys_j1_energy(self, nwkid, ep, cluster, attribut, value):
    return compute_divided_value(self, nwkid, ep, cluster, attribut, value, "SummationMeteringDivisor", 1000)


def ubisys_j1_ac_frequency(self, nwkid, ep, cluster, attribut, value):
    return compute_divided_value(self, nwkid, ep, cluster, attribut, value, "ACFrequencyDivisor", 1000)


def ubisys_j1_current(self, nwkid, ep, cluster, attribut, value):
    return compute_divided_value(self, nwkid, ep, cluster, attribut, value, "RMSCurrentDivisor", 1000)


def ubisys_j1_power_factor(self, nwkid, ep, cluster, attribut, value):
    return compute_divided_value(self, nwkid, ep, cluster, attribut, value, "PowerFactorDivisor", 100)


# Outbound

def _write_window_covering(self, nwkid, attribute, data_type, value, manufacturer_specific=True):
    if manufacturer_specific:
        manuf_id, manuf_spec = UBISYS_MANUFACTURER_CODE, "01"
    else:
        manuf_id, manuf_spec = "0000", "00"
    data = "%02x" % value if data_type in (UINT8, ENUM8, BITMAP8) else "%04x" % value
    return write_attribute(self, nwkid, PLUGIN_EP, J1_WINDOW_COVERING_EP, WINDOW_COVERING_CLUSTER, manuf_id, manuf_spec, attribute, data_type, data, ackIsDisabled=False)


def _read_window_covering(self, nwkid, attributes, manufacturer_specific=False):
    if manufacturer_specific:
        return read_attribute(self, nwkid, PLUGIN_EP, J1_WINDOW_COVERING_EP, WINDOW_COVERING_CLUSTER, "00", "01", UBISYS_MANUFACTURER_CODE, len(attributes), attributes, ackIsDisabled=False)
    return read_attribute(self, nwkid, PLUGIN_EP, J1_WINDOW_COVERING_EP, WINDOW_COVERING_CLUSTER, "00", "00", "0000", len(attributes), attributes, ackIsDisabled=False)


def _percentage(key, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterValueError("%s must be a number between 0 and 100, got %s" % (key, value), field=key)
    return int(round(max(0, min(100, value))))


def ubisys_j1_state(self, nwkid, value):
    if not isinstance(value, str) or value.lower() not in WINDOW_COVERING_STATES:
        raise InvalidParameterValueError("state must be one of %s, got %s" % (", ".join(WINDOW_COVERING_STATES), value), field="state")
    window_covering_command(self, nwkid, J1_WINDOW_COVERING_EP, WINDOW_COVERING_STATES[value.lower()])
    return {"state": value}


def ubisys_j1_position(self, nwkid, value):
    position = _percentage("position", value)
    window_covering_command(self, nwkid, J1_WINDOW_COVERING_EP, "GoToLiftPercentage", 100 - position)
    return {"position": position}


def ubisys_j1_tilt(self, nwkid, value):
    tilt = _percentage("tilt", value)
    window_covering_command(self, nwkid, J1_WINDOW_COVERING_EP, "GoToTiltPercentage", 100 - tilt)
    return {"tilt": tilt}


def ubisys_j1_read_position(self, nwkid):
    return _read_window_covering(self, nwkid, [CURRENT_POSITION_LIFT_PERCENTAGE])


def ubisys_j1_read_tilt(self, nwkid):
    return _read_window_covering(self, nwkid, [CURRENT_POSITION_TILT_PERCENTAGE])


def _unsigned(value, field, maximum):
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise InvalidParameterValueError("configure_j1 %s must be an integer between 0 and %s, got %s" % (field, maximum, value), field=field)
    return value


def _number(value, field):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise InvalidParameterValueError("configure_j1 %s must be a positive number, got %s" % (field, value), field=field)
    return value


def _parse_configure_j1(value):
    if isinstance(value, str):
        try:
            value = json.loads(value)

        except ValueError as e:
            raise InvalidParameterValueError("configure_j1 is not valid JSON: %s" % e, field="configure_j1") from e
    if not isinstance(value, dict):
        raise InvalidParameterValueError("configure_j1 must be a JSON object", field="configure_j1")
    return value


def ubisys_j1_configure_j1(self, nwkid, value):
    value = _parse_configure_j1(value)
    self.log.logging("Ubisys", "Debug", "ubisys_j1_configure_j1 %s %s" % (nwkid, value), nwkid)

    steps_per_second = _number(value.get("steps_per_second") or self.pluginconf.pluginConf["ubisysStepsPerSecond"], "steps_per_second")

    if value.get("calibrate"):
        self.log.logging("Ubisys", "Status", "ubisys J1 %s: Starting calibration..." % nwkid, nwkid)
        _write_window_covering(self, nwkid, INSTALLED_OPEN_LIMIT_LIFT, UINT16, 0x0000)
        _write_window_covering(self, nwkid, INSTALLED_CLOSED_LIMIT_LIFT, UINT16, 0x00F0)
        _write_window_covering(self, nwkid, INSTALLED_OPEN_LIMIT_TILT, UINT16, 0x0000)
        _write_window_covering(self, nwkid, INSTALLED_CLOSED_LIMIT_TILT, UINT16, 0x0384)
        # Invalidate step values
        for attribute in (LIFT_TO_TILT_TRANSITION_STEPS, TOTAL_STEPS, LIFT_TO_TILT_TRANSITION_STEPS_2, TOTAL_STEPS_2):
            _write_window_covering(self, nwkid, attribute, UINT16, 0xFFFF)
        _write_window_covering(self, nwkid, MODE, BITMAP8, MODE_CALIBRATION, manufacturer_specific=False)
        self.log.logging("Ubisys", "Status", "ubisys J1 %s: Calibration mode entered. Move blind down, then up, then down, then up to complete." % nwkid, nwkid)

    if value.get("windowCoveringType") is not None:
        covering_type = _unsigned(value["windowCoveringType"], "windowCoveringType", 9)
        _write_window_covering(self, nwkid, WINDOW_COVERING_TYPE, ENUM8, covering_type)
        self.log.logging("Ubisys", "Log", "ubisys J1 %s: Window covering type set to %s" % (nwkid, WINDOW_COVERING_TYPES[covering_type]), nwkid)

    if value.get("configStatus") is not None:
        _write_window_covering(self, nwkid, CONFIG_STATUS, BITMAP8, _unsigned(value["configStatus"], "configStatus", 0xFF))

    for field, attribute in (
        ("installedOpenLimitLiftCm", INSTALLED_OPEN_LIMIT_LIFT),
        ("installedClosedLimitLiftCm", INSTALLED_CLOSED_LIMIT_LIFT),
        ("installedOpenLimitTiltDdegree", INSTALLED_OPEN_LIMIT_TILT),
        ("installedClosedLimitTiltDdegree", INSTALLED_CLOSED_LIMIT_TILT),
    ):
        if value.get(field) is not None:
            _write_window_covering(self, nwkid, attribute, UINT16, _unsigned(value[field], field, 0xFFFF))

    if value.get("turnaroundGuardTime") is not None:
        _write_window_covering(self, nwkid, TURNAROUND_GUARD_TIME, UINT8, _unsigned(value["turnaroundGuardTime"], "turnaroundGuardTime", 0xFF))

    # Steps, either given or computed from the travel times
    steps = {
        LIFT_TO_TILT_TRANSITION_STEPS: value.get("liftToTiltTransitionSteps"),
        LIFT_TO_TILT_TRANSITION_STEPS_2: value.get("liftToTiltTransitionSteps2"),
        TOTAL_STEPS: value.get("totalSteps"),
        TOTAL_STEPS_2: value.get("totalSteps2"),
    }
    if value.get("lift_to_tilt_transition_ms") is not None:
        steps[LIFT_TO_TILT_TRANSITION_STEPS] = int(round(_number(value["lift_to_tilt_transition_ms"], "lift_to_tilt_transition_ms") / 1000 * steps_per_second))
        steps[LIFT_TO_TILT_TRANSITION_STEPS_2] = steps[LIFT_TO_TILT_TRANSITION_STEPS]
    if value.get("open_to_closed_s") is not None:
        steps[TOTAL_STEPS] = int(round(_number(value["open_to_closed_s"], "open_to_closed_s") * steps_per_second))
    if value.get("closed_to_open_s") is not None:
        steps[TOTAL_STEPS_2] = int(round(_number(value["closed_to_open_s"], "closed_to_open_s") * steps_per_second))

    for attribute in (LIFT_TO_TILT_TRANSITION_STEPS, LIFT_TO_TILT_TRANSITION_STEPS_2, TOTAL_STEPS, TOTAL_STEPS_2):
        if steps[attribute] is not None:
            _write_window_covering(self, nwkid, attribute, UINT16, _unsigned(steps[attribute], CALIBRATION_ATTRIBUTES[attribute][0], 0xFFFF))

    if value.get("additionalSteps") is not None:
        _write_window_covering(self, nwkid, ADDITIONAL_STEPS, UINT8, _unsigned(value["additionalSteps"], "additionalSteps", 0xFF))

    if value.get("inactivePowerThreshold") is not None:
        _write_window_covering(self, nwkid, INACTIVE_POWER_THRESHOLD, UINT16, _unsigned(value["inactivePowerThreshold"], "inactivePowerThreshold", 0xFFFF))

    if value.get("startupSteps") is not None:
        _write_window_covering(self, nwkid, STARTUP_STEPS, UINT16, _unsigned(value["startupSteps"], "startupSteps", 0xFFFF))

    if ("calibrate" in value and value["calibrate"] == 0) or value.get("exitCalibration"):
        _write_window_covering(self, nwkid, MODE, BITMAP8, 0x00, manufacturer_specific=False)
        self.log.logging("Ubisys", "Status", "ubisys J1 %s: Calibration mode exited." % nwkid, nwkid)

    return {"configure_j1": "configured"}


def ubisys_j1_read_configuration(self, nwkid):
    _read_window_covering(self, nwkid, STANDARD_CONFIGURATION_ATTRIBUTES)
    _read_window_covering(self, nwkid, list(CALIBRATION_ATTRIBUTES), manufacturer_specific=True)


def ubisys_j1_motor_reversed(self, nwkid, value):
    if not isinstance(value, bool):
        raise InvalidParameterValueError("motor_reversed must be true or false, got %s" % (value,), field="motor_reversed")

    current_mode = getAttributeValue(self, nwkid, J1_WINDOW_COVERING_EP, WINDOW_COVERING_CLUSTER, MODE)
    if current_mode is None:
        ubisys_j1_read_mode(self, nwkid)
        raise ConfigurationNotAvailableError(nwkid, "window covering mode")

    new_mode = current_mode | MODE_MOTOR_REVERSED if value else current_mode & ~MODE_MOTOR_REVERSED
    _write_window_covering(self, nwkid, MODE, BITMAP8, new_mode, manufacturer_specific=False)
    return {"motor_reversed": value}


def ubisys_j1_read_mode(self, nwkid):
    return _read_window_covering(self, nwkid, [MODE])


def _meter_getter(key):
    cluster, attribute = METER_ATTRIBUTES[key]

    def getter(self, nwkid):
        return read_attribute(self, nwkid, PLUGIN_EP, J1_METERING_EP, cluster, "00", "00", "0000", 1, attribute, ackIsDisabled=False)
    getter.__name__ = "ubisys_j1_read_%s" % key
    return getter


def ubisys_j1_configure(self, nwkid):
    """ Best effort, a missing endpoint is logged and the next one is processed """

    if is_endpoint_available(self, nwkid, J1_WINDOW_COVERING_EP):
        _read_window_covering(self, nwkid, STANDARD_CONFIGURATION_ATTRIBUTES + [CURRENT_POSITION_LIFT_PERCENTAGE, CURRENT_POSITION_TILT_PERCENTAGE])
        _read_window_covering(self, nwkid, list(CALIBRATION_ATTRIBUTES), manufacturer_specific=True)
        max_interval = "%04x" % self.pluginconf.pluginConf["ubisysPositionReportingMaxInterval"]
        for attribute in (CURRENT_POSITION_LIFT_PERCENTAGE, CURRENT_POSITION_TILT_PERCENTAGE):
            configure_reporting(self, nwkid, J1_WINDOW_COVERING_EP, WINDOW_COVERING_CLUSTER, [
                {"Attribute": attribute, "DataType": UINT8, "minInter": "0001", "maxInter": max_interval, "rptChg": "01"}])
    else:
        self.log.logging("Ubisys", "Log", "ubisys J1 %s: Failed to configure endpoint 1, not found" % nwkid, nwkid)

    if is_endpoint_available(self, nwkid, J1_METERING_EP):
        read_attribute(self, nwkid, PLUGIN_EP, J1_METERING_EP, METERING_CLUSTER, "00", "00", "0000", 2, ["0000", "0400"], ackIsDisabled=False)
        electrical = [attribute for cluster, attribute in METER_ATTRIBUTES.values() if cluster == ELECTRICAL_MEASUREMENT_CLUSTER]
        read_attribute(self, nwkid, PLUGIN_EP, J1_METERING_EP, ELECTRICAL_MEASUREMENT_CLUSTER, "00", "00", "0000", len(electrical), electrical, ackIsDisabled=False)
    else:
        self.log.logging("Ubisys", "Log", "ubisys J1 %s: Failed to configure endpoint 3, not found" % nwkid, nwkid)

    ubisys_configure_device_setup(self, nwkid)


def ubisys_j1_exposes(self, nwkid):
    exposes = [
        {"type": "cover", "name": "cover", "access": "all", "features": ["state", "position", "tilt"]},
        {"type": "numeric", "name": "power", "access": "state_get", "unit": "W"},
        {"type": "numeric", "name": "energy", "access": "state_get", "unit": "kWh"},
        {"type": "numeric", "name": "voltage", "access": "state_get", "unit": "V"},
        {"type": "numeric", "name": "current", "access": "state_get", "unit": "A"},
        {"type": "numeric", "name": "ac_frequency", "access": "state_get", "unit": "Hz"},
        {"type": "numeric", "name": "active_power", "access": "state_get", "unit": "W"},
        {"type": "numeric", "name": "reactive_power", "access": "state_get", "unit": "VAr"},
        {"type": "numeric", "name": "apparent_power", "access": "state_get", "unit": "VA"},
        {"type": "numeric", "name": "power_factor", "access": "state_get"},
        {"type": "binary", "name": "moving", "access": "state"},
        {"type": "enum", "name": "movement", "access": "state", "values": ["stopped", "opening", "closing"]},
        {"type": "binary", "name": "motor_reversed", "access": "all"},
        {"type": "binary", "name": "calibration_mode", "access": "state"},
        {"type": "enum", "name": "window_covering_type", "access": "state", "values": list(WINDOW_COVERING_TYPES.values())},
        {"type": "numeric", "name": "turnaround_guard_time", "access": "state", "unit": "ms"},
        {"type": "numeric", "name": "lift_to_tilt_transition_steps", "access": "state"},
        {"type": "numeric", "name": "lift_to_tilt_transition_steps_2", "access": "state"},
        {"type": "numeric", "name": "total_steps", "access": "state"},
        {"type": "numeric", "name": "total_steps_2", "access": "state"},
        {"type": "numeric", "name": "additional_steps", "access": "state", "unit": "%"},
        {"type": "numeric", "name": "inactive_power_threshold", "access": "state", "unit": "mW"},
        {"type": "numeric", "name": "startup_steps", "access": "state"},
        {"type": "numeric", "name": "installed_open_limit_lift_cm", "access": "state", "unit": "cm"},
        {"type": "numeric", "name": "installed_closed_limit_lift_cm", "access": "state", "unit": "cm"},
        {"type": "numeric", "name": "installed_open_limit_tilt_ddeg", "access": "state", "unit": "0.1°"},
        {"type": "numeric", "name": "installed_closed_limit_tilt_ddeg", "access": "state", "unit": "0.1°"},
        {"type": "list", "name": "input_configurations", "access": "all", "item_type": "numeric"},
        {"type": "list", "name": "input_actions", "access": "all", "item_type": "text"},
        {"type": "composite", "name": "configure_j1", "access": "set", "features": [
            "windowCoveringType", "configStatus", "installedOpenLimitLiftCm", "installedClosedLimitLiftCm",
            "installedOpenLimitTiltDdegree", "installedClosedLimitTiltDdegree", "turnaroundGuardTime",
            "liftToTiltTransitionSteps", "totalSteps", "liftToTiltTransitionSteps2", "totalSteps2", "additionalSteps",
            "inactivePowerThreshold", "startupSteps", "calibrate", "exitCalibration", "open_to_closed_s", "closed_to_open_s",
            "lift_to_tilt_transition_ms", "steps_per_second"]},
    ]
    return exposes


UBISYS_J1_DEVICE_PARAMETERS = {
    "state": {"callable": ubisys_j1_state, "models": (J1_MODEL,), "description": "open, close or stop the shutter"},
    "position": {"callable": ubisys_j1_position, "getter": ubisys_j1_read_position, "models": (J1_MODEL,), "description": "Lift position 0 (closed) .. 100 (open)"},
    "tilt": {"callable": ubisys_j1_tilt, "getter": ubisys_j1_read_tilt, "models": (J1_MODEL,), "description": "Tilt position 0 .. 100"},
    "configure_j1": {"callable": ubisys_j1_configure_j1, "getter": ubisys_j1_read_configuration, "models": (J1_MODEL,), "description": "Calibration and configuration of the J1"},
    "motor_reversed": {"callable": ubisys_j1_motor_reversed, "getter": ubisys_j1_read_mode, "models": (J1_MODEL,), "description": "Reverse motor direction"},
}

for _key in METER_ATTRIBUTES:
    UBISYS_J1_DEVICE_PARAMETERS[_key] = {"getter": _meter_getter(_key), "models": (J1_MODEL,), "description": "Metering value, read only"}
