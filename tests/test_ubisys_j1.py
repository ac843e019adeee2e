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
from conftest import J1_ENDPOINTS, split_zcl

from Modules.ubisysExceptions import (ConfigurationNotAvailableError,
                                      InvalidParameterValueError,
                                      UnsupportedParameterError)


def test_aliases_resolve_to_j1(z4d):
    assert z4d.onDeviceAnnounce("1111", "J1-R (5602)", J1_ENDPOINTS) == "J1"
    assert z4d.onDeviceAnnounce("2222", "J1", J1_ENDPOINTS) == "J1"
    assert z4d.onDeviceAnnounce("3333", "J2 (5503)", J1_ENDPOINTS) is None
    assert "3333" not in z4d.ListOfDevices


def test_position_report_is_inverted(z4d, j1):
    state = z4d.onAttributeReport(j1, "01", "0102", "0008", "20", "1e")
    assert state["position"] == 70


def test_operational_status_report(z4d, j1):
    state = z4d.onAttributeReport(j1, "01", "0102", "000a", "18", "02")
    assert state["moving"] is True
    assert state["movement"] == "closing"

    state = z4d.onAttributeReport(j1, "01", "0102", "000a", "18", "00")
    assert state["moving"] is False
    assert state["movement"] == "stopped"


def test_window_covering_type_report(z4d, j1):
    assert z4d.onAttributeReport(j1, "01", "0102", "0000", "30", "00")["window_covering_type"] == "Roller Shade"
    assert z4d.onAttributeReport(j1, "01", "0102", "0000", "30", "0c")["window_covering_type"] == "Unknown (12)"


def test_manufacturer_specific_calibration_report(z4d, j1):
    state = z4d.onAttributeReport(j1, "01", "0102", "1000", "20", "04", manufacturer_code="10f2")
    assert state["turnaround_guard_time"] == 200

    state = z4d.onAttributeReport(j1, "01", "0102", "1002", "21", "01f4", manufacturer_code="10f2")
    assert state["total_steps"] == 500


def test_mode_report(z4d, j1):
    state = z4d.onAttributeReport(j1, "01", "0102", "0017", "18", "03")
    assert state["motor_reversed"] is True
    assert state["calibration_mode"] is True


@pytest.mark.parametrize("cluster, attribute, datatype, data, key, expected", [
    ("0702", "0000", "25", "0000000003e8", "energy", 1.0),
    ("0702", "0400", "2a", "0000c8", "power", 200),
    ("0b04", "0300", "21", "c350", "ac_frequency", 50.0),
    ("0b04", "0505", "21", "00e6", "voltage", 230),
    ("0b04", "0508", "21", "07d0", "current", 2.0),
    ("0b04", "050b", "29", "ffce", "active_power", -50),
    ("0b04", "0510", "28", "5a", "power_factor", 0.9),
])
def test_meter_reports(z4d, j1, cluster, attribute, datatype, data, key, expected):
    state = z4d.onAttributeReport(j1, "03", cluster, attribute, datatype, data)
    assert state[key] == pytest.approx(expected)


def test_energy_keeps_raw_value_in_cache(z4d, j1):
    z4d.onAttributeReport(j1, "03", "0702", "0000", "25", "0000000003e8")
    assert z4d.ListOfDevices[j1]["Ep"]["03"]["0702"]["0000"] == 1000


def test_state_commands(z4d, j1, controller_link):
    assert z4d.onCommand(j1, "state", "open") == {"state": "open"}
    fcf, manufacturer, command = split_zcl(controller_link.payloads()[-1])
    assert fcf == 0x11
    assert command == "00"

    z4d.onCommand(j1, "state", "STOP")
    assert split_zcl(controller_link.payloads()[-1])[2] == "02"

    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(j1, "state", "toggle")


def test_position_command(z4d, j1, controller_link):
    assert z4d.onCommand(j1, "position", 30) == {"position": 30}
    assert split_zcl(controller_link.payloads()[-1])[2] == "05" + "46"
    assert controller_link.sent[-1]["data"]["Cluster"] == 0x0102


def test_position_is_clamped(z4d, j1, controller_link):
    assert z4d.onCommand(j1, "position", 150) == {"position": 100}
    assert split_zcl(controller_link.payloads()[-1])[2] == "05" + "00"

    assert z4d.onCommand(j1, "tilt", -5) == {"tilt": 0}
    assert split_zcl(controller_link.payloads()[-1])[2] == "08" + "64"


def test_position_requires_a_number(z4d, j1):
    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(j1, "position", "half")


def test_motor_reversed_needs_the_current_mode(z4d, j1, controller_link):
    with pytest.raises(ConfigurationNotAvailableError):
        z4d.onCommand(j1, "motor_reversed", True)
    assert split_zcl(controller_link.payloads()[-1])[2] == "00" + "1700"

    z4d.onAttributeReport(j1, "01", "0102", "0017", "18", "02")
    assert z4d.onCommand(j1, "motor_reversed", True) == {"motor_reversed": True}
    _, manufacturer, command = split_zcl(controller_link.payloads()[-1])
    assert manufacturer is None
    assert command == "02" + "1700" + "18" + "03"


def test_configure_j1_steps_from_travel_times(z4d, j1, controller_link):
    z4d.onCommand(j1, "configure_j1", {"open_to_closed_s": 10, "closed_to_open_s": 12, "steps_per_second": 50})

    frames = [split_zcl(x) for x in controller_link.payloads()]
    assert all(manufacturer == "f210" for _, manufacturer, _ in frames)
    commands = [command for _, _, command in frames]
    assert "02" + "0210" + "21" + "f401" in commands
    assert "02" + "0410" + "21" + "5802" in commands


def test_configure_j1_calibration(z4d, j1, controller_link):
    published = z4d.onCommand(j1, "configure_j1", '{"calibrate": 1, "windowCoveringType": 0}')
    assert published == {"configure_j1": "configured"}

    frames = [split_zcl(x) for x in controller_link.payloads()]
    # Mode is a standard attribute
    assert (0x10, None, "02" + "1700" + "18" + "02") in frames
    assert (0x14, "f210", "02" + "0210" + "21" + "ffff") in frames
    assert (0x14, "f210", "02" + "0000" + "30" + "00") in frames


def test_configure_j1_rejects_bad_input(z4d, j1, controller_link):
    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(j1, "configure_j1", "{not json")
    with pytest.raises(InvalidParameterValueError) as excinfo:
        z4d.onCommand(j1, "configure_j1", {"windowCoveringType": 12})
    assert excinfo.value.field == "windowCoveringType"
    assert controller_link.sent == []


def test_meter_getter_reads_endpoint_3(z4d, j1, controller_link):
    z4d.onAttributeReport(j1, "03", "0b04", "0505", "21", "00e6")
    assert z4d.onGet(j1, "voltage") == 230
    assert controller_link.sent[-1]["data"]["TargetEp"] == 3
    assert split_zcl(controller_link.payloads()[-1])[2] == "00" + "0505"


def test_meter_values_are_read_only(z4d, j1):
    with pytest.raises(UnsupportedParameterError):
        z4d.onCommand(j1, "voltage", 230)


def test_configure_reads_and_sets_up_reporting(z4d, j1, controller_link):
    z4d.onConfigure(j1)
    frames = [(x["data"]["TargetEp"], x["data"]["Cluster"], split_zcl(x["data"]["payload"])) for x in controller_link.sent]

    reporting = [x for x in frames if x[2][2].startswith("06")]
    assert len(reporting) == 2
    assert reporting[0][2][2] == "06" + "00" + "0800" + "20" + "0100" + "2c01" + "01"

    assert any(ep == 3 and cluster == 0x0702 for ep, cluster, _ in frames)
    assert any(ep == 0xE8 and cluster == 0xFC00 for ep, cluster, _ in frames)


def test_configure_skips_missing_endpoints(z4d, controller_link):
    z4d.onDeviceAnnounce("4444", "J1 (5502)", {"01": ["0000", "0102"]})
    z4d.onConfigure("4444")
    assert {x["data"]["TargetEp"] for x in controller_link.sent} == {1}


def test_exposes_and_definition(z4d, j1):
    names = [x["name"] for x in z4d.getExposes(j1)]
    assert "cover" in names
    assert "configure_j1" in names
    assert "power_factor" in names

    definition = z4d.getDefinition(j1)
    assert definition["model"] == "J1"
    assert definition["multi_endpoint"] is False
    assert definition["endpoints"]["default"] == 1
