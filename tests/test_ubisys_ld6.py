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

import json

import pytest
from conftest import split_zcl

from Modules.ubisysExceptions import (ConfigurationNotAvailableError,
                                      InvalidCalibrationInputError,
                                      InvalidParameterValueError,
                                      UnknownModeError)
from Modules.ubisysOutputCatalog import get
from Modules.ubisysOutputCodec import decode, encode

CCT = encode(get("1x_cct")["channels"])


def _report_output_configuration(z4d, nwkid, buffer):
    # The array data type travels as the attribute data type
    return z4d.onAttributeReport(nwkid, "e8", "fc00", "0010", "48", buffer[1:].hex())


def test_output_mode_writes_catalog_configuration(z4d, ld6, controller_link):
    assert z4d.onCommand(ld6, "output_mode", "1x_cct") == {"output_mode": "1x_cct"}

    frame = controller_link.sent[-1]["data"]
    assert frame["Cluster"] == 0xFC00
    assert frame["TargetEp"] == 0xE8
    fcf, manufacturer, command = split_zcl(frame["payload"])
    assert manufacturer is None
    assert command == "02" + "1000" + "48" + CCT[1:].hex()
    assert z4d.ListOfDevices[ld6]["State"]["output_mode"] == "1x_cct"


def test_output_mode_unknown(z4d, ld6, controller_link):
    with pytest.raises(UnknownModeError) as excinfo:
        z4d.onCommand(ld6, "output_mode", "7x_disco")
    assert "1x_rgbww" in str(excinfo.value)
    assert controller_link.sent == []
    # Logged with its context
    assert z4d.log.LogErrorHistory


def test_output_configuration_raw_hex(z4d, ld6, controller_link):
    raw = "0x" + encode(get("2x_cct")["channels"]).hex()
    assert z4d.onCommand(ld6, "output_configuration", raw) == {"output_configuration_raw": raw[2:]}
    _, _, command = split_zcl(controller_link.payloads()[-1])
    assert command.endswith(raw[2:])


def test_output_configuration_rejects_partial_buffer(z4d, ld6, controller_link):
    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(ld6, "output_configuration", CCT[:20].hex())
    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(ld6, "output_configuration", "not hex")
    assert controller_link.sent == []


def test_output_configuration_report(z4d, ld6):
    state = _report_output_configuration(z4d, ld6, CCT)
    assert state["output_configuration_raw"] == CCT.hex()
    assert state["output_mode"] == "1x_cct"
    low, high = state["color_temp_range_l1"]
    assert 152 <= low <= 156
    assert 369 <= high <= 373


def test_custom_output_configuration_report(z4d, ld6):
    buffer = bytearray(CCT)
    buffer[6] = 0x80
    state = _report_output_configuration(z4d, ld6, bytes(buffer))
    assert state["output_mode"] == "custom"


def test_partial_report_publishes_raw_only(z4d, ld6):
    state = _report_output_configuration(z4d, ld6, CCT[:20])
    assert state["output_configuration_raw"] == CCT[:20].hex()
    assert "output_mode" not in state


def test_mode_switch_read_back_after_settling(z4d, ld6, controller_link):
    z4d.onCommand(ld6, "output_mode", "1x_rgb")
    controller_link.clear()

    z4d.pluginconf.pluginConf["ubisysModeSwitchSettlingDelay"] = 0
    z4d.onWriteAttributeResponse(ld6, "e8", "fc00", "0010", "00")
    assert "ReadOutputConfigurationAfter" in z4d.ListOfDevices[ld6]["Ubisys"]

    z4d.onHeartbeat()
    _, _, command = split_zcl(controller_link.payloads()[-1])
    assert command == "00" + "1000"
    assert "ReadOutputConfigurationAfter" not in z4d.ListOfDevices[ld6]["Ubisys"]

    # Only once
    z4d.onHeartbeat()
    assert len(controller_link.sent) == 1


def test_mode_switch_is_not_read_back_while_settling(z4d, ld6, controller_link):
    z4d.onWriteAttributeResponse(ld6, "e8", "fc00", "0010", "00")
    z4d.onHeartbeat()
    assert controller_link.sent == []


def test_failed_mode_switch_is_not_read_back(z4d, ld6):
    z4d.onWriteAttributeResponse(ld6, "e8", "fc00", "0010", "86")
    assert "ReadOutputConfigurationAfter" not in z4d.ListOfDevices[ld6]["Ubisys"]


def test_calibration_without_configuration_requests_a_read(z4d, ld6, controller_link):
    with pytest.raises(ConfigurationNotAvailableError):
        z4d.onCommand(ld6, "calibration", {"channel": 1, "flux": 100})
    _, _, command = split_zcl(controller_link.payloads()[-1])
    assert command == "00" + "1000"


def test_calibration_patches_reported_configuration(z4d, ld6, controller_link):
    _report_output_configuration(z4d, ld6, CCT)
    published = z4d.onCommand(ld6, "calibration", json.dumps({"channel": 2, "x": 0.4578, "y": 0.4101}))
    assert published == {"calibration_status": "Updated channel 2"}

    _, _, command = split_zcl(controller_link.payloads()[-1])
    buffer = bytes.fromhex("48" + command[len("02100048"):])
    channels = decode(buffer)["channels"]
    assert channels[1]["x"] == pytest.approx(0.4578, abs=1 / 65536)
    assert channels[0] == decode(CCT)["channels"][0]


def test_calibration_after_mode_switch_patches_new_layout(z4d, ld6, controller_link):
    _report_output_configuration(z4d, ld6, CCT)
    z4d.onCommand(ld6, "output_mode", "2x_rgb")
    z4d.onWriteAttributeResponse(ld6, "e8", "fc00", "0010", "00")

    z4d.onCommand(ld6, "calibration", {"channel": 1, "flux": 100})
    _, _, command = split_zcl(controller_link.payloads()[-1])
    channels = decode(bytes.fromhex("48" + command[len("02100048"):]))["channels"]
    expected = decode(encode(get("2x_rgb")["channels"]))["channels"]
    assert [c["function"] for c in channels] == [c["function"] for c in expected]
    assert channels[0]["flux"] == 100
    assert channels[1:] == expected[1:]


def test_calibration_while_mode_switch_is_pending(z4d, ld6, controller_link):
    _report_output_configuration(z4d, ld6, CCT)
    z4d.onCommand(ld6, "output_mode", "2x_rgb")
    controller_link.clear()

    with pytest.raises(ConfigurationNotAvailableError):
        z4d.onCommand(ld6, "calibration", {"channel": 1, "flux": 100})
    _, _, command = split_zcl(controller_link.payloads()[-1])
    assert command == "00" + "1000"


def test_rejected_mode_switch_keeps_layout_unknown(z4d, ld6):
    _report_output_configuration(z4d, ld6, CCT)
    z4d.onCommand(ld6, "output_mode", "2x_rgb")
    z4d.onWriteAttributeResponse(ld6, "e8", "fc00", "0010", "87")

    with pytest.raises(ConfigurationNotAvailableError):
        z4d.onCommand(ld6, "calibration", {"channel": 1, "flux": 100})


@pytest.mark.parametrize("value, message", [
    ("", "Invalid calibration JSON"),
    ("{channel", "Invalid calibration JSON"),
    ("[1, 2]", "Calibration must be a JSON object"),
    ({"x": 0.3}, 'Calibration must specify a "channel" between 1 and 6'),
    ({"channel": 7}, 'Calibration must specify a "channel" between 1 and 6'),
    ({"channel": 1, "x": 1.5}, '"x"'),
    ({"channel": 1, "flux": 255}, '"flux"'),
])
def test_calibration_input_errors(z4d, ld6, value, message):
    _report_output_configuration(z4d, ld6, CCT)
    with pytest.raises(InvalidCalibrationInputError) as excinfo:
        z4d.onCommand(ld6, "calibration", value)
    assert message in str(excinfo.value)


def test_invalid_json_message_shows_expected_format(z4d, ld6):
    with pytest.raises(InvalidCalibrationInputError) as excinfo:
        z4d.onCommand(ld6, "calibration", "{")
    assert '{"channel": 1..6, "x": 0..1, "y": 0..1, "flux": 0..254}' in str(excinfo.value)


def test_advanced_options_report(z4d, ld6):
    state = z4d.onAttributeReport(ld6, "01", "0300", "0000", "18", "11", manufacturer_code="10f2")
    assert state["advanced_options_no_color_white"] is True
    assert state["advanced_options_constant_luminous_flux"] is True
    assert state["advanced_options_ignore_color_temp_range"] is False


def test_standard_attribute_sharing_the_advanced_options_id(z4d, ld6):
    # CurrentHue
    state = z4d.onAttributeReport(ld6, "01", "0300", "0000", "20", "11")
    assert "advanced_options_no_color_white" not in state
    assert z4d.ListOfDevices[ld6]["Ep"]["01"]["0300"]["0000"] == 0x11


def test_advanced_option_read_modify_write(z4d, ld6, controller_link):
    z4d.onAttributeReport(ld6, "01", "0300", "0000", "18", "01", manufacturer_code="10f2")
    assert z4d.onCommand(ld6, "advanced_options_constant_luminous_flux", True) == {"advanced_options_constant_luminous_flux": True}

    _, manufacturer, command = split_zcl(controller_link.payloads()[-1])
    assert manufacturer == "f210"
    assert command == "02" + "0000" + "18" + "11"


def test_advanced_option_requires_boolean(z4d, ld6):
    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(ld6, "advanced_options_no_color_white", "yes")


def test_minimum_on_level(z4d, ld6, controller_link):
    assert z4d.onCommand(ld6, "minimum_on_level", 10) == {"minimum_on_level": 10}
    _, manufacturer, command = split_zcl(controller_link.payloads()[-1])
    assert manufacturer == "f210"
    assert command == "02" + "0000" + "20" + "0a"

    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(ld6, "minimum_on_level", 0)

    state = z4d.onAttributeReport(ld6, "01", "0008", "0000", "20", "14", manufacturer_code="10f2")
    assert state["minimum_on_level"] == 20


def test_ballast_levels(z4d, ld6, controller_link):
    assert z4d.onCommand(ld6, "ballast_max_level", 200) == {"ballast_max_level": 200}
    write, read = controller_link.payloads()[-2:]
    assert split_zcl(write)[2] == "02" + "1100" + "20" + "c8"
    assert split_zcl(read)[2] == "00" + "1100"

    with pytest.raises(InvalidParameterValueError):
        z4d.onCommand(ld6, "ballast_min_level", 255)

    state = z4d.onAttributeReport(ld6, "01", "0301", "0010", "20", "05")
    assert state["ballast_min_level"] == 5


def test_getters_request_a_read(z4d, ld6, controller_link):
    _report_output_configuration(z4d, ld6, CCT)
    assert z4d.onGet(ld6, "output_configuration") is None
    assert z4d.onGet(ld6, "output_mode") == "1x_cct"
    _, _, command = split_zcl(controller_link.payloads()[-1])
    assert command == "00" + "1000"


def test_exposes_follow_color_capabilities(z4d, ld6):
    z4d.onAttributeReport(ld6, "01", "0300", "400a", "19", "0010")
    _report_output_configuration(z4d, ld6, CCT)

    exposes = z4d.getExposes(ld6)
    names = [x.get("name") for x in exposes]
    assert "output_mode" in names
    assert "advanced_options_constant_luminous_flux" in names

    lights = [x for x in exposes if x["type"] == "light"]
    assert [x["endpoint"] for x in lights] == ["l1"]
    assert lights[0]["features"] == ["state", "brightness", "color_temp"]
    assert 369 <= lights[0]["color_temp_range"][1] <= 373


def test_exposes_fallback_range_without_whites(z4d, ld6):
    z4d.onAttributeReport(ld6, "01", "0300", "400a", "19", "0018")
    _report_output_configuration(z4d, ld6, encode(get("1x_rgb")["channels"]))

    light = [x for x in z4d.getExposes(ld6) if x["type"] == "light"][0]
    assert light["features"] == ["state", "brightness", "color_temp", "color_xy"]
    assert light["color_temp_range"] == [153, 555]


def test_exposes_without_capabilities_probe_the_cache(z4d, ld6):
    light = [x for x in z4d.getExposes(ld6) if x["type"] == "light"][0]
    assert light["features"] == ["state", "brightness"]

    z4d.onAttributeReport(ld6, "01", "0300", "0003", "21", "5042")
    light = [x for x in z4d.getExposes(ld6) if x["type"] == "light"][0]
    assert light["features"] == ["state", "brightness", "color_xy"]


def test_configure_reads_output_configuration(z4d, ld6, controller_link):
    z4d.onConfigure(ld6)
    commands = [split_zcl(x)[2] for x in controller_link.payloads()]
    assert "00" + "1000" in commands
    # ColorCapabilities
    assert "00" + "0a40" in commands


def test_definition(z4d, ld6):
    definition = z4d.getDefinition(ld6)
    assert definition["model"] == "LD6"
    assert definition["ota"] is True
    assert definition["multi_endpoint"] is True
    assert definition["endpoints"]["l2"] == 5
    assert definition["endpoints"]["setup"] == 232
