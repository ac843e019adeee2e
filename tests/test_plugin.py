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
from pathlib import Path

from conftest import LD6_ENDPOINTS, FakeControllerLink

from Classes.LoggingManagement import LOG_ERROR_HISTORY
from Classes.PluginConf import PluginConf
from Modules.database import resolve_model_name
from plugin import BasePlugin


def test_certified_configurations_are_loaded(z4d):
    assert sorted(z4d.DeviceConf) == ["C4", "J1", "LD6"]
    assert resolve_model_name(z4d, "J1-R (5602)") == "J1"
    assert resolve_model_name(z4d, "LD6") == "LD6"
    assert resolve_model_name(z4d, "S2 (5601)") is None


def test_reannounce_resets_state(z4d, ld6):
    z4d.onAttributeReport(ld6, "01", "0301", "0010", "20", "05")
    assert z4d.ListOfDevices[ld6]["State"]

    z4d.onDeviceAnnounce(ld6, "LD6", LD6_ENDPOINTS)
    assert z4d.ListOfDevices[ld6]["State"] == {}
    assert z4d.ListOfDevices[ld6]["Manufacturer Name"] == "ubisys"


def test_unknown_device_is_ignored(z4d, controller_link):
    assert z4d.onAttributeReport("beef", "01", "0006", "0000", "10", "01") is None
    assert z4d.onCommand("beef", "state", "open") is None
    assert z4d.getExposes("beef") == []
    assert controller_link.sent == []


def test_hooks_before_start():
    plugin = BasePlugin()
    assert plugin.onCommand("a1b2", "output_mode", "1x_cct") is None
    assert plugin.onDeviceAnnounce("a1b2", "LD6", LD6_ENDPOINTS) is None


def test_zcl_sequence_number_per_device(z4d, ld6, j1, controller_link):
    z4d.onCommand(ld6, "minimum_on_level", 10)
    z4d.onCommand(ld6, "minimum_on_level", 11)
    z4d.onCommand(j1, "state", "stop")
    assert [x["sqn"] for x in controller_link.sent] == [0, 1, 0]


def test_plugin_conf_persists_changed_values(tmp_path):
    conf = PluginConf(str(tmp_path), 2)
    conf.pluginConf["ubisysModeSwitchSettlingDelay"] = 10
    conf.write_Settings()

    with open(conf.pluginConf["filename"], encoding="utf-8") as handle:
        assert json.load(handle) == {"ubisysModeSwitchSettlingDelay": 10}

    assert PluginConf(str(tmp_path), 2).pluginConf["ubisysModeSwitchSettlingDelay"] == 10


def test_plugin_conf_keeps_default_on_bad_type(tmp_path):
    conf_dir = tmp_path / "Conf"
    conf_dir.mkdir()
    with open(conf_dir / "PluginConf-03.json", "w", encoding="utf-8") as handle:
        json.dump({"ubisysDefaultMinMireds": "150", "unknownParameter": 1, "Ubisys": 1}, handle)

    conf = PluginConf(str(tmp_path), 3)
    assert conf.pluginConf["ubisysDefaultMinMireds"] == 153
    assert conf.pluginConf["Ubisys"] == 1


def test_errors_are_kept_in_history_file(tmp_path):
    plugin = BasePlugin()
    plugin.onStart(FakeControllerLink(), str(tmp_path), 4)
    plugin.onDeviceAnnounce("a1b2", "Unknown model", {})
    plugin.onStop()

    history_file = Path(plugin.pluginconf.pluginConf["pluginLogs"]) / (LOG_ERROR_HISTORY + "04.json")
    with open(history_file, encoding="utf-8") as handle:
        history = json.load(handle)
    entry = history[str(history["LastLog"])]["0"]
    assert "Unknown model" in entry["message"]
    assert entry["context"]["NwkId"] == "a1b2"

    # History is reloaded on the next start
    plugin = BasePlugin()
    plugin.onStart(FakeControllerLink(), str(tmp_path), 4)
    assert plugin.log.LogErrorHistory["LastLog"] == history["LastLog"]
    plugin.onStop()


def test_debug_logging_is_gated_per_module(z4d, ld6, caplog):
    caplog.set_level("DEBUG", logger="UbisysPlugin")
    z4d.onCommand(ld6, "minimum_on_level", 10)
    assert not [x for x in caplog.records if "ubisys_ld6" in x.getMessage()]

    z4d.pluginconf.pluginConf["Ubisys"] = 1
    z4d.onAttributeReport(ld6, "01", "0300", "0000", "18", "01", manufacturer_code="10f2")
    assert [x for x in caplog.records if "ubisys_ld6_advanced_options" in x.getMessage()]


def test_malformed_report_is_logged_not_raised(z4d, j1):
    state = z4d.onAttributeReport(j1, "03", "0b04", "0505", "21", "zz")
    assert "voltage" not in state
    assert z4d.log.LogErrorHistory


def test_report_value_only_goes_through_registered_functions(z4d, j1):
    metering = z4d.DeviceConf["J1"]["Ep"]["03"]["0702"]["Attributes"]
    metering["0400"]["EvalExp"] = "value * 1000"
    metering["0000"]["EvalFunc"] = "not_registered"

    state = z4d.onAttributeReport(j1, "03", "0702", "0400", "2a", "0000c8")
    assert state["power"] == 200

    z4d.log.LogErrorHistory.clear()
    state = z4d.onAttributeReport(j1, "03", "0702", "0000", "25", "000000002710")
    assert "energy" not in state
    assert "not_registered" in json.dumps(z4d.log.LogErrorHistory)
