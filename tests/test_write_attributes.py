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

from Modules.tools import get_request_datastruct, get_status_datastruct
from Modules.writeAttributes import status_name


def test_status_name():
    assert status_name("00") == "SUCCESS"
    assert status_name("86") == "UNSUPPORTED_ATTRIBUTE"
    assert status_name("87") == "INVALID_VALUE"


def test_write_request_is_tracked(z4d, j1):
    z4d.onAttributeReport(j1, "01", "0102", "0017", "18", "00")
    z4d.onCommand(j1, "motor_reversed", True)

    request = get_request_datastruct(z4d, "WriteAttributes", j1, "01", "0102", "0017")
    assert request["Status"] == "requested"
    assert request["DataType"] == "18"
    assert request["data"] == "01"


def test_failed_write_response(z4d, j1):
    z4d.onAttributeReport(j1, "01", "0102", "0017", "18", "00")
    z4d.onCommand(j1, "motor_reversed", True)
    z4d.onWriteAttributeResponse(j1, "01", "0102", "0017", "86")

    assert get_status_datastruct(z4d, "WriteAttributes", j1, "01", "0102", "0017") == "86"
    assert get_request_datastruct(z4d, "WriteAttributes", j1, "01", "0102", "0017")["Status"] == "fullfilled"

    history = z4d.log.LogErrorHistory
    last = history[str(history["LastLog"])]
    entry = last[str(last["LastLog"])]
    assert "UNSUPPORTED_ATTRIBUTE" in entry["message"]
    assert entry["context"]["Attribute"] == "0017"


def test_global_write_response_matches_sequence_number(z4d, j1):
    z4d.onAttributeReport(j1, "01", "0102", "0017", "18", "00")
    z4d.onCommand(j1, "motor_reversed", True)
    sqn = z4d.ListOfDevices[j1]["WriteAttributes"]["Ep"]["01"]["0102"]["iSQN"]["0017"]

    z4d.onWriteAttributeResponse(j1, "01", "0102", None, "00", sqn=sqn)
    assert get_status_datastruct(z4d, "WriteAttributes", j1, "01", "0102", "0017") == "00"


def test_write_response_for_unknown_device(z4d):
    z4d.onWriteAttributeResponse("dead", "01", "0102", "0017", "00")
    assert "dead" not in z4d.ListOfDevices
