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

from plugin import BasePlugin

LD6_NWKID = "a1b2"
J1_NWKID = "c3d4"
C4_NWKID = "e5f6"

LD6_LIGHT_CLUSTERS = ["0000", "0003", "0004", "0005", "0006", "0008", "0300", "0301"]
LD6_ENDPOINTS = {
    "01": LD6_LIGHT_CLUSTERS,
    "02": ["0000", "0005", "0006", "0008"],
    "e8": ["fc00"],
}
J1_ENDPOINTS = {
    "01": ["0000", "0003", "0004", "0005", "0102"],
    "02": ["0000", "0005", "0006", "0008", "0102"],
    "03": ["0000", "0702", "0b04"],
    "e8": ["fc00"],
}
C4_ENDPOINTS = {
    "01": ["0000", "0003", "0005", "0006", "0008"],
    "e8": ["fc00"],
}


class FakeControllerLink:
    """ Records every frame handed over to the host """

    def __init__(self):
        self.sent = []

    def sendData(self, cmd, data, NwkId=None, sqn=None, ackIsDisabled=False):
        self.sent.append({"cmd": cmd, "data": data, "NwkId": NwkId, "sqn": sqn, "ackIsDisabled": ackIsDisabled})
        return sqn

    def payloads(self):
        return [x["data"]["payload"] for x in self.sent]

    def clear(self):
        self.sent.clear()


def split_zcl(payload):
    """ ( frame control, manufacturer code or None, command + records ) without the sequence number """

    fcf = int(payload[:2], 16)
    if fcf & 0x04:
        return fcf, payload[2:6], payload[8:]
    return fcf, None, payload[4:]


@pytest.fixture
def controller_link():
    return FakeControllerLink()


@pytest.fixture
def z4d(tmp_path, controller_link):
    plugin = BasePlugin()
    plugin.onStart(controller_link, str(tmp_path), 1)
    yield plugin
    plugin.onStop()


@pytest.fixture
def ld6(z4d):
    z4d.onDeviceAnnounce(LD6_NWKID, "LD6", LD6_ENDPOINTS)
    return LD6_NWKID


@pytest.fixture
def j1(z4d):
    z4d.onDeviceAnnounce(J1_NWKID, "J1 (5502)", J1_ENDPOINTS)
    return J1_NWKID


@pytest.fixture
def c4(z4d):
    z4d.onDeviceAnnounce(C4_NWKID, "C4 (5504)", C4_ENDPOINTS)
    return C4_NWKID
