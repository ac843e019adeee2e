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
    Module: stateMaj.py

    Description: Update of the user facing state of a device

"""

import time


def MajDeviceState(self, nwkid, key, value):
    """ Publish value under key in ListOfDevices[nwkid]["State"] """

    if nwkid not in self.ListOfDevices:
        self.log.logging("Input", "Error", "MajDeviceState - unknown device %s for %s" % (nwkid, key), nwkid)
        return

    state = self.ListOfDevices[nwkid].setdefault("State", {})
    previous = state.get(key)
    state[key] = value
    self.ListOfDevices[nwkid]["Stamp"] = {"LastSeen": int(time.time())}
    if previous != value:
        self.log.logging("Input", "Debug", "MajDeviceState - %s %s: %s -> %s" % (nwkid, key, previous, value), nwkid)


def MajDeviceStates(self, nwkid, states):
    for key, value in states.items():
        MajDeviceState(self, nwkid, key, value)
    return states


def getDeviceState(self, nwkid, key, default=None):
    return self.ListOfDevices.get(nwkid, {}).get("State", {}).get(key, default)
