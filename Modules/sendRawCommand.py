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

import sys
import time

PLUGIN_EP = "01"


def raw_APS_request(self, targetaddr, dest_ep, cluster, profileId, payload, zigate_ep=PLUGIN_EP, zigpyzqn=None, groupaddrmode=False, highpriority=False, ackIsDisabled=False, delayAfterSent=False):
    self.log.logging(
        "outRawAPS",
        "Debug",
        "raw_APS_request - Profile: %s Cluster: %s TargetNwk: %s TargetEp: %s SrcEp: %s payload: %s ZCLsqn: %s GroupMode: %s ackIsDisable: %s"
        % (profileId, cluster, targetaddr, dest_ep, zigate_ep, payload, zigpyzqn, groupaddrmode, ackIsDisabled),
        targetaddr,
    )

    if zigpyzqn is None:
        zigpyzqn = "0"

    callingfunction = sys._getframe(1).f_code.co_name
    data = {
        "Function": callingfunction,
        "Profile": int(profileId, 16),
        "Cluster": int(cluster, 16),
        "TargetNwk": int(targetaddr, 16),
        "TargetEp": int(dest_ep, 16),
        "SrcEp": int(zigate_ep, 16),
        "Sqn": int(zigpyzqn, 16),
        "RxOnIdle": device_listening_on_iddle(self, targetaddr),
        "payload": payload,
        "highpriority": highpriority,
        "delayAfterSent": delayAfterSent,
        "timestamp": time.time(),
    }

    if groupaddrmode:
        data["AddressMode"] = 0x01
        ackIsDisabled = True
    elif ackIsDisabled:
        data["AddressMode"] = 0x07
    else:
        data["AddressMode"] = 0x02

    self.log.logging(
        "outRawAPS",
        "Debug",
        "raw_APS_request - %s ==> Profile: %04x Cluster: %04x TargetNwk: %04x TargetEp: %02x SrcEp: %02x  payload: %s"
        % (callingfunction, data["Profile"], data["Cluster"], data["TargetNwk"], data["TargetEp"], data["SrcEp"], data["payload"]),
        targetaddr,
    )

    return self.ControllerLink.sendData("RAW-COMMAND", data, NwkId=int(targetaddr, 16), sqn=int(zigpyzqn, 16), ackIsDisabled=ackIsDisabled)


def device_listening_on_iddle(self, nwkid):

    if nwkid not in self.ListOfDevices:
        return True

    if "Capability" in self.ListOfDevices[nwkid] and "Reduced-Function Device" in self.ListOfDevices[nwkid]["Capability"]:
        return False

    return self.ListOfDevices[nwkid].get("PowerSource") != "Battery"
