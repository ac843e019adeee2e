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
    Module: writeAttributes.py

    Description: Write Attribute Response processing

"""

from zigpy.zcl import foundation

from DevicesModules import FUNCTION_WRITE_RESPONSE_MODULE
from Modules.readZclClusters import _get_model_name, is_cluster_specific_config
from Modules.tools import (get_isqn_datastruct, get_list_isqn_attr_datastruct,
                           get_request_datastruct,
                           set_request_phase_datastruct, set_status_datastruct)


def status_name(MsgAttrStatus):
    try:
        return foundation.Status(int(MsgAttrStatus, 16)).name
    except ValueError:
        return "0x%s" % MsgAttrStatus


def Decode_Write_Attribute_Response(self, MsgSQN, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrStatus, MsgAttrID=None):
    self.log.logging("WriteAttributes", "Debug", "Decode_Write_Attribute_Response - MsgSQN: %s, MsgSrcAddr: %s, MsgSrcEp: %s, MsgClusterId: %s MsgAttrID: %s Status: %s" % (
        MsgSQN, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgAttrStatus), MsgSrcAddr)

    if MsgSrcAddr not in self.ListOfDevices:
        self.log.logging("WriteAttributes", "Log", "Decode_Write_Attribute_Response - unknown device %s" % MsgSrcAddr, MsgSrcAddr)
        return

    if MsgAttrID:
        matching_attributes = [MsgAttrID]
    else:
        # Global success status, match the request by its sequence number
        matching_attributes = [
            x for x in get_list_isqn_attr_datastruct(self, "WriteAttributes", MsgSrcAddr, MsgSrcEp, MsgClusterId)
            if get_isqn_datastruct(self, "WriteAttributes", MsgSrcAddr, MsgSrcEp, MsgClusterId, x) == MsgSQN
        ]
        self.log.logging("WriteAttributes", "Debug", "------- - sqn: %s matches attributes: %s" % (MsgSQN, matching_attributes), MsgSrcAddr)

    for attribute in matching_attributes:
        set_status_datastruct(self, "WriteAttributes", MsgSrcAddr, MsgSrcEp, MsgClusterId, attribute, MsgAttrStatus)
        set_request_phase_datastruct(self, "WriteAttributes", MsgSrcAddr, MsgSrcEp, MsgClusterId, attribute, "fullfilled")

        if MsgAttrStatus != "00":
            request = get_request_datastruct(self, "WriteAttributes", MsgSrcAddr, MsgSrcEp, MsgClusterId, attribute)
            self.log.logging("WriteAttributes", "Error", "Write Attribute Response - %s/%s ClusterID: %s/%s failed with %s" % (
                MsgSrcAddr, MsgSrcEp, MsgClusterId, attribute, status_name(MsgAttrStatus)), MsgSrcAddr, {
                "NwkId": MsgSrcAddr, "Ep": MsgSrcEp, "Cluster": MsgClusterId, "Attribute": attribute, "Status": MsgAttrStatus, "Request": request})

        _write_response_callback(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, attribute, MsgAttrStatus)


def _write_response_callback(self, nwkid, ep, cluster, attribute, status):
    model = _get_model_name(self, nwkid)
    if not is_cluster_specific_config(self, model, ep, cluster):
        return

    _function = self.DeviceConf[model]["Ep"][ep][cluster].get("WriteResponseFunc")
    if _function is None:
        return
    if _function not in FUNCTION_WRITE_RESPONSE_MODULE:
        self.log.logging("WriteAttributes", "Error", "_write_response_callback - unknown WriteResponseFunc %s for %s" % (_function, model), nwkid)
        return

    FUNCTION_WRITE_RESPONSE_MODULE[_function](self, nwkid, ep, cluster, attribute, status)
