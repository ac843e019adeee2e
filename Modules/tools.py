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
    Module : tools.py


    Description: Plugin toolbox
"""

HEX_DIGIT = "0123456789abcdefABCDEF"


def is_hex(s):
    return len(s) > 0 and all(char in HEX_DIGIT for char in s)


def getEpForCluster(self, nwkid, ClusterId, strict=False):
    """
    Return the list of Ep associated to the ClusterId
    If strict is True, then None will return if there is no Cluster found
    """

    EPlist = [str(x) for x in self.ListOfDevices[nwkid]["Ep"] if ClusterId in self.ListOfDevices[nwkid]["Ep"][x]]
    if strict and not EPlist:
        return None
    return EPlist


def is_endpoint_available(self, nwkid, ep):
    return nwkid in self.ListOfDevices and ep in self.ListOfDevices[nwkid].get("Ep", {})


# Used by zclRawCommands
def get_and_inc_ZCL_SQN(self, key):
    return get_and_increment_generic_SQN(self, key, "ZCLSQN")


def get_and_increment_generic_SQN(self, nwkid, sqn_type):
    if nwkid not in self.ListOfDevices:
        return "%02x" % 0x00

    if sqn_type not in self.ListOfDevices[nwkid] or self.ListOfDevices[nwkid][sqn_type] in ("", {}):
        self.ListOfDevices[nwkid][sqn_type] = "%02x" % 0x00
        return self.ListOfDevices[nwkid][sqn_type]

    self.ListOfDevices[nwkid][sqn_type] = "%02x" % ((int(self.ListOfDevices[nwkid][sqn_type], 16) + 1) % 256)
    return self.ListOfDevices[nwkid][sqn_type]


def checkAttribute(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID):

    ep_cache = self.ListOfDevices[MsgSrcAddr].setdefault("Ep", {}).setdefault(MsgSrcEp, {})
    if not isinstance(ep_cache.get(MsgClusterId), dict):
        ep_cache[MsgClusterId] = {}
    ep_cache[MsgClusterId].setdefault(MsgAttrID, {})


def checkAndStoreAttributeValue(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, Value):
    checkAttribute(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID)
    self.ListOfDevices[MsgSrcAddr]["Ep"][MsgSrcEp][MsgClusterId][MsgAttrID] = Value


def getAttributeValue(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID):
    """ Cached value of the attribute, None when never reported """

    cluster = self.ListOfDevices.get(MsgSrcAddr, {}).get("Ep", {}).get(MsgSrcEp, {}).get(MsgClusterId)
    if not isinstance(cluster, dict) or MsgAttrID not in cluster:
        self.log.logging("PluginTools", "Debug", "getAttributeValue - Unknown %s/%s %s %s" % (MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID), MsgSrcAddr)
        return None
    if cluster[MsgAttrID] in ("", {}):
        return None
    return cluster[MsgAttrID]


# Functions to manage Device Attributes infos ( WriteAttributes)
def check_datastruct(self, DeviceAttribute, key, endpoint, clusterId):
    # Make sure all tree exists
    if key not in self.ListOfDevices:
        return None
    _cluster = self.ListOfDevices[key].setdefault(DeviceAttribute, {}).setdefault("Ep", {}).setdefault(endpoint, {})
    if not isinstance(_cluster.get(clusterId), dict):
        _cluster[clusterId] = {}
    _cluster[clusterId].setdefault("TimeStamp", 0)
    _cluster[clusterId].setdefault("iSQN", {})
    _cluster[clusterId].setdefault("Attributes", {})
    _cluster[clusterId].setdefault("ZigateRequest", {})
    return True


def set_timestamp_datastruct(self, DeviceAttribute, key, endpoint, clusterId, now):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return
    self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["TimeStamp"] = now


def set_request_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId, datatype, EPin, EPout, manuf_id, manuf_spec, data, ackIsDisabled, phase):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return

    self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["ZigateRequest"][AttributeId] = {
        "Status": phase,
        "DataType": datatype,
        "EPin": EPin,
        "EPout": EPout,
        "manuf_id": manuf_id,
        "manuf_spec": manuf_spec,
        "data": data,
        "ackIsDisabled": ackIsDisabled,
    }


def get_request_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return None
    return self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["ZigateRequest"].get(AttributeId)


def set_request_phase_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId, phase):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return
    if AttributeId in self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["ZigateRequest"]:
        self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["ZigateRequest"][AttributeId]["Status"] = phase


def set_isqn_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId, isqn):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return
    if isqn is not None:
        self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["iSQN"][AttributeId] = isqn


def get_list_isqn_attr_datastruct(self, DeviceAttribute, key, endpoint, clusterId):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return []
    return list(self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["iSQN"].keys())


def get_isqn_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return None
    return self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["iSQN"].get(AttributeId)


def set_status_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId, status):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return
    self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["Attributes"][AttributeId] = status


def get_status_datastruct(self, DeviceAttribute, key, endpoint, clusterId, AttributeId):
    if check_datastruct(self, DeviceAttribute, key, endpoint, clusterId) is None:
        return None
    return self.ListOfDevices[key][DeviceAttribute]["Ep"][endpoint][clusterId]["Attributes"].get(AttributeId)


def is_ack_tobe_disabled(self, key):
    # If Pairing in progress keep Ack
    # If Battery device keep Ack

    return (
        not self.ListOfDevices[key].get("PairingInProgress", False)
        and self.ListOfDevices[key].get("PowerSource") != "Battery"
        and self.ListOfDevices[key].get("MacCapa") != "80"
    )


def get_deviceconf_parameter_value(self, model, attribute, return_default=None):
    """ Retrieve Configuration Attribute from Config file"""

    return self.DeviceConf.get(model, {}).get(attribute, return_default)
