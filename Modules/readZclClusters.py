#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Implementation of Zigbee for Domoticz plugin.
#
# This file is part of Zigbee for Domoticz plugin. https://github.com/zigbeefordomoticz/Domoticz-Zigbee
# (C) 2015-2024
#
# Initial authors: zaraki673 & pipiche38
#
# SPDX-License-Identifier:    GPL-3.0 license

from DevicesModules import FUNCTION_MODULE, FUNCTION_WITH_ACTIONS_MODULE
from Modules.stateMaj import MajDeviceState
from Modules.tools import checkAndStoreAttributeValue
from Modules.ubisysConsts import CLUSTER_DESCRIPTIONS
from Modules.zclClusterHelpers import decoding_attribute_data

# "ActionList":
#   check_store_value - check the value and store in the corresponding data strcuture entry
#   check_store_raw_value - store the value as decoded from the wire, before any computation
#   upd_state - publish the value under "StateKey" in the device state

CHECK_AND_STORE = "check_store_value"
CHECK_AND_STORE_RAW = "check_store_raw_value"
UPDATE_STATE = "upd_state"


def process_cluster_attribute_response(self, MsgSQN, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgAttType, MsgAttSize, MsgClusterData, Source, ManufacturerCode=None):

    self.log.logging("ZclClusters", "Debug", "Foundation Cluster - Nwkid: %s Ep: %s Cluster: %s Attribute: %s Type: %s Data: %s Source: %s" % (
        MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgAttType, MsgClusterData, Source), MsgSrcAddr)

    device_model = _get_model_name(self, MsgSrcAddr)
    try:
        raw_value = decoding_attribute_data(MsgAttType, MsgClusterData)

    except ValueError as e:
        self.log.logging("ZclClusters", "Error", "process_cluster_attribute_response - %s/%s %s %s cannot decode %s as %s: %s" % (
            MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgClusterData, MsgAttType, e), MsgSrcAddr, {"NwkId": MsgSrcAddr, "Data": MsgClusterData})
        return
    value = raw_value
    _name = cluster_attribute_retrieval(self, MsgSrcEp, MsgClusterId, MsgAttrID, "Name", model=device_model, manufacturer_code=ManufacturerCode)
    _datatype = cluster_attribute_retrieval(self, MsgSrcEp, MsgClusterId, MsgAttrID, "DataType", model=device_model, manufacturer_code=ManufacturerCode)
    _manuf_specific_cluster = _cluster_manufacturer_function(self, MsgSrcEp, MsgClusterId, MsgAttrID, model=device_model, manufacturer_code=ManufacturerCode)

    if _manuf_specific_cluster is None and _datatype and _datatype != MsgAttType:
        # When ManufSpecificCluster, do not check DataType as we don't have the info
        self.log.logging("ZclClusters", "Log", "process_cluster_attribute_response - %s/%s %s - %s DataType: %s miss-match with expected %s" % (
            MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgAttType, _datatype), MsgSrcAddr)

    # Do we have to use a manufacturer specific function, and then skip everything else
    if _manuf_specific_cluster is not None and _manuf_specific_cluster in FUNCTION_WITH_ACTIONS_MODULE:
        func = FUNCTION_WITH_ACTIONS_MODULE[_manuf_specific_cluster]
        func(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, value)
        formated_logging(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgAttType, MsgAttSize, MsgClusterData, Source, device_model, _name, _datatype, _manuf_specific_cluster, value)
        return

    _ranges = cluster_attribute_retrieval(self, MsgSrcEp, MsgClusterId, MsgAttrID, "Range", model=device_model, manufacturer_code=ManufacturerCode)
    if _ranges is not None:
        checking_ranges = _check_range(self, value, MsgAttType, _ranges)
        if checking_ranges is not None and not checking_ranges:
            _context = {
                "Source": str(Source),
                "Model": str(device_model),
                "MsgClusterId": str(MsgClusterId),
                "MsgSrcEp": str(MsgSrcEp),
                "MsgAttrID": str(MsgAttrID),
                "MsgAttType": str(MsgAttType),
                "MsgClusterData": str(MsgClusterData),
                "ranges": str(_ranges),
            }
            self.log.logging("ZclClusters", "Error", " %s/%s %s %s . value out of ranges : %s -> %s" % (
                MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, value, str(_ranges)), nwkid=MsgSrcAddr, context=_context)

    _function = cluster_attribute_retrieval(self, MsgSrcEp, MsgClusterId, MsgAttrID, "EvalFunc", model=device_model, manufacturer_code=ManufacturerCode)
    if _function is not None:
        value = compute_attribute_value(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, value, _function)

    _action_list = cluster_attribute_retrieval(self, MsgSrcEp, MsgClusterId, MsgAttrID, "ActionList", model=device_model, manufacturer_code=ManufacturerCode)
    formated_logging(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, MsgAttType, MsgAttSize, MsgClusterData, Source, device_model, _name, _datatype, _action_list, value)

    if value is None:
        self.log.logging("ZclClusters", "Debug", "---> Value is None", MsgSrcAddr)
        return

    if _action_list is None:
        if ManufacturerCode:
            return
        # Keep track of it, capabilities are probed from the attribute cache
        checkAndStoreAttributeValue(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, raw_value)
        return

    for data_action in _action_list:
        self.log.logging("ZclClusters", "Debug", "---> Data Action: %s" % data_action, MsgSrcAddr)

        if data_action == CHECK_AND_STORE_RAW:
            checkAndStoreAttributeValue(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, raw_value)

        elif data_action == CHECK_AND_STORE:
            checkAndStoreAttributeValue(self, MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID, value)

        elif data_action == UPDATE_STATE:
            _state_key = cluster_attribute_retrieval(self, MsgSrcEp, MsgClusterId, MsgAttrID, "StateKey", model=device_model, manufacturer_code=ManufacturerCode)
            if _state_key is None:
                self.log.logging("ZclClusters", "Error", "process_cluster_attribute_response - %s/%s %s %s upd_state without StateKey" % (
                    MsgSrcAddr, MsgSrcEp, MsgClusterId, MsgAttrID), MsgSrcAddr)
                continue
            MajDeviceState(self, MsgSrcAddr, _state_key, value)


def _check_range(self, value, datatype, _range):

    if len(_range) != 2:
        self.log.logging("ZclClusters", "Error", " . Incorrect range %s" % str(_range))
        return None

    if isinstance(_range[0], int) and isinstance(_range[1], int):
        _range1 = _range[0]
        _range2 = _range[1]
    else:
        _range1 = decoding_attribute_data(datatype, _range[0])
        _range2 = decoding_attribute_data(datatype, _range[1])

    if _range1 < _range2:
        return _range1 <= value <= _range2

    if _range1 > _range2:
        return _range1 >= value >= _range2

    return value == _range1


def _get_model_name(self, nwkid):

    if nwkid in self.ListOfDevices and "Model" in self.ListOfDevices[nwkid] and self.ListOfDevices[nwkid]["Model"] not in ("", {}):
        return self.ListOfDevices[nwkid]["Model"]
    return None


def _cluster_manufacturer_function(self, ep, cluster, attribute, model, manufacturer_code=None):

    if is_cluster_specific_config(self, model, ep, cluster):
        manuf_specific_function = _cluster_specific_attribute_retrieval(self, model, ep, cluster, attribute, "ManufSpecificFunc", manufacturer_code)
        if manuf_specific_function:
            return manuf_specific_function

        if "ManufSpecificCluster" in self.DeviceConf[model]["Ep"][ep][cluster]:
            return self.DeviceConf[model]["Ep"][ep][cluster]["ManufSpecificCluster"]

    return None


def _cluster_specific_attribute_retrieval(self, model, ep, cluster, attribute, parameter, manufacturer_code=None):

    # Manufacturer specific attributes can share their Id with a standard one
    section = "ManufacturerAttributes" if manufacturer_code else "Attributes"
    if (
        ep in self.DeviceConf[model]["Ep"]
        and cluster in self.DeviceConf[model]["Ep"][ep]
        and isinstance(self.DeviceConf[model]["Ep"][ep][cluster], dict)
        and section in self.DeviceConf[model]["Ep"][ep][cluster]
        and attribute in self.DeviceConf[model]["Ep"][ep][cluster][section]
        and parameter in self.DeviceConf[model]["Ep"][ep][cluster][section][attribute]
    ):
        return self.DeviceConf[model]["Ep"][ep][cluster][section][attribute][parameter]
    return None


def is_cluster_specific_config(self, model, ep, cluster):
    if model is None or model not in self.DeviceConf:
        return False
    if "Ep" not in self.DeviceConf[model]:
        return False
    if ep not in self.DeviceConf[model]["Ep"]:
        return False
    if cluster not in self.DeviceConf[model]["Ep"][ep]:
        return False
    if self.DeviceConf[model]["Ep"][ep][cluster] in ("", {}):
        return False
    return True


def cluster_attribute_retrieval(self, ep, cluster, attribute, parameter, model=None, manufacturer_code=None):
    if model and is_cluster_specific_config(self, model, ep, cluster):
        return _cluster_specific_attribute_retrieval(self, model, ep, cluster, attribute, parameter, manufacturer_code)
    return None


def compute_attribute_value(self, nwkid, ep, cluster, attribut, value, _function):

    if _function not in FUNCTION_MODULE:
        self.log.logging("ZclClusters", "Error", "compute_attribute_value - %s/%s %s %s unknown EvalFunc %s" % (
            nwkid, ep, cluster, attribut, _function), nwkid)
        return None
    return FUNCTION_MODULE[_function](self, nwkid, ep, cluster, attribut, value)


def formated_logging(self, nwkid, ep, cluster, attribute, dt, dz, d, Source, device_model, attr_name, exp_dt, action, value):

    if not self.pluginconf.pluginConf["trackZclClustersIn"]:
        return

    lqi = self.ListOfDevices[nwkid]["LQI"] if "LQI" in self.ListOfDevices[nwkid] else 0
    cluster_description = CLUSTER_DESCRIPTIONS.get(cluster, "Unknown cluster")
    self.log.logging("ZclClusters", "Log", "Attribute Report | %s | %s | %s | %s | %s | %s | %s | %s | %s | %s | %s | %s | %s | %s | %s" % (
        nwkid, ep, cluster, cluster_description, attribute, attr_name, dt, exp_dt, dz, device_model, action, d, value, Source, lqi), nwkid)
