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
    Module: plugin.py

    Description: Entry points called by the host. The host owns the radio and hands over
                 device announcements, attribute reports and write responses, and sends
                 the frames built here through the ControllerLink.

"""

import time

from Classes.LoggingManagement import LoggingManagement, host_error_api, host_status_api
from Classes.PluginConf import PluginConf
from DevicesModules import (DEVICE_CONFIGURE_MODULE, DEVICE_EXPOSES_MODULE,
                            DEVICE_HEARTBEAT_MODULE)
from Modules.database import importDeviceConfV2, register_device
from Modules.paramDevice import (get_device_parameter,
                                 initialize_device_settings,
                                 set_device_parameter)
from Modules.readZclClusters import process_cluster_attribute_response
from Modules.tools import get_deviceconf_parameter_value
from Modules.writeAttributes import Decode_Write_Attribute_Response

VERSION = "1.0.0"


class BasePlugin:
    enabled = False

    def __init__(self):

        self.ListOfDevices = {}  # { NwkId : { "Model", "Ep", "State", ... } }
        self.DeviceConf = {}  # Certified device configurations, per model
        self.ModelAliases = {}  # Zigbee Model Identifier -> certified model

        # Objects from Classe
        self.ControllerLink = None
        self.pluginconf = None  # PlugConf object / all configuration parameters
        self.log = None

        self.permitTojoin = {"Duration": 0, "Starttime": 0}
        self.PluginHealth = {}
        self.homedirectory = None
        self.HardwareID = None
        self.HeartbeatCount = 0

        self.device_settings = {}
        initialize_device_settings(self)

    def onStart(self, controller_link, homefolder, hardwareid):
        host_status_api("Welcome to the ubisys converters for Zigbee plugin %s" % VERSION)

        self.ControllerLink = controller_link
        self.homedirectory = homefolder
        self.HardwareID = hardwareid

        self.pluginconf = PluginConf(homefolder, hardwareid)
        self.log = LoggingManagement(self.pluginconf, self.PluginHealth, self.HardwareID, self.ListOfDevices, self.permitTojoin)
        self.log.openLogFile()
        self.log.loggingUpdatePluginVersion(VERSION)

        importDeviceConfV2(self)

        self.PluginHealth["Flag"] = 1
        self.PluginHealth["Txt"] = "Ready"
        self.enabled = True
        self.log.logging("Plugin", "Status", "Plugin started, %s device configurations loaded" % len(self.DeviceConf))

    def onStop(self):
        if self.log:
            self.log.logging("Plugin", "Log", "onStop called")
            self.log.closeLogFile()

        self.PluginHealth["Flag"] = 3
        self.PluginHealth["Txt"] = "No Communication"
        self.enabled = False

    def onDeviceAnnounce(self, nwkid, model, endpoints):
        """ endpoints is { "01": [ "0000", "0006", ... ], ... } """
        if not self.enabled:
            return None
        self.log.logging("Plugin", "Debug", "onDeviceAnnounce %s %s %s" % (nwkid, model, endpoints), nwkid)
        return register_device(self, nwkid, model, endpoints)

    def onAttributeReport(self, nwkid, ep, cluster, attribute, datatype, data, sqn="00", manufacturer_code=None):
        if not _known_device(self, nwkid, "onAttributeReport"):
            return None
        size = "%04x" % (len(data) // 2)
        process_cluster_attribute_response(self, sqn, nwkid, ep, cluster, attribute, datatype, size, data, "Report", ManufacturerCode=manufacturer_code)
        return self.ListOfDevices[nwkid].get("State", {})

    def onWriteAttributeResponse(self, nwkid, ep, cluster, attribute, status, sqn=None):
        if not _known_device(self, nwkid, "onWriteAttributeResponse"):
            return
        Decode_Write_Attribute_Response(self, sqn, nwkid, ep, cluster, status, attribute)

    def onCommand(self, nwkid, key, value):
        if not _known_device(self, nwkid, "onCommand"):
            return None
        return set_device_parameter(self, nwkid, key, value)

    def onGet(self, nwkid, key):
        if not _known_device(self, nwkid, "onGet"):
            return None
        return get_device_parameter(self, nwkid, key)

    def onConfigure(self, nwkid):
        if not _known_device(self, nwkid, "onConfigure"):
            return
        model = self.ListOfDevices[nwkid].get("Model")
        if model not in DEVICE_CONFIGURE_MODULE:
            self.log.logging("Plugin", "Log", "onConfigure - nothing to configure for %s (%s)" % (nwkid, model), nwkid)
            return
        DEVICE_CONFIGURE_MODULE[model](self, nwkid)

    def onHeartbeat(self):
        if not self.enabled:
            return

        self.HeartbeatCount += 1
        now = int(time.time())
        for nwkid in list(self.ListOfDevices):
            model = self.ListOfDevices[nwkid].get("Model")
            if model in DEVICE_HEARTBEAT_MODULE:
                DEVICE_HEARTBEAT_MODULE[model](self, nwkid, now)

    def getExposes(self, nwkid):
        if not _known_device(self, nwkid, "getExposes"):
            return []
        model = self.ListOfDevices[nwkid].get("Model")
        if model not in DEVICE_EXPOSES_MODULE:
            return []
        return DEVICE_EXPOSES_MODULE[model](self, nwkid)

    def getDefinition(self, nwkid):
        if not _known_device(self, nwkid, "getDefinition"):
            return None
        model = self.ListOfDevices[nwkid].get("Model")
        return {
            "model": model,
            "vendor": get_deviceconf_parameter_value(self, model, "Vendor"),
            "description": get_deviceconf_parameter_value(self, model, "Description"),
            "endpoints": get_deviceconf_parameter_value(self, model, "EndpointNames", {}),
            "ota": bool(get_deviceconf_parameter_value(self, model, "Ota", False)),
            "multi_endpoint": bool(get_deviceconf_parameter_value(self, model, "MultiEndpoint", False)),
        }


def _known_device(self, nwkid, caller):
    if not self.enabled or self.log is None:
        host_error_api("%s called before onStart" % caller)
        return False
    if nwkid not in self.ListOfDevices:
        self.log.logging("Plugin", "Error", "%s - unknown device %s" % (caller, nwkid), nwkid, {"NwkId": nwkid, "Caller": caller})
        return False
    return True


global _plugin  # pylint: disable=global-variable-not-assigned
_plugin = BasePlugin()


def onStart(controller_link, homefolder, hardwareid=0):
    global _plugin  # pylint: disable=global-variable-not-assigned
    _plugin.onStart(controller_link, homefolder, hardwareid)


def onStop():
    global _plugin  # pylint: disable=global-variable-not-assigned
    _plugin.onStop()


def onDeviceAnnounce(nwkid, model, endpoints):
    global _plugin  # pylint: disable=global-variable-not-assigned
    return _plugin.onDeviceAnnounce(nwkid, model, endpoints)


def onAttributeReport(nwkid, ep, cluster, attribute, datatype, data, sqn="00", manufacturer_code=None):
    global _plugin  # pylint: disable=global-variable-not-assigned
    return _plugin.onAttributeReport(nwkid, ep, cluster, attribute, datatype, data, sqn, manufacturer_code)


def onWriteAttributeResponse(nwkid, ep, cluster, attribute, status, sqn=None):
    global _plugin  # pylint: disable=global-variable-not-assigned
    _plugin.onWriteAttributeResponse(nwkid, ep, cluster, attribute, status, sqn)


def onCommand(nwkid, key, value):
    global _plugin  # pylint: disable=global-variable-not-assigned
    return _plugin.onCommand(nwkid, key, value)


def onGet(nwkid, key):
    global _plugin  # pylint: disable=global-variable-not-assigned
    return _plugin.onGet(nwkid, key)


def onConfigure(nwkid):
    global _plugin  # pylint: disable=global-variable-not-assigned
    _plugin.onConfigure(nwkid)


def onHeartbeat():
    global _plugin  # pylint: disable=global-variable-not-assigned
    _plugin.onHeartbeat()


def getExposes(nwkid):
    global _plugin  # pylint: disable=global-variable-not-assigned
    return _plugin.getExposes(nwkid)


def getDefinition(nwkid):
    global _plugin  # pylint: disable=global-variable-not-assigned
    return _plugin.getDefinition(nwkid)
