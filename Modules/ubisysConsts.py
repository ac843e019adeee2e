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
    Module: ubisysConsts.py

    Description: Clusters, attributes and data types shared by the ubisys devices

"""

from zigpy.zcl.clusters.closures import WindowCovering
from zigpy.zcl.clusters.general import LevelControl, OnOff
from zigpy.zcl.clusters.homeautomation import ElectricalMeasurement
from zigpy.zcl.clusters.lighting import Ballast, Color
from zigpy.zcl.clusters.smartenergy import Metering

UBISYS_MANUFACTURER_CODE = "10f2"

# Device Setup cluster, hosted on the management endpoint 232
UBISYS_SETUP_EP = "e8"
UBISYS_DEVICE_SETUP_CLUSTER = "fc00"
UBISYS_INPUT_CONFIGURATIONS = "0000"
UBISYS_INPUT_ACTIONS = "0001"
UBISYS_OUTPUT_CONFIGURATIONS = "0010"

ONOFF_CLUSTER = "%04x" % OnOff.cluster_id
LEVEL_CONTROL_CLUSTER = "%04x" % LevelControl.cluster_id
WINDOW_COVERING_CLUSTER = "%04x" % WindowCovering.cluster_id
COLOR_CLUSTER = "%04x" % Color.cluster_id
BALLAST_CLUSTER = "%04x" % Ballast.cluster_id
METERING_CLUSTER = "%04x" % Metering.cluster_id
ELECTRICAL_MEASUREMENT_CLUSTER = "%04x" % ElectricalMeasurement.cluster_id

CLUSTER_DESCRIPTIONS = {
    "%04x" % cluster.cluster_id: cluster.name
    for cluster in (OnOff, LevelControl, WindowCovering, Color, Ballast, Metering, ElectricalMeasurement)
}
CLUSTER_DESCRIPTIONS[UBISYS_DEVICE_SETUP_CLUSTER] = "ubisys Device Setup"

# ZCL Data types
DATA8 = "08"
BITMAP8 = "18"
UINT8 = "20"
UINT16 = "21"
ENUM8 = "30"
OCTET_STRING = "41"
ARRAY = "48"

ZCL_PROFILE = "0104"
