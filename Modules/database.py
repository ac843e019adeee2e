#!/usr/bin/env python3
# coding: utf-8 -*-
#
# Author: zaraki673 & pipiche38
#
"""
    Module: database.py

    Description: Certified device configurations and device records

"""

import json
import os.path
from os import listdir
from os.path import isdir, isfile, join

# Device attributes re-initialized when a device (re)announces itself
BUILD_ATTRIBUTES = (
    "State",
    "Stamp",
    "WriteAttributes",
    "Ubisys",
)


def importDeviceConfV2(self):

    self.DeviceConf = {}
    self.ModelAliases = {}
    model_certified = self.pluginconf.pluginConf["pluginCertified"]

    if not os.path.isdir(model_certified):
        self.log.logging("Database", "Error", "importDeviceConfV2 - Certified folder %s not found" % model_certified)
        return

    model_brand_list = [f for f in listdir(model_certified) if isdir(join(model_certified, f))]
    for brand in sorted(model_brand_list):
        model_directory = join(model_certified, brand)
        model_list = [f for f in listdir(model_directory) if isfile(join(model_directory, f)) and f.endswith(".json")]

        for model_device in sorted(model_list):
            filename = join(model_directory, model_device)
            with open(filename, "rt", encoding="utf-8") as handle:
                try:
                    model_definition = json.load(handle)
                except ValueError as e:
                    self.log.logging("Database", "Error", "--> JSON ConfFile: %s load failed with error: %s" % (str(filename), str(e)))
                    continue

            device_model_name = model_device.rsplit(".", 1)[0]
            if device_model_name in self.DeviceConf:
                self.log.logging("Database", "Debug", "--> Config for %s/%s not loaded as already defined" % (str(brand), str(device_model_name)))
                continue

            self.log.logging("Database", "Debug", "--> Config for %s/%s" % (str(brand), str(device_model_name)))
            self.DeviceConf[device_model_name] = dict(model_definition)
            for alias in model_definition.get("ZigbeeModel", [device_model_name]):
                self.ModelAliases[alias] = device_model_name

    self.log.logging("Database", "Debug", "--> Config loaded: %s" % list(self.DeviceConf.keys()))
    self.log.logging("Database", "Status", "DeviceConf loaded - %s confs loaded" % len(self.DeviceConf))


def resolve_model_name(self, zigbee_model):
    """ Return the certified model for the Model Identifier reported by the device, None if unknown """

    if zigbee_model in self.ModelAliases:
        return self.ModelAliases[zigbee_model]
    if zigbee_model in self.DeviceConf:
        return zigbee_model
    return None


def register_device(self, nwkid, zigbee_model, endpoints):
    """ Create or refresh the ListOfDevices record, endpoints is { ep: [ input clusters ] } """

    model = resolve_model_name(self, zigbee_model)
    if model is None:
        self.log.logging("Database", "Error", "register_device - %s unknown model %s" % (nwkid, zigbee_model), nwkid, {"NwkId": nwkid, "Model": zigbee_model})
        return None

    device = self.ListOfDevices.setdefault(nwkid, {})
    for attribute in BUILD_ATTRIBUTES:
        device[attribute] = {}
    device["Model"] = model
    device["ZigbeeModel"] = zigbee_model
    device["Manufacturer Name"] = self.DeviceConf[model].get("Vendor", "")

    ep_cache = device.setdefault("Ep", {})
    for ep, clusters in endpoints.items():
        ep_cache.setdefault(ep, {})
        for cluster in clusters:
            ep_cache[ep].setdefault(cluster, {})

    self.log.logging("Database", "Debug", "register_device %s %s -> %s endpoints: %s" % (nwkid, zigbee_model, model, list(ep_cache)), nwkid)
    return model
