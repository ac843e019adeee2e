#!/usr/bin/env python3
# coding: utf-8 -*-
#
# Author: pipiche38
#

"""
Class PluginConf

Description: Import the PluginConf-xx.json file and initialized each of the available parameters in this file
Parameters not define in the PluginConf-xx.json file will be set to their default value.

"""

import json
import os.path
from pathlib import Path

from Classes.LoggingManagement import host_error_api, host_log_api, host_status_api

SETTINGS = {
    "Ubisys": {
        "Order": 1,
        "param": {
            "ubisysModeSwitchSettlingDelay": { "type": "int", "default": 6, "current": None, "restart": 0, "hidden": False, "Advanced": False, },
            "ubisysDefaultMinMireds": { "type": "int", "default": 153, "current": None, "restart": 0, "hidden": False, "Advanced": True, },
            "ubisysDefaultMaxMireds": { "type": "int", "default": 555, "current": None, "restart": 0, "hidden": False, "Advanced": True, },
            "ubisysStepsPerSecond": { "type": "int", "default": 50, "current": None, "restart": 0, "hidden": False, "Advanced": True, },
            "ubisysReadOutputConfigurationAtConfigure": { "type": "bool", "default": 1, "current": None, "restart": 0, "hidden": False, "Advanced": True, },
            "ubisysPositionReportingMaxInterval": { "type": "int", "default": 300, "current": None, "restart": 0, "hidden": False, "Advanced": True, },
        },
    },
    "Plugin": {
        "Order": 2,
        "param": {
            "pluginHome": { "type": "path", "default": "", "current": None, "restart": 1, "hidden": True, "Advanced": True, },
            "homedirectory": { "type": "path", "default": "", "current": None, "restart": 1, "hidden": True, "Advanced": True, },
            "pluginConfig": { "type": "path", "default": "", "current": None, "restart": 1, "hidden": False, "Advanced": True, },
            "pluginCertified": { "type": "path", "default": "", "current": None, "restart": 1, "hidden": False, "Advanced": True, },
            "pluginLogs": { "type": "path", "default": "", "current": None, "restart": 1, "hidden": False, "Advanced": True, },
        },
    },
    "VerboseLogging": {
        "Order": 3,
        "param": {
            "MatchingNwkId": { "type": "str", "default": "ffff", "current": None, "restart": 0, "hidden": False, "Advanced": False },
            "Ubisys": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": False },
            "BasicOutput": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "Database": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "Input": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "Plugin": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "PluginTools": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "ZclClusters": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "zclCommand": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "outRawAPS": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "trackZclClustersIn": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "trackZclClustersOut": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "WriteAttributes": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "Zigpy": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
            "ZigpyDefaultLoggingInfo": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": True },
        },
    },
    "PluginLogging": {
        "Order": 4,
        "param": {
            "enablePluginLogging": { "type": "bool", "default": 0, "current": None, "restart": 1, "hidden": False, "Advanced": False },
            "logThreadName": { "type": "bool", "default": 0, "current": None, "restart": 0, "hidden": False, "Advanced": False },
            "loggingBackupCount": { "type": "int", "default": 7, "current": None, "restart": 1, "hidden": False, "Advanced": False },
            "loggingMaxMegaBytes": { "type": "int", "default": 0, "current": None, "restart": 1, "hidden": False, "Advanced": False },
            "PluginLogMode": {"type": "list", "list": { "system default": 0, "0600": 0o600, "0640": 0o640, "0644": 0o644}, "default": 0, "current": None, "restart": 1, "hidden": False, "Advanced": True,},
        },
    },
}

CERTIFIED_FOLDER = Path(__file__).resolve().parent.parent / "Conf" / "Certified"


class PluginConf:
    def __init__(self, homedir, hardwareid):

        self.pluginConf = {}
        self.homedir = str(homedir)
        self.hardwareid = hardwareid
        self.pluginConf["pluginHome"] = self.homedir.rstrip("/").rstrip("\\")

        setup_folder_parameters(self, self.homedir)
        _path_check(self)

        _pluginConf = Path(self.pluginConf["pluginConfig"])
        self.pluginConf["filename"] = str(_pluginConf / ("PluginConf-%02d.json" % hardwareid))
        if os.path.isfile(self.pluginConf["filename"]):
            _load_Settings(self)
        else:
            self.write_Settings()

        _param_checking(self)

    def write_Settings(self):
        # serialize json format the pluginConf "
        # Only the parameters which are different than default "

        _pluginConf = Path(self.pluginConf["pluginConfig"])
        pluginConfFile = _pluginConf / ("PluginConf-%02d.json" % self.hardwareid)
        self.pluginConf["filename"] = str(pluginConfFile)

        write_pluginConf = {}
        for theme in SETTINGS:
            for param in SETTINGS[theme]["param"]:
                if SETTINGS[theme]["param"][param]["type"] == "path":
                    continue
                if self.pluginConf[param] != SETTINGS[theme]["param"][param]["default"]:
                    write_pluginConf[param] = self.pluginConf[param]

        with open(pluginConfFile, "wt", encoding="utf-8") as handle:
            json.dump(write_pluginConf, handle, sort_keys=True, indent=2)


def _load_Settings(self):
    # deserialize json format of pluginConf"
    # load parameters "

    with open(self.pluginConf["filename"], "rt", encoding="utf-8") as handle:
        try:
            _pluginConf = json.load(handle)

        except json.decoder.JSONDecodeError as e:
            host_error_api("poorly-formed %s, not JSON: %s" % (self.pluginConf["filename"], e))
            return

    for param in _pluginConf:
        theme = _theme_of_param(param)
        if theme is None:
            host_error_api("Unknown parameter %s in %s, ignored" % (param, self.pluginConf["filename"]))
            continue
        if not _is_valid_type(SETTINGS[theme]["param"][param], _pluginConf[param]):
            host_error_api("Wrong parameter type for %s, keeping default %s" % (param, self.pluginConf[param]))
            continue
        self.pluginConf[param] = _pluginConf[param]

    host_log_api("%s loaded" % self.pluginConf["filename"])


def _theme_of_param(param):
    for theme in SETTINGS:
        if param in SETTINGS[theme]["param"]:
            return theme
    return None


def _is_valid_type(definition, value):
    if definition["type"] in ("bool", "int"):
        return isinstance(value, int)
    if definition["type"] == "list":
        return value in definition["list"].values()
    if definition["type"] in ("str", "path"):
        return isinstance(value, str)
    return True


def _path_check(self):
    for param in ("pluginConfig", "pluginLogs"):
        _path_name = Path(self.pluginConf[param])
        if not os.path.exists(_path_name):
            host_status_api("Creating folder %s" % _path_name)
            _path_name.mkdir(parents=True, exist_ok=True)

    if not os.path.isdir(self.pluginConf["pluginCertified"]):
        host_error_api("Cannot access path: %s" % self.pluginConf["pluginCertified"])


def _param_checking(self):
    # Let"s check the Type
    for theme in SETTINGS:
        for param in SETTINGS[theme]["param"]:
            if SETTINGS[theme]["param"][param]["type"] == "path":
                continue
            if self.pluginConf[param] == SETTINGS[theme]["param"][param]["default"]:
                continue
            host_status_api("%s set to %s" % (param, self.pluginConf[param]))


def setup_folder_parameters(self, homedir):

    for theme in SETTINGS:
        for param in SETTINGS[theme]["param"]:
            if param == "pluginHome":
                continue
            if param == "homedirectory":
                self.pluginConf[param] = str(Path(homedir))
            elif param == "pluginConfig":
                self.pluginConf[param] = str(Path(self.pluginConf["pluginHome"]) / "Conf")
            elif param == "pluginCertified":
                self.pluginConf[param] = str(CERTIFIED_FOLDER)
            elif param == "pluginLogs":
                self.pluginConf[param] = str(Path(self.pluginConf["pluginHome"]) / "Logs")
            else:
                self.pluginConf[param] = SETTINGS[theme]["param"][param]["default"]
