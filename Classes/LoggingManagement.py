#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Implementation of ubisys converters for the Zigbee plugin.
#
# This file is part of Zigbee for Domoticz plugin. https://github.com/zigbeefordomoticz/Domoticz-Zigbee
# (C) 2015-2024
#
# Initial authors: deufo & pipiche38
#
# SPDX-License-Identifier:    GPL-3.0 license

"""
    Module : LoggingManagement.py

    Description: Plugin logging routines

"""

import inspect
import json
import logging
import os
import threading
import time
import traceback
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path

LOG_ERROR_HISTORY = "PluginZigbee_log_error_history_"
LOG_FILE = "PluginZigbee_"
HOST_LOGGER = "UbisysPlugin"

MAX_ERRORS_PER_LAUNCH = 20
MAX_LAUNCH_HISTORY = 5


def host_log_api(message):
    logging.getLogger(HOST_LOGGER).info(message)


def host_status_api(message):
    logging.getLogger(HOST_LOGGER).warning(message)


def host_error_api(message):
    logging.getLogger(HOST_LOGGER).error(message)


class LoggingManagement:
    def __init__(self, pluginconf, PluginHealth, HardwareID, ListOfDevices, permitTojoin):
        self.LogErrorHistory = {}
        self.pluginconf = pluginconf
        self.PluginHealth = PluginHealth
        self.HardwareID = HardwareID
        self.ListOfDevices = ListOfDevices
        self.permitTojoin = permitTojoin
        self.PluginVersion = None
        self._startTime = int(time.time())
        self._file_handler = None

        self.debugZigpy = None
        self.reload_debug_settings = True

    def zigpy_login(self):
        self.reload_debug_settings = False
        _configure_debug_mode(self, "Zigpy", configure_zigpy_loggers)

    def loggingUpdatePluginVersion(self, Version):
        self.PluginVersion = Version
        if (
            self.LogErrorHistory
            and self.LogErrorHistory["LastLog"]
            and "StartTime" in self.LogErrorHistory[str(self.LogErrorHistory["LastLog"])]
            and self.LogErrorHistory[str(self.LogErrorHistory["LastLog"])]["StartTime"] == self._startTime
        ):
            self.LogErrorHistory[str(self.LogErrorHistory["LastLog"])]["PluginVersion"] = Version

    def openLogFile(self):
        self.open_logging_mode()
        self.open_log_history()

    def open_logging_mode(self):
        if not self.pluginconf.pluginConf["enablePluginLogging"]:
            return

        _pluginlogs = Path(self.pluginconf.pluginConf["pluginLogs"])
        _logfilename = _pluginlogs / (LOG_FILE + "%02d.log" % self.HardwareID)

        _backupCount = int(self.pluginconf.pluginConf["loggingBackupCount"])
        _maxBytes = int(self.pluginconf.pluginConf["loggingMaxMegaBytes"]) * 1024 * 1024
        host_status_api("Please watch plugin log into %s" % _logfilename)

        if _maxBytes == 0:
            # Rotate every midnight
            self._file_handler = TimedRotatingFileHandler(_logfilename, when="midnight", interval=1, backupCount=_backupCount, encoding="utf-8")
        else:
            self._file_handler = RotatingFileHandler(_logfilename, maxBytes=_maxBytes, backupCount=_backupCount, encoding="utf-8")

        self._file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s:%(message)s"))
        root_logger = logging.getLogger()
        root_logger.addHandler(self._file_handler)
        root_logger.setLevel(logging.DEBUG)

        if self.pluginconf.pluginConf["PluginLogMode"] in (0o600, 0o640, 0o644):
            os.chmod(_logfilename, self.pluginconf.pluginConf["PluginLogMode"])

    def open_log_history(self):
        _pluginlogs = Path(self.pluginconf.pluginConf["pluginLogs"])
        jsonLogHistory = _pluginlogs / (LOG_ERROR_HISTORY + "%02d.json" % self.HardwareID)
        if not jsonLogHistory.is_file():
            host_status_api("Log history not found, no error logged")
            return

        with open(jsonLogHistory, "r", encoding="utf-8") as handle:
            try:
                self.LogErrorHistory = json.load(handle)

            except json.decoder.JSONDecodeError as e:
                self.LogErrorHistory = {}
                host_error_api("load Json LogErrorHistory poorly-formed %s, not JSON: %s" % (jsonLogHistory, e))

        if not self.LogErrorHistory:
            # flush the file to avoid the error next startup
            loggingWriteErrorHistory(self)

    def closeLogFile(self):
        loggingWriteErrorHistory(self)
        if self._file_handler is not None:
            logging.getLogger().removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None
        host_log_api("Logging shutdown")

    def logging(self, module, logType, message, nwkid=None, context=None):

        thread_name = "%s %s" % (threading.current_thread().name, threading.current_thread().native_id)

        if logType == "Error":
            if context:
                context["StackTrace"] = get_stack_trace()
            else:
                context = {"StackTrace": get_stack_trace()}

        if self.reload_debug_settings:
            self.zigpy_login()

        modules = [module] if isinstance(module, str) else module
        for module_instance in modules:
            if _is_to_be_logged(self, logType, module_instance):
                process_logging_event(self, thread_name, module_instance, logType, str(message), nwkid, context)


def _is_to_be_logged(self, logType, module):
    if logType in ("Log", "Status", "Error"):
        return True
    if module in self.pluginconf.pluginConf:
        return bool(self.pluginconf.pluginConf[module])
    host_error_api("%s debug module unknown %s" % (module, module))
    return True


def process_logging_event(self, thread_name, module, logType, message, nwkid, context):
    if logType == "Error":
        loggingError(self, thread_name, module, message, nwkid, context)

    elif logType == "Debug":
        _logginfilter(self, thread_name, message, nwkid)

    else:
        loggingDirector(self, thread_name, logType, message)


def _format_message(self, thread_name, message):
    if self.pluginconf.pluginConf["logThreadName"]:
        return "[%17s] " % thread_name + message
    return message


def _loggingStatus(self, thread_name, message):
    host_status_api(_format_message(self, thread_name, message))


def _loggingLog(self, thread_name, message):
    host_log_api(_format_message(self, thread_name, message))


def _loggingDebug(self, thread_name, message):
    logging.getLogger(HOST_LOGGER).debug(_format_message(self, thread_name, message))


def _logginfilter(self, thread_name, message, nwkid):

    if nwkid is None:
        _loggingDebug(self, thread_name, message)
    elif nwkid:
        nwkid = nwkid.lower()
        _debugMatchId = self.pluginconf.pluginConf["MatchingNwkId"].lower().strip().split(",")
        if ("ffff" in _debugMatchId) or (nwkid in _debugMatchId) or (nwkid == "ffff"):
            _loggingDebug(self, thread_name, message)


def loggingDirector(self, thread_name, logType, message):
    if logType == "Log":
        _loggingLog(self, thread_name, message)
    elif logType == "Status":
        _loggingStatus(self, thread_name, message)


def loggingError(self, thread_name, module, message, nwkid, context):
    host_error_api(_format_message(self, thread_name, message))

    # Log empty
    if not self.LogErrorHistory or "LastLog" not in self.LogErrorHistory:
        self.LogErrorHistory["LastLog"] = 0
        self.LogErrorHistory["0"] = {
            "LastLog": 0,
            "StartTime": self._startTime,
            "PluginVersion": self.PluginVersion,
        }

        self.LogErrorHistory["0"]["0"] = loggingBuildContext(self, thread_name, module, message, nwkid, context)
        loggingWriteErrorHistory(self)
        return  # log created, leaving

    # check if existing log contains plugin launch time
    index = self.LogErrorHistory["LastLog"]
    if self.LogErrorHistory[str(index)].get("StartTime") != self._startTime:
        index += 1

    # check if it's a new entry
    if str(index) not in self.LogErrorHistory:
        self.LogErrorHistory["LastLog"] = index
        self.LogErrorHistory[str(index)] = {
            "LastLog": 0,
            "StartTime": self._startTime,
            "PluginVersion": self.PluginVersion,
        }
        self.LogErrorHistory[str(index)]["0"] = loggingBuildContext(self, thread_name, module, message, nwkid, context)
    else:
        self.LogErrorHistory[str(index)]["LastLog"] += 1
        self.LogErrorHistory[str(index)][str(self.LogErrorHistory[str(index)]["LastLog"])] = loggingBuildContext(
            self, thread_name, module, message, nwkid, context
        )

        if len(self.LogErrorHistory[str(index)]) > MAX_ERRORS_PER_LAUNCH + 3:  # log full for this launch time, remove oldest
            idx = list(self.LogErrorHistory[str(index)].keys())[3]
            self.LogErrorHistory[str(index)].pop(idx)

    if len(self.LogErrorHistory) > MAX_LAUNCH_HISTORY + 1:  # log full, remove oldest
        idx = list(self.LogErrorHistory.keys())[1]
        self.LogErrorHistory.pop(idx)

    loggingWriteErrorHistory(self)


def get_stack_trace():
    # Get the current stack frame
    current_frame = inspect.currentframe()

    # Get the call stack ( -2 to exclude the get_stack_trace() and logging()
    stack = traceback.extract_stack(current_frame)[:-2]
    return "".join(traceback.format_list(stack))


def loggingBuildContext(self, thread_name, module, message, nwkid, context=None):

    _context = {
        "Time": int(time.time()),
        "PermitToJoin": self.permitTojoin,
        "PluginHealth": self.PluginHealth.get("Txt", "Not Started"),
        "Thread": thread_name,
        "nwkid": nwkid,
        "Module": module,
        "message": message,
    }

    if nwkid in self.ListOfDevices:
        _context["DeviceInfos"] = str(self.ListOfDevices.get(nwkid, {}))

    if context is not None:
        _context["context"] = {k: str(v) for k, v in context.items()} if isinstance(context, dict) else str(context)

    return _context


def loggingWriteErrorHistory(self):
    _pluginlogs = Path(self.pluginconf.pluginConf["pluginLogs"])
    jsonLogHistory = _pluginlogs / (LOG_ERROR_HISTORY + "%02d.json" % self.HardwareID)

    with open(jsonLogHistory, "w", encoding="utf-8") as json_file:
        json.dump(dict(self.LogErrorHistory), json_file)
        json_file.write("\n")


def configure_loggers(self, logger_names, mode):
    if mode == "debug":
        _set_logging_level = logging.DEBUG
    elif mode == "info":
        _set_logging_level = logging.INFO
    else:
        _set_logging_level = logging.WARNING

    for logger_name in logger_names:
        logging.getLogger(logger_name).setLevel(_set_logging_level)


def configure_zigpy_loggers(self, mode="warning"):
    """ Configure Logging level for zigpy """
    if mode == self.debugZigpy:
        return
    self.debugZigpy = mode

    logger_names = [
        "zigpy.types",
        "zigpy.zcl",
        "zigpy.util",
    ]
    configure_loggers(self, logger_names, mode)


def _configure_debug_mode(self, config_name, config_function):
    """ if ConfigName parameter set to True, enable python module logging"""

    if self.pluginconf.pluginConf[config_name]:
        return config_function(self, "debug")

    default_mode = "info" if self.pluginconf.pluginConf["ZigpyDefaultLoggingInfo"] else "warning"
    config_function(self, default_mode)
