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


class UbisysException(Exception):
    """Base exception for ubisys converter errors."""

    def __init__(self, message, code="UBISYS_ERROR"):
        super().__init__(message)
        self.code = code


class UnknownModeError(UbisysException):
    """Raised when an output mode is not part of the configuration catalog."""

    def __init__(self, mode, known_modes):
        super().__init__(
            "Unknown output mode '%s'. Valid modes are: %s" % (mode, ", ".join(known_modes)),
            code="UNKNOWN_MODE",
        )
        self.mode = mode
        self.known_modes = list(known_modes)


class InvalidChannelCountError(UbisysException):
    """Raised when an output configuration does not describe exactly 6 channels."""

    def __init__(self, count, expected=6):
        super().__init__("Output configuration requires exactly %s channels, got %s" % (expected, count), code="INVALID_CHANNEL_COUNT")
        self.count = count


class ChannelIndexOutOfRangeError(UbisysException):
    def __init__(self, channel):
        super().__init__("Channel %s is out of range, expected 1..6" % (channel,), code="CHANNEL_OUT_OF_RANGE")
        self.channel = channel


class BufferTooShortError(UbisysException):
    def __init__(self, length, minimum=4):
        super().__init__("Output configuration buffer too short: %s bytes (at least %s expected)" % (length, minimum), code="BUFFER_TOO_SHORT")
        self.length = length


class InvalidParameterValueError(UbisysException):
    """Raised when a user supplied value fails validation, ``field`` names the offending input."""

    def __init__(self, message, field=None, code="INVALID_VALUE"):
        super().__init__(message, code=code)
        self.field = field


class InvalidCalibrationInputError(InvalidParameterValueError):
    def __init__(self, message, field=None):
        super().__init__(message, field=field, code="INVALID_CALIBRATION")


class UnsupportedParameterError(UbisysException):
    def __init__(self, key, model):
        super().__init__("Parameter '%s' is not supported by model %s" % (key, model), code="UNSUPPORTED_PARAMETER")
        self.key = key
        self.model = model


class SetupEndpointNotFoundError(UbisysException):
    """Raised when the device does not expose the ubisys management endpoint 232."""

    def __init__(self, nwkid):
        super().__init__("Device %s has no ubisys setup endpoint (232)" % nwkid, code="SETUP_ENDPOINT_NOT_FOUND")
        self.nwkid = nwkid


class ConfigurationNotAvailableError(UbisysException):
    """Raised when a read-modify-write needs a value the device has not reported yet, a read has been issued."""

    def __init__(self, nwkid, attribute="output configuration"):
        super().__init__(
            "No %s available yet for %s. A read has been requested, retry once it has been reported" % (attribute, nwkid),
            code="CONFIGURATION_NOT_AVAILABLE",
        )
        self.nwkid = nwkid
