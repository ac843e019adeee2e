# !/usr/bin/env python3
# coding: utf-8 -*-
#
# Author: pipiche38
#

from Modules.sendRawCommand import raw_APS_request
from Modules.tools import get_and_inc_ZCL_SQN
from Modules.ubisysConsts import (ARRAY, CLUSTER_DESCRIPTIONS, OCTET_STRING,
                                  UINT16, WINDOW_COVERING_CLUSTER,
                                  ZCL_PROFILE)
from Zigbee.encoder_tools import decode_endian_data

DEFAULT_ACK_MODE = False

# Data types for which the payload is already in air order
VARIABLE_LENGTH_TYPES = (OCTET_STRING, "42", ARRAY)


def _frame_header(self, nwkid, cluster_frame, manufacturer_spec, manufacturer, cmd):
    # Cluster Frame:
    # 0b xxxx xxxx
    #           |- Frame Type: Global (0x00) or Cluster Specific (0x01)
    #          |-- Manufacturer Specific
    #         |--- Command Direction: Client to Server (0)
    #       | ---- Disable default response: True
    #    |||- ---- Reserved : 0x000
    #
    if manufacturer_spec == "01":
        cluster_frame += 0b00000100

    sqn = get_and_inc_ZCL_SQN(self, nwkid)
    payload = "%02x" % cluster_frame
    if manufacturer_spec == "01":
        payload += decode_endian_data(manufacturer, UINT16)
    payload += sqn + cmd
    return sqn, payload


# Read Attributes Command
def rawaps_read_attribute_req(self, nwkid, EpIn, EpOut, Cluster, direction, manufacturer_spec, manufacturer, Attr, ackIsDisabled=DEFAULT_ACK_MODE):
    self.log.logging("zclCommand", "Debug", "rawaps_read_attribute_req %s %s %s %s %s %s %s %s" % (nwkid, EpIn, EpOut, Cluster, direction, manufacturer_spec, manufacturer, Attr))
    zcl_command_formated_logging(self, "Read_Attribute_Req (Raw)", nwkid, EpOut, Cluster, direction, manufacturer_spec, manufacturer, Attr, ackIsDisabled)

    sqn, payload = _frame_header(self, nwkid, 0b00010000, manufacturer_spec, manufacturer, "00")
    idx = 0
    while idx < len(Attr):
        attribute = Attr[idx : idx + 4]
        idx += 4
        payload += decode_endian_data(attribute, UINT16)

    raw_APS_request(self, nwkid, EpOut, Cluster, ZCL_PROFILE, payload, zigpyzqn=sqn, zigate_ep=EpIn, ackIsDisabled=ackIsDisabled)
    return sqn


# Write Attributes
def rawaps_write_attribute_req(self, nwkid, EPin, EPout, cluster, manuf_id, manuf_spec, attribute, data_type, data, ackIsDisabled=DEFAULT_ACK_MODE):
    self.log.logging("zclCommand", "Debug", "rawaps_write_attribute_req %s %s %s %s %s %s %s %s %s" % (nwkid, EPin, EPout, cluster, manuf_id, manuf_spec, attribute, data_type, data))
    zcl_command_formated_logging(self, "Write_Attribute_Req (Raw)", nwkid, EPout, cluster, manuf_id, manuf_spec, attribute, data_type, data, ackIsDisabled)

    # The manufacturer specific sub-field SHALL be set to 1 if this command is being used to write manufacturer specific attributes
    sqn, payload = _frame_header(self, nwkid, 0b00010000, manuf_spec, manuf_id, "02")
    payload += decode_endian_data(attribute, UINT16)  # Attribute Id
    payload += data_type  # Attribute Data Type
    if data_type in VARIABLE_LENGTH_TYPES:
        payload += data
    else:
        payload += decode_endian_data(data, data_type)
    self.log.logging("zclCommand", "Debug", "rawaps_write_attribute_req ==== payload: %s" % (payload))

    raw_APS_request(self, nwkid, EPout, cluster, ZCL_PROFILE, payload, zigpyzqn=sqn, zigate_ep=EPin, ackIsDisabled=ackIsDisabled)
    return sqn


# Configure Reporting
def zcl_raw_configure_reporting_requestv2(self, nwkid, epin, epout, cluster, direction, manufacturer_spec, manufacturer, attribute_reporting_configuration, ackIsDisabled=DEFAULT_ACK_MODE):
    self.log.logging("zclCommand", "Debug", "zcl_raw_configure_reporting_requestv2 %s %s %s %s %s %s %s %s" % (nwkid, epin, epout, cluster, direction, manufacturer_spec, manufacturer, attribute_reporting_configuration))
    zcl_command_formated_logging(self, "Configure_Reporting_Req (Raw)", nwkid, epout, cluster, direction, manufacturer_spec, manufacturer, attribute_reporting_configuration, ackIsDisabled)

    sqn, payload = _frame_header(self, nwkid, 0b00010000, manufacturer_spec, manufacturer, "06")
    for x in attribute_reporting_configuration:
        self.log.logging("zclCommand", "Debug", "zcl_configure_reporting_requestv2 record: %s" % str(x))
        payload += direction
        payload += decode_endian_data(x["Attribute"], UINT16)
        payload += x["DataType"]
        payload += decode_endian_data(x["minInter"], UINT16)
        payload += decode_endian_data(x["maxInter"], UINT16)
        if "rptChg" in x:
            payload += decode_endian_data(x["rptChg"], x["DataType"])

    self.log.logging("zclCommand", "Debug", "zcl_raw_configure_reporting_requestv2  payload: %s" % payload)
    raw_APS_request(self, nwkid, epout, cluster, ZCL_PROFILE, payload, zigpyzqn=sqn, zigate_ep=epin, ackIsDisabled=ackIsDisabled)
    return sqn


# Cluster 0102: Window Covering
WINDOW_COVERING_COMMANDS = {"Up": 0x00, "Down": 0x01, "Stop": 0x02, "GoToLiftValue": 0x04, "GoToLiftPercentage": 0x05, "GoToTiltValue": 0x07, "GoToTiltPercentage": 0x08}


def zcl_raw_window_covering(self, nwkid, EPIn, EPout, command, level="0000", percentage="00", ackIsDisabled=DEFAULT_ACK_MODE):
    self.log.logging("zclCommand", "Debug", "zcl_raw_window_covering %s %s %s %s %s" % (nwkid, EPout, command, level, percentage))
    zcl_command_formated_logging(self, "Window_Covering (Raw)", nwkid, EPout, WINDOW_COVERING_CLUSTER, command, level, percentage, ackIsDisabled)

    if command not in WINDOW_COVERING_COMMANDS:
        self.log.logging("zclCommand", "Error", "zcl_raw_window_covering UNKNOW COMMAND drop it %s %s %s %s %s" % (nwkid, EPout, command, level, percentage))
        return None

    sqn, payload = _frame_header(self, nwkid, 0b00010001, "00", None, "%02x" % WINDOW_COVERING_COMMANDS[command])
    if command in ("GoToLiftValue", "GoToTiltValue"):
        payload += decode_endian_data(level, UINT16)
    elif command in ("GoToLiftPercentage", "GoToTiltPercentage"):
        payload += percentage

    self.log.logging("zclCommand", "Debug", "zcl_raw_window_covering payload %s %s" % (nwkid, payload))
    raw_APS_request(self, nwkid, EPout, WINDOW_COVERING_CLUSTER, ZCL_PROFILE, payload, zigpyzqn=sqn, zigate_ep=EPIn, ackIsDisabled=ackIsDisabled)
    return sqn


def zcl_command_formated_logging(self, command, nwkid, ep, cluster, *args):

    if not self.pluginconf.pluginConf["trackZclClustersOut"]:
        return

    formatted_message = "Zcl Command | %s | %s | %s | %s | %s " % (
        command, nwkid, ep, cluster, CLUSTER_DESCRIPTIONS.get(cluster, "Unknown cluster"))
    for arg in args:
        formatted_message += "| %s" % arg

    self.log.logging("zclCommand", "Log", formatted_message)
