#!/usr/bin/env python3
# coding: utf-8 -*-
#
# Author: zaraki673 & pipiche38
#
"""
    Module: basicOutputs

    Description: All direct communications towards the devices

"""

from time import time

from Modules.sendRawCommand import PLUGIN_EP
from Modules.tools import (is_ack_tobe_disabled, set_isqn_datastruct,
                           set_request_datastruct, set_timestamp_datastruct)
from Zigbee.zclRawCommands import (rawaps_read_attribute_req,
                                   rawaps_write_attribute_req,
                                   zcl_raw_configure_reporting_requestv2,
                                   zcl_raw_window_covering)


def read_attribute(self, nwkid, EpIn, EpOut, Cluster, direction, manufacturer_spec, manufacturer, lenAttr, Attr, ackIsDisabled=False):
    if isinstance(Attr, list):
        Attr = "".join(Attr)
    if len(Attr) != 4 * lenAttr:
        self.log.logging("BasicOutput", "Error", "read_attribute - inconsistent attribute list %s (%s)" % (Attr, lenAttr), nwkid)
        return None

    self.log.logging("BasicOutput", "Debug", "read_attribute %s/%s Cluster: %s Attributes: %s" % (nwkid, EpOut, Cluster, Attr), nwkid)
    return rawaps_read_attribute_req(self, nwkid, EpIn, EpOut, Cluster, direction, manufacturer_spec, manufacturer, Attr, ackIsDisabled=ackIsDisabled)


def write_attribute(self, key, EPin, EPout, clusterID, manuf_id, manuf_spec, attribute, data_type, data, ackIsDisabled=False):
    i_sqn = rawaps_write_attribute_req(self, key, EPin, EPout, clusterID, manuf_id, manuf_spec, attribute, data_type, data, ackIsDisabled=ackIsDisabled)

    set_isqn_datastruct(self, "WriteAttributes", key, EPout, clusterID, attribute, i_sqn)
    set_request_datastruct(self, "WriteAttributes", key, EPout, clusterID, attribute, data_type, EPin, EPout, manuf_id, manuf_spec, data, ackIsDisabled, "requested")
    set_timestamp_datastruct(self, "WriteAttributes", key, EPout, clusterID, int(time()))
    return i_sqn


def configure_reporting(self, nwkid, EPout, cluster, attribute_reporting_configuration):
    """ Send a Configure Reporting for a list of attributes records ( Attribute, DataType, minInter, maxInter, rptChg ) """

    self.log.logging("BasicOutput", "Debug", "configure_reporting %s/%s Cluster: %s Records: %s" % (nwkid, EPout, cluster, attribute_reporting_configuration), nwkid)
    return zcl_raw_configure_reporting_requestv2(
        self, nwkid, PLUGIN_EP, EPout, cluster, "00", "00", "0000", attribute_reporting_configuration, ackIsDisabled=is_ack_tobe_disabled(self, nwkid)
    )


def window_covering_command(self, nwkid, EPout, command, percentage=None):
    self.log.logging("BasicOutput", "Debug", "window_covering_command %s/%s %s %s" % (nwkid, EPout, command, percentage), nwkid)
    if percentage is None:
        return zcl_raw_window_covering(self, nwkid, PLUGIN_EP, EPout, command, ackIsDisabled=is_ack_tobe_disabled(self, nwkid))
    return zcl_raw_window_covering(self, nwkid, PLUGIN_EP, EPout, command, percentage="%02x" % percentage, ackIsDisabled=is_ack_tobe_disabled(self, nwkid))
