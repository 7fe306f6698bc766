# -*- coding: utf-8 -*-

"""
BOOTP/DHCP packet model.

The fixed part of a packet is kept as the list of values that DHCPFormat
packs and unpacks, indexed with the BOOTP_* constants.  Whatever follows the
magic cookie is kept untouched as the options area and decoded on demand.
"""

import random
import struct

from dhcpexceptions import MalformedPacketError
from dhcpoptions import build_options, iter_options, options_to_dict
from dhcputil import bytes_to_ip, bytes_to_mac, mac_to_bytes

from dhcpvars import *


def trim_string(data):
    return data.split(b'\x00', 1)[0].decode('ascii', 'replace')


class DHCPPacket:
    def __init__(self, buf=None, options=b''):
        if buf is None:
            buf = [0, 0, 0, 0, 0, 0, BOOTP_FLAGS_NONE,
                   IPV4_NULL_ADDRESS, IPV4_NULL_ADDRESS,
                   IPV4_NULL_ADDRESS, IPV4_NULL_ADDRESS,
                   b'', b'', b'', COOKIE]
        self.buf = list(buf)
        self.options = bytes(options)

    @classmethod
    def from_bytes(cls, data):
        if len(data) < DHCPFormatSize:
            raise MalformedPacketError("Cannot be a DHCP packet - too small! ({0} bytes)".format(len(data)))
        buf = struct.unpack(DHCPFormat, data[:DHCPFormatSize])
        if buf[BOOTP_COOKIE] != COOKIE:
            raise MalformedPacketError("Bad magic cookie {0!r}".format(buf[BOOTP_COOKIE]))
        return cls(buf, data[DHCPFormatSize:])

    def to_bytes(self):
        pkt = struct.pack(DHCPFormat, *self.buf) + self.options
        if len(pkt) < DHCP_MIN_PACKET_SIZE:
            pkt += b'\x00' * (DHCP_MIN_PACKET_SIZE - len(pkt))
        return pkt

    def set_hardware_address(self, mac_str):
        """Write a colon separated MAC into chaddr, null padded to 16 bytes"""
        self.buf[BOOTP_CHADDR] = mac_to_bytes(mac_str)
        self.buf[BOOTP_HTYPE] = HTYPE_ETHER
        self.buf[BOOTP_HLEN] = HLEN_ETHER

    @property
    def op(self):
        return self.buf[BOOTP_OP]

    @property
    def htype(self):
        return self.buf[BOOTP_HTYPE]

    @property
    def hlen(self):
        return self.buf[BOOTP_HLEN]

    @property
    def hops(self):
        return self.buf[BOOTP_HOPS]

    @property
    def xid(self):
        return self.buf[BOOTP_XID]

    @property
    def secs(self):
        return self.buf[BOOTP_SECS]

    @property
    def flags(self):
        return self.buf[BOOTP_FLAGS]

    @property
    def broadcast(self):
        return bool(self.buf[BOOTP_FLAGS] & BOOTP_FLAGS_BROADCAST)

    @property
    def ciaddr(self):
        return bytes_to_ip(self.buf[BOOTP_CIADDR])

    @property
    def yiaddr(self):
        return bytes_to_ip(self.buf[BOOTP_YIADDR])

    @property
    def siaddr(self):
        return bytes_to_ip(self.buf[BOOTP_SIADDR])

    @property
    def giaddr(self):
        return bytes_to_ip(self.buf[BOOTP_GIADDR])

    @property
    def chaddr(self):
        return self.buf[BOOTP_CHADDR].ljust(16, b'\x00')

    @property
    def mac(self):
        return bytes_to_mac(self.chaddr)

    @property
    def sname(self):
        return trim_string(self.buf[BOOTP_SNAME])

    @property
    def file(self):
        return trim_string(self.buf[BOOTP_FILE])

    def iter_options(self):
        return iter_options(self.options)

    def get_option(self, code):
        return options_to_dict(self.options).get(code)

    @property
    def message_type(self):
        value = self.get_option(DHCP_MSG)
        if not value:
            return None
        return value[0]


def new_discover_packet(xid=None, param_request_list=DEFAULT_PARAM_REQUEST_LIST):
    """
    Build a DHCPDISCOVER asking for a broadcast reply.

    chaddr is left empty, set_hardware_address() has to be called before the
    packet is sent.
    """
    if xid is None:
        xid = random.getrandbits(32)

    buf = [BOOTREQUEST, HTYPE_ETHER, HLEN_ETHER, 0, xid, 0, BOOTP_FLAGS_BROADCAST,
           IPV4_NULL_ADDRESS, IPV4_NULL_ADDRESS, IPV4_NULL_ADDRESS, IPV4_NULL_ADDRESS,
           b'', b'', b'', COOKIE]

    options = [(DHCP_MSG, struct.pack('!B', DHCP_DISCOVER))]
    if param_request_list:
        options.append((DHCP_PARAM_REQUEST_LIST, bytes(param_request_list)))

    return DHCPPacket(buf, build_options(options))
