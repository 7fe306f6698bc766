# -*- coding: utf-8 -*-

import ipaddress
import re
import struct

import netifaces

from dhcpexceptions import InterfaceNotFoundError, MalformedAddressError

MAC_RE = re.compile('(?i)^[0-9a-f]{2}(?::[0-9a-f]{2}){5}$')


def bytes_to_int(data):
    """Big-endian unsigned 32-bit value of the first four bytes"""
    return struct.unpack('!I', data[:4])[0]


def bytes_to_ip(data):
    return ipaddress.IPv4Address(bytes(data[:4]))


def mac_to_bytes(mac_str):
    """Convert 'aa:bb:cc:dd:ee:ff' into its six raw bytes"""
    if not isinstance(mac_str, str) or not MAC_RE.match(mac_str):
        raise MalformedAddressError("Invalid hardware address: {0!r}".format(mac_str))
    return bytes(int(x, 16) for x in mac_str.split(':'))


def bytes_to_mac(data):
    return ':'.join(['%02x' % x for x in data[:6]])


def get_iface_mac(ifname):
    if not ifname:
        raise InterfaceNotFoundError("No interface given")
    if ifname not in netifaces.interfaces():
        raise InterfaceNotFoundError("{0}: no such interface".format(ifname))
    try:
        ifinfo = netifaces.ifaddresses(ifname)
    except ValueError as e:
        raise InterfaceNotFoundError("{0}: {1}".format(ifname, e))
    for linkinfo in ifinfo.get(netifaces.AF_LINK, []):
        mac_str = linkinfo.get('addr')
        if mac_str and MAC_RE.match(mac_str):
            return mac_str.lower()
    raise InterfaceNotFoundError("{0}: no hardware address".format(ifname))


def hexline(data):
    """Convert a binary buffer into a hexadecimal representation"""
    hexa = ' '.join(["%02x" % x for x in data])
    printable = ''.join([(32 <= x < 127) and chr(x) or '.' for x in data])
    return "(%d) %s : %s" % (len(data), hexa, printable)
