#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Unit tests for dhcppacket.py."""

import struct
import unittest

import dhcppacket
from dhcpexceptions import MalformedAddressError, MalformedPacketError
from dhcpvars import *

MAC = '00:25:90:94:27:cc'


def make_offer(xid=0x12345678, options=b'\x35\x01\x02\xff'):
    """Builds the wire bytes of a DHCPOFFER for 192.168.1.100."""
    header = struct.pack(DHCPFormat, BOOTREPLY, HTYPE_ETHER, HLEN_ETHER, 1, xid,
                         3, BOOTP_FLAGS_BROADCAST,
                         b'\x00\x00\x00\x00', b'\xc0\xa8\x01\x64',
                         b'\xc0\xa8\x01\x01', b'\x0a\x00\x00\x01',
                         b'\x00\x25\x90\x94\x27\xcc', b'boot.example',
                         b'pxelinux.0', COOKIE)
    return header + options


class DiscoverPacketTest(unittest.TestCase):
    """Checks the DHCPDISCOVER builder."""

    def setUp(self):
        self.packet = dhcppacket.new_discover_packet(xid=0xdeadbeef)
        self.packet.set_hardware_address(MAC)

    def testHeader(self):
        self.assertEqual(BOOTREQUEST, self.packet.op)
        self.assertEqual(1, self.packet.htype)
        self.assertEqual(6, self.packet.hlen)
        self.assertEqual(0, self.packet.hops)
        self.assertEqual(0xdeadbeef, self.packet.xid)
        self.assertTrue(self.packet.broadcast)
        for addr in (self.packet.ciaddr, self.packet.yiaddr,
                     self.packet.siaddr, self.packet.giaddr):
            self.assertEqual('0.0.0.0', str(addr))

    def testLayout(self):
        data = self.packet.to_bytes()
        self.assertEqual(236, BOOTPHeaderSize)
        self.assertEqual(COOKIE, data[236:240])
        self.assertEqual(b'\x01\x01\x06\x00', data[:4])
        self.assertEqual(b'\xde\xad\xbe\xef', data[4:8])
        self.assertEqual(b'\x80\x00', data[10:12])
        self.assertEqual(b'\x00\x25\x90\x94\x27\xcc' + b'\x00' * 10, data[28:44])
        self.assertEqual(bytes([53, 1, 1]), data[240:243])
        self.assertEqual(DHCP_MIN_PACKET_SIZE, len(data))

    def testOptions(self):
        labels = [o.label for o in self.packet.iter_options()]
        self.assertEqual(['DHCP Message Type', 'Parameter Request List'], labels)
        self.assertEqual(DHCP_DISCOVER, self.packet.message_type)

    def testRandomTransactionId(self):
        xids = set(dhcppacket.new_discover_packet().xid for _ in range(8))
        self.assertGreater(len(xids), 1)

    def testRoundTrip(self):
        decoded = dhcppacket.DHCPPacket.from_bytes(self.packet.to_bytes())
        self.assertEqual(self.packet.xid, decoded.xid)
        self.assertEqual(self.packet.flags, decoded.flags)
        self.assertEqual(self.packet.ciaddr, decoded.ciaddr)
        self.assertEqual(self.packet.yiaddr, decoded.yiaddr)
        self.assertEqual(self.packet.siaddr, decoded.siaddr)
        self.assertEqual(self.packet.giaddr, decoded.giaddr)
        self.assertEqual(self.packet.chaddr, decoded.chaddr)
        self.assertEqual(MAC, decoded.mac)

    def testMalformedHardwareAddress(self):
        with self.assertRaises(MalformedAddressError):
            self.packet.set_hardware_address('00:25:90:94:27')


class ReceivedPacketTest(unittest.TestCase):
    """Decoding of inbound datagrams."""

    def testHeaderAccessors(self):
        packet = dhcppacket.DHCPPacket.from_bytes(make_offer())
        self.assertEqual(BOOTREPLY, packet.op)
        self.assertEqual(1, packet.hops)
        self.assertEqual(0x12345678, packet.xid)
        self.assertEqual(3, packet.secs)
        self.assertEqual('192.168.1.100', str(packet.yiaddr))
        self.assertEqual('192.168.1.1', str(packet.siaddr))
        self.assertEqual('10.0.0.1', str(packet.giaddr))
        self.assertEqual(MAC, packet.mac)
        self.assertEqual('boot.example', packet.sname)
        self.assertEqual('pxelinux.0', packet.file)
        self.assertEqual(DHCP_OFFER, packet.message_type)

    def testGetOption(self):
        packet = dhcppacket.DHCPPacket.from_bytes(
            make_offer(options=bytes([53, 1, 2, 54, 4, 192, 168, 1, 1, 255])))
        self.assertEqual(b'\xc0\xa8\x01\x01', packet.get_option(DHCP_SERVER))
        self.assertIsNone(packet.get_option(DHCP_LEASE_TIME))

    def testNoMessageType(self):
        packet = dhcppacket.DHCPPacket.from_bytes(make_offer(options=b'\xff'))
        self.assertIsNone(packet.message_type)

    def testTooShort(self):
        with self.assertRaises(MalformedPacketError):
            dhcppacket.DHCPPacket.from_bytes(make_offer()[:239])

    def testBadCookie(self):
        data = bytearray(make_offer())
        data[236] = 0
        with self.assertRaises(MalformedPacketError):
            dhcppacket.DHCPPacket.from_bytes(bytes(data))


if __name__ == '__main__':
    unittest.main()
