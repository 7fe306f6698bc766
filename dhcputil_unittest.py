#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Unit tests for dhcputil.py."""

import unittest

import mock
import netifaces

import dhcputil
from dhcpexceptions import InterfaceNotFoundError, MalformedAddressError


class FieldCodecTest(unittest.TestCase):
    """Integer, address and MAC helpers."""

    def testBytesToInt(self):
        self.assertEqual(0x63825363, dhcputil.bytes_to_int(b'\x63\x82\x53\x63'))
        self.assertEqual(0, dhcputil.bytes_to_int(b'\x00\x00\x00\x00'))

    def testBytesToIp(self):
        self.assertEqual('192.168.1.254',
                         str(dhcputil.bytes_to_ip(b'\xc0\xa8\x01\xfe')))

    def testMacToBytes(self):
        self.assertEqual(b'\x00\x1a\x2b\x3c\x4d\x5e',
                         dhcputil.mac_to_bytes('00:1a:2B:3c:4D:5e'))

    def testMacRoundTrip(self):
        self.assertEqual('de:ad:be:ef:00:01',
                         dhcputil.bytes_to_mac(dhcputil.mac_to_bytes('DE:AD:BE:EF:00:01')))

    def testMalformedMac(self):
        for mac_str in ('', '00:11:22:33:44', '00:11:22:33:44:55:66',
                        '00-11-22-33-44-55', '0g:11:22:33:44:55', None):
            with self.assertRaises(MalformedAddressError):
                dhcputil.mac_to_bytes(mac_str)

    def testHexline(self):
        self.assertEqual('(3) 41 00 7a : A.z', dhcputil.hexline(b'A\x00z'))


class IfaceMacTest(unittest.TestCase):
    """Interface to MAC lookup through netifaces."""

    @mock.patch.object(netifaces, 'ifaddresses')
    @mock.patch.object(netifaces, 'interfaces')
    def testKnownInterface(self, interfaces, ifaddresses):
        interfaces.return_value = ['lo', 'eth0']
        ifaddresses.return_value = {
            netifaces.AF_LINK: [{'addr': '52:54:00:AB:CD:EF',
                                 'broadcast': 'ff:ff:ff:ff:ff:ff'}]}
        self.assertEqual('52:54:00:ab:cd:ef', dhcputil.get_iface_mac('eth0'))
        ifaddresses.assert_called_once_with('eth0')

    @mock.patch.object(netifaces, 'interfaces')
    def testUnknownInterface(self, interfaces):
        interfaces.return_value = ['lo']
        with self.assertRaises(InterfaceNotFoundError):
            dhcputil.get_iface_mac('eth7')

    @mock.patch.object(netifaces, 'ifaddresses')
    @mock.patch.object(netifaces, 'interfaces')
    def testInterfaceWithoutHardwareAddress(self, interfaces, ifaddresses):
        interfaces.return_value = ['tun0']
        ifaddresses.return_value = {netifaces.AF_INET: [{'addr': '10.8.0.2'}]}
        with self.assertRaises(InterfaceNotFoundError):
            dhcputil.get_iface_mac('tun0')

    @mock.patch.object(netifaces, 'ifaddresses')
    @mock.patch.object(netifaces, 'interfaces')
    def testInterfaceVanishedDuringLookup(self, interfaces, ifaddresses):
        interfaces.return_value = ['eth0']
        ifaddresses.side_effect = ValueError('You must specify a valid interface name.')
        with self.assertRaises(InterfaceNotFoundError):
            dhcputil.get_iface_mac('eth0')

    def testUsesNetifacesModule(self):
        self.assertIs(netifaces, dhcputil.netifaces)

    def testEmptyName(self):
        with self.assertRaises(InterfaceNotFoundError):
            dhcputil.get_iface_mac('')


if __name__ == '__main__':
    unittest.main()
