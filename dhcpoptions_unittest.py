#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Unit tests for dhcpoptions.py."""

import unittest

import dhcpoptions
from dhcpexceptions import CorruptedOptionError
from dhcpvars import DHCP_OPTIONS, DHCP_MESSAGE_TYPES


class OptionTableTest(unittest.TestCase):
    """Checks the static option and message type tables."""

    def testRequiredCodesPresent(self):
        for code in (0, 1, 3, 6, 12, 15, 28, 33, 43, 44, 51, 53, 54, 58, 59,
                     119, 252, 255):
            self.assertIn(code, DHCP_OPTIONS)

    def testMessageTypesFollowRfc2131(self):
        self.assertEqual('DHCPDISCOVER', DHCP_MESSAGE_TYPES[1])
        self.assertEqual('DHCPOFFER', DHCP_MESSAGE_TYPES[2])
        self.assertEqual('DHCPACK', DHCP_MESSAGE_TYPES[5])
        self.assertEqual('DHCPNACK', DHCP_MESSAGE_TYPES[6])
        self.assertEqual('DHCPRELEASE', DHCP_MESSAGE_TYPES[7])


class ParseOptionsTest(unittest.TestCase):
    """Decoding of the options area."""

    def parse(self, data):
        return [(o.label, o.value) for o in dhcpoptions.parse_options(bytes(data))]

    def testServerIdentifier(self):
        self.assertEqual([('Server Identifier', '10.0.0.1')],
                         self.parse([54, 4, 10, 0, 0, 1, 255]))

    def testRouterList(self):
        self.assertEqual([('Router', '192.168.1.1 192.168.1.2 ')],
                         self.parse([3, 8, 192, 168, 1, 1, 192, 168, 1, 2, 255]))

    def testMessageType(self):
        self.assertEqual([('DHCP Message Type', 'DHCPDISCOVER')],
                         self.parse([53, 1, 1, 255]))

    def testUnknownMessageTypeValue(self):
        self.assertEqual([('DHCP Message Type', '42')], self.parse([53, 1, 42, 255]))

    def testUnknownCode(self):
        options = dhcpoptions.parse_options(bytes([200, 2, 9, 9, 255]))
        self.assertEqual(1, len(options))
        self.assertEqual(200, options[0].code)
        self.assertIsNone(options[0].name)
        self.assertEqual('200', options[0].label)
        self.assertEqual('(2) 09 09 : ..', options[0].value)

    def testLeaseTimes(self):
        data = [51, 4, 0, 0, 0x0e, 0x10,
                58, 4, 0, 0, 0x07, 0x08,
                59, 4, 0xff, 0xff, 0xff, 0xff, 255]
        self.assertEqual([('IP Address Lease Time', '3600'),
                          ('Renewal Time Value', '1800'),
                          ('Rebinding Time Value', '4294967295')],
                         self.parse(data))

    def testStrings(self):
        data = [12, 4] + list(b'host') + [15, 7] + list(b'example') + \
               [252, 5] + list(b'proxy') + [255]
        self.assertEqual([('Host Name', 'host'),
                          ('Domain Name', 'example'),
                          ('Web Proxy Server', 'proxy')],
                         self.parse(data))

    def testDomainSearchIsNotDecoded(self):
        label, value = self.parse([119, 3, 1, 97, 0, 255])[0]
        self.assertEqual('Domain Search', label)
        self.assertIn('unsupported', value)

    def testVendorSpecificSizeOnly(self):
        self.assertEqual([('Vendor Specific', '(3 bytes)')],
                         self.parse([43, 3, 1, 2, 3, 255]))

    def testParameterRequestList(self):
        self.assertEqual([('Parameter Request List', '1 3 6')],
                         self.parse([55, 3, 1, 3, 6, 255]))

    def testPadConsumesOneByteEach(self):
        self.assertEqual([], self.parse([0] * 7))
        self.assertEqual([('Subnet Mask', '255.255.255.0')],
                         self.parse([0, 0, 0, 1, 4, 255, 255, 255, 0, 0, 255]))

    def testStopsAtEndIgnoringTrailingBytes(self):
        self.assertEqual([('DHCP Message Type', 'DHCPOFFER')],
                         self.parse([53, 1, 2, 255, 1, 3, 0xde, 0xad]))

    def testRunsToEndOfBufferWithoutEnd(self):
        self.assertEqual([('Subnet Mask', '255.0.0.0')],
                         self.parse([1, 4, 255, 0, 0, 0]))

    def testCorruptedLengthStopsScan(self):
        seen = []
        with self.assertRaises(CorruptedOptionError) as ctx:
            for option in dhcpoptions.iter_options(bytes([1, 3, 255, 255, 0, 255])):
                seen.append(option)
        self.assertEqual([], seen)
        self.assertEqual(1, ctx.exception.code)
        self.assertEqual('corrupted option 1 (4,3)', str(ctx.exception))

    def testOptionsAfterCorruptionAreNotReported(self):
        seen = []
        data = bytes([53, 1, 2, 54, 3, 10, 0, 0, 3, 4, 10, 0, 0, 1, 255])
        with self.assertRaises(CorruptedOptionError):
            for option in dhcpoptions.iter_options(data):
                seen.append(option.label)
        self.assertEqual(['DHCP Message Type'], seen)

    def testMissingLengthByte(self):
        with self.assertRaises(CorruptedOptionError):
            dhcpoptions.parse_options(bytes([53, 1, 1, 12]))

    def testValuePastBufferEnd(self):
        with self.assertRaises(CorruptedOptionError):
            dhcpoptions.parse_options(bytes([12, 10, 97, 98]))

    def testAddressListNotMultipleOfFour(self):
        with self.assertRaises(CorruptedOptionError):
            dhcpoptions.parse_options(bytes([6, 6, 8, 8, 8, 8, 8, 8, 255]))


class RawOptionsTest(unittest.TestCase):
    """Raw access and encoding helpers."""

    def testOptionsToDictStopsQuietly(self):
        data = bytes([53, 1, 2, 1, 3, 0, 0, 0, 54, 4, 1, 2, 3, 4])
        self.assertEqual({53: b'\x02'}, dhcpoptions.options_to_dict(data))

    def testOptionsToDictLogsAtDebugOnly(self):
        data = bytes([53, 1, 2, 1, 3, 0, 0, 0, 255])
        with self.assertLogs('dhcp.options', level='DEBUG') as logs:
            dhcpoptions.options_to_dict(data)
        self.assertEqual(['DEBUG'], [r.levelname for r in logs.records])

    def testBuildOptions(self):
        data = dhcpoptions.build_options([(53, b'\x01'), (55, b'\x01\x03')])
        self.assertEqual(bytes([53, 1, 1, 55, 2, 1, 3, 255]), data)


if __name__ == '__main__':
    unittest.main()
