#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Unit tests for dhcpdiscover.py."""

import io
import logging
import unittest

import mock

import dhcpdiscover
import dhcppacket
from dhcpexceptions import (InterfaceNotFoundError, MalformedPacketError,
                            ReceiveTimeoutError, TransportError)
from dhcpvars import *

MAC = '52:54:00:12:34:56'


def make_reply(xid, options):
    packet = dhcppacket.DHCPPacket(
        [BOOTREPLY, HTYPE_ETHER, HLEN_ETHER, 0, xid, 0, BOOTP_FLAGS_NONE,
         b'\x00\x00\x00\x00', b'\xc0\xa8\x01\x64', b'\xc0\xa8\x01\x01',
         b'\x00\x00\x00\x00', b'', b'', b'', COOKIE],
        bytes(options))
    return dhcppacket.DHCPPacket.from_bytes(packet.to_bytes())


class DHCPDiscoverTest(unittest.TestCase):
    """Runs the discover loop against a mocked transport."""

    def setUp(self):
        patcher = mock.patch.object(dhcpdiscover, 'get_iface_mac', return_value=MAC)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.out = io.StringIO()
        self.client = dhcpdiscover.DHCPDiscover(logging.getLogger(), 'eth0',
                                                timeout=5, out=self.out)
        self.transport = mock.MagicMock()
        self.transport.__enter__.return_value = self.transport
        self.transport.__exit__.return_value = False
        self.client.make_transport = mock.Mock(return_value=self.transport)

    def sent_packet(self):
        return self.transport.send.call_args[0][0]

    def testClientParams(self):
        config = self.client.client_config
        self.assertEqual('eth0', config['ifname'])
        self.assertEqual(MAC, config['mac'])
        self.assertEqual(68, config['port'])
        self.assertEqual(('255.255.255.255', 67), config['server_address'])

    def testNoOffers(self):
        self.transport.receive.side_effect = ReceiveTimeoutError('timed out')
        self.client.run()
        output = self.out.getvalue()
        self.assertIn('Interface: eth0 [%s]' % MAC, output)
        self.assertIn('>>> Send DHCP discover', output)
        self.assertIn('%24s : %s' % ('DHCP Message Type', 'DHCPDISCOVER'), output)
        self.assertTrue(output.endswith('No more offers.\n'))
        self.assertEqual(MAC, self.sent_packet().mac)
        self.assertEqual(1, self.transport.send.call_count)
        self.transport.__exit__.assert_called_once_with(None, None, None)

    def testOffersArePrinted(self):
        def receive(timeout):
            xid = self.sent_packet().xid
            self.transport.receive.side_effect = [
                (make_reply(xid, [53, 1, 2, 3, 8, 192, 168, 1, 1, 192, 168, 1, 2, 255]),
                 ('192.168.1.1', 67)),
                MalformedPacketError('too small'),
                (make_reply(xid, [53, 1, 2, 1, 3, 255, 255, 0, 54, 4, 1, 1, 1, 1, 255]),
                 ('192.168.1.2', 67)),
                ReceiveTimeoutError('timed out')]
            return self.transport.receive(timeout)
        self.transport.receive.side_effect = receive

        self.client.run()
        output = self.out.getvalue()
        self.assertIn('<<< Receive DHCPOFFER from 192.168.1.1', output)
        self.assertIn('Your IP address   : 192.168.1.100', output)
        self.assertIn('%24s : %s' % ('Router', '192.168.1.1 192.168.1.2 '), output)
        self.assertIn('<<< Receive DHCPOFFER from 192.168.1.2', output)
        self.assertIn('corrupted option 1 (4,3)', output)
        self.assertNotIn('Server Identifier', output)
        self.assertTrue(output.endswith('No more offers.\n'))

    def testForeignTransactionIdIsPrintedAndLogged(self):
        def receive(timeout):
            xid = self.sent_packet().xid
            self.transport.receive.side_effect = [
                (make_reply(xid ^ 1, [53, 1, 2, 255]), ('192.168.1.9', 67)),
                ReceiveTimeoutError('timed out')]
            return self.transport.receive(timeout)
        self.transport.receive.side_effect = receive

        with self.assertLogs(level='INFO') as logs:
            self.client.run()
        self.assertIn('<<< Receive DHCPOFFER from 192.168.1.9', self.out.getvalue())
        self.assertTrue(any('does not match ours' in line for line in logs.output))

    def testReceiveBoundByRemainingTime(self):
        timeouts = []

        def receive(timeout):
            timeouts.append(timeout)
            if len(timeouts) < 3:
                raise MalformedPacketError('garbage')
            raise ReceiveTimeoutError('timed out')
        self.transport.receive.side_effect = receive

        with mock.patch.object(dhcpdiscover, 'time') as fake_time:
            fake_time.monotonic.side_effect = [100.0, 100.0, 100.0, 102.0, 102.0, 104.5, 104.5]
            self.client.run()
        self.assertEqual([5.0, 3.0, 0.5], timeouts)

    def testDeadlineEndsLoop(self):
        self.transport.receive.side_effect = MalformedPacketError('garbage')
        with mock.patch.object(dhcpdiscover, 'time') as fake_time:
            fake_time.monotonic.side_effect = [100.0, 100.0, 100.0, 106.0]
            self.client.run()
        self.assertEqual(1, self.transport.receive.call_count)

    def testTransportErrorReleasesSocket(self):
        self.transport.send.side_effect = TransportError('Network is unreachable')
        with self.assertRaises(TransportError):
            self.client.run()
        self.assertEqual(1, self.transport.__exit__.call_count)


class MainTest(unittest.TestCase):
    """Exit codes of the command line entry point."""

    @mock.patch('sys.stderr', new_callable=io.StringIO)
    def testMissingInterface(self, stderr):
        self.assertEqual(1, dhcpdiscover.main([]))
        self.assertIn('usage', stderr.getvalue())

    @mock.patch('sys.stderr', new_callable=io.StringIO)
    def testUnknownInterface(self, stderr):
        with mock.patch.object(dhcpdiscover, 'get_iface_mac',
                               side_effect=InterfaceNotFoundError('eth9: no such interface')):
            self.assertEqual(1, dhcpdiscover.main(['-i', 'eth9']))
        self.assertIn('eth9: no such interface', stderr.getvalue())

    @mock.patch('sys.stderr', new_callable=io.StringIO)
    def testTransportFailure(self, stderr):
        with mock.patch.object(dhcpdiscover, 'get_iface_mac', return_value=MAC), \
             mock.patch.object(dhcpdiscover.DHCPDiscover, 'run',
                               side_effect=TransportError('Cannot bind to port 68')):
            self.assertEqual(1, dhcpdiscover.main(['-i', 'eth0', '-t', '1']))
        self.assertIn('Cannot bind to port 68', stderr.getvalue())

    def testSuccess(self):
        with mock.patch.object(dhcpdiscover, 'get_iface_mac', return_value=MAC), \
             mock.patch.object(dhcpdiscover.DHCPDiscover, 'run') as run:
            self.assertEqual(0, dhcpdiscover.main(['-i', 'eth0']))
        run.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
