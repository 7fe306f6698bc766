#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Unit tests for dhcptransport.py."""

import logging
import socket
import unittest

import mock

import dhcppacket
import dhcptransport
from dhcpexceptions import (MalformedPacketError, ReceiveTimeoutError,
                            TransportError)
from dhcpvars import BOOTP_PORT_REQUEST, BROADCAST_ADDRESS


class MockSocketTest(unittest.TestCase):
    """Transport behaviour against a mocked socket module."""

    def setUp(self):
        patcher = mock.patch.object(dhcptransport.socket, 'socket')
        self.socket_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.sock = self.socket_class.return_value
        self.transport = dhcptransport.DHCPTransport(logging.getLogger())

    def testBindSetsBroadcast(self):
        self.transport.bind()
        self.sock.setsockopt.assert_any_call(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        self.sock.bind.assert_called_once_with(('', 68))

    @unittest.skipUnless(hasattr(socket, 'SO_BINDTODEVICE'),
                         'SO_BINDTODEVICE not available on this platform')
    def testBindToInterface(self):
        transport = dhcptransport.DHCPTransport(logging.getLogger(), ifname='eth0')
        transport.bind()
        self.sock.setsockopt.assert_any_call(socket.SOL_SOCKET, socket.SO_BINDTODEVICE,
                                             b'eth0\0')

    def testNoInterfaceNoDeviceBinding(self):
        self.transport.bind()
        for call in self.sock.setsockopt.call_args_list:
            self.assertNotEqual(getattr(socket, 'SO_BINDTODEVICE', None), call[0][1])

    def testBindFailureClosesSocket(self):
        self.sock.bind.side_effect = PermissionError(13, 'Permission denied')
        with self.assertRaises(TransportError):
            self.transport.bind()
        self.sock.close.assert_called_once_with()
        self.assertIsNone(self.transport.sock)

    def testSendBroadcast(self):
        packet = dhcppacket.new_discover_packet()
        packet.set_hardware_address('02:00:00:00:00:01')
        self.transport.bind()
        self.transport.send(packet)
        self.sock.sendto.assert_called_once_with(
            packet.to_bytes(), (BROADCAST_ADDRESS, BOOTP_PORT_REQUEST))

    def testSendFailure(self):
        self.sock.sendto.side_effect = OSError(101, 'Network is unreachable')
        self.transport.bind()
        with self.assertRaises(TransportError):
            self.transport.send(dhcppacket.new_discover_packet())

    def testReceiveUsesGivenTimeout(self):
        data = dhcppacket.new_discover_packet(xid=7).to_bytes()
        self.sock.recvfrom.return_value = (data, ('10.0.0.1', 67))
        self.transport.bind()
        packet, req_addr = self.transport.receive(2.5)
        self.sock.settimeout.assert_called_once_with(2.5)
        self.assertEqual(7, packet.xid)
        self.assertEqual(('10.0.0.1', 67), req_addr)

    def testReceiveTimeout(self):
        self.sock.recvfrom.side_effect = socket.timeout('timed out')
        self.transport.bind()
        with self.assertRaises(ReceiveTimeoutError):
            self.transport.receive(0.1)

    def testReceiveWithoutTimeLeft(self):
        self.transport.bind()
        with self.assertRaises(ReceiveTimeoutError):
            self.transport.receive(0)
        self.assertFalse(self.sock.recvfrom.called)

    def testReceiveError(self):
        self.sock.recvfrom.side_effect = OSError(9, 'Bad file descriptor')
        self.transport.bind()
        with self.assertRaises(TransportError) as ctx:
            self.transport.receive(1)
        self.assertNotIsInstance(ctx.exception, ReceiveTimeoutError)

    def testReceiveGarbage(self):
        self.sock.recvfrom.return_value = (b'\x02' * 20, ('10.0.0.1', 67))
        self.transport.bind()
        with self.assertRaises(MalformedPacketError):
            self.transport.receive(1)

    def testContextManagerCloses(self):
        with self.transport:
            pass
        self.sock.close.assert_called_once_with()
        self.assertIsNone(self.transport.sock)


class LoopbackTest(unittest.TestCase):
    """Sends a packet to ourselves over 127.0.0.1."""

    def testSendAndReceive(self):
        transport = dhcptransport.DHCPTransport(logging.getLogger(), port=0,
                                                address='127.0.0.1')
        with transport:
            port = transport.sock.getsockname()[1]
            packet = dhcppacket.new_discover_packet(xid=0xcafe)
            packet.set_hardware_address('02:00:00:00:00:02')
            transport.send(packet, ('127.0.0.1', port))
            received, req_addr = transport.receive(2.0)
        self.assertEqual(0xcafe, received.xid)
        self.assertEqual('02:00:00:00:00:02', received.mac)
        self.assertEqual('127.0.0.1', req_addr[0])

    def testTimeoutWhenNothingArrives(self):
        transport = dhcptransport.DHCPTransport(logging.getLogger(), port=0,
                                                address='127.0.0.1')
        with transport:
            with self.assertRaises(ReceiveTimeoutError):
                transport.receive(0.05)


if __name__ == '__main__':
    unittest.main()
