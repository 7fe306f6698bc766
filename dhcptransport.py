# -*- coding: utf-8 -*-

import socket

from dhcpexceptions import ReceiveTimeoutError, TransportError
from dhcppacket import DHCPPacket
from dhcputil import hexline

from dhcpvars import *


class DHCPTransport:
    """
    One UDP socket bound to the client port, used both to broadcast the
    request and to collect the replies.
    """

    def __init__(self, logger, port=BOOTP_PORT_REPLY, address='', ifname=None):
        self.log = logger
        self.port = port
        self.address = address
        self.ifname = ifname
        self.sock = None

    def __enter__(self):
        self.bind()
        return self

    def __exit__(self, *exc_info):
        self.close()

    def bind(self):
        self.log.debug('Binding to {0}:{1}.'.format(self.address or '*', self.port))
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if self.ifname and hasattr(socket, 'SO_BINDTODEVICE'):
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_BINDTODEVICE,
                                self.ifname.encode() + b'\0')
            sock.bind((self.address, self.port))
        except OSError as e:
            sock.close()
            raise TransportError("Cannot bind to port {0}: {1}".format(self.port, e))
        self.sock = sock
        return sock

    def send(self, packet, address=(BROADCAST_ADDRESS, BOOTP_PORT_REQUEST)):
        pkt = packet.to_bytes()
        self.log.debug("Send {0} bytes to {1}:{2} {3}".format(len(pkt), address[0], address[1], hexline(pkt)))
        try:
            self.sock.sendto(pkt, address)
        except OSError as e:
            raise TransportError("Cannot send to {0}:{1}: {2}".format(address[0], address[1], e))

    def receive(self, timeout):
        """
        Wait at most |timeout| seconds for one datagram and return it as
        (DHCPPacket, (ip, port)).

        Raises ReceiveTimeoutError when nothing arrived in time and
        MalformedPacketError when what arrived is not a DHCP packet.
        """
        if timeout <= 0:
            raise ReceiveTimeoutError("No time left to receive")
        try:
            self.sock.settimeout(timeout)
            data, req_addr = self.sock.recvfrom(RECV_BUFFER_SIZE)
        except socket.timeout:
            raise ReceiveTimeoutError("No datagram within {0:.3f}s".format(timeout))
        except OSError as e:
            raise TransportError("Cannot receive: {0}".format(e))
        self.log.debug("Handle data from {0}: {1}".format(req_addr[0], hexline(data)))
        return DHCPPacket.from_bytes(data), req_addr

    def close(self):
        if self.sock is not None:
            self.sock.close()
            self.sock = None
