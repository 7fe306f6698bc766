#!/usr/bin/env python
# -*- coding: utf-8 -*-

import argparse
import logging
import sys
import time

from dhcpexceptions import *
from dhcppacket import new_discover_packet
from dhcptransport import DHCPTransport

from dhcputil import get_iface_mac

from dhcpvars import *


class DHCPDiscover:
    def __init__(self, logger, ifname, timeout=DEFAULT_TIMEOUT, out=None):
        self.log = logger
        self.out = out or sys.stdout

        #Client options
        self.client_config = self.get_client_params(ifname, timeout)

    def get_client_params(self, ifname, timeout):
        return { 'ifname': ifname,
                 'mac': get_iface_mac(ifname),
                 'timeout': timeout,
                 'port': BOOTP_PORT_REPLY,
                 'server_address': (BROADCAST_ADDRESS, BOOTP_PORT_REQUEST),
                }

    def write(self, *args):
        print(*args, file=self.out)

    def show_packet(self, packet):
        self.write("Client IP address :", packet.ciaddr)
        self.write("Your IP address   :", packet.yiaddr)
        self.write("Server IP address :", packet.siaddr)
        self.write("Relay IP address  :", packet.giaddr)
        self.write("Options:")
        try:
            for option in packet.iter_options():
                self.write("%24s : %s" % (option.label, option.value))
        except CorruptedOptionError as e:
            self.log.info("Partial options from {0}: {1}".format(packet.mac, e))
            self.write(str(e))
        self.write()

    def make_transport(self):
        return DHCPTransport(self.log, port=self.client_config['port'],
                             ifname=self.client_config['ifname'])

    def run(self):
        config = self.client_config
        self.write("Interface: %s [%s]" % (config['ifname'], config['mac']))

        with self.make_transport() as transport:
            discover = new_discover_packet()
            discover.set_hardware_address(config['mac'])

            self.write("\n>>> Send DHCP discover")
            self.show_packet(discover)
            transport.send(discover, config['server_address'])

            deadline = time.monotonic() + config['timeout']
            while time.monotonic() < deadline:
                try:
                    offer, req_addr = transport.receive(deadline - time.monotonic())
                except ReceiveTimeoutError as e:
                    self.log.debug("{0}".format(e))
                    break
                except MalformedPacketError as e:
                    self.log.info("Drop wrong packet: {0}".format(e))
                    continue

                if offer.xid != discover.xid:
                    self.log.info("Transaction id %08x does not match ours (%08x)" % (offer.xid, discover.xid))
                msg_type = DHCP_MESSAGE_TYPES.get(offer.message_type, 'DHCP packet')
                self.write("\n<<< Receive %s from %s" % (msg_type, req_addr[0]))
                self.show_packet(offer)

        self.write("No more offers.")


def parse_args(argv):
    parser = argparse.ArgumentParser(description="Broadcast a DHCPDISCOVER and print the offers.")
    parser.add_argument("-i", "--interface", dest="interface", default=None,
                        help="network interface to use")
    parser.add_argument("-t", "--timeout", dest="timeout", type=int, default=DEFAULT_TIMEOUT,
                        help="timeout in seconds (default: %(default)s)")
    parser.add_argument("-v", "--verbose", dest="verbose", action="store_true",
                        help="log debug messages")
    return parser, parser.parse_args(argv)


def main(argv=None):
    parser, args = parse_args(argv)

    if not args.interface or args.timeout <= 0:
        parser.print_usage(sys.stderr)
        return 1

    logging.basicConfig(level=args.verbose and logging.DEBUG or logging.INFO)
    logger = logging.getLogger()

    try:
        instance = DHCPDiscover(logger=logger, ifname=args.interface, timeout=args.timeout)
        instance.run()
    except DHCPError as e:
        sys.stderr.write("{0}\n".format(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
