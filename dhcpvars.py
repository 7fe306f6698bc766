import struct

BOOTP_PORT_REQUEST = 67
BOOTP_PORT_REPLY = 68

BROADCAST_ADDRESS = '255.255.255.255'

BOOTREQUEST = 1
BOOTREPLY = 2

HTYPE_ETHER = 1
HLEN_ETHER = 6

DHCPFormat = '!4BIHH4s4s4s4s16s64s128s4s'
DHCPFormatSize = struct.calcsize(DHCPFormat)
BOOTPHeaderSize = DHCPFormatSize - 4

(BOOTP_OP,BOOTP_HTYPE,BOOTP_HLEN,BOOTP_HOPS,BOOTP_XID,BOOTP_SECS,
 BOOTP_FLAGS,BOOTP_CIADDR,BOOTP_YIADDR,BOOTP_SIADDR,BOOTP_GIADDR,
 BOOTP_CHADDR,BOOTP_SNAME,BOOTP_FILE,BOOTP_COOKIE) = range(15)

BOOTP_FLAGS_NONE = 0
BOOTP_FLAGS_BROADCAST = 1<<15

COOKIE = b'\x63\x82\x53\x63'

# RFC 1542 minimum BOOTP datagram, some relays drop anything shorter
DHCP_MIN_PACKET_SIZE = 300
RECV_BUFFER_SIZE = 4096

DEFAULT_TIMEOUT = 5

IPV4_NULL_ADDRESS = b'\x00\x00\x00\x00'

DHCP_PAD = 0
DHCP_IP_MASK = 1
DHCP_IP_GATEWAY = 3
DHCP_IP_DNS = 6
DHCP_HOSTNAME = 12
DHCP_DOMAIN = 15
DHCP_BROADCAST_ADDR = 28
DHCP_STATIC_ROUTE = 33
DHCP_VENDOR_SPECIFIC = 43
DHCP_NETBIOS_NS = 44
DHCP_LEASE_TIME = 51
DHCP_MSG = 53
DHCP_SERVER = 54
DHCP_PARAM_REQUEST_LIST = 55
DHCP_RENEWAL_TIME = 58
DHCP_REBINDING_TIME = 59
DHCP_DOMAIN_SEARCH = 119
DHCP_WEB_PROXY = 252
DHCP_END = 255

DHCP_DISCOVER = 1
DHCP_OFFER = 2
DHCP_REQUEST = 3
DHCP_DECLINE = 4
DHCP_ACK = 5
DHCP_NAK = 6
DHCP_RELEASE = 7

DHCP_MESSAGE_TYPES = { DHCP_DISCOVER: 'DHCPDISCOVER',
                       DHCP_OFFER: 'DHCPOFFER',
                       DHCP_REQUEST: 'DHCPREQUEST',
                       DHCP_DECLINE: 'DHCPDECLINE',
                       DHCP_ACK: 'DHCPACK',
                       DHCP_NAK: 'DHCPNACK',
                       DHCP_RELEASE: 'DHCPRELEASE' }

# Expected value length of an option, VARIABLE means the length byte is
# taken as is.
VARIABLE = -1

# How the value of an option is rendered.
(OPT_OPAQUE, OPT_MESSAGE_TYPE, OPT_IP_LIST, OPT_IP, OPT_UINT32, OPT_STRING,
 OPT_DOMAIN_SEARCH, OPT_SIZE_ONLY, OPT_CODE_LIST) = range(9)

# code: (expected length, display name, kind)
DHCP_OPTIONS = {  0: (0, 'Pad Option', OPT_OPAQUE),
                  1: (4, 'Subnet Mask', OPT_IP),
                  2: (4, 'Time Offset', OPT_OPAQUE),
                  3: (VARIABLE, 'Router', OPT_IP_LIST),
                  4: (VARIABLE, 'Time Server', OPT_IP_LIST),
                  5: (VARIABLE, 'Name Server', OPT_IP_LIST),
                  6: (VARIABLE, 'Domain Name Server', OPT_IP_LIST),
                  7: (VARIABLE, 'Log Server', OPT_IP_LIST),
                  9: (VARIABLE, 'LPR Server', OPT_IP_LIST),
                 12: (VARIABLE, 'Host Name', OPT_STRING),
                 13: (2, 'Boot File Size', OPT_OPAQUE),
                 15: (VARIABLE, 'Domain Name', OPT_STRING),
                 17: (VARIABLE, 'Root Path', OPT_STRING),
                 26: (2, 'Interface MTU', OPT_OPAQUE),
                 28: (4, 'Broadcast Address', OPT_IP),
                 33: (VARIABLE, 'Static Route', OPT_OPAQUE),
                 42: (VARIABLE, 'NTP Server', OPT_IP_LIST),
                 43: (VARIABLE, 'Vendor Specific', OPT_SIZE_ONLY),
                 44: (VARIABLE, 'NetBIOS Name Server', OPT_IP_LIST),
                 50: (4, 'Requested IP Address', OPT_IP),
                 51: (4, 'IP Address Lease Time', OPT_UINT32),
                 52: (1, 'Option Overload', OPT_OPAQUE),
                 53: (1, 'DHCP Message Type', OPT_MESSAGE_TYPE),
                 54: (4, 'Server Identifier', OPT_IP),
                 55: (VARIABLE, 'Parameter Request List', OPT_CODE_LIST),
                 56: (VARIABLE, 'Message', OPT_STRING),
                 57: (2, 'Maximum Message Size', OPT_OPAQUE),
                 58: (4, 'Renewal Time Value', OPT_UINT32),
                 59: (4, 'Rebinding Time Value', OPT_UINT32),
                 60: (VARIABLE, 'Vendor Class Identifier', OPT_STRING),
                 61: (VARIABLE, 'Client Identifier', OPT_OPAQUE),
                 66: (VARIABLE, 'TFTP Server Name', OPT_STRING),
                 67: (VARIABLE, 'Bootfile Name', OPT_STRING),
                119: (VARIABLE, 'Domain Search', OPT_DOMAIN_SEARCH),
                121: (VARIABLE, 'Classless Static Route', OPT_OPAQUE),
                252: (VARIABLE, 'Web Proxy Server', OPT_STRING),
                255: (0, 'End Option', OPT_OPAQUE) }

DEFAULT_PARAM_REQUEST_LIST = (DHCP_IP_MASK, DHCP_IP_GATEWAY, DHCP_IP_DNS,
                              DHCP_HOSTNAME, DHCP_DOMAIN, DHCP_BROADCAST_ADDR,
                              DHCP_LEASE_TIME, DHCP_SERVER, DHCP_RENEWAL_TIME,
                              DHCP_REBINDING_TIME, DHCP_DOMAIN_SEARCH,
                              DHCP_WEB_PROXY)
