# -*- coding: utf-8 -*-

"""
Walking and decoding of the DHCP options area.

The options area is a run of <code, length, value> records.  Pad (0) and
End (255) are single bytes without a length.  Each record is looked up in
DHCP_OPTIONS, which gives the length the value must have and the kind of
value it holds; the kind selects one of the decoders below.
"""

import collections
import logging
import struct

from dhcpexceptions import CorruptedOptionError
from dhcputil import bytes_to_int, bytes_to_ip, hexline

from dhcpvars import *

log = logging.getLogger('dhcp.options')


class DHCPOption(collections.namedtuple('DHCPOption', 'code name value')):
    """A decoded option, |name| is None for codes missing from DHCP_OPTIONS"""
    __slots__ = ()

    @property
    def label(self):
        return self.name or str(self.code)


def iter_raw_options(data):
    """
    Yield (code, value) for every option up to End or the end of |data|.

    Raises CorruptedOptionError when a length disagrees with the option
    table or a record does not fit in what is left of |data|.
    """
    offset = 0
    while offset < len(data):
        code = data[offset]
        if code == DHCP_END:
            return
        if code == DHCP_PAD:
            offset += 1
            continue
        if offset + 1 >= len(data):
            raise CorruptedOptionError(code, "corrupted option {0} (no length)", code)
        length = data[offset + 1]
        expected = DHCP_OPTIONS.get(code, (VARIABLE,))[0]
        if expected >= 0 and expected != length:
            raise CorruptedOptionError(code, "corrupted option {0} ({1},{2})",
                                       code, expected, length)
        start = offset + 2
        if start + length > len(data):
            raise CorruptedOptionError(code, "corrupted option {0} ({1} bytes, {2} left)",
                                       code, length, len(data) - start)
        yield code, data[start:start + length]
        offset = start + length


def decode_message_type(value):
    return DHCP_MESSAGE_TYPES.get(value[0], str(value[0]))


def decode_ip_list(value):
    return ''.join(['%s ' % bytes_to_ip(value[n:n + 4]) for n in range(0, len(value), 4)])


def decode_ip(value):
    return str(bytes_to_ip(value))


def decode_uint32(value):
    return str(bytes_to_int(value))


def decode_string(value):
    return value.decode('utf-8', 'replace')


def decode_domain_search(value):
    # RFC 1035 section 4.1.4 name compression is not decoded
    return '[unsupported: compressed domain names, %d bytes]' % len(value)


def decode_size_only(value):
    return '(%d bytes)' % len(value)


def decode_code_list(value):
    return ' '.join([str(x) for x in value])


DECODERS = { OPT_OPAQUE: hexline,
             OPT_MESSAGE_TYPE: decode_message_type,
             OPT_IP_LIST: decode_ip_list,
             OPT_IP: decode_ip,
             OPT_UINT32: decode_uint32,
             OPT_STRING: decode_string,
             OPT_DOMAIN_SEARCH: decode_domain_search,
             OPT_SIZE_ONLY: decode_size_only,
             OPT_CODE_LIST: decode_code_list }


def decode_option(code, value):
    try:
        length, name, kind = DHCP_OPTIONS[code]
    except KeyError:
        log.debug("unknown option %d, size:%d %s" % (code, len(value), hexline(value)))
        return DHCPOption(code, None, hexline(value))
    if kind == OPT_IP_LIST and len(value) % 4:
        raise CorruptedOptionError(code, "corrupted option {0} ({1} bytes, not a list of addresses)",
                                   code, len(value))
    return DHCPOption(code, name, DECODERS[kind](value))


def iter_options(data):
    """Yield a DHCPOption for each option in |data|, see iter_raw_options"""
    for code, value in iter_raw_options(data):
        yield decode_option(code, value)


def parse_options(data):
    """Decoded options as a list, CorruptedOptionError is left to the caller"""
    return list(iter_options(data))


def options_to_dict(data):
    """Map option code to raw value, stopping quietly at a corrupted option"""
    dhcp_tags = {}
    try:
        for code, value in iter_raw_options(data):
            dhcp_tags[code] = value
    except CorruptedOptionError as e:
        log.debug("Stopped option parsing: {0}".format(e))
    return dhcp_tags


def encode_option(code, value):
    return struct.pack('!BB%ds' % len(value), code, len(value), value)


def build_options(options):
    """Encode (code, value) pairs and terminate them with End"""
    return b''.join([encode_option(code, value) for code, value in options]) + \
           struct.pack('!B', DHCP_END)
