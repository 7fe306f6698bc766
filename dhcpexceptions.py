# -*- coding: utf-8 -*-

class DHCPError(Exception):
    pass

class DHCPCodeError(DHCPError):
    def __init__(self, code, message, *args):
        super(DHCPCodeError, self).__init__(message.format(*args) if args else message)
        self.code = code

class MalformedAddressError(DHCPError):
    pass

class MalformedPacketError(DHCPError):
    pass

class CorruptedOptionError(DHCPCodeError):
    pass

class InterfaceNotFoundError(DHCPError):
    pass

class TransportError(DHCPError):
    pass

class ReceiveTimeoutError(TransportError, TimeoutError):
    pass
