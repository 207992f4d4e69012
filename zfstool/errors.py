class ZFSError(Exception):
    pass

class InvalidSignature(ZFSError):
    def __init__(self, kind, expected, found):
        ZFSError.__init__(self, "Invalid %s signature: expected 0x%08x, got 0x%08x"
                          % (kind, expected, found))
        self.expected = expected
        self.found = found

class InvalidHeader(ZFSError):
    pass

class UnknownPixelFormat(ZFSError):
    def __init__(self, code):
        ZFSError.__init__(self, "Unknown RIM format %d" % code)
        self.code = code

class ShortRead(ZFSError, IOError):
    pass

class ShortWrite(ZFSError, IOError):
    pass

class SeekFailure(ZFSError, IOError):
    pass
