"""
errors.py

Exceptions raised by every stage of the key generation pipeline
"""

# Pipeline stages, used to tell the operator where a run failed
GENERATE = "generate"
ENCODE = "encode"
STORE = "store"
DECODE = "decode"
VERIFY = "verify"
CLEANUP = "cleanup"


class KeyPairError(Exception):
    """Base class for all key pair pipeline errors

    Arguments:
        message (str): Human readable description
        path (str|None): File involved in the failure, if any
    """
    stage = None

    def __init__(self, message, path=None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        if self.path is None:
            return "[{}] {}".format(self.stage, self.message)
        return "[{}] {}: {!r}".format(self.stage, self.message, self.path)


class GenerationError(KeyPairError):
    stage = GENERATE


class RandomSourceUnavailable(GenerationError):
    pass


class CurveParameterError(GenerationError):
    pass


class EncodingError(KeyPairError):
    stage = ENCODE


class KeyStoreError(KeyPairError):
    """Filesystem failure, operation is one of 'write', 'read' or 'remove'"""
    stage = STORE

    def __init__(self, message, path=None, operation=None):
        super().__init__(message, path)
        self.operation = operation

    def __str__(self):
        return "[{}:{}] {}: {!r}".format(
            self.stage, self.operation, self.message, self.path)


class ReadBackError(KeyStoreError):

    def __init__(self, message, path=None):
        super().__init__(message, path, operation="read")


class KeyFileNotFound(ReadBackError):
    pass


class DecodeError(KeyPairError):
    stage = DECODE


class MalformedArmor(DecodeError):
    pass


class MalformedStructure(DecodeError):
    pass


class WrongKeyType(DecodeError):
    pass


class MismatchError(KeyPairError):
    """Decoded key half differs from the generated one

    Arguments:
        half (str): 'private' or 'public'
    """
    stage = VERIFY

    def __init__(self, half, path=None):
        super().__init__("{} keys don't match".format(half), path)
        self.half = half


class CleanupError(KeyPairError):
    """Removing written key files failed, disk state is unknown

    Arguments:
        errors (list): KeyStoreError for each path that couldn't be removed
    """
    stage = CLEANUP

    def __init__(self, errors):
        paths = [err.path for err in errors]
        super().__init__(
            "unable to remove {}, manual intervention required".format(
                ", ".join(repr(p) for p in paths)))
        self.errors = list(errors)
        self.paths = paths
