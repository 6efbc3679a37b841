"""
keypair.py

Elliptic curve key pair generation and structural comparison
"""
import logging

import ecdsa
from ecdsa.curves import Curve
from ecdsa.ellipticcurve import CurveFp

from .errors import RandomSourceUnavailable, CurveParameterError

# NIST P-384 (secp384r1)
DEFAULT_CURVE = ecdsa.NIST384p

PRIVATE = 'private'
PUBLIC = 'public'


logger = logging.getLogger("KeyPair")


def _curve_id(key):
    return (key.curve.name, key.curve.oid)


def _point(key):
    """Affine coordinates of a verifying key point"""
    point = key.pubkey.point
    return (point.x(), point.y())


class KeyPair(object):
    """
    Private/public ecdsa key pair.

    Arguments:
        private_key (ecdsa.SigningKey):
        public_key (ecdsa.VerifyingKey|None): When None it's derived from
            private_key, decoders pass the decoded public key so it can be
            compared instead of trusted.
    """

    def __init__(self, private_key, public_key=None):
        self._private_key = private_key
        if public_key is None:
            public_key = private_key.get_verifying_key()
        self._public_key = public_key

    @property
    def private_key(self):
        return self._private_key

    @property
    def public_key(self):
        return self._public_key

    @property
    def curve(self):
        return self._private_key.curve

    @classmethod
    def generate(cls, curve=DEFAULT_CURVE, entropy=None):
        """Generate a new key pair

        Arguments:
            curve (ecdsa.curves.Curve): Named short Weierstrass curve
            entropy (callable|None): Random source entropy(nbytes), defaults
                to os.urandom

        Returns:
            KeyPair
        """
        if not isinstance(curve, Curve) or not isinstance(curve.curve, CurveFp):
            raise CurveParameterError(
                "{!r} is not a supported named curve".format(curve))

        try:
            private_key = ecdsa.SigningKey.generate(curve=curve, entropy=entropy)
        except (OSError, NotImplementedError) as err:
            raise RandomSourceUnavailable(
                "random source unavailable ({})".format(err)) from err
        except ValueError as err:
            raise CurveParameterError(
                "invalid curve {} ({})".format(curve.name, err)) from err

        logger.debug("Generated {} key pair".format(curve.name))
        return cls(private_key)

    def mismatches(self, other):
        """Compare curve, private scalar and public point field by field

        Returns:
            list: Halves that differ, a subset of ['private', 'public']
        """
        differ = []

        mine, theirs = self._private_key, other.private_key
        if (_curve_id(mine) != _curve_id(theirs) or
                mine.privkey.secret_multiplier != theirs.privkey.secret_multiplier):
            differ.append(PRIVATE)

        mine, theirs = self._public_key, other.public_key
        if _curve_id(mine) != _curve_id(theirs) or _point(mine) != _point(theirs):
            differ.append(PUBLIC)

        return differ

    def __eq__(self, other):
        if not isinstance(other, KeyPair):
            return NotImplemented
        return not self.mismatches(other)

    __hash__ = None

    def __repr__(self):
        return "KeyPair(curve={})".format(self.curve.name)
