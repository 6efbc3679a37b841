"""
codec.py

PEM encoding and strict decoding of ecdsa key pairs.

Private keys are DER encoded EC private keys (RFC 5915, 'EC PRIVATE KEY')
or PKCS#8 ('PRIVATE KEY'), public keys are DER SubjectPublicKeyInfo
structures ('PUBLIC KEY'). Decoding never attempts a best effort parse,
anything that isn't exactly one armored block of the expected kind is
rejected.
"""
import base64
import binascii
import re
from collections import namedtuple

import ecdsa
from ecdsa import der
from ecdsa.curves import UnknownCurveError
from ecdsa.ellipticcurve import CurveFp
from ecdsa.keys import MalformedPointError

from .keypair import KeyPair
from .errors import EncodingError, MalformedArmor, MalformedStructure, WrongKeyType

# Armor labels
EC_PRIVATE_KEY = "EC PRIVATE KEY"
PKCS8_PRIVATE_KEY = "PRIVATE KEY"
PUBLIC_KEY = "PUBLIC KEY"

# Private key format -> armor label
PRIVATE_KEY_LABELS = {
    'ssleay': EC_PRIVATE_KEY,
    'pkcs8': PKCS8_PRIVATE_KEY}

# Labels of key material for other algorithms
FOREIGN_KEY_LABELS = frozenset([
    "RSA PRIVATE KEY",
    "RSA PUBLIC KEY",
    "DSA PRIVATE KEY",
    "DSA PUBLIC KEY",
    "OPENSSH PRIVATE KEY",
    "SSH2 PUBLIC KEY"])

# Base64 characters per armor line
LINE_LENGTH = 64

# Key algorithms
EC = 'ec'
RSA = 'rsa'
DSA = 'dsa'
ED25519 = 'ed25519'
ED448 = 'ed448'
UNKNOWN = 'unknown'

ALGORITHM_OIDS = {
    (1, 2, 840, 10045, 2, 1): EC,
    (1, 2, 840, 113549, 1, 1, 1): RSA,
    (1, 2, 840, 10040, 4, 1): DSA,
    (1, 3, 101, 112): ED25519,
    (1, 3, 101, 113): ED448}

_ARMOR_RE = re.compile(
    br"\A\s*-----BEGIN ([A-Z0-9 ]+)-----\r?\n"
    br"([A-Za-z0-9+/=\s]*?\n)"
    br"-----END ([A-Z0-9 ]+)-----\s*\Z")

# Errors raised by ecdsa when DER content is invalid
_DER_ERRORS = (der.UnexpectedDER, MalformedPointError, UnknownCurveError, ValueError)


EncodedKeyPair = namedtuple('EncodedKeyPair', ['private', 'public'])

# Generic SubjectPublicKeyInfo decoding result, key is an ecdsa.VerifyingKey
# when algorithm is 'ec' otherwise the raw DER bytes.
PublicKeyInfo = namedtuple('PublicKeyInfo', ['algorithm', 'key'])


def armor(der_bytes, label):
    """Wrap DER bytes in a PEM block (RFC 7468, 64 column lines)"""
    body = base64.b64encode(der_bytes)
    lines = [b"-----BEGIN " + label.encode('ascii') + b"-----"]
    lines.extend(body[start:start + LINE_LENGTH]
                 for start in range(0, len(body), LINE_LENGTH))
    lines.append(b"-----END " + label.encode('ascii') + b"-----")
    return b"\n".join(lines) + b"\n"


def dearmor(data, path=None):
    """Parse a single PEM block

    Arguments:
        data (bytes|str): Armored content
        path (str|None): Source file, only used in error messages

    Returns:
        tuple: (label, der_bytes)
    """
    if isinstance(data, str):
        try:
            data = data.encode('ascii')
        except UnicodeEncodeError:
            raise MalformedArmor("armor contains non ASCII characters", path) from None

    match = _ARMOR_RE.match(data)
    if match is None:
        raise MalformedArmor("expected a single complete PEM block", path)

    begin, body, end = match.groups()
    if begin != end:
        raise MalformedArmor(
            "armor labels don't match ({} / {})".format(
                begin.decode(), end.decode()), path)

    body = b"".join(body.split())
    if not body:
        raise MalformedArmor("empty PEM block", path)

    try:
        der_bytes = base64.b64decode(body, validate=True)
    except binascii.Error as err:
        raise MalformedArmor("invalid base64 body ({})".format(err), path) from err

    return begin.decode('ascii'), der_bytes


def _algorithm(der_bytes, path=None, pkcs8=False):
    """Key algorithm from SubjectPublicKeyInfo or PKCS#8 AlgorithmIdentifier"""
    try:
        body, _ = der.remove_sequence(der_bytes)
        if pkcs8:
            _, body = der.remove_integer(body)
        algorithm, _ = der.remove_sequence(body)
        oid, _ = der.remove_object(algorithm)
    except der.UnexpectedDER as err:
        raise MalformedStructure(
            "invalid algorithm identifier ({})".format(err), path) from err

    return ALGORITHM_OIDS.get(oid, UNKNOWN)


def decode_public_key_info(der_bytes, path=None):
    """Decode a SubjectPublicKeyInfo of any algorithm

    Returns:
        PublicKeyInfo
    """
    algorithm = _algorithm(der_bytes, path)
    if algorithm != EC:
        return PublicKeyInfo(algorithm, der_bytes)

    try:
        key = ecdsa.VerifyingKey.from_der(der_bytes)
    except _DER_ERRORS as err:
        raise MalformedStructure(
            "invalid EC public key ({})".format(err), path) from err

    return PublicKeyInfo(EC, key)


def _is_pkcs8(der_bytes, path=None):
    """PKCS#8 PrivateKeyInfo has version 0, RFC 5915 ECPrivateKey version 1"""
    try:
        body, _ = der.remove_sequence(der_bytes)
        version, _ = der.remove_integer(body)
    except der.UnexpectedDER as err:
        raise MalformedStructure(
            "invalid private key structure ({})".format(err), path) from err
    return version == 0


def decode_private_key(data, path=None):
    """Decode armored EC private key

    Returns:
        ecdsa.SigningKey
    """
    label, der_bytes = dearmor(data, path)

    if label in FOREIGN_KEY_LABELS:
        raise WrongKeyType("expected EC private key, found {}".format(label), path)
    if label not in (PKCS8_PRIVATE_KEY, EC_PRIVATE_KEY):
        raise MalformedArmor("unexpected private key label {}".format(label), path)

    pkcs8 = _is_pkcs8(der_bytes, path)
    if pkcs8:
        algorithm = _algorithm(der_bytes, path, pkcs8=True)
        if algorithm != EC:
            raise WrongKeyType(
                "expected EC private key, found {} key".format(algorithm), path)

    # Label must describe the structure it wraps
    if pkcs8 != (label == PKCS8_PRIVATE_KEY):
        raise MalformedArmor(
            "{} label doesn't match the key structure".format(label), path)

    try:
        key = ecdsa.SigningKey.from_der(der_bytes)
    except _DER_ERRORS as err:
        raise MalformedStructure(
            "invalid EC private key ({})".format(err), path) from err

    if not isinstance(key.curve.curve, CurveFp):
        raise WrongKeyType(
            "expected EC private key, found {} key".format(key.curve.name), path)
    return key


def decode_public_key(data, path=None):
    """Decode armored EC public key

    Returns:
        ecdsa.VerifyingKey
    """
    label, der_bytes = dearmor(data, path)

    if label in FOREIGN_KEY_LABELS:
        raise WrongKeyType("expected EC public key, found {}".format(label), path)
    if label != PUBLIC_KEY:
        raise MalformedArmor("unexpected public key label {}".format(label), path)

    info = decode_public_key_info(der_bytes, path)
    if info.algorithm != EC:
        raise WrongKeyType(
            "expected EC public key, found {} key".format(info.algorithm), path)

    return info.key


def encode(keypair, private_format='ssleay'):
    """Encode key pair into PEM

    Arguments:
        keypair (KeyPair):
        private_format (str): 'ssleay' or 'pkcs8'

    Returns:
        EncodedKeyPair: (private_pem, public_pem) bytes
    """
    label = PRIVATE_KEY_LABELS.get(private_format)
    if label is None:
        raise EncodingError("unknown private key format {!r}".format(private_format))

    try:
        private_der = keypair.private_key.to_der(format=private_format)
        public_der = keypair.public_key.to_der()
    except ValueError as err:
        raise EncodingError("unable to encode key pair ({})".format(err)) from err

    return EncodedKeyPair(armor(private_der, label), armor(public_der, PUBLIC_KEY))


def decode(encoded_private, encoded_public, paths=(None, None)):
    """Decode both PEM blocks back into a KeyPair

    Arguments:
        encoded_private (bytes):
        encoded_public (bytes):
        paths (tuple): (private, public) source files for error messages

    Returns:
        KeyPair
    """
    private_path, public_path = paths
    private_key = decode_private_key(encoded_private, private_path)
    public_key = decode_public_key(encoded_public, public_path)
    return KeyPair(private_key, public_key)
