"""
verifier.py

Check the stored key files decode back into the generated key pair
"""
import logging

from . import codec
from .errors import MismatchError


logger = logging.getLogger("Verifier")


def verify(original, store):
    """Read back, decode and compare stored keys against the original

    Arguments:
        original (KeyPair): Key pair generated in this run
        store (KeyStore): Store the key pair was written to

    Raises:
        ReadBackError: Files couldn't be read (KeyFileNotFound if missing)
        DecodeError: Stored content isn't a valid EC key pair
        MismatchError: Decoded keys are different from the original
    """
    encoded_private, encoded_public = store.read()
    decoded = codec.decode(encoded_private, encoded_public, store.files)

    # Private key is reported first when both halves differ
    mismatches = original.mismatches(decoded)
    if mismatches:
        half = mismatches[0]
        raise MismatchError(half, getattr(store.files, half))

    logger.debug("Verified {}, {}".format(store.private_path, store.public_path))
