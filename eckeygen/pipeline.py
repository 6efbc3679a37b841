"""
pipeline.py

Generate -> encode -> store -> verify, removing the stored files
when anything fails after they were written.
"""
import logging

from . import codec
from .keypair import KeyPair
from .store import KeyStore
from .verifier import verify
from .errors import KeyStoreError, CleanupError

# Run states
START = "start"
GENERATED = "generated"
ENCODED = "encoded"
STORED = "stored"
VERIFIED = "verified"
CLEANUP = "cleanup"
ABORTED = "aborted"


logger = logging.getLogger("KeyGen")


def cleanup(store):
    """Remove key files written by a failed run, a failure here is
    raised as CleanupError and leaves disk state unknown"""
    logger.info("Removing {!r}, {!r}".format(store.private_path, store.public_path))
    store.remove()


class KeyGenPipeline(object):
    """Single key pair generation run"""

    def __init__(self, config, generate=KeyPair.generate):
        """
        Arguments:
            config (Configuration): Run configuration
            generate (callable): Key pair factory
        """
        self.config = config
        self.store = KeyStore(
            config.private_path, config.public_path,
            private_mode=config.private_mode,
            public_mode=config.public_mode)
        self._generate = generate
        self.state = START
        self.keypair = None

    def _set_state(self, state):
        logger.debug("State {} -> {}".format(self.state, state))
        self.state = state

    def _check_targets(self):
        for path in self.store.existing():
            if not self.config.overwrite:
                raise KeyStoreError("refusing to overwrite existing file",
                                    path, "write")
            logger.warning("{!r} already exists and will be overwritten".format(path))

    def _store_and_verify(self, encoded):
        self.store.write(encoded.private, encoded.public)
        self._set_state(STORED)

        verify(self.keypair, self.store)
        self._set_state(VERIFIED)

    def run(self):
        """
        Returns:
            KeyFiles: Paths of the verified key files

        Raises:
            KeyPairError: The run failed, CleanupError when the written
                files couldn't be removed afterwards.
        """
        # Nothing is on disk before the store stage, fail without cleanup
        try:
            self.keypair = self._generate()
            self._set_state(GENERATED)

            encoded = codec.encode(self.keypair, self.config.private_format)
            self._set_state(ENCODED)

            self._check_targets()
        except BaseException:
            self._set_state(ABORTED)
            raise

        try:
            self._store_and_verify(encoded)
        except BaseException as err:
            logger.error("Run failed in state {}: {}".format(self.state, err))
            self._set_state(CLEANUP)
            try:
                cleanup(self.store)
            except CleanupError as cleanup_err:
                raise cleanup_err from err
            finally:
                self._set_state(ABORTED)
            raise

        return self.store.files


def run(config):
    """Generate, store and verify a new key pair using config

    Returns:
        KeyFiles: Paths of the verified key files
    """
    return KeyGenPipeline(config).run()
