"""
store.py

Read and write the encoded key pair files
"""
import logging
import os
from collections import namedtuple

from .errors import KeyStoreError, ReadBackError, KeyFileNotFound, CleanupError

WRITE = "write"
READ = "read"
REMOVE = "remove"

KeyFiles = namedtuple('KeyFiles', ['private', 'public'])


logger = logging.getLogger("KeyStore")


class KeyStore(object):
    """
    Private and public key files. Files are overwritten when they
    already exist, there is no locking so two processes using the same
    paths will corrupt each other.
    """

    def __init__(self, private_path, public_path,
                 private_mode=0o600, public_mode=0o644):
        """
        Arguments:
            private_path (str):
            public_path (str):
            private_mode (int): Permission bits for the private key file
            public_mode (int): Permission bits for the public key file
        """
        self.files = KeyFiles(private_path, public_path)
        self._modes = KeyFiles(private_mode, public_mode)

    @property
    def private_path(self):
        return self.files.private

    @property
    def public_path(self):
        return self.files.public

    @staticmethod
    def _write_file(path, content, mode):
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            try:
                # os.open mode is ignored for existing files, restrict
                # permissions before any key material is written
                os.fchmod(fd, mode)
                dest_file = os.fdopen(fd, 'wb')
            except OSError:
                os.close(fd)
                raise
            with dest_file:
                dest_file.write(content)
        except OSError as err:
            raise KeyStoreError(
                "unable to write key file ({})".format(err.strerror),
                path, WRITE) from err

    @staticmethod
    def _read_file(path):
        try:
            with open(path, 'rb') as src_file:
                return src_file.read()
        except FileNotFoundError as err:
            raise KeyFileNotFound("key file not found", path) from err
        except OSError as err:
            raise ReadBackError(
                "unable to read key file ({})".format(err.strerror), path) from err

    def existing(self):
        """Return list of key file paths present on disk"""
        return [path for path in self.files if os.path.lexists(path)]

    def write(self, encoded_private, encoded_public):
        """Write private then public key file, the two writes are independent
        so a failure on the second leaves the first file on disk"""
        self._write_file(self.private_path, encoded_private, self._modes.private)
        logger.debug("Wrote {}".format(self.private_path))
        self._write_file(self.public_path, encoded_public, self._modes.public)
        logger.debug("Wrote {}".format(self.public_path))

    def read(self):
        """
        Returns:
            tuple: (private_bytes, public_bytes)
        """
        return self._read_file(self.private_path), self._read_file(self.public_path)

    def remove(self):
        """Remove both key files, already missing files are ignored.

        Raises:
            CleanupError: One or both files couldn't be removed
        """
        errors = []
        for path in self.files:
            try:
                os.remove(path)
                logger.debug("Removed {}".format(path))
            except FileNotFoundError:
                continue
            except OSError as err:
                errors.append(KeyStoreError(
                    "unable to remove key file ({})".format(err.strerror),
                    path, REMOVE))

        if errors:
            raise CleanupError(errors)
