"""
generate_keys:

Command line tool generating a NIST P-384 ECDSA key pair, the keys
are stored as PEM files and verified after writing them.
"""
import argparse
import logging
import sys

from . import config
from .errors import KeyPairError, CleanupError
from .logger import configure_logging
from .pipeline import run

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CLEANUP_FAILURE = 3


logger = logging.getLogger("KeyGen")


def file_mode(value):
    """Octal permission bits, '600' or '0o600'"""
    try:
        mode = int(value, 8)
    except ValueError:
        raise argparse.ArgumentTypeError("{} is not an octal file mode".format(value))
    if not 0 <= mode <= 0o7777:
        raise argparse.ArgumentTypeError("{} is not a valid file mode".format(value))
    return mode


def parse_args(args):
    parser = argparse.ArgumentParser(
        description="Generate ECDSA NIST P-384 private and public PEM keys",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument(
        "-pr", "--private", dest="private_path", default=config.PRIVATE_KEY_PATH,
        help="private key file name: WILL BE OVERWRITTEN!")
    parser.add_argument(
        "-pu", "--public", dest="public_path", default=config.PUBLIC_KEY_PATH,
        help="public key file name: WILL BE OVERWRITTEN!")
    parser.add_argument(
        "--format", dest="private_format", default=config.PRIVATE_KEY_FORMAT,
        choices=config.PRIVATE_KEY_FORMATS,
        help="private key container")
    parser.add_argument(
        "--private-mode", type=file_mode, default=config.PRIVATE_KEY_MODE,
        help="private key file permissions (octal)")
    parser.add_argument(
        "--public-mode", type=file_mode, default=config.PUBLIC_KEY_MODE,
        help="public key file permissions (octal)")
    parser.add_argument(
        "--no-overwrite", dest="overwrite", action="store_false",
        help="fail instead of overwriting existing key files")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="debug logging")
    return parser.parse_args(args)


def build_config(options):
    """Configuration from parsed command line options"""
    return config.Configuration(
        private_path=options.private_path,
        public_path=options.public_path,
        private_format=options.private_format,
        private_mode=options.private_mode,
        public_mode=options.public_mode,
        overwrite=options.overwrite)


def main(args=None):
    options = parse_args(sys.argv[1:] if args is None else args)
    configure_logging(options.verbose)

    try:
        files = run(build_config(options))
    except CleanupError as err:
        logger.critical(err)
        if err.__cause__ is not None:
            logger.error("Run failure: {}".format(err.__cause__))
        return EXIT_CLEANUP_FAILURE
    except KeyPairError as err:
        logger.error(err)
        return EXIT_FAILURE

    logger.info("{!r}, {!r} were added".format(files.private, files.public))
    return EXIT_SUCCESS


if __name__ == '__main__':
    sys.exit(main())
