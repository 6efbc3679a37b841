"""
config.py

Default settings and the immutable run configuration
"""
from collections import namedtuple

# Key files, relative to the current working directory.
# WARNING: EXISTING FILES WILL BE OVERWRITTEN
PRIVATE_KEY_PATH = 'private.pem'
PUBLIC_KEY_PATH = 'public.pem'

# Private key container: 'ssleay' (EC PRIVATE KEY) or 'pkcs8' (PRIVATE KEY)
PRIVATE_KEY_FORMAT = 'ssleay'
PRIVATE_KEY_FORMATS = ('ssleay', 'pkcs8')

# Permissions applied to the written files
PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644

# Overwrite key files left by a previous run
OVERWRITE = True


Configuration = namedtuple('Configuration', [
    'private_path', 'public_path',
    'private_format', 'private_mode', 'public_mode',
    'overwrite'])


def default_config(**kwargs):
    """Return Configuration with module defaults, kwargs replace fields"""
    config = Configuration(
        private_path=PRIVATE_KEY_PATH,
        public_path=PUBLIC_KEY_PATH,
        private_format=PRIVATE_KEY_FORMAT,
        private_mode=PRIVATE_KEY_MODE,
        public_mode=PUBLIC_KEY_MODE,
        overwrite=OVERWRITE)
    return config._replace(**kwargs)
