"""
eckeygen

Generate, store and verify ECDSA NIST P-384 PEM key pairs
"""
from eckeygen.config import Configuration, default_config
from eckeygen.keypair import KeyPair
from eckeygen.pipeline import run
