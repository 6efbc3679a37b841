from unittest import TestCase

import ecdsa

from eckeygen.keypair import KeyPair, DEFAULT_CURVE
from eckeygen.errors import RandomSourceUnavailable, CurveParameterError


class TestKeyPairGenerate(TestCase):

    def test_default_curve(self):
        """Test keys are generated on NIST P-384"""
        keypair = KeyPair.generate()
        self.assertIs(DEFAULT_CURVE, ecdsa.NIST384p)
        self.assertEqual(keypair.private_key.curve, ecdsa.NIST384p)
        self.assertEqual(keypair.public_key.curve, ecdsa.NIST384p)

    def test_public_derived_from_private(self):
        """Test public key is the private scalar times the generator"""
        keypair = KeyPair.generate()
        expected = ecdsa.NIST384p.generator * keypair.private_key.privkey.secret_multiplier
        point = keypair.public_key.pubkey.point
        self.assertEqual((point.x(), point.y()), (expected.x(), expected.y()))

    def test_distinct_keys(self):
        """Test two generations never return the same key"""
        first = KeyPair.generate()
        second = KeyPair.generate()
        self.assertNotEqual(first, second)
        self.assertEqual(first.mismatches(second), ['private', 'public'])

    def test_random_source_unavailable(self):
        """Test random source errors are reported"""
        def entropy(nbytes):
            raise OSError("no entropy")

        with self.assertRaises(RandomSourceUnavailable) as ctx:
            KeyPair.generate(entropy=entropy)
        self.assertEqual(ctx.exception.stage, 'generate')

    def test_invalid_curve(self):
        """Test unsupported curves are rejected"""
        for curve in ("NIST384p", None, ecdsa.Ed25519):
            with self.assertRaises(CurveParameterError):
                KeyPair.generate(curve=curve)


class TestKeyPairEquality(TestCase):

    def setUp(self):
        self.keypair = KeyPair.generate()

    def test_equal_values(self):
        """Test equality compares values not identity"""
        der = self.keypair.private_key.to_der()
        copy = KeyPair(ecdsa.SigningKey.from_der(der))
        self.assertIsNot(copy.private_key, self.keypair.private_key)
        self.assertEqual(copy, self.keypair)
        self.assertEqual(copy.mismatches(self.keypair), [])

    def test_public_mismatch(self):
        """Test a different public half is detected"""
        other = KeyPair.generate()
        mixed = KeyPair(self.keypair.private_key, other.public_key)
        self.assertEqual(self.keypair.mismatches(mixed), ['public'])
        self.assertNotEqual(self.keypair, mixed)

    def test_private_mismatch(self):
        """Test a different private half is detected"""
        other = KeyPair.generate()
        mixed = KeyPair(other.private_key, self.keypair.public_key)
        self.assertEqual(self.keypair.mismatches(mixed), ['private'])

    def test_curve_mismatch(self):
        """Test keys on different curves never compare equal"""
        other = KeyPair.generate(curve=ecdsa.NIST256p)
        self.assertEqual(self.keypair.mismatches(other), ['private', 'public'])

    def test_other_types(self):
        self.assertNotEqual(self.keypair, None)
        self.assertNotEqual(self.keypair, "keypair")
