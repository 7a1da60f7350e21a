import unittest

from duplint.errors import ConfigurationError
from duplint.index.fingerprint import ContentAddresser, HASH_ALGORITHMS


class ContentAddresserTest(unittest.TestCase):
    def test_md5_is_default(self):
        addresser = ContentAddresser()
        self.assertEqual('md5', addresser.hash_algorithm)
        self.assertEqual('3858f62230ac3c915f300c664312c63f', addresser.fingerprint_text('foobar'))

    def test_sha256(self):
        addresser = ContentAddresser('sha256')
        self.assertEqual(
            'c3ab8ff13720e8ad9047dd39466b3c8974e592c2fa383d4a3960714caef0c4f2',
            addresser.fingerprint_text('foobar'))

    def test_all_algorithms_are_deterministic_and_at_least_128_bits(self):
        for name in HASH_ALGORITHMS:
            with self.subTest(name):
                first = ContentAddresser(name)
                second = ContentAddresser(name)
                self.assertEqual(first.fingerprint_text('same'), second.fingerprint_text('same'))
                self.assertNotEqual(first.fingerprint_text('same'), first.fingerprint_text('different'))
                self.assertGreaterEqual(len(first.fingerprint_text('same')) * 4, 128)

    def test_text_is_hashed_as_utf8(self):
        addresser = ContentAddresser('murmur3')
        self.assertEqual(addresser.fingerprint_bytes('héllo'.encode('utf-8')), addresser.fingerprint_text('héllo'))

    def test_unknown_algorithm(self):
        with self.assertRaises(ConfigurationError):
            ContentAddresser('crc32')


if __name__ == '__main__':
    unittest.main()
