from unittest import TestCase
from nftregistry.db.encoder import encode, decode, MAX_SAFE_INT


class TestEncode(TestCase):
    def test_int_to_str(self):
        self.assertEqual(encode(1000), '1000')

    def test_str_to_str(self):
        self.assertEqual(encode('hello'), '"hello"')

    def test_bool_is_not_treated_as_int(self):
        self.assertEqual(encode(True), 'true')

    def test_big_int_is_wrapped(self):
        self.assertEqual(encode(MAX_SAFE_INT + 1), '{"__big_int__":"%d"}' % (MAX_SAFE_INT + 1))

    def test_decode_big_int(self):
        self.assertEqual(decode('{"__big_int__":"100000000000000000000000"}'), 10 ** 23)

    def test_decode_bytes(self):
        self.assertEqual(decode(b'"howdy"'), 'howdy')

    def test_decode_none(self):
        self.assertIsNone(decode(None))

    def test_decode_failure(self):
        self.assertIsNone(decode(b'xwow'))
