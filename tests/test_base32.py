import base64

import pytest

from twofactor import DecodeError, InvalidCharacter, decode_base32
from twofactor.base32 import decoded_length


def test_empty():
    assert decode_base32("") == b""


def test_known_vector():
    # M=12 F=5 R=17 A=0 -> 01100 00101 10001 00000
    assert decode_base32("MFRA") == b"ab\x00"


def test_sixteen_char_secret():
    assert decode_base32("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"


def test_case_insensitive():
    assert decode_base32("jbswy3dpehpk3pxp") == decode_base32("JBSWY3DPEHPK3PXP")
    assert decode_base32("JbSwY3dPeHpK3pXp") == b"Hello!\xde\xad\xbe\xef"


@pytest.mark.parametrize("length", range(0, 41))
def test_output_length(length):
    text = ("JBSWY3DPEHPK3PXP7ZA2" * 3)[:length]
    assert len(decode_base32(text)) == (length * 5 + 4) // 8 == decoded_length(length)


def test_full_blocks_match_stdlib():
    text = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    assert decode_base32(text) == base64.b32decode(text) == b"12345678901234567890"


def test_pending_bits_dropped_below_half_byte():
    # "AB" is 10 bits: one full byte, the 2 leftover bits are not emitted
    assert decode_base32("AB") == b"\x00"
    # "ABC" is 15 bits: the 7 leftover bits become a zero padded byte
    assert decode_base32("ABC") == b"\x00\x44"


def test_invalid_character():
    with pytest.raises(InvalidCharacter) as excinfo:
        decode_base32("1")
    assert excinfo.value.char == "1"
    assert excinfo.value.position == 0


@pytest.mark.parametrize("text", ["JBSW=", "JBSW Y3DP", "ABC8", "0", "ÄBC", "MFRA===="])
def test_invalid_input_rejected(text):
    with pytest.raises(DecodeError):
        decode_base32(text)


def test_invalid_character_is_value_error():
    with pytest.raises(ValueError):
        decode_base32("JBSWY3DPEHPK3PX1")
