import random
import re

import pytest

from twofactor import BASE32_ALPHABET, decode_base32, generate_secret


def test_generate_secret_alphabet():
    for _ in range(50):
        secret = generate_secret()
        assert len(secret) == 16
        assert re.fullmatch("[A-Z2-7]{16}", secret)
        assert len(decode_base32(secret)) == 10


def test_generate_secret_longer():
    assert len(generate_secret(32)) == 32


def test_generate_secret_too_short():
    with pytest.raises(ValueError):
        generate_secret(15)


def test_injected_source_is_reproducible():
    assert generate_secret(random_source=random.Random(42)) == generate_secret(random_source=random.Random(42))


class _Counting(object):
    def __init__(self):
        self.values = iter(range(32))

    def randrange(self, n):
        assert n == 32
        return next(self.values)


def test_value_mapping():
    # 0-25 -> A-Z, 26-31 -> 2-7, in draw order
    assert generate_secret(32, random_source=_Counting()) == BASE32_ALPHABET
    assert BASE32_ALPHABET == "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"


def test_default_source_is_system_random():
    from twofactor import compat

    assert isinstance(compat.random, random.SystemRandom)
