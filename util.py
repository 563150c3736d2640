import struct

from math import gcd
from random import SystemRandom

random = SystemRandom()


def words_to_bytes(words):
    """Serialize 32-bit words as big-endian bytes."""
    return struct.pack(">{}L".format(len(words)), *words)


def bytes_to_words(data):
    if len(data) % 4:
        raise ValueError("length of data must be a multiple of 4")
    return list(struct.unpack(">{}L".format(len(data) // 4), data))


def mod_inv(a, m):
    """Return the integer x such that (a * x) % m == 1."""
    # This function uses the extended Euclidean algorithm.
    x0, x1, y0, y1 = 1, 0, 0, 1
    a1, m1 = a, m
    while m1:
        q = a1 // m1
        a1, m1 = m1, a1 % m1
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1

    assert a1 == gcd(a, m)
    assert a*x0 + m*y0 == a1

    if a1 != 1:
        raise ValueError("modular inverse does not exist")
    else:
        return x0 % m
