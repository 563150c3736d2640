"""Recover the seed of a freshly seeded generator from one of its outputs.

Seeding doesn't twist the registers, so each of the first 624 outputs is just
the tempered initialization array. Every seeding step is invertible (the
multiplier is odd and the xor-shift can be undone), so one output and its
position are enough to walk back to register 0, which is the seed.
"""

from mersenne_twister import INIT_MULTIPLIER, N, WORD_MASK, unshift_right_xor, untemper
from util import mod_inv

INIT_MULTIPLIER_INVERSE = mod_inv(INIT_MULTIPLIER, 2**32)


def unseed_step(value, i):
    """Given register i of a fresh initialization array, return register i - 1."""
    mixed = (INIT_MULTIPLIER_INVERSE * (value - i)) & WORD_MASK
    return unshift_right_xor(mixed, 30)


def recover_seed(output, index=0):
    if not 0 <= index < N:
        raise ValueError("index must be in range(0, {})".format(N))
    register = untemper(output)
    for i in reversed(range(1, index + 1)):
        register = unseed_step(register, i)
    return register


def crack_time_seed(first_output, now, window=1000):
    """Return the timestamp that seeded the generator, if it falls within
    `window` seconds before `now`. Otherwise return None."""
    seed = recover_seed(first_output)
    if now - window <= seed <= now:
        return seed
    return None
