import os

from math import ceil
from time import time

from Cryptodome.Util.strxor import strxor

from mersenne_twister import N, MT19937_RNG, initialize, twist, untemper
from seed_recovery import crack_time_seed, recover_seed
from util import bytes_to_words, random, words_to_bytes

SEED_BITS = 16


def keystream(seed, length):
    if not 0 <= seed < 2**SEED_BITS:
        raise ValueError("seed must be a {}-bit integer".format(SEED_BITS))
    rng = MT19937_RNG(seed)
    words = [rng.get_number() for _ in range(ceil(length / 4))]
    return words_to_bytes(words)[:length]


def encrypt(data, seed):
    if not data:
        return b""
    return strxor(data, keystream(seed, len(data)))


decrypt = encrypt


def encrypt_with_random_prefix(data, seed):
    prefix = os.urandom(random.randint(0, 64))
    return encrypt(prefix + data, seed)


def _known_keystream_word(ciphertext, known_suffix):
    """Return (index, word) for the first keystream word that lies entirely
    under the known part of the plaintext."""
    start = len(ciphertext) - len(known_suffix)
    if start < 0:
        raise ValueError("known_suffix is longer than the ciphertext")
    index = ceil(start / 4)
    if 4*index + 4 > len(ciphertext):
        raise ValueError("known_suffix must cover at least one aligned 4-byte chunk")
    offset = 4*index - start
    keystream_bytes = strxor(ciphertext[4*index : 4*index + 4],
                             known_suffix[offset : offset + 4])
    return index, bytes_to_words(keystream_bytes)[0]


def crack_seed(ciphertext, known_suffix, seeds=None):
    """Find the seed that encrypted `ciphertext`, given the end of the
    plaintext. Return None if no seed matches."""
    seeds = range(2**SEED_BITS) if seeds is None else seeds
    index, word = _known_keystream_word(ciphertext, known_suffix)

    if index < N:
        seed = recover_seed(word, index)
        return seed if seed in seeds else None

    # The word comes after at least one twist, so I have to search. Only the
    # last twist needs to go as far as the register I'm comparing against.
    target = untemper(word)
    full_twists, position = divmod(index, N)
    for seed_guess in seeds:
        state = initialize(seed_guess)
        for _ in range(full_twists - 1):
            twist(state)
        twist(state, limit=position + 1)
        if state.registers[position] == target:
            return seed_guess
    return None


def make_reset_token(timestamp=None, words=4):
    seed = int(time()) if timestamp is None else timestamp
    rng = MT19937_RNG(seed)
    return words_to_bytes([rng.get_number() for _ in range(words)]).hex()


def token_is_from_mt(token, now=None, window=3600):
    """Check whether `token` came from make_reset_token within the last
    `window` seconds."""
    now = int(time()) if now is None else now
    try:
        words = bytes_to_words(bytes.fromhex(token))
    except ValueError:
        return False
    if not words:
        return False
    seed = crack_time_seed(words[0], now, window)
    return seed is not None and make_reset_token(seed, len(words)) == token
