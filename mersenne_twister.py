from math import ceil

N = 624
M = 397
MATRIX_A = 0x9908b0df
UPPER_MASK = 0x80000000
LOWER_MASK = 0x7fffffff
INIT_MULTIPLIER = 1812433253
WORD_MASK = 0xffffffff


class InvalidInputLengthError(ValueError):
    pass


class MT19937State:
    """The 624 registers of the generator plus the index of the next one to
    temper and return."""

    def __init__(self, registers=None, cursor=0):
        if registers is None:
            registers = [0] * N
        elif len(registers) != N:
            raise InvalidInputLengthError(
                "expected {} registers, got {}".format(N, len(registers)))
        if not 0 <= cursor <= N:
            raise ValueError("cursor must be in range(0, {})".format(N + 1))
        # Always copy, so that two states never share a register list.
        self.registers = list(registers)
        self.cursor = cursor

    def __repr__(self):
        return "<MT19937State cursor={}>".format(self.cursor)


def initialize(seed):
    if not 0 <= seed <= WORD_MASK:
        raise ValueError("seed must be an unsigned 32-bit integer")
    registers = [seed] + [0]*(N - 1)
    prev = seed
    for i in range(1, N):
        prev = registers[i] = WORD_MASK & (INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i)
    # The cursor starts at 0 rather than N, so the first N words come
    # straight from the untwisted initialization array.
    return MT19937State(registers, cursor=0)


def twist(state, limit=N):
    # limit makes this function only twist part of the registers, instead of
    # all of them. Register i only depends on registers that come before it
    # in the same pass, so the first `limit` registers come out the same as
    # with a full twist. This is for code that searches through seeds, not
    # for normal use of the RNG.
    registers = state.registers
    for i in range(limit):
        # Both halves come from register i, not i + 1. This differs from the
        # reference MT19937 and changes every twisted output.
        x = (registers[i] & UPPER_MASK) | (registers[i] & LOWER_MASK)
        x_a = x >> 1
        if x & 1:
            x_a ^= MATRIX_A
        registers[i] = registers[(i + M) % N] ^ x_a
    state.cursor = 0


def temper(y):
    y ^= (y >> 11)
    y ^= (y << 7) & 0x9d2c5680
    y ^= (y << 15) & 0xefc60000
    y ^= (y >> 18)
    return y


def next_word(state):
    if state.cursor >= N:
        twist(state)
    raw = state.registers[state.cursor]
    state.cursor += 1
    return temper(raw)


def next_unit_double(state):
    """Return a float in [0, 1) with 53 bits of precision, made from two
    words."""
    a = next_word(state) >> 5
    b = next_word(state) >> 6
    return (a * 67108864.0 + b) / 9007199254740992.0


def unshift_right_xor(y, shift):
    """Invert y ^= y >> shift.

    Each pass fixes `shift` more of the high-order bits, so ceil(32 / shift)
    passes always give back the original word.
    """
    x = y
    for _ in range(ceil(32 / shift)):
        x = y ^ (x >> shift)
    return x


def unshift_left_xor_mask(y, shift, mask):
    """Invert y ^= (y << shift) & mask, fixing low-order bits first."""
    x = y
    for _ in range(ceil(32 / shift)):
        x = y ^ ((x << shift) & mask)
    return x


def untemper(y):
    y = unshift_right_xor(y, 18)
    y = unshift_left_xor_mask(y, 15, 0xefc60000)
    y = unshift_left_xor_mask(y, 7, 0x9d2c5680)
    y = unshift_right_xor(y, 11)
    return y


def clone_from_output(outputs):
    """Build a state that will produce the same future output as the
    generator that emitted `outputs`.

    `outputs` must be 624 consecutive words, starting at a point where the
    source generator's cursor was 0. The clone can't reproduce anything
    before that window.
    """
    outputs = list(outputs)
    if len(outputs) != N:
        raise InvalidInputLengthError(
            "need exactly {} outputs to clone, got {}".format(N, len(outputs)))
    if not all(0 <= x <= WORD_MASK for x in outputs):
        raise ValueError("outputs must be unsigned 32-bit integers")
    # The source has just used up its registers, so the clone twists on its
    # next draw too.
    return MT19937State([untemper(x) for x in outputs], cursor=N)


class MT19937_RNG:
    """Mersenne Twister random number generator"""

    def __init__(self, seed=0):
        self.state = initialize(seed)

    @classmethod
    def from_state(cls, state):
        rng = cls.__new__(cls)
        rng.state = state
        return rng

    @classmethod
    def from_outputs(cls, outputs):
        return cls.from_state(clone_from_output(outputs))

    def get_number(self):
        return next_word(self.state)

    def random(self):
        return next_unit_double(self.state)
