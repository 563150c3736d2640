import pytest

import mersenne_twister
from mersenne_twister import (
    MATRIX_A, N, InvalidInputLengthError, MT19937State, MT19937_RNG, clone_from_output,
    initialize, next_unit_double, next_word, temper, twist, unshift_left_xor_mask,
    unshift_right_xor, untemper)
from util import random


def test_zero_seed_first_output_is_zero():
    state = initialize(0)
    assert next_word(state) == 0


def test_second_register_of_seed_one():
    state = initialize(1)
    assert state.registers[:2] == [1, 1812433254]
    next_word(state)
    assert next_word(state) == temper(1812433254)


def test_seeding_starts_at_cursor_zero():
    state = initialize(5489)
    assert state.cursor == 0
    assert len(state.registers) == N


@pytest.mark.parametrize("seed", [-1, 2**32])
def test_seed_out_of_range(seed):
    with pytest.raises(ValueError):
        initialize(seed)


def test_same_seed_gives_same_sequence():
    seed = random.getrandbits(32)
    rng1 = MT19937_RNG(seed)
    rng2 = MT19937_RNG(seed)
    assert [rng1.get_number() for _ in range(2000)] == [rng2.get_number() for _ in range(2000)]


@pytest.mark.parametrize("x", [0x00000000, 0xffffffff, 0x80000000, 1])
def test_untemper_boundary_values(x):
    assert untemper(temper(x)) == x
    assert temper(untemper(x)) == x


def test_untemper_inverts_temper():
    for _ in range(5000):
        x = random.getrandbits(32)
        assert untemper(temper(x)) == x
        assert temper(untemper(x)) == x


def test_temper_stays_within_32_bits():
    for _ in range(1000):
        assert 0 <= temper(random.getrandbits(32)) <= 0xffffffff


@pytest.mark.parametrize("shift", [1, 7, 11, 18, 30, 31])
def test_unshift_right_xor(shift):
    x = random.getrandbits(32)
    assert unshift_right_xor(x ^ (x >> shift), shift) == x


@pytest.mark.parametrize("shift,mask", [(7, 0x9d2c5680), (15, 0xefc60000), (3, 0xffffffff)])
def test_unshift_left_xor_mask(shift, mask):
    x = random.getrandbits(32)
    assert unshift_left_xor_mask(x ^ ((x << shift) & mask), shift, mask) == x


def test_twist_uses_same_register_for_both_halves():
    state = MT19937State(list(range(N)), cursor=N)
    twist(state)
    assert state.cursor == 0
    # Register 0 is even, so nothing gets xored with MATRIX_A.
    assert state.registers[0] == 397
    assert state.registers[1] == 398 ^ MATRIX_A
    # Register 227 reads register 0, which was already rewritten in this pass.
    assert state.registers[227] == 397 ^ (227 >> 1) ^ MATRIX_A


def test_twist_of_zero_state_is_zero():
    state = MT19937State()
    twist(state)
    assert state.registers == [0] * N


def test_partial_twist_matches_full_twist():
    full = initialize(42)
    partial = initialize(42)
    twist(full)
    twist(partial, limit=300)
    assert partial.registers[:300] == full.registers[:300]


def test_twist_cadence(monkeypatch):
    calls = []
    real_twist = mersenne_twister.twist

    def counting_twist(state, limit=N):
        calls.append(state.cursor)
        real_twist(state, limit)

    monkeypatch.setattr(mersenne_twister, "twist", counting_twist)
    state = initialize(1234)
    initial_registers = list(state.registers)
    for i in range(N):
        assert next_word(state) == temper(initial_registers[i])
    assert calls == []
    assert state.cursor == N

    next_word(state)
    assert calls == [N]
    assert state.cursor == 1


def test_clone_predicts_future_output():
    rng = MT19937_RNG(random.getrandbits(32))
    numbers = [rng.get_number() for _ in range(N)]
    clone = MT19937_RNG.from_outputs(numbers)
    assert clone.state.cursor == N
    assert [rng.get_number() for _ in range(N)] == [clone.get_number() for _ in range(N)]


def test_clone_after_twist():
    rng = MT19937_RNG(random.getrandbits(32))
    for _ in range(N):
        rng.get_number()
    numbers = [rng.get_number() for _ in range(N)]
    clone = MT19937_RNG.from_outputs(numbers)
    assert [rng.random() for _ in range(1000)] == [clone.random() for _ in range(1000)]


@pytest.mark.parametrize("length", [0, N - 1, N + 1])
def test_clone_requires_624_outputs(length):
    with pytest.raises(InvalidInputLengthError):
        clone_from_output([0] * length)


def test_clone_does_not_alias_source():
    state = initialize(7)
    outputs = [next_word(state) for _ in range(N)]
    clone = clone_from_output(outputs)
    clone.registers[0] ^= 1
    assert clone_from_output(outputs).registers[0] != clone.registers[0]
    assert clone.registers is not state.registers


def test_states_do_not_share_registers():
    a = MT19937State()
    b = MT19937State()
    a.registers[0] = 1
    assert b.registers[0] == 0

    registers = [0] * N
    c = MT19937State(registers)
    registers[0] = 5
    assert c.registers[0] == 0


def test_state_requires_624_registers():
    with pytest.raises(InvalidInputLengthError):
        MT19937State([0] * 10)


@pytest.mark.parametrize("cursor", [-1, N + 1])
def test_state_cursor_out_of_range(cursor):
    with pytest.raises(ValueError):
        MT19937State(initialize(1).registers, cursor=cursor)


@pytest.mark.parametrize("cursor", [0, N])
def test_state_cursor_bounds_allowed(cursor):
    assert MT19937State(cursor=cursor).cursor == cursor


@pytest.mark.parametrize("word", [-1, 2**32])
def test_clone_rejects_words_wider_than_32_bits(word):
    outputs = [0] * N
    outputs[5] = word
    with pytest.raises(ValueError):
        clone_from_output(outputs)


def test_known_outputs_for_seed_5489():
    rng = MT19937_RNG(5489)
    numbers = [rng.get_number() for _ in range(N + 5)]
    assert numbers[:3] == [46662977, 1228475205, 930876788]
    # These come after the first twist, which mixes each register only with
    # itself and the register M places ahead.
    assert numbers[N:] == [1170798911, 52537100, 537818649, 2038564016, 1248694561]


def test_unit_double_range():
    state = initialize(random.getrandbits(32))
    for _ in range(10000):
        assert 0.0 <= next_unit_double(state) < 1.0


def test_unit_double_uses_two_words():
    words = initialize(99)
    floats = initialize(99)
    a = next_word(words) >> 5
    b = next_word(words) >> 6
    assert next_unit_double(floats) == (a * 2.0**26 + b) / 2.0**53
    assert floats.cursor == words.cursor == 2


def test_unit_double_of_zero_seed():
    # The first two words of seed 0 are temper(0) and temper(1).
    assert MT19937_RNG(0).random() == (temper(1) >> 6) / 2.0**53


def test_rng_from_state_shares_that_state():
    state = initialize(3)
    rng = MT19937_RNG.from_state(state)
    rng.get_number()
    assert state.cursor == 1
