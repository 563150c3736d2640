#!/usr/bin/env python3

# standard library modules
import cProfile
import inspect
import os
import re
import sys
import traceback
import warnings

from argparse import ArgumentParser
from contextlib import redirect_stdout
from time import time


# modules in this project
import mersenne_twister
import mt_stream_cipher
import seed_recovery
import util

random = util.random


warnings.simplefilter("default", BytesWarning)
warnings.simplefilter("default", ResourceWarning)
warnings.simplefilter("default", DeprecationWarning)

EXAMPLE_PLAIN_BYTES = (b"Give a man a beer, he'll waste an hour. "
                       b"Teach a man to brew, he'll waste a lifetime.")


def challenge21():
    """Implement the MT19937 Mersenne Twister RNG"""
    rng = mersenne_twister.MT19937_RNG(seed=0)
    assert rng.get_number() == 0

    rng = mersenne_twister.MT19937_RNG(seed=1)
    numbers = [rng.get_number() for _ in range(10)]
    print(numbers)
    assert numbers[1] == mersenne_twister.temper(1812433254)

    seed = random.getrandbits(32)
    rng1 = mersenne_twister.MT19937_RNG(seed)
    rng2 = mersenne_twister.MT19937_RNG(seed)
    assert ([rng1.get_number() for _ in range(1000)] ==
            [rng2.get_number() for _ in range(1000)])
    floats = [rng1.random() for _ in range(1000)]
    assert all(0.0 <= x < 1.0 for x in floats)


def challenge22():
    """Crack an MT19937 seed"""
    now = int(time())
    seed = now - random.randint(40, 1000)
    output = mersenne_twister.MT19937_RNG(seed).get_number()
    recovered_seed = seed_recovery.crack_time_seed(output, now)
    print("found seed: {}".format(recovered_seed))
    assert recovered_seed == seed

    # Any of the first 624 outputs gives away the seed, as long as I know
    # its position.
    rng = mersenne_twister.MT19937_RNG(seed)
    position = random.randrange(mersenne_twister.N)
    numbers = [rng.get_number() for _ in range(position + 1)]
    assert seed_recovery.recover_seed(numbers[-1], position) == seed


def challenge23():
    """Clone an MT19937 RNG from its output"""
    rng = mersenne_twister.MT19937_RNG(seed=random.getrandbits(32))
    numbers = [rng.get_number() for _ in range(624)]

    rng2 = mersenne_twister.MT19937_RNG.from_outputs(numbers)
    numbers1 = [rng.get_number() for _ in range(1000)]
    numbers2 = [rng2.get_number() for _ in range(1000)]
    assert numbers1 == numbers2


def challenge24():
    """Create the MT19937 stream cipher and break it"""
    seed = random.getrandbits(16)
    test_ciphertext = mt_stream_cipher.encrypt(EXAMPLE_PLAIN_BYTES, seed)
    test_plaintext = mt_stream_cipher.decrypt(test_ciphertext, seed)
    assert test_plaintext == EXAMPLE_PLAIN_BYTES

    seed = random.getrandbits(16)
    my_bytes = b"A" * 14
    ciphertext = mt_stream_cipher.encrypt_with_random_prefix(my_bytes, seed)
    recovered_seed = mt_stream_cipher.crack_seed(ciphertext, my_bytes)
    print("found seed: {}".format(recovered_seed))
    assert recovered_seed == seed

    token = mt_stream_cipher.make_reset_token()
    print("reset token: {}".format(token))
    assert mt_stream_cipher.token_is_from_mt(token)
    assert not mt_stream_cipher.token_is_from_mt(os.urandom(16).hex())


class ChallengeNotFoundError(ValueError):
    pass


CHALLENGE_NAME = re.compile(r"^challenge(\d+)$")


def challenges_by_number():
    result = {}
    for name, fn in inspect.getmembers(sys.modules[__name__], inspect.isfunction):
        match = CHALLENGE_NAME.match(name)
        if match:
            result[int(match.group(1))] = fn
    return result


def get_challenges(challenge_nums):
    available = challenges_by_number()
    result = []
    for num in challenge_nums:
        num = str(num)
        fn = available.get(int(num)) if num.isdigit() else None
        if fn is None:
            raise ChallengeNotFoundError("challenge {} not found".format(num))
        result.append(fn)
    return result


def get_all_challenges():
    return [fn for _, fn in sorted(challenges_by_number().items())]


def main(argv=None):
    parser = ArgumentParser(
        description="Demonstrate the MT19937 generator and the attacks on it.")
    parser.add_argument(
        "challenges", nargs="*",
        help="Challenge(s) to run. If not specified, all challenges will be run.")
    parser.add_argument(
        "-p", "--profile", help="Profile challenges.", action="store_true")
    parser.add_argument(
        "-q", "--quiet", help="Don't show challenge output.", action="store_true")
    args = parser.parse_args(argv)
    try:
        challenges = get_challenges(args.challenges) or get_all_challenges()
    except ChallengeNotFoundError as e:
        parser.error(e)

    failures = 0
    profile = cProfile.Profile() if args.profile else None
    try:
        with open(os.devnull, "w") as null_stream:
            output_stream = null_stream if args.quiet else sys.stdout
            for challenge in challenges:
                num = re.findall(r"^challenge(.+)$", challenge.__name__)[0]
                print("Running challenge {}: {}".format(num, challenge.__doc__))
                try:
                    challenge_args = {name: value for name, value in vars(args).items()
                                      if name in inspect.signature(challenge).parameters}
                    with redirect_stdout(output_stream):
                        if profile:
                            profile.runcall(challenge, **challenge_args)
                        else:
                            challenge(**challenge_args)
                except Exception:
                    failures += 1
                    traceback.print_exc()
                else:
                    print("Challenge {} passed.".format(num))
    finally:
        if profile:
            print()
            profile.print_stats(sort="cumulative")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
