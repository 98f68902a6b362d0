"""
Round constants and MDS matrices for the circom flavour of Poseidon.

The tables are the output of the Grain LFSR generator from the Poseidon
reference implementation (https://extgit.iaik.tugraz.at/krypto/hadeshash,
`generate_parameters_grain.sage`) run with a prime field, the x^5 s-box,
8 full rounds and the per-width partial round counts below. These are the
same parameters circomlib and the on-chain PoseidonT3/PoseidonT4 libraries
are built from, so nothing here may be tuned.
"""

import functools
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Tuple

FULL_ROUNDS = 8
# indexed by t - 2
PARTIAL_ROUNDS = (56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68)
ALPHA = 5

MIN_WIDTH = 2
MAX_WIDTH = MIN_WIDTH + len(PARTIAL_ROUNDS) - 1

# Grain parameter tags: field=1 (prime field), sbox=0 (x^alpha)
_GRAIN_FIELD = 1
_GRAIN_SBOX = 0


@dataclass(frozen=True)
class PoseidonParams:
    t: int
    full_rounds: int
    partial_rounds: int
    round_constants: Tuple[int, ...]
    mds: Tuple[Tuple[int, ...], ...]


def _bits(value: int, width: int) -> list[int]:
    return [int(b) for b in bin(value)[2:].zfill(width)]


def grain_bits(field_size: int, t: int, full_rounds: int, partial_rounds: int) -> Iterator[int]:
    """
    Self-shrinking Grain LFSR seeded with the permutation parameters.
    """
    state = deque(
        _bits(_GRAIN_FIELD, 2)
        + _bits(_GRAIN_SBOX, 4)
        + _bits(field_size, 12)
        + _bits(t, 12)
        + _bits(full_rounds, 10)
        + _bits(partial_rounds, 10)
        + [1] * 30
    )

    def clock() -> int:
        bit = state[62] ^ state[51] ^ state[38] ^ state[23] ^ state[13] ^ state[0]
        state.popleft()
        state.append(bit)
        return bit

    for _ in range(160):
        clock()

    while True:
        if clock():
            yield clock()
        else:
            clock()


def _random_int(bits: Iterator[int], n: int) -> int:
    value = 0
    for _ in range(n):
        value = (value << 1) | next(bits)
    return value


def _round_constants(bits: Iterator[int], n: int, count: int, p: int) -> list[int]:
    constants = []
    for _ in range(count):
        c = _random_int(bits, n)
        while c >= p:
            c = _random_int(bits, n)
        constants.append(c)
    return constants


def _cauchy_mds(bits: Iterator[int], n: int, t: int, p: int) -> list[list[int]]:
    while True:
        samples = [_random_int(bits, n) % p for _ in range(2 * t)]
        while len(set(samples)) != len(samples):
            samples = [_random_int(bits, n) % p for _ in range(2 * t)]
        xs, ys = samples[:t], samples[t:]
        if any((x + y) % p == 0 for x in xs for y in ys):
            continue
        return [[pow(x + y, -1, p) for y in ys] for x in xs]


def generate_params(p: int, t: int) -> PoseidonParams:
    if not MIN_WIDTH <= t <= MAX_WIDTH:
        raise ValueError(f"unsupported Poseidon width {t}")
    n = p.bit_length()
    partial_rounds = PARTIAL_ROUNDS[t - MIN_WIDTH]
    bits = grain_bits(n, t, FULL_ROUNDS, partial_rounds)
    # constants are drawn first, the matrix continues the same stream
    constants = _round_constants(bits, n, (FULL_ROUNDS + partial_rounds) * t, p)
    mds = _cauchy_mds(bits, n, t, p)
    return PoseidonParams(
        t=t,
        full_rounds=FULL_ROUNDS,
        partial_rounds=partial_rounds,
        round_constants=tuple(constants),
        mds=tuple(tuple(row) for row in mds),
    )


@functools.lru_cache(maxsize=None)
def poseidon_params(p: int, t: int) -> PoseidonParams:
    return generate_params(p, t)
