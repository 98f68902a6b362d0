from py_ecc.bn128 import curve_order
from py_ecc.fields.field_elements import FQ

from shielded_pool.errors import DomainError
from shielded_pool.poseidon_params import ALPHA, MAX_WIDTH, poseidon_params


# !Important! The hash here must agree bit for bit with the on-chain verifier.
# Commitments live in the BN254 scalar field (the SNARK scalar field).


class Field(FQ):
    field_modulus = curve_order
    ORDER = curve_order

    def __hash__(self):
        return hash(self.n)

    @property
    def v(self) -> int:
        return self.n

    def to_bytes(self) -> bytes:
        return self.n.to_bytes(32, byteorder="big")

    def hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def field_element(value, what: str = "field element") -> Field:
    """
    Strict conversion into the field: ints must already be reduced.
    """
    if isinstance(value, Field):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(what, value)
    if not 0 <= value < Field.ORDER:
        raise DomainError(what, value)
    return Field(value)


def poseidon(*inputs) -> Field:
    """
    Poseidon over the scalar field with width t = len(inputs) + 1,
    capacity lane initialised to zero and the digest read from lane 0.
    """
    if not 1 <= len(inputs) <= MAX_WIDTH - 1:
        raise DomainError("poseidon arity", len(inputs))
    elements = [field_element(x, "poseidon input") for x in inputs]

    params = poseidon_params(Field.ORDER, len(elements) + 1)
    t = params.t
    constants = params.round_constants
    mds = params.mds
    half_full = params.full_rounds // 2
    rounds = params.full_rounds + params.partial_rounds

    state = [Field.zero(), *elements]
    for r in range(rounds):
        state = [s + constants[r * t + i] for i, s in enumerate(state)]
        if r < half_full or r >= half_full + params.partial_rounds:
            state = [s**ALPHA for s in state]
        else:
            state[0] = state[0] ** ALPHA
        state = [
            sum((state[j] * row[j] for j in range(t)), Field.zero()) for row in mds
        ]
    return state[0]


def poseidon_t3(a, b) -> Field:
    return poseidon(a, b)


def poseidon_t4(a, b, c) -> Field:
    return poseidon(a, b, c)
