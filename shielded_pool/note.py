from dataclasses import dataclass
from enum import IntEnum

from eth_utils import keccak

from shielded_pool.address import address_to_int
from shielded_pool.crypto import Field, field_element, poseidon_t3, poseidon_t4
from shielded_pool.errors import DomainError

SUB_ID_BITS = 256
# notes carry uint120 values on chain
VALUE_BITS = 120


class TokenType(IntEnum):
    ERC20 = 0
    ERC721 = 1
    ERC1155 = 2


def _uint(value, bits: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(what, value)
    if not 0 <= value < 2**bits:
        raise DomainError(what, value)
    return value


@dataclass(frozen=True)
class TokenData:
    token_type: TokenType
    token_address: int
    # zero for fungible tokens, the item id otherwise
    token_sub_id: int = 0

    def __post_init__(self):
        try:
            token_type = TokenType(self.token_type)
        except ValueError:
            raise DomainError("token type", self.token_type) from None
        object.__setattr__(self, "token_type", token_type)
        object.__setattr__(self, "token_address", address_to_int(self.token_address))
        object.__setattr__(
            self, "token_sub_id", _uint(self.token_sub_id, SUB_ID_BITS, "token sub id")
        )

    def abi_encode(self) -> bytes:
        return b"".join(
            int.to_bytes(word, length=32, byteorder="big")
            for word in (self.token_type, self.token_address, self.token_sub_id)
        )

    def token_id(self) -> Field:
        """
        ERC20 tokens are identified by their address directly, everything else
        by the keccak of the abi encoded descriptor reduced into the field.
        """
        if self.token_type == TokenType.ERC20:
            return Field(self.token_address)
        return Field(int.from_bytes(keccak(self.abi_encode()), byteorder="big"))


def erc20(token_address) -> TokenData:
    return TokenData(TokenType.ERC20, token_address)


def note_public_key(master_public_key, random) -> Field:
    return poseidon_t3(
        field_element(master_public_key, "master public key"),
        field_element(random, "note random"),
    )


@dataclass(frozen=True)
class Note:
    npk: Field
    token: TokenData
    value: int

    def __post_init__(self):
        object.__setattr__(self, "npk", field_element(self.npk, "npk"))
        if not isinstance(self.token, TokenData):
            raise DomainError("token", self.token)
        _uint(self.value, VALUE_BITS, "value")

    def commitment(self) -> Field:
        # order is fixed: npk, token id, value
        return poseidon_t4(self.npk, self.token.token_id(), self.value)


def hash_commitment(note: Note) -> Field:
    return note.commitment()
