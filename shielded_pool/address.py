from eth_utils import is_hex_address, to_checksum_address

from shielded_pool.errors import DomainError

ADDRESS_BITS = 160
ZERO_ADDRESS = "0x" + "00" * 20


def to_address(value) -> str:
    """
    Normalise an address given as an int, 20 raw bytes or a hex string
    into its checksummed hex form.
    """
    if isinstance(value, bool):
        raise DomainError("address", value)
    if isinstance(value, int):
        if not 0 <= value < 2**ADDRESS_BITS:
            raise DomainError("address", value)
        value = value.to_bytes(ADDRESS_BITS // 8, byteorder="big")
    if isinstance(value, bytes):
        if len(value) != ADDRESS_BITS // 8:
            raise DomainError("address", value)
        return to_checksum_address(value)
    if isinstance(value, str) and is_hex_address(value):
        return to_checksum_address(value)
    raise DomainError("address", value)


def address_to_int(value) -> int:
    return int(to_address(value), 16)
