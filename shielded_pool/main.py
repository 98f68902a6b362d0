import argparse
import logging

from shielded_pool.config import GenesisConfig
from shielded_pool.fees import get_fee
from shielded_pool.note import Note, TokenData, TokenType
from shielded_pool.treasury import TreasuryAndFeeAdmin


def _int(value: str) -> int:
    return int(value, 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shielded pool commitments and fees",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    commands = parser.add_subparsers(dest="command", required=True)

    fee = commands.add_parser("fee", help="Split an amount into base and fee")
    fee.add_argument("--amount", type=_int, required=True)
    fee.add_argument("--fee-bp", type=_int, required=True, help="Fee in basis points")
    fee.add_argument("--inclusive", action="store_true", help="Amount already includes the fee")

    commitment = commands.add_parser("commitment", help="Hash a note commitment")
    commitment.add_argument("--npk", type=_int, required=True, help="Note public key")
    commitment.add_argument("--token-address", type=str, required=True)
    commitment.add_argument(
        "--token-type", type=str, default=TokenType.ERC20.name, choices=[t.name for t in TokenType]
    )
    commitment.add_argument("--token-sub-id", type=_int, default=0)
    commitment.add_argument("--value", type=_int, required=True)

    config = commands.add_parser("config", help="Load a genesis configuration")
    config.add_argument("--config", type=str, required=True, help="Configuration file path")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    match args.command:
        case "fee":
            base, fee = get_fee(args.amount, args.inclusive, args.fee_bp)
            print(base, fee)
        case "commitment":
            token = TokenData(TokenType[args.token_type], args.token_address, args.token_sub_id)
            note = Note(npk=args.npk, token=token, value=args.value)
            print(note.commitment().hex())
        case "config":
            admin = TreasuryAndFeeAdmin()
            GenesisConfig.load(args.config).initialize(admin)
            print(f"treasury: {admin.treasury()}")
            print(f"administrator: {admin.administrator()}")
            print(f"deposit_fee: {admin.deposit_fee()}")
            print(f"withdraw_fee: {admin.withdraw_fee()}")
            print(f"nft_fee: {admin.nft_fee()}")


if __name__ == "__main__":
    main()
