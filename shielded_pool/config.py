from __future__ import annotations

from dataclasses import dataclass
from typing import Self

import dacite
import yaml

from shielded_pool.address import to_address
from shielded_pool.treasury import FeeConfig, TreasuryAndFeeAdmin


@dataclass
class GenesisConfig:
    """
    Values the governed treasury and fee state is brought up with.
    """

    treasury: str
    administrator: str
    fees: FeeConfig

    @classmethod
    def load(cls, yaml_path: str) -> Self:
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)
        config = dacite.from_dict(data_class=GenesisConfig, data=data)
        config.validate()
        return config

    def validate(self):
        to_address(self.treasury)
        to_address(self.administrator)
        self.fees.validate()

    def initialize(self, admin: TreasuryAndFeeAdmin):
        admin.initialize(
            self.treasury,
            self.fees.deposit_fee,
            self.fees.withdraw_fee,
            self.fees.nft_fee,
            self.administrator,
        )
