"""Everything a quote reads, captured once."""

from __future__ import annotations

from dataclasses import dataclass, field

from amm_quote.apy import VirtualPriceSnapshot
from amm_quote.curve.depeg import DepegOracle
from amm_quote.curve.types import TradeDirection
from amm_quote.pool import PoolSnapshot
from amm_quote.vault import VaultSnapshot


@dataclass(frozen=True)
class PoolQuoteState:
    """Pool, vault, price history and oracle snapshots read at the same point.

    Attributes:
        pool: Pool reserves, fees and curve
        vault_a: Vault holding token A
        vault_b: Vault holding token B
        apy_snapshot: Virtual price ring buffer
        depeg_oracle: Oracle state for depegged stable pools
    """

    pool: PoolSnapshot
    vault_a: VaultSnapshot
    vault_b: VaultSnapshot
    apy_snapshot: VirtualPriceSnapshot = field(default_factory=VirtualPriceSnapshot.empty)
    depeg_oracle: DepegOracle | None = None

    def vaults_for(self, direction: TradeDirection) -> tuple[VaultSnapshot, VaultSnapshot]:
        """(source vault, destination vault) for a trade direction."""
        if direction is TradeDirection.A_TO_B:
            return self.vault_a, self.vault_b
        return self.vault_b, self.vault_a

    def reserves_for(self, direction: TradeDirection) -> tuple[int, int]:
        """(source reserve, destination reserve) for a trade direction."""
        if direction is TradeDirection.A_TO_B:
            return self.pool.token_a_amount, self.pool.token_b_amount
        return self.pool.token_b_amount, self.pool.token_a_amount
