"""Quote engine: swap, deposit and withdraw quotes against a pool snapshot.

Composes share accounting, the swap curve and the fee engine. Both pool
reserves sit in yield-bearing vaults, so every amount entering or leaving the
pool is converted through vault shares exactly as settlement would, and the
rounding loss of that conversion is part of the quote.

The engine never mutates its state. A fresher snapshot gives a new engine
through ``with_state``.
"""

from __future__ import annotations

from dataclasses import fields

import structlog

from amm_quote.apy import compute_apy, compute_virtual_price, first_virtual_price, last_virtual_price
from amm_quote.config import DEFAULT_CONFIG, QuoteConfig
from amm_quote.curve import (
    CurveType,
    TradeDirection,
    compute_imbalance_deposit,
    compute_in_amount,
    compute_out_amount,
    compute_withdraw_one,
    resolve_depeg,
    supports_imbalanced_liquidity,
)
from amm_quote.errors import (
    AmountOverflow,
    CapabilityUnsupported,
    ConfigurationError,
    ImbalancedDepositUnsupported,
    InsufficientReserve,
    PoolDisabled,
    SwapNotActivated,
    UndefinedAPY,
)
from amm_quote.math.shares import Rounding, actual_deposit_amount, amount_from_share, share_from_amount, unmint_amount
from amm_quote.math.slippage import max_amount_with_slippage, min_amount_with_slippage, validate_slippage_bps
from amm_quote.quote.state import PoolQuoteState
from amm_quote.quote.types import DepositQuote, PoolInformation, SwapQuote, WithdrawQuote
from amm_quote.safe_int import U64_MAX, IntegerOverflow, S
from amm_quote.vault import VaultSnapshot, compute_pool_token_amounts

logger = structlog.get_logger()


def _require_amount(name: str, amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= U64_MAX:
        raise ConfigurationError(f"{name} must be a u64 amount, got {amount!r}")


def _u64(name: str, amount: int) -> int:
    try:
        return S(amount).to_u64()
    except IntegerOverflow as e:
        raise AmountOverflow(f"{name} {amount} does not fit a u64") from e


def _narrow(quote: SwapQuote | DepositQuote | WithdrawQuote) -> None:
    """Check every amount in ``quote`` fits the program's u64 amounts."""
    for field in fields(quote):
        value = getattr(quote, field.name)
        if isinstance(value, int):
            _u64(field.name, value)


class QuoteEngine:
    """Prices swaps and liquidity operations for one pool snapshot.

    Args:
        state: Pool, vaults, price history and oracle, read at one point
        config: Engine configuration (default slippage, buffer capacity)

    Raises:
        ConfigurationError: If the price history does not have the configured capacity
    """

    def __init__(self, state: PoolQuoteState, config: QuoteConfig | None = None) -> None:
        self.config = config if config is not None else DEFAULT_CONFIG
        if state.apy_snapshot.capacity != self.config.snapshot_capacity:
            raise ConfigurationError(
                f"Virtual price buffer has {state.apy_snapshot.capacity} slots, "
                f"expected {self.config.snapshot_capacity}"
            )
        self.state = state

    def with_state(self, state: PoolQuoteState) -> QuoteEngine:
        """Engine over a fresher snapshot, same configuration."""
        return QuoteEngine(state, self.config)

    def _slippage(self, slippage_bps: int | None) -> int:
        if slippage_bps is None:
            return self.config.default_slippage_bps
        return validate_slippage_bps(slippage_bps)

    def _curve(self) -> CurveType:
        # Oracle is re-read on every quote
        return resolve_depeg(self.state.pool.curve, self.state.depeg_oracle)

    def _withdrawable(self, vault: VaultSnapshot) -> int:
        return vault.withdrawable_amount(self.state.pool.current_time)

    # --- Swap ---

    def get_swap_quote(
        self, in_token_mint: str, in_amount: int, slippage_bps: int | None = None
    ) -> SwapQuote:
        """Quote swapping ``in_amount`` of ``in_token_mint`` for the other token.

        Args:
            in_token_mint: Mint paid into the pool
            in_amount: Raw input amount, fees included
            slippage_bps: Tolerance applied to the output (config default if None)

        Returns:
            SwapQuote with the settled output and its slippage-reduced minimum

        Raises:
            InvalidMint: If the mint is not one of the pool's mints
            PoolDisabled: If the pool refuses swaps
            SwapNotActivated: If the pool is not yet activated
            InsufficientReserve: If the output reaches the available reserve
        """
        pool = self.state.pool
        direction = pool.direction_for(in_token_mint)
        _require_amount("in_amount", in_amount)
        slippage = self._slippage(slippage_bps)

        if not pool.enabled:
            raise PoolDisabled("Pool is disabled")
        if not pool.is_activated:
            raise SwapNotActivated(
                f"Swaps open at {pool.activation_type.value} {pool.activation_point}, "
                f"current is {pool.current_point}"
            )

        curve = self._curve()
        fees = pool.latest_pool_fees()
        source_vault, destination_vault = self.state.vaults_for(direction)
        source_reserve, destination_reserve = self.state.reserves_for(direction)

        owner_fee = fees.owner_trading_fee(in_amount)
        trade_fee = fees.trading_fee(in_amount)

        # Vault lp minted for the input, and what it is actually worth
        source_withdrawable = self._withdrawable(source_vault)
        source_vault_lp = unmint_amount(
            in_amount - owner_fee, source_withdrawable, source_vault.lp_supply
        )
        actual_source_amount = amount_from_share(
            source_vault_lp, source_withdrawable, source_vault.lp_supply, Rounding.DOWN
        )
        source_amount_after_fee = S(actual_source_amount).saturating_sub(trade_fee).value

        destination_amount = compute_out_amount(
            curve, source_amount_after_fee, source_reserve, destination_reserve, direction
        )

        # Vault lp burned for the output, and what it actually pays
        destination_withdrawable = self._withdrawable(destination_vault)
        destination_vault_lp = unmint_amount(
            destination_amount, destination_withdrawable, destination_vault.lp_supply
        )
        amount_out = amount_from_share(
            destination_vault_lp,
            destination_withdrawable,
            destination_vault.lp_supply,
            Rounding.DOWN,
        )

        max_out = self.get_max_swap_out_amount(pool.other_mint(in_token_mint))
        if amount_out >= max_out:
            logger.warning(
                "swap_quote_insufficient_reserve",
                direction=direction.value,
                amount_out=amount_out,
                max_out=max_out,
            )
            raise InsufficientReserve(
                f"Out amount {amount_out} reaches the available reserve {max_out}"
            )

        quote = SwapQuote(
            amount_in=in_amount,
            amount_out=amount_out,
            min_amount_out=min_amount_with_slippage(amount_out, slippage),
            trade_fee=trade_fee,
            owner_fee=owner_fee,
            trade_direction=direction,
        )
        _narrow(quote)
        logger.debug(
            "swap_quote_computed",
            direction=direction.value,
            amount_in=in_amount,
            amount_out=amount_out,
            trade_fee=trade_fee,
            owner_fee=owner_fee,
        )
        return quote

    def get_max_swap_out_amount(self, out_token_mint: str) -> int:
        """Largest amount of ``out_token_mint`` the pool can pay out.

        The smaller of the logical reserve and the tokens physically in the vault.
        """
        pool = self.state.pool
        direction = pool.direction_for(out_token_mint)
        vault = self.state.vault_a if direction is TradeDirection.A_TO_B else self.state.vault_b
        return _u64("max_out_amount", min(pool.token_amount(out_token_mint), vault.reserve_balance))

    def get_max_swap_in_amount(self, in_token_mint: str) -> int:
        """Estimated largest input of ``in_token_mint`` the pool can absorb.

        An estimate only: inverts the curve against the maximum output, leaving
        one unit in the pool, then removes the fees.
        """
        pool = self.state.pool
        direction = pool.direction_for(in_token_mint)
        source_reserve, destination_reserve = self.state.reserves_for(direction)

        max_out = self.get_max_swap_out_amount(pool.other_mint(in_token_mint))
        # The pool cannot be fully depleted
        if max_out == destination_reserve:
            max_out = S(max_out).saturating_sub(1).value

        max_in = compute_in_amount(self._curve(), max_out, source_reserve, destination_reserve, direction)
        fees = pool.latest_pool_fees()
        owner_fee = fees.owner_trading_fee(max_in)
        trade_fee = fees.trading_fee(max_in)
        return _u64("max_in_amount", S(max_in).saturating_sub(owner_fee).saturating_sub(trade_fee).value)

    # --- Liquidity ---

    def get_deposit_quote(
        self,
        token_a_in_amount: int,
        token_b_in_amount: int,
        balanced: bool,
        slippage_bps: int | None = None,
    ) -> DepositQuote:
        """Quote a deposit.

        With ``balanced`` and one side zero, the zero side's amount is derived
        from the pool ratio. Otherwise the amounts are deposited as given, which
        only stable pools accept when both are non-zero.

        Raises:
            ImbalancedDepositUnsupported: If a constant product pool gets two non-zero sides
            ConfigurationError: If ``balanced`` is set with two non-zero sides
            EmptyPool: If a reserve or supply the ratio divides by is zero
        """
        _require_amount("token_a_in_amount", token_a_in_amount)
        _require_amount("token_b_in_amount", token_b_in_amount)
        slippage = self._slippage(slippage_bps)
        curve = self._curve()
        both_sides = token_a_in_amount != 0 and token_b_in_amount != 0

        if both_sides and not supports_imbalanced_liquidity(curve):
            raise ImbalancedDepositUnsupported("Constant product pools only support balanced deposits")
        if both_sides and balanced:
            raise ConfigurationError("A balanced deposit takes exactly one non-zero side")

        if balanced:
            quote = self._balanced_deposit_quote(curve, token_a_in_amount, token_b_in_amount, slippage)
        else:
            pool_token_amount_out = self._imbalance_deposit_shares(
                curve, token_a_in_amount, token_b_in_amount
            )
            quote = DepositQuote(
                pool_token_amount_out=pool_token_amount_out,
                min_pool_token_amount_out=min_amount_with_slippage(pool_token_amount_out, slippage),
                token_a_in_amount=token_a_in_amount,
                token_b_in_amount=token_b_in_amount,
            )

        _narrow(quote)
        logger.debug(
            "deposit_quote_computed",
            balanced=balanced,
            pool_token_amount_out=quote.pool_token_amount_out,
            token_a_in_amount=quote.token_a_in_amount,
            token_b_in_amount=quote.token_b_in_amount,
        )
        return quote

    def _balanced_deposit_quote(
        self, curve: CurveType, token_a_in_amount: int, token_b_in_amount: int, slippage: int
    ) -> DepositQuote:
        pool = self.state.pool
        if token_a_in_amount == 0:
            given, reserve_given, reserve_other = token_b_in_amount, pool.token_b_amount, pool.token_a_amount
        else:
            given, reserve_given, reserve_other = token_a_in_amount, pool.token_a_amount, pool.token_b_amount

        if supports_imbalanced_liquidity(curve):
            # Stable pools settle the derived pair as an imbalanced deposit
            other = amount_from_share(given, reserve_other, reserve_given, Rounding.DOWN)
            if token_a_in_amount == 0:
                deposit_a, deposit_b = other, given
            else:
                deposit_a, deposit_b = given, other
            pool_token_amount_out = self._imbalance_deposit_shares(curve, deposit_a, deposit_b)
            return DepositQuote(
                pool_token_amount_out=pool_token_amount_out,
                min_pool_token_amount_out=min_amount_with_slippage(pool_token_amount_out, slippage),
                token_a_in_amount=deposit_a if token_a_in_amount else max_amount_with_slippage(deposit_a, slippage),
                token_b_in_amount=deposit_b if token_b_in_amount else max_amount_with_slippage(deposit_b, slippage),
            )

        pool_token_amount_out = share_from_amount(given, reserve_given, pool.lp_supply, Rounding.DOWN)
        required_a, required_b = self._required_balanced_amounts(pool_token_amount_out)
        return DepositQuote(
            pool_token_amount_out=pool_token_amount_out,
            min_pool_token_amount_out=min_amount_with_slippage(pool_token_amount_out, slippage),
            token_a_in_amount=max_amount_with_slippage(required_a, slippage),
            token_b_in_amount=max_amount_with_slippage(required_b, slippage),
        )

    def _required_balanced_amounts(self, pool_token_amount: int) -> tuple[int, int]:
        """Tokens needed on each side to mint ``pool_token_amount`` shares (rounded up)."""
        pool = self.state.pool
        amounts = []
        for vault in (self.state.vault_a, self.state.vault_b):
            vault_lp = share_from_amount(
                pool_token_amount, pool.lp_supply, vault.pool_lp_amount, Rounding.UP
            )
            amounts.append(
                amount_from_share(vault_lp, self._withdrawable(vault), vault.lp_supply, Rounding.UP)
            )
        return amounts[0], amounts[1]

    def _imbalance_deposit_shares(self, curve: CurveType, deposit_a: int, deposit_b: int) -> int:
        pool = self.state.pool
        vault_a, vault_b = self.state.vault_a, self.state.vault_b
        actual_a = actual_deposit_amount(
            deposit_a,
            pool.token_a_amount,
            vault_a.pool_lp_amount,
            vault_a.lp_supply,
            self._withdrawable(vault_a),
        )
        actual_b = actual_deposit_amount(
            deposit_b,
            pool.token_b_amount,
            vault_b.pool_lp_amount,
            vault_b.lp_supply,
            self._withdrawable(vault_b),
        )
        return compute_imbalance_deposit(
            curve,
            actual_a,
            actual_b,
            pool.token_a_amount,
            pool.token_b_amount,
            pool.lp_supply,
            pool.fees,
        )

    def get_withdraw_quote(
        self,
        pool_token_amount: int,
        slippage_bps: int | None = None,
        token_mint: str | None = None,
    ) -> WithdrawQuote:
        """Quote burning ``pool_token_amount`` shares.

        Without ``token_mint`` both sides are paid proportionally. With it,
        everything is paid in that token (stable pools only).

        Raises:
            InvalidMint: If token_mint is not one of the pool's mints
            CapabilityUnsupported: If a single-sided withdraw targets a constant product pool
            InsufficientReserve: If more shares are burned than exist
        """
        _require_amount("pool_token_amount", pool_token_amount)
        slippage = self._slippage(slippage_bps)
        pool = self.state.pool
        if pool_token_amount > pool.lp_supply:
            raise InsufficientReserve(
                f"Cannot burn {pool_token_amount} shares out of a supply of {pool.lp_supply}"
            )

        if token_mint is None:
            token_a_out, token_b_out = (
                self._balanced_withdraw_amount(vault, pool_token_amount)
                for vault in (self.state.vault_a, self.state.vault_b)
            )
        else:
            token_a_out, token_b_out = self._single_sided_withdraw_amounts(pool_token_amount, token_mint)

        quote = WithdrawQuote(
            pool_token_amount_in=pool_token_amount,
            token_a_out_amount=token_a_out,
            token_b_out_amount=token_b_out,
            min_token_a_out_amount=min_amount_with_slippage(token_a_out, slippage),
            min_token_b_out_amount=min_amount_with_slippage(token_b_out, slippage),
        )
        _narrow(quote)
        logger.debug(
            "withdraw_quote_computed",
            pool_token_amount_in=pool_token_amount,
            token_mint=token_mint,
            token_a_out_amount=token_a_out,
            token_b_out_amount=token_b_out,
        )
        return quote

    def _balanced_withdraw_amount(self, vault: VaultSnapshot, pool_token_amount: int) -> int:
        vault_lp_burn = share_from_amount(
            pool_token_amount, self.state.pool.lp_supply, vault.pool_lp_amount, Rounding.DOWN
        )
        return amount_from_share(vault_lp_burn, self._withdrawable(vault), vault.lp_supply, Rounding.DOWN)

    def _single_sided_withdraw_amounts(self, pool_token_amount: int, token_mint: str) -> tuple[int, int]:
        pool = self.state.pool
        # Withdrawing token A prices like a B -> A trade
        direction = pool.direction_for(token_mint).opposite
        curve = self._curve()
        if not supports_imbalanced_liquidity(curve):
            raise CapabilityUnsupported("Constant product pools only support balanced withdraws")

        out_amount = compute_withdraw_one(
            curve,
            pool_token_amount,
            pool.lp_supply,
            pool.token_a_amount,
            pool.token_b_amount,
            pool.fees,
            direction,
        )

        withdrawing_a = direction is TradeDirection.B_TO_A
        vault = self.state.vault_a if withdrawing_a else self.state.vault_b
        withdrawable = self._withdrawable(vault)
        # Vault lp burned for the amount, and what it actually pays
        vault_lp_burn = share_from_amount(out_amount, withdrawable, vault.lp_supply, Rounding.DOWN)
        real_out_amount = amount_from_share(vault_lp_burn, withdrawable, vault.lp_supply, Rounding.DOWN)
        if withdrawing_a:
            return real_out_amount, 0
        return 0, real_out_amount

    # --- Pool information ---

    def get_pool_info(self) -> PoolInformation:
        """Vault-backed reserves, current virtual price and trailing APY."""
        pool = self.state.pool
        snapshot = self.state.apy_snapshot
        token_a_amount, token_b_amount = compute_pool_token_amounts(
            self.state.vault_a, self.state.vault_b, pool.current_time
        )

        virtual_price = compute_virtual_price(
            self._curve(), pool.token_a_amount, pool.token_b_amount, pool.lp_supply
        )
        if virtual_price == 0:
            last = last_virtual_price(snapshot)
            if last is not None:
                virtual_price = last.price

        first = first_virtual_price(snapshot)
        try:
            apy: float | None = compute_apy(snapshot, self.config.seconds_per_year)
        except UndefinedAPY as e:
            logger.debug("pool_apy_undefined", reason=str(e))
            apy = None

        return PoolInformation(
            token_a_amount=token_a_amount,
            token_b_amount=token_b_amount,
            virtual_price=virtual_price,
            apy=apy,
            first_virtual_price=first.price if first is not None else None,
            first_timestamp=first.timestamp if first is not None else None,
            current_timestamp=pool.current_time,
        )
