"""StableSwap math for two-asset pools.

Core math for the stable curve on already-upscaled balances. Uses
Newton-Raphson iteration for the invariant and for solving a single balance.
The amplification convention is ``Ann = A * n`` (n = 2).

IMPORTANT: All financial calculations use SafeInt so that a division by zero
or underflow fails loudly instead of producing a quote the remote program
would never settle.
"""

from amm_quote.constants import MAX_ITERATIONS, N_COINS
from amm_quote.errors import EmptyPool, InsufficientReserve, InvariantDidNotConverge
from amm_quote.fees.pool_fees import PoolFees
from amm_quote.safe_int import S


def compute_next_d(amp: int, d_init: int, d_prod: int, sum_x: int) -> int:
    """One Newton-Raphson step of the invariant.

    D' = D * (n * d_prod + Ann * S) / ((Ann - 1) * D + (n + 1) * d_prod)
    """
    ann = amp * N_COINS
    leverage = sum_x * ann
    numerator = d_init * (d_prod * N_COINS + leverage)
    # amp >= 1, so Ann - 1 >= 1
    denominator = d_init * (ann - 1) + d_prod * (N_COINS + 1)
    return (S(numerator) // denominator).value


def compute_d(amp: int, amount_a: int, amount_b: int) -> int:
    """Calculate the StableSwap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = sum(balances)
        2. d_prod = D^(n+1) / (n^n * prod(balances)), built one balance at a time
        3. Iterate until |D_new - D_old| <= 1
        4. Max iterations: 256

    Args:
        amp: Amplification coefficient A
        amount_a: Upscaled balance of token A
        amount_b: Upscaled balance of token B

    Returns:
        The invariant D (0 for an empty pool)

    Raises:
        EmptyPool: If exactly one balance is zero
        InvariantDidNotConverge: If iteration doesn't converge
    """
    sum_x = amount_a + amount_b
    if sum_x == 0:
        return 0
    if amount_a == 0 or amount_b == 0:
        raise EmptyPool("Stable invariant is undefined with a zero balance")

    amount_a_times_coins = S(amount_a) * N_COINS
    amount_b_times_coins = S(amount_b) * N_COINS

    d = S(sum_x)
    for _ in range(MAX_ITERATIONS):
        d_prod = d
        d_prod = d_prod * d // amount_a_times_coins
        d_prod = d_prod * d // amount_b_times_coins
        d_prev = d
        d = S(compute_next_d(amp, d.value, d_prod.value, sum_x))
        if d.within(d_prev, 1):
            return d.value

    raise InvariantDidNotConverge(
        f"Stable invariant did not converge after {MAX_ITERATIONS} iterations"
    )


def compute_y(amp: int, x: int, d: int) -> int:
    """Solve for the other balance y given balance x and invariant D.

    Solves ``y^2 + b*y = c`` by Newton-Raphson, where
    ``c = D^(n+1) / (n^(2n) * x * A)`` and ``b = x + D / Ann``.

    Args:
        amp: Amplification coefficient A
        x: Upscaled balance of the known side
        d: Invariant to preserve

    Returns:
        The upscaled balance of the unknown side

    Raises:
        EmptyPool: If x is zero
        InvariantDidNotConverge: If iteration doesn't converge
    """
    if x == 0:
        raise EmptyPool("Cannot solve a stable balance against an empty side")
    ann = amp * N_COINS

    c = S(d) * d // (S(x) * N_COINS)
    c = c * d // (ann * N_COINS)
    b = S(x) + S(d) // ann

    y = S(d)
    for _ in range(MAX_ITERATIONS):
        y_prev = y
        y = (y * y + c) // (y * 2 + b - d)
        if y.within(y_prev, 1):
            return y.value

    raise InvariantDidNotConverge(
        f"Stable balance did not converge after {MAX_ITERATIONS} iterations"
    )


def swap_to(amp: int, source_amount: int, swap_source_amount: int, swap_destination_amount: int) -> int:
    """Destination amount for an upscaled, fee-reduced source amount.

    Output = old_destination - new_destination - 1 (1 unit rounding protection),
    clamped at zero.
    """
    invariant = compute_d(amp, swap_source_amount, swap_destination_amount)
    new_destination = compute_y(amp, swap_source_amount + source_amount, invariant)
    return S(swap_destination_amount).saturating_sub(new_destination).saturating_sub(1).value


def swap_from(amp: int, destination_amount: int, swap_source_amount: int, swap_destination_amount: int) -> int:
    """Upscaled source amount needed to take ``destination_amount`` out.

    Raises:
        InsufficientReserve: If destination_amount would drain the reserve
    """
    if destination_amount >= swap_destination_amount:
        raise InsufficientReserve(
            f"Cannot take {destination_amount} out of a reserve of {swap_destination_amount}"
        )
    invariant = compute_d(amp, swap_source_amount, swap_destination_amount)
    new_source = compute_y(amp, swap_destination_amount - destination_amount, invariant)
    return S(new_source).saturating_sub(swap_source_amount).value


def compute_mint_amount_for_deposit(
    amp: int,
    deposit_amount_a: int,
    deposit_amount_b: int,
    swap_amount_a: int,
    swap_amount_b: int,
    pool_token_supply: int,
    fees: PoolFees,
) -> int:
    """Pool shares minted for a (possibly imbalanced) deposit.

    Algorithm:
        1. d0 from the current balances, d1 from the balances after deposit
        2. Each new balance pays the normalized trade fee on its distance
           from the ideal balance d1 * old / d0
        3. d2 from the fee-adjusted balances
        4. Mint supply * (d2 - d0) / d0

    Raises:
        EmptyPool: If the pool has no invariant or no share supply
    """
    if deposit_amount_a == 0 and deposit_amount_b == 0:
        return 0

    d0 = compute_d(amp, swap_amount_a, swap_amount_b)
    if d0 == 0 or pool_token_supply == 0:
        raise EmptyPool("Cannot price a deposit into an empty pool")

    old_balances = (swap_amount_a, swap_amount_b)
    new_balances = (swap_amount_a + deposit_amount_a, swap_amount_b + deposit_amount_b)
    d1 = compute_d(amp, *new_balances)
    if d1 <= d0:
        return 0

    adjusted_balances = []
    for old_balance, new_balance in zip(old_balances, new_balances):
        ideal_balance = S(d1) * old_balance // d0
        difference = ideal_balance.abs_diff(new_balance)
        fee = fees.normalized_trade_fee(difference.value)
        adjusted_balances.append(S(new_balance).saturating_sub(fee).value)

    d2 = compute_d(amp, *adjusted_balances)
    if d2 <= d0:
        return 0
    return (S(pool_token_supply) * (S(d2) - d0) // d0).value


def compute_withdraw_one(
    amp: int,
    pool_token_amount: int,
    pool_token_supply: int,
    swap_base_amount: int,
    swap_quote_amount: int,
    fees: PoolFees,
) -> tuple[int, int]:
    """Base amount released by burning ``pool_token_amount`` into one side.

    Args:
        amp: Amplification coefficient A
        pool_token_amount: Pool shares burned
        pool_token_supply: Pool share supply
        swap_base_amount: Upscaled balance of the side being withdrawn
        swap_quote_amount: Upscaled balance of the other side
        fees: Pool fees (normalized trade fee is charged)

    Returns:
        Tuple of (withdrawn amount, fee amount), both upscaled

    Raises:
        EmptyPool: If the share supply is zero
        InsufficientReserve: If more shares are burned than exist
    """
    if pool_token_supply == 0:
        raise EmptyPool("Cannot withdraw from a pool with no share supply")
    if pool_token_amount > pool_token_supply:
        raise InsufficientReserve(
            f"Cannot burn {pool_token_amount} shares out of a supply of {pool_token_supply}"
        )
    if pool_token_amount == 0:
        return 0, 0

    d0 = compute_d(amp, swap_base_amount, swap_quote_amount)
    d1 = (S(d0) - S(pool_token_amount) * d0 // pool_token_supply).value
    new_y = compute_y(amp, swap_quote_amount, d1)

    expected_base_amount = (S(swap_base_amount) * d1 // d0).saturating_sub(new_y)
    expected_quote_amount = S(swap_quote_amount) - S(swap_quote_amount) * d1 // d0
    new_base_amount_fee = S(swap_base_amount) - fees.normalized_trade_fee(expected_base_amount.value)
    new_quote_amount_fee = S(swap_quote_amount) - fees.normalized_trade_fee(expected_quote_amount.value)

    dy = new_base_amount_fee.saturating_sub(compute_y(amp, new_quote_amount_fee.value, d1))
    dy_0 = S(swap_base_amount).saturating_sub(new_y)
    return dy.value, dy_0.saturating_sub(dy).value
