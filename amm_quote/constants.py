"""Protocol constants for the dynamic AMM quote engine.

Values mirror the remote pool and vault programs so that local integer
arithmetic settles to the same amounts.
"""

# Number of assets in a pool
N_COINS = 2

# Newton-Raphson iteration cap for the stable invariant and balance solvers
MAX_ITERATIONS = 256

# Precision of depeg exchange rates (1.0 == 1_000_000)
DEPEG_PRECISION = 10**6

# Precision of virtual price samples (1.0 == 100_000_000)
VIRTUAL_PRICE_PRECISION = 10**8

# Basis points denominator used by slippage and fee schedules
BPS_DENOMINATOR = 10_000

# Vault locked profit degrades linearly against this denominator
LOCKED_PROFIT_DEGRADATION_DENOMINATOR = 10**12

# Ring buffer size of the virtual price history kept per pool
DEFAULT_SNAPSHOT_CAPACITY = 28

SECONDS_PER_YEAR = 365 * 24 * 3600
