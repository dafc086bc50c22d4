"""Virtual price history and trailing APY.

The pool records its virtual price (invariant per share, precision 10^8) into
a fixed-capacity ring buffer. The APY estimate compounds the growth between
the oldest and the newest recorded sample over a year.

The buffer is a value: recording a sample returns a new snapshot, the old one
is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass

from amm_quote.constants import DEFAULT_SNAPSHOT_CAPACITY, SECONDS_PER_YEAR, VIRTUAL_PRICE_PRECISION
from amm_quote.curve import CurveType, compute_d
from amm_quote.errors import UndefinedAPY
from amm_quote.safe_int import S


@dataclass(frozen=True)
class VirtualPrice:
    """One virtual price sample. A zero price marks an unfilled slot."""

    price: int = 0
    timestamp: int = 0

    @property
    def is_filled(self) -> bool:
        return self.price != 0


@dataclass(frozen=True)
class VirtualPriceSnapshot:
    """Fixed-capacity ring buffer of virtual price samples.

    Attributes:
        virtual_prices: Buffer slots, oldest overwritten first
        pointer: Index of the next slot to write
    """

    virtual_prices: tuple[VirtualPrice, ...]
    pointer: int = 0

    def __post_init__(self) -> None:
        if not self.virtual_prices:
            raise ValueError("Virtual price buffer must have at least one slot")
        if not 0 <= self.pointer < len(self.virtual_prices):
            raise ValueError(
                f"Pointer {self.pointer} out of range for {len(self.virtual_prices)} slots"
            )

    @classmethod
    def empty(cls, capacity: int = DEFAULT_SNAPSHOT_CAPACITY) -> VirtualPriceSnapshot:
        return cls(virtual_prices=tuple(VirtualPrice() for _ in range(capacity)), pointer=0)

    @property
    def capacity(self) -> int:
        return len(self.virtual_prices)

    def record(self, price: int, timestamp: int) -> VirtualPriceSnapshot:
        """Return a snapshot with the sample written at the pointer and the pointer advanced."""
        slots = list(self.virtual_prices)
        slots[self.pointer] = VirtualPrice(price=price, timestamp=timestamp)
        return VirtualPriceSnapshot(
            virtual_prices=tuple(slots), pointer=(self.pointer + 1) % self.capacity
        )


def first_virtual_price(snapshot: VirtualPriceSnapshot) -> VirtualPrice | None:
    """Oldest filled sample, scanning forward from the write pointer.

    The scan stops at the slot just before the pointer (the newest one).
    """
    size = snapshot.capacity
    initial = snapshot.pointer
    current = initial
    while (current + 1) % size != initial:
        if snapshot.virtual_prices[current].is_filled:
            break
        current = (current + 1) % size

    sample = snapshot.virtual_prices[current]
    return sample if sample.is_filled else None


def last_virtual_price(snapshot: VirtualPriceSnapshot) -> VirtualPrice | None:
    """Newest sample: the slot before the write pointer, wrapping at index 0."""
    previous = snapshot.pointer - 1 if snapshot.pointer else snapshot.capacity - 1
    sample = snapshot.virtual_prices[previous]
    return sample if sample.is_filled else None


def compute_apy(snapshot: VirtualPriceSnapshot, seconds_per_year: int = SECONDS_PER_YEAR) -> float:
    """Annualized yield between the oldest and newest samples.

    ``apy = (last / first) ** (seconds_per_year / elapsed) - 1``, as a fraction
    (0.05 is 5%). Floating point: an estimate, not a settlement value.

    Raises:
        UndefinedAPY: If an anchor is missing, elapsed time is not positive,
            or the compounded rate overflows
    """
    first = first_virtual_price(snapshot)
    last = last_virtual_price(snapshot)
    if first is None or last is None:
        raise UndefinedAPY("Virtual price history has no filled samples")

    elapsed = last.timestamp - first.timestamp
    if elapsed <= 0:
        raise UndefinedAPY(
            f"Virtual price history spans {elapsed}s, need a positive elapsed time"
        )

    rate = last.price / first.price
    frequency = seconds_per_year / elapsed
    try:
        return rate**frequency - 1
    except OverflowError as e:
        raise UndefinedAPY(f"APY overflows for rate {rate} over {elapsed}s") from e


def compute_virtual_price(
    curve: CurveType, token_a_amount: int, token_b_amount: int, lp_supply: int
) -> int:
    """Invariant per pool share at precision 10^8 (0 for a pool without shares)."""
    if lp_supply == 0:
        return 0
    d = compute_d(curve, token_a_amount, token_b_amount)
    return (S(d) * VIRTUAL_PRICE_PRECISION // lp_supply).value
