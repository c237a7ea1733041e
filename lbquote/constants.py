"""Protocol constants for the liquidity-book quoting kernel.

Centralizes ladder bounds and fee precision parameters.
"""

# Bin id that maps to a price ratio of exactly 1 (2^23)
BIN_ID_OFFSET = 8_388_608

# Ladder bounds: 2^23 bins either side of the offset, stored as uint24 on-chain
MIN_BIN_ID = 0
MAX_BIN_ID = 2**24 - 1

# Basis points denominator (bin_step, reduction_factor, protocol_share)
BASIS_POINT_MAX = 10_000

# Fee precision: fees are expressed as integers scaled by 1e18
PRECISION = 10**18

# base_fee = base_factor * bin_step * BASE_FEE_SCALE
BASE_FEE_SCALE = 10**10

# Protocol fee ceilings
# MAX_FEE = 10% expressed in PRECISION units
MAX_FEE = 10**17
MAX_PROTOCOL_SHARE = 2_500

# Coin amounts are u64 on the target chain
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
