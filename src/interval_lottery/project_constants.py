"""
Default public rules for the interval lottery.

These values define the entry price, the round length and how randomness is
requested. Changing them changes the game and MUST be publicly announced.
"""

# Amounts are integer base units (18 decimals, like wei)
UNIT_DECIMALS = 18

# Price of one entry (0.01 of a whole unit)
ENTRANCE_FEE = 10 * (10**15)

# Minimum seconds between the last reset and the next draw
INTERVAL_SECONDS = 30

# Oracle request parameters
SUBSCRIPTION_ID = 0
GAS_LANE = "0x474e34a077df58807dbe9c96d3c009b23b3c6d0cce433e59bbf5b34f823bc56c"
REQUEST_CONFIRMATIONS = 3
CALLBACK_GAS_LIMIT = 500_000
NUM_WORDS = 1

# Participant addresses are base58 encodings of this many bytes
ADDRESS_BYTES = 32
