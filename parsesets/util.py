"""Utility constants shared by parsesets and the runtimes that consume it.

Character bounds describe the code points a lexer may produce.
Token sentinels are the reserved symbol values a parser hands to sets
for end-of-input and the zero-width epsilon transition.
"""

# Character range (Unicode code points)
MIN_CHAR_VALUE = 0
MAX_CHAR_VALUE = 0x10FFFF

# Token sentinels
EOF = -1
EPSILON = -2

# Returned by IntervalSet.get() for an out-of-range index
INVALID_ELEMENT = -1

# Singleton intervals [v, v] with 0 <= v <= INTERVAL_CACHE_SIZE are shared
INTERVAL_CACHE_SIZE = 1000
