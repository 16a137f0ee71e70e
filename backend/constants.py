"""
Centralized Constants - SINGLE SOURCE OF TRUTH

Price buckets, seed modes and listing defaults are defined here and
imported elsewhere. DO NOT duplicate these definitions in other files.
"""

# =============================================================================
# PRICE RANGE BUCKETS (histogram)
# =============================================================================

# (label, lower bound, upper bound). Upper bound None means unbounded.
# Bounds are inclusive for integer prices: 100 -> '0-100', 101 -> '101-200'.
# A fractional price between two labels (100.5) belongs to the upper bucket.
PRICE_BUCKETS = [
    ('0-100', 0, 100),
    ('101-200', 101, 200),
    ('201-300', 201, 300),
    ('301-400', 301, 400),
    ('401-500', 401, 500),
    ('501-600', 501, 600),
    ('601-700', 601, 700),
    ('701-800', 701, 800),
    ('801-900', 801, 900),
    ('901-above', 901, None),
]

PRICE_BUCKET_LABELS = [label for label, _, _ in PRICE_BUCKETS]


# =============================================================================
# SEEDING
# =============================================================================

SEED_MODE_ONCE = 'seed-once'
SEED_MODE_FORCE_RESET = 'force-reset'

SEED_MODES = [SEED_MODE_ONCE, SEED_MODE_FORCE_RESET]

# /initialize-database wipes and reseeds unless told otherwise
DEFAULT_INITIALIZE_MODE = SEED_MODE_FORCE_RESET


# =============================================================================
# LISTING / MONTH WINDOW
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

MIN_MONTH = 1
MAX_MONTH = 12

MIN_YEAR = 1900
MAX_YEAR = 9999

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]
