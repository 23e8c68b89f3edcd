"""
Numerical constants and defaults for the options calculators.

Solver settings here are defaults only; every solver accepts keyword
overrides. Values marked "reference" reproduce the behaviour of the
original web calculators and should not be tuned.
"""

DAYS_PER_YEAR = 365.0  # calendar days, used for T and per-day theta

# Trading-convention scaling of Greeks
DELTA_SCALE = 100.0  # delta reported as a percentage
VEGA_SCALE = 0.01  # vega per 1 vol point (e.g. 25% -> 26%)

# Abramowitz & Stegun 7.1.26 rational approximation
AS_P = 0.3275911
AS_A1 = 0.254829592
AS_A2 = -0.284496736
AS_A3 = 1.421413741
AS_A4 = -1.453152027
AS_A5 = 1.061405429

# Implied volatility solver parameters (reference)
IV_INITIAL_GUESS = 0.20  # 20% starting volatility
IV_MAX_ITERATIONS = 100
IV_PRICE_TOLERANCE = 1e-4  # $0.0001 price accuracy
IV_MIN_VEGA = 1e-12  # below this the Newton step is meaningless

# Bracketed fallback bounds
IV_MIN_VOL = 0.001  # 0.1% minimum volatility
IV_MAX_VOL = 10.0  # 1000% maximum volatility
IV_BRENT_XTOL = 1e-8

# No-arbitrage bound slack
ARBITRAGE_TOLERANCE = 1e-6

# Margin account
MAINTENANCE_MARGIN = 0.30  # 30% equity requirement (reference)
PROJECTION_CHANGES = tuple(range(-50, 51, 10))  # price changes in %

# Sortino ratio rating bands, highest first
SORTINO_BANDS = (
    (2.0, "Excellent"),
    (1.0, "Good"),
    (0.5, "Fair"),
    (0.0, "Poor"),
)
SORTINO_FLOOR_RATING = "Very Poor"
