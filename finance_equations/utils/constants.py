"""
Numerical constants and tolerances for options pricing calculations.

This module defines the thresholds used for edge case detection, solver
convergence criteria and lattice sizing. Functions accept keyword
overrides for the solver values; these are the defaults.
"""

# Normal distribution bounds
MAX_STANDARD_DEVIATIONS = 8.0  # Beyond ±8σ, CDF is effectively 0 or 1
MAX_PDF_ARGUMENT = 10.0  # Beyond ±10, PDF < 2e-22 and is treated as zero

# Abramowitz-Stegun 26.2.17 coefficients for the normal CDF
CDF_GAMMA = 0.2316419
CDF_COEFFICIENTS = (0.31938153, -0.356563782, 1.781477937, -1.821255978, 1.330274429)

# 1/sqrt(2π) truncated to 8 significant digits
INV_SQRT_2PI = 0.39894228

# Abramowitz-Stegun 7.1.26 coefficients for erf
ERF_P = 0.3275911
ERF_COEFFICIENTS = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)

# Implied volatility solver parameters
IV_PRICE_TOLERANCE = 1e-4  # Stop when |BS(σ) - market| falls below this
IV_MAX_ITERATIONS = 100  # Maximum Newton-Raphson iterations
IV_VOL_TOLERANCE = 1e-8  # Bracket width on σ for Brent
IV_MIN_VEGA = 1e-8  # Below this, the Newton step is numerically meaningless
IV_INITIAL_GUESS = 0.25  # Default 25% volatility if no better guess
IV_MIN_VOL = 0.001  # 0.1% lower bracket for Brent
IV_MAX_VOL = 10.0  # 1000% upper bracket for Brent

# Binomial lattice
MAX_RECOMMENDED_STEPS = 10_000  # ~5e7 node updates; larger trees log a warning
