"""
Numerical tolerances and diagnostic thresholds.

Single place for every fixed constant the estimator and its diagnostics
depend on. Public functions accept keyword overrides where a caller may
reasonably want a different value; the defaults live here. The
ToleranceTier comparison tiers serve the test suite.
"""

from dataclasses import dataclass


# Gauss-Jordan: a pivot with magnitude below this is treated as zero.
PIVOT_TOLERANCE = 1e-10

# Default significance level for confidence intervals.
DEFAULT_ALPHA = 0.05

# VIF severity bands.
VIF_MODERATE = 5.0
VIF_HIGH = 10.0

# Pairwise predictor correlation flags.
HIGH_CORRELATION = 0.9
PERFECT_CORRELATION = 0.9999

# A sum of squares at or below this fraction of y'y is rounding noise.
# Rounding in ȳ leaves about eps² · y'y in TSS for a constant response.
SUM_OF_SQUARES_TOLERANCE = 1e-24

# Legacy t-table switches to the normal quantile from this df onward.
NORMAL_APPROXIMATION_DF = 120


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned problems: Gauss-Jordan and QR agree to near machine precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Ill-conditioned problems (cond(X'X) > 1e8): normal equations lose digits
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e8)',
)

# Exact-fit recovery: y = X beta with no noise
EXACT_FIT = ToleranceTier(
    rtol=0.0,
    atol=1e-8,
    name='exact_fit',
    description='Noise-free data, coefficients recovered exactly',
)

ILL_CONDITION_THRESHOLD = 1e8


def select_tolerance(condition_number: float) -> ToleranceTier:
    """Select the comparison tier appropriate for a given cond(X'X)."""
    if condition_number > ILL_CONDITION_THRESHOLD:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
