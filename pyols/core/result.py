"""
Generic result container for PyOLS computations.

Every backend returns a Result envelope around its parameter payload. The
envelope carries the pieces every fit shares (method metadata, timing,
non-fatal warnings) while the payload type stays domain-specific.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, rows dropped)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True): a fit is never updated in place
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a single computation.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (coefficients, statistics, ...)
        info: Structured metadata (method, rank, diagnostics notes)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearParams(...),
        ...     info={'method': 'gauss_jordan', 'rank': 3},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_gj'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
