"""
Regression solution type.

LinearSolution is the user-facing wrapper around a Result[OLSParams]. It
holds no state of its own: every property reads the immutable payload,
so the numbers a caller sees are the ones computed during fit().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyols.core.result import Result
from pyols.regression._common import (
    AnovaTableRow,
    DiagnosticsParams,
    OLSParams,
)
from pyols.regression.design import INTERCEPT_NAME
from pyols.regression._diagnostics import vif_severity
from pyols.regression._inference import anova_table, significance_stars

if TYPE_CHECKING:
    from pyols.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearSolution:
    """
    User-facing OLS results.

    Wraps the Result envelope and exposes coefficients, inference,
    goodness-of-fit statistics and diagnostics as read-only properties.
    """
    _result: Result[OLSParams]
    _design: 'RegressionDesign'

    # === Estimates ===

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.estimate.coefficients

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.estimate.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.estimate.residuals

    @property
    def ssr(self) -> float:
        """Regression (explained) sum of squares."""
        return self._result.params.estimate.ssr

    @property
    def sse(self) -> float:
        """Residual sum of squares."""
        return self._result.params.estimate.sse

    @property
    def tss(self) -> float:
        """Total sum of squares."""
        return self._result.params.estimate.tss

    # === Inference ===

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """SE(β) = sqrt(diag(MSE · (X'X)⁻¹))."""
        return self._result.params.inference.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.inference.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values of the coefficient t tests."""
        return self._result.params.inference.p_values

    @property
    def conf_int_lower(self) -> NDArray[np.floating[Any]]:
        return self._result.params.inference.conf_int_lower

    @property
    def conf_int_upper(self) -> NDArray[np.floating[Any]]:
        return self._result.params.inference.conf_int_upper

    @property
    def covariance(self) -> NDArray[np.floating[Any]]:
        """Coefficient covariance matrix MSE · (X'X)⁻¹."""
        return self._result.params.inference.covariance

    @property
    def alpha(self) -> float:
        """Significance level of the confidence intervals."""
        return self._result.params.inference.alpha

    @property
    def r_squared(self) -> float:
        return self._result.params.inference.r_squared

    @property
    def adj_r_squared(self) -> float:
        return self._result.params.inference.adj_r_squared

    @property
    def mse(self) -> float:
        return self._result.params.inference.mse

    @property
    def msr(self) -> float:
        return self._result.params.inference.msr

    @property
    def rmse(self) -> float:
        """Residual standard error sqrt(MSE)."""
        return self._result.params.inference.rmse

    @property
    def f_statistic(self) -> float:
        return self._result.params.inference.f_statistic

    @property
    def f_p_value(self) -> float:
        return self._result.params.inference.f_p_value

    @property
    def log_likelihood(self) -> float:
        return self._result.params.inference.log_likelihood

    @property
    def aic(self) -> float:
        return self._result.params.inference.aic

    @property
    def bic(self) -> float:
        return self._result.params.inference.bic

    # === Diagnostics ===

    @property
    def vif(self) -> NDArray[np.floating[Any]]:
        """Variance inflation factors aligned with coefficients (NaN for the intercept)."""
        return self._result.params.diagnostics.vif

    @property
    def diagnostics(self) -> DiagnosticsParams:
        return self._result.params.diagnostics

    @property
    def anova_table(self) -> tuple[AnovaTableRow, ...]:
        return anova_table(self._result.params.estimate, self._result.params.inference)

    # === Dimensions ===

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def k(self) -> int:
        return self._design.k

    @property
    def df_model(self) -> int:
        return self._result.params.estimate.df_model

    @property
    def df_residual(self) -> int:
        return self._result.params.estimate.df_residual

    @property
    def include_intercept(self) -> bool:
        return self._design.include_intercept

    @property
    def term_names(self) -> tuple[str, ...]:
        return self._design.term_names

    @property
    def response_name(self) -> str:
        return self._design.response_name

    @property
    def design(self) -> 'RegressionDesign':
        return self._design

    # === Envelope ===

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # === Presentation ===

    def equation(self, decimals: int = 4) -> str:
        """
        Fitted equation as text, e.g. 'y = 1.2000 + 0.5000*x1 - 3.0000*x2'.
        """
        terms = []
        for name, coef in zip(self.term_names, self.coefficients):
            value = f"{abs(coef):.{decimals}f}"
            body = value if name == INTERCEPT_NAME else f"{value}*{name}"
            if not terms:
                terms.append(f"-{body}" if coef < 0 else body)
            else:
                terms.append(f"{'-' if coef < 0 else '+'} {body}")
        return f"{self.response_name} = " + " ".join(terms)

    def summary(self) -> str:
        """Generate R-style summary output."""
        width = 78
        level = int(round((1.0 - self.alpha) * 100))
        name_w = max(12, *(len(name) for name in self.term_names))

        lines = [
            "Ordinary Least Squares Regression",
            "=" * width,
            f"Response: {self.response_name}",
            f"Observations: {self.n}",
        ]
        n_dropped = self.info.get('n_dropped', 0)
        if n_dropped:
            lines.append(f"Rows dropped (missing values): {n_dropped}")
        lines += [
            "",
            "Coefficients:",
            "-" * width,
            f"{'':<{name_w}} {'Estimate':>12} {'Std.Error':>11} {'t value':>9} "
            f"{'Pr(>|t|)':>10} {'VIF':>8}",
            "-" * width,
        ]

        for i, name in enumerate(self.term_names):
            vif = self.vif[i]
            vif_str = "" if np.isnan(vif) else f"{vif:8.3f}"
            lines.append(
                f"{name:<{name_w}} {self.coefficients[i]:12.6f} "
                f"{self.standard_errors[i]:11.6f} {self.t_statistics[i]:9.3f} "
                f"{_format_p(self.p_values[i]):>10} {vif_str:>8} "
                f"{significance_stars(self.p_values[i])}"
            )

        lines += [
            "-" * width,
            "Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1",
            "",
            f"{level}% confidence intervals:",
        ]
        for i, name in enumerate(self.term_names):
            lines.append(
                f"  {name:<{name_w}} [{self.conf_int_lower[i]:.6f}, "
                f"{self.conf_int_upper[i]:.6f}]"
            )

        lines += [
            "",
            f"Residual standard error: {self.rmse:.6f} on {self.df_residual} degrees of freedom",
            f"Multiple R-squared: {self.r_squared:.6f},  "
            f"Adjusted R-squared: {self.adj_r_squared:.6f}",
            f"F-statistic: {self.f_statistic:.4f} on {self.df_model} and "
            f"{self.df_residual} DF,  p-value: {_format_p(self.f_p_value)}",
            f"Log-likelihood: {self.log_likelihood:.4f},  "
            f"AIC: {self.aic:.4f},  BIC: {self.bic:.4f}",
            f"Durbin-Watson: {self.diagnostics.durbin_watson:.4f},  "
            f"Condition number: {self.diagnostics.condition_number:.4g}",
        ]

        flagged = [
            f"  {name}: VIF {self.vif[i]:.2f} ({vif_severity(self.vif[i])})"
            for i, name in enumerate(self.term_names)
            if vif_severity(self.vif[i]) in ('moderate', 'high')
        ]
        if flagged:
            lines += ["", "Multicollinearity:"] + flagged

        if self.warnings:
            lines += ["", "Warnings:"] + [f"  {w}" for w in self.warnings]

        lines.append("-" * width)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """
        Plain-Python snapshot of the fit (floats, ints, lists, strings).

        Suitable for JSON or a persistence layer; NaN and inf are kept as
        float values.
        """
        diagnostics = self.diagnostics
        return {
            'response_name': self.response_name,
            'term_names': list(self.term_names),
            'include_intercept': self.include_intercept,
            'n': self.n,
            'k': self.k,
            'df_model': self.df_model,
            'df_residual': self.df_residual,
            'alpha': float(self.alpha),
            'coefficients': self.coefficients.tolist(),
            'standard_errors': self.standard_errors.tolist(),
            't_statistics': self.t_statistics.tolist(),
            'p_values': self.p_values.tolist(),
            'conf_int_lower': self.conf_int_lower.tolist(),
            'conf_int_upper': self.conf_int_upper.tolist(),
            'vif': self.vif.tolist(),
            'fitted_values': self.fitted_values.tolist(),
            'residuals': self.residuals.tolist(),
            'ssr': float(self.ssr),
            'sse': float(self.sse),
            'tss': float(self.tss),
            'mse': float(self.mse),
            'msr': float(self.msr),
            'rmse': float(self.rmse),
            'r_squared': float(self.r_squared),
            'adj_r_squared': float(self.adj_r_squared),
            'f_statistic': float(self.f_statistic),
            'f_p_value': float(self.f_p_value),
            'log_likelihood': float(self.log_likelihood),
            'aic': float(self.aic),
            'bic': float(self.bic),
            'condition_number': float(diagnostics.condition_number),
            'determinant': float(diagnostics.determinant),
            'durbin_watson': float(diagnostics.durbin_watson),
            'press': float(diagnostics.press),
            'backend_name': self.backend_name,
            'warnings': list(self.warnings),
        }

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n}, k={self.k}, "
            f"r_squared={self.r_squared:.4f}, backend={self.backend_name!r})"
        )


def _format_p(p: float) -> str:
    if np.isnan(p):
        return "NA"
    if p < 2e-16:
        return "< 2e-16"
    if p < 1e-4:
        return f"{p:.2e}"
    return f"{p:.4f}"
