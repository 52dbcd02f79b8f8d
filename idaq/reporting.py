"""Compose the plain-language lab report for a two-sample comparison.

The report is a derived view of :class:`idaq.schema.ComparisonResult`: it only
formats values that were already computed, so the result record stays the
single source of truth and can be tested without string matching.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .schema import (
    VARIANCE_METHOD_TEST,
    VARIANCE_MODE_EQUAL,
    ComparisonResult,
    DescriptiveStats,
    TestResult,
    VarianceAssessment,
)

REPORT_TITLE = "IDAQ LAB REPORT: T-TEST ANALYSIS"

SECTION_TITLES: Tuple[str, ...] = (
    "Descriptive comparison",
    "Variance check",
    "Test selection",
    "P-value meaning",
    "Verdict",
    "Confidence interval",
    "Effect size",
)


@dataclass(frozen=True)
class ReportSection:
    title: str
    lines: Tuple[str, ...]


def _num(value: float, digits: int = 3) -> str:
    """Format ``value`` with fixed decimals; NaN reads as 'undefined'."""
    value = float(value)
    if math.isnan(value):
        return "undefined"
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    return f"{value:.{digits}f}"


def _percent(fraction: float) -> str:
    return f"{100.0 * fraction:g}%"


def _descriptive_section(stats1: DescriptiveStats, stats2: DescriptiveStats, test: TestResult):
    lines = []
    for label, s in (("Group 1", stats1), ("Group 2", stats2)):
        lines.append(
            f"{label}: n = {s.count}, mean = {_num(s.mean)}, "
            f"SD = {_num(s.standard_deviation)}, SE = {_num(s.standard_error)}"
        )
    lines.append(f"Difference of means (Group 1 - Group 2): {_num(test.mean_difference)}")
    return ReportSection(SECTION_TITLES[0], tuple(lines))


def _variance_section(variance: VarianceAssessment, alpha: float):
    if variance.method == VARIANCE_METHOD_TEST:
        low, high = variance.ratio_confidence_interval or (math.nan, math.nan)
        lines = [
            "Method: F-test for equal variances",
            f"F = {_num(variance.f_statistic)}, p = {_num(variance.equality_pvalue, 4)}",
            f"Variance ratio CI ({_percent(1.0 - alpha)}): [{_num(low)}, {_num(high)}]",
        ]
        if variance.variances_equal:
            lines.append(f"Decision: variances are compatible (p >= {alpha:g})")
        else:
            lines.append(f"Decision: variances differ (p < {alpha:g})")
    else:
        lines = [
            "Method: variance-ratio rule of thumb (F-test not used)",
            f"Larger/smaller variance ratio = {_num(variance.variance_ratio, 2)} "
            f"(threshold {variance.threshold:g})",
        ]
        if variance.variances_equal:
            lines.append("Decision: variances are compatible (ratio within threshold)")
        else:
            lines.append("Decision: variances differ (ratio above threshold)")
    return ReportSection(SECTION_TITLES[1], tuple(lines))


def _degenerate_note(test: TestResult) -> str:
    if test.standard_error == 0.0:
        cause = "the standard error is zero (neither group shows any spread)"
    else:
        cause = "the standard error is undefined"
    return f"Note: {cause}, so the t-statistic is degenerate."


def _test_section(test: TestResult):
    if test.variance_mode == VARIANCE_MODE_EQUAL:
        name = "Student's t-test with pooled variance (equal variances)"
    else:
        name = "Welch's t-test (unequal variances)"
    lines = [
        f"Test: {name}",
        f"T-STATISTIC:   {_num(test.t_statistic)} (Signal-to-Noise Ratio)",
        f"DEG. FREEDOM:  {_num(test.degrees_of_freedom, 2)}",
        f"P-VALUE:       {_num(test.p_value, 4)}",
    ]
    if test.degenerate:
        lines.append(_degenerate_note(test))
    return ReportSection(SECTION_TITLES[2], tuple(lines))


def _pvalue_section(test: TestResult):
    if math.isnan(test.p_value):
        meaning = (
            "The p-value is undefined here: without a usable standard error the "
            "data cannot separate a real difference from random noise."
        )
    else:
        meaning = (
            f"There is a {100.0 * test.p_value:.2f}% probability of seeing a "
            "difference at least this large if the two groups truly had the same mean."
        )
    lines = [
        "The p-value measures how surprising the observed difference would be "
        "if there were no real difference between the groups.",
        meaning,
        f"Cutoff: alpha = {test.alpha:g}; a result is significant when p < {test.alpha:g}.",
    ]
    return ReportSection(SECTION_TITLES[3], tuple(lines))


def _verdict_section(test: TestResult):
    if test.reject_null:
        lines = (
            "STATUS: STATISTICALLY SIGNIFICANT (Reject Null)",
            "The instrumentation data shows a true physical difference",
            "between the two measurement sets.",
        )
    else:
        lines = (
            "STATUS: NOT SIGNIFICANT (Fail to Reject Null)",
            "The difference between measurement sets is within the",
            "expected range of sensor noise or random variation.",
        )
    return ReportSection(SECTION_TITLES[4], lines)


def _interval_section(test: TestResult):
    low, high = test.confidence_interval
    lines = [
        f"CONF. INT.:    [{_num(low)}, {_num(high)}]",
        f"We are {_percent(1.0 - test.alpha)} confident that the true difference "
        "between the groups lies in this range.",
    ]
    if test.interval_contains_zero:
        lines.append("The interval straddles zero: 'no difference' remains plausible.")
    elif low > 0:
        lines.append("The interval lies entirely above zero: Group 1 reads higher.")
    else:
        lines.append("The interval lies entirely below zero: Group 1 reads lower.")
    return ReportSection(SECTION_TITLES[5], tuple(lines))


def _effect_section(result: ComparisonResult):
    effect = result.effect
    return ReportSection(
        SECTION_TITLES[6],
        (
            f"Cohen's d: {_num(effect.cohens_d, 2)} ({effect.magnitude_class} effect)",
            f"Pooled SD used for standardization: {_num(effect.pooled_standard_deviation)}",
            "Thresholds on |d|: <0.2 very small, <0.5 small, <0.8 medium, otherwise large.",
        ),
    )


def compose_report(result: ComparisonResult) -> List[ReportSection]:
    """Build the ordered report sections for ``result``.

    Returns:
        list[ReportSection]: Sections in the order of ``SECTION_TITLES``.
    """
    test = result.test
    return [
        _descriptive_section(result.stats1, result.stats2, test),
        _variance_section(result.variance, test.alpha),
        _test_section(test),
        _pvalue_section(test),
        _verdict_section(test),
        _interval_section(test),
        _effect_section(result),
    ]


def render_report(sections: Sequence[ReportSection]) -> str:
    """Render report sections as banner-framed console text."""
    header = f"{'=' * 10} {REPORT_TITLE} {'=' * 10}"
    rule = "-" * len(header)
    out = ["", header]
    for i, section in enumerate(sections):
        if i:
            out.append(rule)
        out.append(f"{section.title.upper()}")
        out.extend(section.lines)
    out.append("=" * len(header))
    return "\n".join(out) + "\n"
