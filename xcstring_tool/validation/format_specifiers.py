"""Detection and comparison of printf-style format specifiers."""

import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Tuple


@dataclass
class FormatIssue:
    """A disagreement between source and translation specifiers."""

    error_type: str  # count_mismatch, missing, extra, order_changed
    message: str
    severity: str  # critical, warning


# Matches: %[n$][flags][width][.precision][length]type, and the escaped %%
FORMAT_SPECIFIER_PATTERN = re.compile(
    r"%"
    r"(?:"
    r"(?:\d+\$)?"
    r"[-+0 #]*"
    r"(?:\d+|\*)?"
    r"(?:\.(?:\d+|\*))?"
    r"(?:hh|h|ll|l|L|z|j|t|q)?"
    r"[diuoxXfFeEgGaAcCsSp@]"
    r"|%"
    r")"
)


def extract_format_specifiers(text: str) -> List[str]:
    """Extract format specifiers from text in order, ignoring escaped "%%"."""
    return [
        match.group(0)
        for match in FORMAT_SPECIFIER_PATTERN.finditer(text)
        if match.group(0) != "%%"
    ]


def has_format_specifiers(text: str) -> bool:
    return bool(extract_format_specifiers(text))


class FormatSpecifierValidator:
    """
    Checks that a translation keeps the format specifiers of its source.

    Handles object (%@), integer (%d, %ld, %lld), float (%f, %.2f) and
    positional (%1$@, %2$lld) specifiers.
    """

    def validate(self, source: str, translation: str) -> Tuple[bool, List[FormatIssue]]:
        """
        Validate that specifiers in source match those in translation.

        Args:
            source: Original source text
            translation: Translated text

        Returns:
            Tuple of (is_valid, list of issues)
        """
        issues = []

        source_specs = extract_format_specifiers(source)
        trans_specs = extract_format_specifiers(translation)

        if len(source_specs) != len(trans_specs):
            issues.append(
                FormatIssue(
                    error_type="count_mismatch",
                    message=f"Specifier count mismatch: source has {len(source_specs)}, "
                    f"translation has {len(trans_specs)}",
                    severity="critical",
                )
            )

        source_counts = Counter(source_specs)
        trans_counts = Counter(trans_specs)

        for spec in sorted(source_counts - trans_counts):
            issues.append(
                FormatIssue(
                    error_type="missing",
                    message=f"Missing specifier in translation: {spec}",
                    severity="critical",
                )
            )

        for spec in sorted(trans_counts - source_counts):
            issues.append(
                FormatIssue(
                    error_type="extra",
                    message=f"Extra specifier in translation: {spec}",
                    severity="critical",
                )
            )

        # Reordering only matters for non-positional specifiers
        if not issues:
            source_plain = [s for s in source_specs if "$" not in s]
            trans_plain = [s for s in trans_specs if "$" not in s]
            if source_plain != trans_plain:
                issues.append(
                    FormatIssue(
                        error_type="order_changed",
                        message="Non-positional specifier order changed "
                        "(may cause runtime issues)",
                        severity="warning",
                    )
                )

        is_valid = not any(issue.severity == "critical" for issue in issues)
        return is_valid, issues
