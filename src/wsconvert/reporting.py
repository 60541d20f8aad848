"""Presentation helpers for conversion reports."""

from __future__ import annotations

from .stats import CategoryReport, CategoryStatus, ConversionReport


# Why: Render byte values as two upper-case hex digits across every report line.
def format_counts(entry: CategoryReport) -> str:
    pairs = ", ".join(f"[{value:02X}]={count}" for value, count in entry.counts)
    chars = "char" if entry.total == 1 else "chars"
    types = "type" if entry.distinct == 1 else "types"
    return f"{pairs} ({entry.total} {chars}, {entry.distinct} {types})"


def format_category(entry: CategoryReport) -> str:
    if entry.status is CategoryStatus.SKIPPED:
        detail = "Skipped"
    elif entry.status is CategoryStatus.NONE:
        detail = "None"
    else:
        detail = format_counts(entry)
    return f"{entry.category.label}: {detail}"


def format_dot_commands(report: ConversionReport) -> list[str]:
    if report.dot_commands_skipped:
        return ["Dot commands: Skipped"]
    if not (report.dot_commands_replaced or report.dot_commands_removed):
        return ["Dot commands: None"]
    return [
        "Dot commands after processing:",
        f"  Replaced: {report.dot_commands_replaced}",
        f"  Removed:  {report.dot_commands_removed}",
    ]


# Why: Assemble the console report printed after each conversion.
def format_report_lines(report: ConversionReport) -> list[str]:
    lines = format_dot_commands(report)
    lines.append("Control characters after processing:")
    lines.extend(f"  {format_category(entry)}" for entry in report.categories)
    lines.append(f"Bytes in: {report.bytes_in}, bytes out: {report.bytes_out}")
    if report.truncated:
        lines.append("Input ended mid-line; trailing text flushed as-is")
    if report.open_wrappers:
        lines.append("Wrappers left open: " + ", ".join(report.open_wrappers))
    return lines


def format_report(report: ConversionReport) -> str:
    return "\n".join(format_report_lines(report))


__all__ = [
    "format_category",
    "format_counts",
    "format_dot_commands",
    "format_report",
    "format_report_lines",
]
