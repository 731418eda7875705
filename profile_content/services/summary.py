from __future__ import annotations

from ..models.processing_result import AggregationReport

"""SUMMARY line rendering for one fetch-normalize cycle."""

SUMMARY_LABEL = "SUMMARY"


def render_summary_body(report: AggregationReport) -> str:
    """Counters of a report without the SUMMARY label (log_summary adds it).

    Examples:
        >>> r = AggregationReport(total_rows=4, config_rows=2, project_rows=1, talk_rows=1)
        >>> render_summary_body(r)
        'rows=4 config=2 projects=1 talks=1 skipped=0'
    """
    return (
        f"rows={report.total_rows} "
        f"config={report.config_rows} "
        f"projects={report.project_rows} "
        f"talks={report.talk_rows} "
        f"skipped={report.skipped_rows}"
    )


def render_summary_line(report: AggregationReport) -> str:
    """Render the full SUMMARY line for an aggregation report.

    Format:
    SUMMARY rows={total} config={config} projects={projects} talks={talks} skipped={skipped}
    """
    return f"{SUMMARY_LABEL} {render_summary_body(report)}"
