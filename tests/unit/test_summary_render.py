from __future__ import annotations

import re

from profile_content.models.processing_result import AggregationReport
from profile_content.services.summary import render_summary_body, render_summary_line

SUMMARY_RE = re.compile(r"^SUMMARY rows=\d+ config=\d+ projects=\d+ talks=\d+ skipped=\d+$")


def test_render_empty_report():
    line = render_summary_line(AggregationReport())
    assert line == "SUMMARY rows=0 config=0 projects=0 talks=0 skipped=0"
    assert SUMMARY_RE.match(line)


def test_render_counts_skipped_rows():
    report = AggregationReport(total_rows=5, config_rows=2, project_rows=1, talk_rows=1)
    report.skip("a", "NO_KEY_COLUMN")
    assert render_summary_line(report) == "SUMMARY rows=5 config=2 projects=1 talks=1 skipped=1"


def test_render_body_has_no_label():
    report = AggregationReport(total_rows=2, config_rows=1, talk_rows=1)
    assert render_summary_body(report) == "rows=2 config=1 projects=0 talks=1 skipped=0"
    assert render_summary_line(report) == f"SUMMARY {render_summary_body(report)}"
