"""Tests for report rendering and coverage."""

from dataclasses import replace

from helpers import method_decl, type_decl

from xmldoccheck.models import DeclarationKind, Issue, IssueKind, Report
from xmldoccheck.reporters import compute_coverage, render_github, render_summary, render_text


def make_report() -> Report:
    foo = replace(type_decl("Foo"), line=3, column=14)
    report = Report()
    report.add(
        Issue(
            IssueKind.MISSING_DOCUMENTATION_BLOCK,
            "Class Foo does not have any XML comments",
            subject=foo,
            path="src/Foo.cs",
        )
    )
    report.add(Issue(IssueKind.UNIT_FAILURE, "Unable to analyze Bad.cs: boom", path="Bad.cs"))
    return report


def test_render_text():
    assert render_text(make_report()).splitlines() == [
        "Class Foo does not have any XML comments",
        "Unable to analyze Bad.cs: boom",
    ]


def test_render_text_with_locations():
    assert render_text(make_report(), locations=True).splitlines() == [
        "src/Foo.cs:3: Class Foo does not have any XML comments",
        "Bad.cs: Unable to analyze Bad.cs: boom",
    ]


def test_render_github():
    assert render_github(make_report()).splitlines() == [
        "::warning file=src/Foo.cs,line=3,col=14,title=missing-documentation-block::"
        "Class Foo does not have any XML comments",
        "::warning file=Bad.cs,title=unit-failure::Unable to analyze Bad.cs: boom",
    ]


def test_render_github_escapes():
    report = Report()
    report.add(Issue(IssueKind.UNIT_FAILURE, "100% broken\nreally", path="C:\\a,b.cs"))
    assert render_github(report) == (
        "::warning file=C%3A\\a%2Cb.cs,title=unit-failure::100%25 broken%0Areally"
    )


def test_empty_report_renders_nothing():
    assert render_text(Report()) == ""
    assert render_github(Report()) == ""


def test_coverage():
    report = Report()
    report.record(DeclarationKind.TYPE, documented=True)
    report.record(DeclarationKind.TYPE, documented=False)
    report.record(DeclarationKind.ROUTINE, documented=True)
    assert compute_coverage(report) == {"type": 0.5, "property": 1.0, "routine": 1.0}


def test_summary():
    report = Report()
    report.record(DeclarationKind.TYPE, documented=False)
    report.add(Issue(IssueKind.MISSING_DOCUMENTATION_BLOCK, "x", subject=method_decl("M")))
    report.units_checked = 2
    report.units_failed = 1
    assert render_summary(report) == (
        "1 issue(s) in 2 file(s), 1 failed. Coverage: type 0%, property 100%, routine 100%"
    )
