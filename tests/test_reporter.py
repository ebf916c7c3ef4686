"""Tests for the text reports, run against the sample snapshot."""

from dataclasses import replace

import pytest

from dm_inspect.models import ReportOptions
from dm_inspect.registry import StaticRegistry, load_snapshot
from dm_inspect.reporter import render_component_list, render_statistics
from dm_inspect.service import diagnose, list_and_filter

from helpers import AR, REGISTRY_JSON, comp, dep

VERBOSE = [
    "[5] com.acme.store",
    " [1] com.acme.Store registered",
    "    com.acme.Log service available required",
    " [4] com.acme.Pricing(currency=eur,mode=live) unregistered",
    "    com.acme.Rates service unavailable required",
    "    com.acme.pricing configuration unavailable required",
    "[7] com.acme.web",
    " [2] com.acme.Web unregistered",
    "    com.acme.Cart service unavailable required",
    "    com.acme.Store service available required",
    " [3] com.acme.Cart unregistered",
    "    com.acme.Pricing(currency=eur) service unavailable required",
    " [10] com.acme.Metrics registered",
    "    com.acme.Exporter service unavailable optional",
    "[9] com.acme.extras",
    " [6] com.acme.Audit unregistered",
    "    com.acme.Report service unavailable required",
    " [8] com.acme.Report unregistered",
    "    com.acme.Audit service unavailable required",
]

COMPACT = [
    "[5] c.a.store",
    " [1] c.a.Store R(c.a.Log S AR)",
    " [4] c.a.Pricing(currency=eur,mode=live) U(c.a.Rates S UR c.a.pricing C UR)",
    "[7] c.a.web",
    " [2] c.a.Web U(c.a.Cart S UR c.a.Store S AR)",
    " [3] c.a.Cart U(c.a.Pricing(currency=eur) S UR)",
    " [10] c.a.Metrics R(c.a.Exporter S UO)",
    "[9] c.a.extras",
    " [6] c.a.Audit U(c.a.Report S UR)",
    " [8] c.a.Report U(c.a.Audit S UR)",
]

DIAGNOSIS = [
    "5 missing dependencies found.",
    "-------------------------------------",
    "Please note that the following bundles are in the RESOLVED state:",
    " * [9] com.acme.extras",
    "Please note that the following bundles are in the INSTALLED state:",
    " * [11] com.acme.legacy",
    "Circular dependency found:",
    " * com.acme.Report -> com.acme.Audit -> com.acme.Report",
    "Circular dependency found:",
    " * com.acme.Audit -> com.acme.Report -> com.acme.Audit",
    "The following configuration(s) are missing:",
    " * com.acme.pricing for bundle com.acme.store",
    "The following service(s) are missing:",
    " * com.acme.Audit and needs:",
    "    com.acme.Report",
    "   to work",
    " * com.acme.Rates is not found in the service registry",
    " * com.acme.Report and needs:",
    "    com.acme.Audit",
    "   to work",
]


@pytest.fixture
def registry():
    return load_snapshot(REGISTRY_JSON)


class TestComponentList:
    def test_verbose(self, registry):
        assert list_and_filter(registry, ReportOptions()) == VERBOSE

    def test_compact(self, registry):
        assert list_and_filter(registry, ReportOptions(compact=True)) == COMPACT

    def test_repeatable(self, registry):
        options = ReportOptions(compact=True)
        assert list_and_filter(registry, options) == list_and_filter(registry, options)

    def test_nodeps(self, registry):
        lines = list_and_filter(registry, ReportOptions(hide_deps=True))
        assert lines[:3] == [
            "[5] com.acme.store",
            " [1] com.acme.Store registered",
            " [4] com.acme.Pricing(currency=eur,mode=live) unregistered",
        ]
        assert not any(line.startswith("    ") for line in lines)

    def test_notavail(self, registry):
        lines = list_and_filter(registry, ReportOptions(not_available_only=True))
        assert " [1] com.acme.Store registered" not in lines
        assert " [10] com.acme.Metrics registered" not in lines
        assert "    com.acme.Store service available required" not in lines
        assert "    com.acme.Cart service unavailable required" in lines

    def test_unit_header_once_per_run(self, registry):
        lines = list_and_filter(registry, ReportOptions(unit_filter=["com.acme.web"]))
        assert lines[0] == "[7] com.acme.web"
        assert sum(1 for line in lines if line.startswith("[")) == 1

    def test_unit_filter_by_id(self, registry):
        lines = list_and_filter(registry, ReportOptions(unit_filter=["9"], hide_deps=True))
        assert lines == [
            "[9] com.acme.extras",
            " [6] com.acme.Audit unregistered",
            " [8] com.acme.Report unregistered",
        ]

    def test_name_pattern_and_service_filter_or(self, registry):
        options = ReportOptions(
            hide_deps=True,
            service_filter="protocol=http",
            name_patterns=[r".*\.CartImpl"],
        )
        assert list_and_filter(registry, options) == [
            "[7] com.acme.web",
            " [3] com.acme.Cart unregistered",
            " [10] com.acme.Metrics registered",
        ]

    def test_id_filter(self, registry):
        lines = list_and_filter(registry, ReportOptions(id_filter={8}, hide_deps=True))
        assert lines == ["[9] com.acme.extras", " [8] com.acme.Report unregistered"]

    def test_stats(self, registry):
        lines = list_and_filter(registry, ReportOptions(stats=True, id_filter={2, 3}))
        assert lines[-4:] == [
            "Statistics:",
            " - Units: 6",
            " - Components: 2",
            " - Dependencies: 3",
        ]

    def test_compact_with_no_dependencies(self):
        lines = render_component_list([comp(1, "org.x.Lonely")], ReportOptions(compact=True))
        assert lines == ["[3] o.e.app", " [1] o.x.Lonely U"]

    def test_compact_notavail_keeps_only_unavailable(self):
        component = comp(1, "org.x.A", dep("org.x.B"), dep("org.x.C", AR))
        lines = render_component_list(
            [component], ReportOptions(compact=True, not_available_only=True),
        )
        assert lines[1] == " [1] o.x.A U(o.x.B S UR)"

    def test_state_label_is_displayed(self):
        component = replace(comp(1, "A"), state_label="waiting for required")
        lines = render_component_list([component], ReportOptions(compact=True))
        assert lines[1] == " [1] A WFR"


def test_statistics_without_dependencies():
    assert render_statistics(2, [comp(1, "A", dep("B"))], include_dependencies=False) == [
        "Statistics:",
        " - Units: 2",
        " - Components: 1",
    ]


class TestDiagnosis:
    def test_full_report(self, registry):
        assert diagnose(registry) == DIAGNOSIS

    def test_repeatable(self, registry):
        assert diagnose(registry) == diagnose(registry)

    def test_nothing_missing(self):
        registry = StaticRegistry([comp(1, "A", registered=True)])
        assert diagnose(registry) == ["No missing dependencies found."]

    def test_other_kinds_are_listed(self):
        registry = StaticRegistry([comp(1, "A", dep("some.bundle", kind="bundle"))])
        lines = diagnose(registry)
        assert lines[-2:] == [
            "The following other dependencies are missing:",
            " * some.bundle (bundle) is not found in the registry",
        ]
