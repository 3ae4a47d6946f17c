from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from practiceops.core.service_lines import (
    FALLBACK_COLOR,
    SERVICE_LINE_KEYWORDS,
    ServiceLine,
    classify_service_line,
    leading_token,
    service_line_catalogue,
    service_line_color,
)


def test_prospect_marker_wins_over_everything():
    assert classify_service_line("PROSPECT: John Smith") is ServiceLine.PROSPECTS
    assert classify_service_line("TAX - prospect review", "Motta Internal") is ServiceLine.PROSPECTS


def test_internal_client_overrides_title_keywords():
    assert classify_service_line("TAX - 1040 Prep", client_name="Motta Internal") is ServiceLine.MOTTA
    assert classify_service_line("", client_name="motta financial") is ServiceLine.MOTTA


@pytest.mark.parametrize("title", ["", None, "   "])
def test_missing_title_is_other(title):
    expected = ServiceLine.OTHER
    assert classify_service_line(title) is expected


def test_leading_token_uses_first_delimiter():
    assert leading_token("tax | 2024 | return") == "TAX"
    assert leading_token("Bookkeeping: March - cleanup") == "BOOKKEEPING"
    assert leading_token("no delimiter here") == "NO DELIMITER HERE"


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("TAX - 1040 Prep", ServiceLine.TAX),
        ("TAXES2024: Smith", ServiceLine.TAX),
        ("1120 | corp return", ServiceLine.TAX),
        ("ACCT | Monthly close", ServiceLine.ACCOUNTING),
        ("BOOKXYZ: cleanup", ServiceLine.BOOKKEEPING),
        ("BK - Q1", ServiceLine.BOOKKEEPING),
        ("ADV: Planning session", ServiceLine.ADVISORY),
        ("INTERNAL - team offsite", ServiceLine.MOTTA),
        ("ALFRED | rollout", ServiceLine.ALFRED_AI),
        ("WEALTH MANAGEMENT: review", ServiceLine.MWM),
        ("SEED - round docs", ServiceLine.SUFFOLK),
        ("Random Task", ServiceLine.OTHER),
    ],
)
def test_keyword_prefix_classification(title, expected):
    assert classify_service_line(title) is expected


def test_declaration_order_decides_overlaps():
    # "TAX" and "AI" both appear in the token; TAX is declared first
    assert classify_service_line("TAXAI: review") is ServiceLine.TAX
    # "ADVAI" contains both ADV and AI; ADVISORY precedes ALFRED AI
    assert classify_service_line("ADVAI: kickoff") is ServiceLine.ADVISORY


def test_only_leading_token_is_matched():
    assert classify_service_line("Client call - TAX follow up") is ServiceLine.OTHER


def test_classification_is_total_and_repeatable():
    titles = ["", "x", "PROSPECT", "tax", "Zzz | 1040", "::", "-", "|BOOK"]
    members = set(ServiceLine)
    for title in titles:
        first = classify_service_line(title)
        assert first in members
        assert classify_service_line(title) is first


def test_keyword_table_is_immutable_and_ordered():
    assert isinstance(SERVICE_LINE_KEYWORDS, tuple)
    names = [line for line, _ in SERVICE_LINE_KEYWORDS]
    assert names[0] is ServiceLine.TAX
    assert names[-1] is ServiceLine.PROSPECTS
    assert ServiceLine.OTHER not in names


def test_colors():
    assert service_line_color(ServiceLine.TAX) == "bg-blue-100 text-blue-700 border-blue-300"
    assert service_line_color("BOOKKEEPING") == "bg-purple-100 text-purple-700 border-purple-300"
    assert service_line_color(ServiceLine.OTHER) == FALLBACK_COLOR
    assert service_line_color("NOT A LINE") == FALLBACK_COLOR
    assert service_line_color(None) == FALLBACK_COLOR


def test_catalogue_lists_every_line_once():
    catalogue = service_line_catalogue()
    assert [entry["name"] for entry in catalogue] == [line.value for line in ServiceLine]
    assert catalogue[-1]["keywords"] == []
