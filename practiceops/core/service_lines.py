"""Service-line classification for practice-management work items.

Work item titles follow a loose ``PREFIX | description`` convention (``TAX -
1040 Prep``, ``BOOK: March cleanup``).  The leading prefix decides the
service line.  Two overrides run first:

* any title mentioning a prospect is a ``PROSPECTS`` item;
* any work done for the firm itself (client name containing ``MOTTA``) is
  internal.

Everything else is matched against :data:`SERVICE_LINE_KEYWORDS` in
declaration order, so the order of that table matters when two lines share a
keyword substring (``AI`` is contained in many tokens, for example).
"""
from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ServiceLine(str, Enum):
    TAX = "TAX"
    ACCOUNTING = "ACCOUNTING"
    BOOKKEEPING = "BOOKKEEPING"
    ADVISORY = "ADVISORY"
    MOTTA = "MOTTA"
    ALFRED_AI = "ALFRED AI"
    MWM = "MWM"
    SUFFOLK = "SUFFOLK"
    PROSPECTS = "PROSPECTS"
    OTHER = "OTHER"


SERVICE_LINE_KEYWORDS: tuple[tuple[ServiceLine, tuple[str, ...]], ...] = (
    (ServiceLine.TAX, ("TAX", "TAXES", "1040", "1120", "1065")),
    (ServiceLine.ACCOUNTING, ("ACCT", "ACCOUNTING", "ACCTG")),
    (ServiceLine.BOOKKEEPING, ("BOOK", "BOOKKEEPING", "BK")),
    (ServiceLine.ADVISORY, ("ADVS", "ADVISORY", "ADV")),
    (ServiceLine.MOTTA, ("MOTTA", "INTERNAL")),
    (ServiceLine.ALFRED_AI, ("ALFRED", "AI", "AAI")),
    (ServiceLine.MWM, ("MWM", "WEALTH", "WEALTH MANAGEMENT", "WM")),
    (ServiceLine.SUFFOLK, ("SUFFOLK", "SUFF", "SEED")),
    (ServiceLine.PROSPECTS, ("PROSPECT", "PROSPECTS")),
)

FALLBACK_COLOR = "bg-slate-100 text-slate-700 border-slate-300"

SERVICE_LINE_COLORS: Mapping[ServiceLine, str] = MappingProxyType(
    {
        ServiceLine.TAX: "bg-blue-100 text-blue-700 border-blue-300",
        ServiceLine.ACCOUNTING: "bg-green-100 text-green-700 border-green-300",
        ServiceLine.BOOKKEEPING: "bg-purple-100 text-purple-700 border-purple-300",
        ServiceLine.ADVISORY: "bg-orange-100 text-orange-700 border-orange-300",
        ServiceLine.MOTTA: "bg-gray-100 text-gray-700 border-gray-300",
        ServiceLine.ALFRED_AI: "bg-indigo-100 text-indigo-700 border-indigo-300",
        ServiceLine.MWM: "bg-red-100 text-red-700 border-red-300",
        ServiceLine.SUFFOLK: "bg-teal-100 text-teal-700 border-teal-300",
        ServiceLine.PROSPECTS: "bg-yellow-100 text-yellow-700 border-yellow-300",
    }
)

PROSPECT_MARKER = "PROSPECT"
INTERNAL_CLIENT_MARKER = "MOTTA"

_PREFIX_DELIMITERS = re.compile(r"[|\-:]")


def leading_token(title: str) -> str:
    """Return the upper-cased prefix of ``title`` before the first ``|``, ``-`` or ``:``."""

    return _PREFIX_DELIMITERS.split(title, maxsplit=1)[0].strip().upper()


def classify_service_line(title: str | None, client_name: str | None = None) -> ServiceLine:
    """Map a work item title (and optionally its client) to a service line.

    Never raises; anything unrecognised is ``ServiceLine.OTHER``.
    """

    if title and PROSPECT_MARKER in title.upper():
        return ServiceLine.PROSPECTS

    if client_name and INTERNAL_CLIENT_MARKER in client_name.upper():
        return ServiceLine.MOTTA

    if not title:
        return ServiceLine.OTHER

    token = leading_token(title)
    for line, keywords in SERVICE_LINE_KEYWORDS:
        if line is ServiceLine.PROSPECTS:
            continue
        # containment, not equality: "TAXES2024" is a TAX item
        if any(keyword in token for keyword in keywords):
            return line

    return ServiceLine.OTHER


def service_line_color(line: ServiceLine | str | None) -> str:
    try:
        key = ServiceLine(line)
    except ValueError:
        return FALLBACK_COLOR
    return SERVICE_LINE_COLORS.get(key, FALLBACK_COLOR)


def service_line_catalogue() -> list[dict[str, object]]:
    """Describe every service line in declaration order, ``OTHER`` last."""

    catalogue: list[dict[str, object]] = [
        {"name": line.value, "keywords": list(keywords), "color": service_line_color(line)}
        for line, keywords in SERVICE_LINE_KEYWORDS
    ]
    catalogue.append({"name": ServiceLine.OTHER.value, "keywords": [], "color": FALLBACK_COLOR})
    return catalogue
