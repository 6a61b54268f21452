"""
Named regular expressions for scraping values out of pod pages.

The pod exposes no token endpoint and no JSON API for the aspect/service
lists, so everything is pulled out of server-rendered HTML:

* ``token``    – ``<meta name="csrf-token" content="…">`` (either attribute order)
* ``aspects``  – ``"aspects":[…]`` inlined in the bookmarklet page
* ``services`` – ``"configured_services":[…]`` inlined in the same page
"""

import re

PATTERNS: dict[str, re.Pattern[str]] = {
    "token":    re.compile(r'content="(.*?)" name="csrf-token"|name="csrf-token" content="(.*?)"'),
    "aspects":  re.compile(r'"aspects":(\[.*?\])'),
    "services": re.compile(r'"configured_services":(\[.*?\])'),
}


def extract_pattern(body: str, key: str) -> str | None:
    """
    Return the first capture of the named pattern *key* found in *body*,
    stripped of surrounding whitespace.

    Alternations leave the non-matching group as ``None``; the last group
    that did participate wins.  An empty capture is reported as ``None``
    so callers never store an empty token.
    """
    if not body:
        return None
    m = PATTERNS[key].search(body)
    if not m:
        return None
    groups = [g for g in m.groups() if g is not None]
    if not groups:
        return None
    value = groups[-1].strip()
    return value or None
