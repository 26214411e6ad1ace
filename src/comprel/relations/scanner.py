"""Stylesheet/script reference scanning of markup samples.

Only literal ``<link>`` and ``<script src>`` tags are recognized; the markup is
not parsed or validated.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from comprel.config.constants import MARKUP_LANGUAGES, SCRIPT_LANGUAGES
from comprel.relations.models import ExternalReferences, MarkupSample

_LINK_TAG = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
_SCRIPT_TAG = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
_ATTR = re.compile(
    r"""\b(?P<name>[a-z][a-z0-9_:-]*)\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"'>]+))""",
    re.IGNORECASE,
)


def _attributes(tag: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR.finditer(tag):
        value = m.group("dq")
        if value is None:
            value = m.group("sq") if m.group("sq") is not None else m.group("bare")
        attrs.setdefault(m.group("name").lower(), value.strip())
    return attrs


def _is_stylesheet(attrs: dict[str, str]) -> bool:
    href = attrs.get("href", "")
    if not href:
        return False
    rel = attrs.get("rel", "").lower().split()
    return "stylesheet" in rel or href.lower().split("?", 1)[0].endswith(".css")


def is_markup(sample: MarkupSample) -> bool:
    return sample.language.strip().lower() in MARKUP_LANGUAGES


def is_script(sample: MarkupSample) -> bool:
    return sample.language.strip().lower() in SCRIPT_LANGUAGES


def scan(samples: Iterable[MarkupSample]) -> ExternalReferences:
    """Collect stylesheet and script URLs from markup samples.

    Discovery order is preserved and duplicates are dropped. Non-markup
    samples are skipped.
    """
    refs = ExternalReferences()
    for sample in samples:
        if not is_markup(sample):
            continue

        for tag in _LINK_TAG.findall(sample.code):
            attrs = _attributes(tag)
            if _is_stylesheet(attrs) and attrs["href"] not in refs.stylesheets:
                refs.stylesheets.append(attrs["href"])

        for tag in _SCRIPT_TAG.findall(sample.code):
            src = _attributes(tag).get("src")
            if src and src not in refs.scripts:
                refs.scripts.append(src)

    return refs
