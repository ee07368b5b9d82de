"""Locale-aware sort keys for text columns.

Two backends are supported:

``icu``
    PyICU's collator, tailored to the configured locale.  The default
    ``zh_Hant_TW`` orders Han characters by stroke count as used in Taiwan.
``uca``
    pyuca's pure-Python Unicode Collation Algorithm with the default table.
    Not locale-tailored (Han characters fall back to code-point order); only
    used when explicitly selected with ``LIYAO_COLLATION=uca``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable

from liyao.config import settings

logger = logging.getLogger(__name__)

SortKey = Callable[[str], Any]

BACKENDS = ("icu", "uca")


class CollationUnavailable(RuntimeError):
    """The selected collation backend cannot be loaded."""


def resolve_backend(backend: str) -> str:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown collation backend {backend!r}. Use: {' | '.join(BACKENDS)}")
    return backend


@lru_cache(maxsize=None)
def _icu_key(locale_name: str) -> SortKey:
    try:
        import icu  # noqa: PLC0415
    except ImportError as exc:
        raise CollationUnavailable(
            f"PyICU could not be imported ({exc}). Install PyICU with a matching "
            "system ICU library, or set LIYAO_COLLATION=uca to sort without "
            "locale tailoring."
        ) from exc

    try:
        collator = icu.Collator.createInstance(icu.Locale(locale_name))
    except icu.ICUError as exc:
        raise CollationUnavailable(f"No ICU collator for locale {locale_name!r}: {exc}") from exc
    return collator.getSortKey


@lru_cache(maxsize=None)
def _uca_key() -> SortKey:
    from pyuca import Collator  # noqa: PLC0415

    return Collator().sort_key


def text_sort_key(locale_name: str | None = None, backend: str | None = None) -> SortKey:
    """Return a ``str -> comparable`` key function for *locale_name*.

    Raises:
        ValueError: If *backend* is not one of :data:`BACKENDS`.
        CollationUnavailable: If the ICU backend cannot be loaded.
    """
    locale_name = locale_name or settings.sort_locale
    resolved = resolve_backend(backend or settings.collation)
    logger.debug("Using %s collation for locale %s", resolved, locale_name)
    if resolved == "icu":
        return _icu_key(locale_name)
    return _uca_key()
