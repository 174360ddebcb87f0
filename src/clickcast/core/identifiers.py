# -*- coding: utf-8 -*-
"""Slide identifier generation.

Identifiers only have to keep asset file names apart, so they come from the
non-cryptographic ``random`` module. An id carries 128 random bits, which puts
the chance of any collision among ``n`` ids at roughly ``n**2 / 2**129``
(about 1e-33 for a thousand slides).
"""

from __future__ import annotations

import random
import re

SLIDE_ID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")

_rng = random.Random()


def _hex_block(rng: random.Random, length: int) -> str:
    return f"{rng.getrandbits(4 * length):0{length}x}"


def generate_slide_id(rng: random.Random | None = None) -> str:
    """Return a random ``8-4-4-4-12`` lower-case hex token."""
    source = rng or _rng
    return "-".join(_hex_block(source, length) for length in (8, 4, 4, 4, 12))


def is_slide_id(value: str) -> bool:
    return SLIDE_ID_PATTERN.fullmatch(value) is not None
