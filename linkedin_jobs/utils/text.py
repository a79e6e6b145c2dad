from __future__ import annotations

import re


_whitespace_re = re.compile(r"\s+")


def normalize_whitespace(text: str, separator: str = " ") -> str:
    return _whitespace_re.sub(separator, text.strip())
