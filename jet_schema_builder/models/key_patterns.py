# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Map ``patternProperties`` regexes to the literal key shapes they admit.

Only anchored literal prefixes/suffixes and plain literal bodies are
understood. Anything else becomes "any string key", which is always a
safe over-approximation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Tuple

_META = frozenset(".^$*+?()[]{}|\\")
_OPTIONAL_QUANTIFIERS = frozenset("*?{")
_BRACKET_RE = re.compile(r"\[[^\]]*\]")
_SEPARATORS = ("_", "-", "\\.")
_ANY_PATTERNS = frozenset({"", ".*", "^.*", ".*$", "^.*$", ".+", "^.+$"})


@dataclass(frozen=True)
class KeyPattern:
    """Keys starting with ``prefix``, ending with ``suffix`` and containing ``contains``.

    With ``exact`` set, the only admitted key is ``prefix`` itself.
    """

    regex: str = ""
    prefix: str = ""
    suffix: str = ""
    contains: str = ""
    exact: bool = False

    @property
    def is_any(self) -> bool:
        return not (self.exact or self.prefix or self.suffix or self.contains)

    def matches(self, key: str) -> bool:
        if self.exact:
            return key == self.prefix
        if len(key) < len(self.prefix) + len(self.suffix):
            return False
        return key.startswith(self.prefix) and key.endswith(self.suffix) and self.contains in key

    def describe(self) -> str:
        if self.exact:
            return f'"{self.prefix}"'
        if self.is_any:
            return "string"
        if self.contains:
            return f"`${{string}}{self.contains}${{string}}`"
        return f"`{self.prefix}${{string}}{self.suffix}`"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"regex": self.regex}
        if self.exact:
            result["exact"] = self.prefix
            return result
        for name in ("prefix", "suffix", "contains"):
            value = getattr(self, name)
            if value:
                result[name] = value
        return result


def _leading_literal(body: str) -> Tuple[str, int]:
    """Collect the literal run at the start of ``body``.

    Returns the literal and the index where parsing stopped.
    """
    chars = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\":
            if i + 1 < len(body) and not body[i + 1].isalnum():
                chars.append(body[i + 1])
                i += 2
                continue
            break
        if c in _META:
            break
        chars.append(c)
        i += 1
    if i < len(body) and body[i] in _OPTIONAL_QUANTIFIERS and chars:
        # the last literal may occur zero times
        chars.pop()
    return "".join(chars), i


def _trailing_literal(body: str) -> str:
    chars = []
    i = len(body) - 1
    while i >= 0:
        c = body[i]
        if i > 0 and body[i - 1] == "\\":
            if c.isalnum():
                break
            chars.append(c)
            i -= 2
            continue
        if c in _META:
            break
        chars.append(c)
        i -= 1
    return "".join(reversed(chars))


def key_pattern_for(regex: str) -> KeyPattern:
    """Describe which literal keys ``regex`` can match.

    >>> key_pattern_for("^x-").prefix
    'x-'
    """
    if not isinstance(regex, str) or regex in _ANY_PATTERNS:
        return KeyPattern(regex=str(regex))

    anchored_start = regex.startswith("^")
    anchored_end = regex.endswith("$") and not regex.endswith("\\$")
    body = regex[1 if anchored_start else 0:len(regex) - 1 if anchored_end else len(regex)]

    literal, stop = _leading_literal(body)
    if stop == len(body) and "|" not in body:
        if anchored_start and anchored_end:
            return KeyPattern(regex=regex, prefix=literal, exact=True)
        if anchored_start:
            return KeyPattern(regex=regex, prefix=literal)
        if anchored_end:
            return KeyPattern(regex=regex, suffix=literal)
        return KeyPattern(regex=regex, contains=literal)

    if "|" in body:
        return KeyPattern(regex=regex)

    prefix = literal if anchored_start else ""
    suffix = _trailing_literal(body) if anchored_end else ""
    if prefix or suffix:
        return KeyPattern(regex=regex, prefix=prefix, suffix=suffix)

    unbracketed = _BRACKET_RE.sub("", body)
    for separator in _SEPARATORS:
        if separator in unbracketed:
            return KeyPattern(regex=regex, contains=separator.lstrip("\\"))
    return KeyPattern(regex=regex)
