# ==============================================
# Pattern literals
# ==============================================
#
# The provider writes its patterns as slash-delimited literals with a
# trailing flag set, e.g. "/mozilla\/5\.0 \(windows/si". compile_pattern()
# turns one of those into a plain re.Pattern.
#
# Flag mapping:
#   i → re.IGNORECASE
#   m → re.MULTILINE
#   s → re.DOTALL
#   x → re.VERBOSE
#   g, y, n → dropped (no meaning for a first-match search)
#
# ==============================================

import re
from typing import Tuple

from uas_parser.errors import MalformedDatabase


PATTERN_LITERAL = re.compile(r"^/(.*)/([gimynsx]*)\s*$", re.DOTALL)

FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def split_literal(literal: str) -> Tuple[str, str]:
    """Split "/body/flags" into (body, flags)."""
    match = PATTERN_LITERAL.match(literal)
    if not match:
        raise MalformedDatabase(f"not a pattern literal: {literal!r}")
    return match.group(1), match.group(2)


def compile_pattern(literal: str) -> "re.Pattern[str]":
    """
    Compile a provider pattern literal.

    Raises:
        MalformedDatabase: the literal is not slash-delimited or the
            body cannot be compiled by re
    """
    body, flag_letters = split_literal(literal)

    flags = 0
    for letter in flag_letters:
        flags |= FLAG_MAP.get(letter, 0)

    try:
        return re.compile(body, flags)
    except (re.error, OverflowError, RecursionError) as e:
        raise MalformedDatabase(f"cannot compile pattern {literal!r}: {e}") from e
