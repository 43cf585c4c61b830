"""Fuzzy filename scoring.

Scores how well a file name matches a query with a fixed precedence of
heuristics: exact, prefix, substring, extension-stripped name, then an
in-order subsequence score combined with a token-overlap score. All scores
are in ``[0, 1]``. Inputs are expected to be lowercased by the caller.
"""

from quickfind.utils.files import strip_extension

EXACT_SCORE = 1.0
PREFIX_SCORE = 0.98
BASENAME_EXACT_SCORE = 0.97
SUBSTRING_SCORE = 0.95
BASENAME_SUBSTRING_SCORE = 0.93
SUBSEQUENCE_CAP = 0.89
TOKEN_WEIGHT = 0.85

_TOKEN_SEPARATORS = frozenset(" _-.")


def fuzzy_score(query: str, target: str) -> float:
    """Score ``target`` against ``query``.

    The first applicable rule wins; only the last stage combines two
    heuristics (the maximum of subsequence and token scores).

    Args:
        query: Lowercased search term.
        target: Lowercased candidate file name.

    Returns:
        Score between 0.0 and 1.0.
    """
    if not query or not target:
        return 0.0
    if target == query:
        return EXACT_SCORE
    if target.startswith(query):
        return PREFIX_SCORE
    if query in target:
        return SUBSTRING_SCORE

    target_base = strip_extension(target)
    if target_base == query:
        return BASENAME_EXACT_SCORE
    if query in target_base:
        return BASENAME_SUBSTRING_SCORE

    score = subsequence_score(query, target)

    query_tokens = tokenize(query)
    if len(query_tokens) > 1:
        score = max(score, token_match_score(query_tokens, tokenize(target)))

    return score


def subsequence_score(query: str, target: str) -> float:
    """Score an in-order (not necessarily contiguous) character match.

    Returns 0.0 unless every query character appears in ``target`` in
    order. Otherwise the score grows with the share of the target covered,
    with each adjacent pair of matched positions, and with a match at the
    very first character, capped below the substring tiers.
    """
    if not query or not target:
        return 0.0

    positions: list[int] = []
    qi = 0
    for ti, char in enumerate(target):
        if qi < len(query) and char == query[qi]:
            positions.append(ti)
            qi += 1

    if qi != len(query):
        return 0.0

    base = len(query) / len(target) * 0.6
    contiguous = sum(
        0.05 for prev, cur in zip(positions, positions[1:]) if cur == prev + 1
    )
    start_bonus = 0.1 if positions[0] == 0 else 0.0

    return min(base + contiguous + start_bonus, SUBSEQUENCE_CAP)


def tokenize(text: str) -> list[str]:
    """Split text into lowercase tokens.

    Splits on space, underscore, hyphen and dot, and before every
    uppercase letter except the first character (camelCase boundaries).
    """
    tokens: list[str] = []
    current: list[str] = []

    for i, char in enumerate(text):
        if char in _TOKEN_SEPARATORS:
            if current:
                tokens.append("".join(current).lower())
                current = []
        elif char.isupper() and i > 0:
            if current:
                tokens.append("".join(current).lower())
            current = [char]
        else:
            current.append(char)

    if current:
        tokens.append("".join(current).lower())
    return tokens


def token_match_score(query_tokens: list[str], target_tokens: list[str]) -> float:
    """Fraction of query tokens found inside some target token, weighted."""
    if not query_tokens:
        return 0.0
    matched = sum(
        1 for qt in query_tokens if any(qt in tt for tt in target_tokens)
    )
    return matched / len(query_tokens) * TOKEN_WEIGHT


def requires_literal_match(query: str) -> bool:
    """Whether a query must match as a literal substring.

    Paths, names with an extension, and numeric identifiers (four or more
    digits, as in camera file names) produce too many false positives under
    subsequence scoring.
    """
    if "/" in query or "." in query:
        return True
    return sum(char.isdigit() for char in query) >= 4
