import re
import logging
from itertools import combinations
from similarstats.similarity import similarity

logger = logging.getLogger(__name__)

_WORD_START_BONUS = 5
_FUZZY_PER_CHAR = 8.0


# --- fuzzy matching ---
def fuzzy_match_score(source: str, pattern: str, /) -> int:
    '''
    Scores how well an abbreviated pattern matches a source text.

    The pattern has to appear in source as an ordered, case-insensitive subsequence.
    Every matched character is worth 1 point; a match sitting right after the previous
    one extends a running streak and adds streak * 2; a match at the start of source
    or right after a space adds 5 more.

    Parameters:
    -----------
    source : str
        candidate text, e.g. a list item
    pattern : str
        user-typed query, e.g. 'hw' for 'Hello World'

    Returns:
    --------
    int
        the accumulated score, or 0 when the pattern is empty or not fully matched
    '''
    if not pattern:
        return 0

    # fold case per character so indices stay aligned with source
    folded = [c.casefold() for c in pattern]

    score = 0
    p = 0
    consecutive = 0
    previous = None

    for i, char in enumerate(source):
        if p == len(folded):
            break
        if char.casefold() != folded[p]:
            continue

        score += 1

        # bonus for consecutive matches
        if previous is not None:
            if i - previous == 1:
                consecutive += 1
                score += consecutive * 2
            else:
                consecutive = 0

        # bonus for match at word start
        if i == 0 or source[i - 1] == ' ':
            score += _WORD_START_BONUS

        previous = i
        p += 1

    return score if p == len(folded) else 0


def fuzzy_matches(source: str, pattern: str, /) -> bool:
    return fuzzy_match_score(source, pattern) > 0


def fuzzy_match_score_normalized(source: str, pattern: str, /, *, per_char: float = _FUZZY_PER_CHAR) -> float:
    '''
    Fuzzy score scaled to [0, 100].

    The raw score is divided by len(pattern) * per_char and clamped at 100. per_char = 8
    is a heuristic ceiling (1 base + 5 word-start + a short streak bonus), not a true
    maximum: long consecutive runs can push the ratio past 100 before the clamp.
    '''
    if not source or not pattern:
        return 0.0

    raw = fuzzy_match_score(source, pattern)
    if raw <= 0:
        return 0.0

    return min(100.0, raw / (len(pattern) * per_char) * 100)


def rank(pattern: str, candidates, /, *, limit: int = None) -> list[tuple[str, int]]:
    '''
    Orders candidates by descending fuzzy score, dropping the ones that do not match.

    Parameters:
    -----------
    pattern : str
        the query
    candidates : Iterable[str]
        texts to rank
    limit : int
        keep at most this many results (default: None, no cap)

    Returns:
    --------
    list[tuple[str, int]]
        (candidate, score) pairs; equal scores keep their input order
    '''
    scored = [(c, fuzzy_match_score(c, pattern)) for c in candidates]
    ranked = sorted((s for s in scored if s[1] > 0), key = lambda s: s[1], reverse = True)
    return ranked[:limit] if limit is not None else ranked


def near_duplicates(texts, /, *, threshold: float = 0.8) -> list[tuple[int, int, float]]:
    '''
    Finds pairs of texts whose edit similarity reaches the threshold.

    Parameters:
    -----------
    texts : Sequence[str]
        entries to compare (every pair is checked, so this is quadratic)
    threshold : float
        minimum similarity in [0, 1] (default: 0.8)

    Returns:
    --------
    list[tuple[int, int, float]]
        (i, j, similarity) with i < j, in index order
    '''
    texts = list(texts)
    pairs = []
    for i, j in combinations(range(len(texts)), 2):
        score = similarity(texts[i], texts[j])
        if score >= threshold:
            pairs.append((i, j, score))

    logger.debug('near_duplicates: %d of %d texts paired at threshold %.2f', len(pairs), len(texts), threshold)
    return pairs


# --- plain search ---
def contains_ignoring_case(text: str, substring: str, /) -> bool:
    if not substring:
        return False
    return substring.casefold() in text.casefold()


def occurrences(text: str, substring: str, /) -> int:
    # non-overlapping, like str.count; an empty needle never counts
    if not substring:
        return 0
    return text.count(substring)


def occurrences_ignoring_case(text: str, substring: str, /) -> int:
    return occurrences(text.lower(), substring.lower())


def words(text: str, /) -> list[str]:
    return text.split()


def word_count(text: str, /) -> int:
    return len(words(text))


def contains_word(text: str, word: str, /) -> bool:
    '''Whole-word containment: 'Wor' is not a word of 'Hello World'.'''
    if not word:
        return False
    return re.search(rf'\b{re.escape(word)}\b', text) is not None


def word_indices(text: str, word: str, /) -> list[int]:
    # positions in words(text) that equal word, case-insensitively
    target = word.lower()
    return [i for i, w in enumerate(words(text)) if w.lower() == target]


def highlighting(text: str, term: str, /, *, prefix: str = '<mark>', suffix: str = '</mark>') -> str:
    '''
    Wraps every case-insensitive occurrence of term in prefix / suffix.

    The inserted text is term itself, as in 'hello World' -> 'hello <mark>world</mark>'
    for term='world'.
    '''
    if not term:
        return text
    return re.sub(re.escape(term), lambda _: prefix + term + suffix, text, flags = re.IGNORECASE)


def excerpt(text: str, term: str, /, *, radius: int = 50, ellipsis: str = '...') -> str | None:
    '''
    Cuts a window of radius characters around the first case-insensitive hit of term.

    Parameters:
    -----------
    text : str
        text to search
    term : str
        term to centre the excerpt on
    radius : int
        characters kept on each side of the term (default: 50)
    ellipsis : str
        marker added where the text was truncated (default: '...')

    Returns:
    --------
    str | None
        the excerpt, or None when term does not occur
    '''
    if not term:
        return None

    found = re.search(re.escape(term), text, flags = re.IGNORECASE)
    if found is None:
        return None

    start = max(0, found.start() - radius)
    end = min(len(text), found.end() + radius)

    result = text[start:end]
    if start > 0:
        result = ellipsis + result
    if end < len(text):
        result = result + ellipsis
    return result


__all__ = [
    'fuzzy_match_score', 'fuzzy_matches', 'fuzzy_match_score_normalized', 'rank', 'near_duplicates',
    'contains_ignoring_case', 'occurrences', 'occurrences_ignoring_case', 'words', 'word_count',
    'contains_word', 'word_indices', 'highlighting', 'excerpt'
]
