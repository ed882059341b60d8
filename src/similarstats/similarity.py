# --- similarity Functions ---
def edit_matrix(a: str, b: str, /) -> list[list[int]]:
    '''
    Builds the full Levenshtein dynamic-programming table for two strings.

    matrix[i][j] holds the minimum number of single-character edits needed to turn
    the first i characters of a into the first j characters of b.

    Parameters:
    -----------
    a : str
        source text (rows)
    b : str
        target text (columns)

    Returns:
    --------
    list[list[int]]
        a (len(a) + 1) x (len(b) + 1) table; matrix[-1][-1] is the edit distance
    '''
    rows, cols = len(a) + 1, len(b) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if a[i - 1] == b[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j],       # deletion
                    matrix[i][j - 1],       # insertion
                    matrix[i - 1][j - 1]    # substitution
                )

    return matrix


def edit_distance(a: str, b: str, /) -> int:
    '''
    Levenshtein distance between two strings (unit cost insert / delete / substitute).

    Only two rows of the table are kept alive, so memory is O(min(len(a), len(b)));
    time is still O(len(a) * len(b)), which gets slow for inputs in the tens of
    thousands of characters.

    Parameters:
    -----------
    a : str
        first text
    b : str
        second text

    Returns:
    --------
    int
        0 iff a == b, never more than max(len(a), len(b))
    '''
    if len(a) < len(b):
        return edit_distance(b, a)
    if len(b) == 0:
        return len(a)

    previous_row = list(range(len(b) + 1))

    for i, ca in enumerate(a):
        current_row = [i + 1]
        for j, cb in enumerate(b):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (ca != cb)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def similarity(a: str, b: str, /) -> float:
    '''
    Normalized edit similarity in [0, 1]: 1 - distance / max(len(a), len(b)).

    Two empty strings are identical and score 1.0.
    '''
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - (edit_distance(a, b) / max_len)


def char_similarity(a: str, b: str, /) -> float:
    # share of positions holding the same character, shorter side padded with spaces
    length = max(len(a), len(b))
    if length == 0:
        return 1.0
    a = a.ljust(length)
    b = b.ljust(length)
    return sum(p == t for p, t in zip(a, b)) / length


def jaccard(a: str, b: str, /) -> float:
    # overlap of the two character sets
    set_a = set(a)
    set_b = set(b)
    intersection = set_a & set_b
    union = set_a | set_b
    return len(intersection) / len(union) if union else 1.0


__all__ = ['edit_matrix', 'edit_distance', 'similarity', 'char_similarity', 'jaccard']
