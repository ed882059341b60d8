import pytest
from similarstats.similarity import edit_matrix, edit_distance, similarity, char_similarity, jaccard


@pytest.mark.parametrize('a, b, expected', [
    ('kitten', 'sitting', 3),
    ('hello', 'hello', 0),
    ('', 'abc', 3),
    ('abc', '', 3),
    ('', '', 0),
    ('abc', 'xyz', 3),
    ('flaw', 'lawn', 2),
    ('café', 'cafe', 1),
])
def test_edit_distance(a, b, expected):
    assert edit_distance(a, b) == expected
    assert edit_distance(b, a) == expected


def test_edit_matrix_base_cases_and_fill():
    matrix = edit_matrix('ab', 'b')

    assert matrix == [[0, 1], [1, 1], [2, 1]]


def test_edit_matrix_agrees_with_rolling_rows():
    for a, b in [('kitten', 'sitting'), ('sunday', 'saturday'), ('', 'x'), ('gumbo', 'gambol')]:
        matrix = edit_matrix(a, b)
        assert len(matrix) == len(a) + 1
        assert all(len(row) == len(b) + 1 for row in matrix)
        assert matrix[-1][-1] == edit_distance(a, b)


def test_similarity():
    assert similarity('kitten', 'sitting') == pytest.approx(1 - 3 / 7)
    assert similarity('abc', 'xyz') == 0.0
    assert similarity('same', 'same') == 1.0


def test_similarity_of_two_empty_strings_is_one():
    assert similarity('', '') == 1.0


def test_similarity_against_empty_string_is_zero():
    assert similarity('', 'abc') == 0.0


def test_char_similarity():
    assert char_similarity('abc', 'abd') == pytest.approx(2 / 3)
    assert char_similarity('abc', '') == 0.0
    assert char_similarity('', '') == 1.0


def test_jaccard():
    assert jaccard('abc', 'bcd') == pytest.approx(0.5)
    assert jaccard('aab', 'ba') == 1.0
    assert jaccard('', '') == 1.0
    assert jaccard('', 'a') == 0.0
