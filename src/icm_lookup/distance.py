"""Edit distance between normalized codes."""


def levenshtein_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings.

    Fills the full (len(a)+1) x (len(b)+1) table; insertion, deletion and
    substitution all cost 1.

    Examples:
        >>> levenshtein_distance("A000", "A001")
        1
        >>> levenshtein_distance("", "I10")
        3
    """
    m, n = len(a), len(b)
    table = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        table[i][0] = i
    for j in range(n + 1):
        table[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,
                table[i][j - 1] + 1,
                table[i - 1][j - 1] + cost,
            )

    return table[m][n]
