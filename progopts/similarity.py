"""
Progopts suggestions for mistyped option names.

- levenshtein(lhs, rhs): edit distance (insert/delete/substitute, each costing 1),
  computed with a single rolling column.
- similar(value, candidates, ...): rank candidates by distance and keep the close ones.

Ranking rules
- candidates are (full name, display name) pairs in registry order; a candidate
  whose full name equals `value` is never suggested.
- candidates are stably sorted by ascending distance, so ties keep registry order.
- anything farther than `cutoff` is skipped.
- once the last accepted distance is greater than 1, the walk stops at the first
  candidate farther than twice that distance (drops the weak tail after a tight
  cluster of close matches).
- at most `limit` suggestions are returned, as display names.
"""


def levenshtein(lhs, rhs, /):
    column = list(range(len(lhs) + 1))

    for x in range(1, len(rhs) + 1):
        column[0] = x
        last = x - 1
        for y in range(1, len(lhs) + 1):
            save = column[y]
            column[y] = min(
                column[y] + 1,  # deletion
                column[y - 1] + 1,  # insertion
                last + (lhs[y - 1] != rhs[x - 1])  # substitution
            )
            last = save

    return column[len(lhs)]


def similar(value, candidates, /, distance=levenshtein, cutoff=8, limit=4):
    """
    Return up to `limit` display names close to `value`.

    Parameters
    - value: str
      the unknown name, as typed (without leading dashes).
    - candidates: Iterable[tuple[str, str]]
      (full name, display name) pairs in registry order.
    - distance: Callable[[str, str], int]
      similarity metric; lower is closer.
    - cutoff: int
      maximum distance for a suggestion.
    - limit: int
      maximum number of suggestions.
    """
    if not callable(distance):
        raise TypeError("similar() distance must be callable")

    distances = sorted(
        ((distance(value, full), display) for full, display in candidates if full != value),
        key=lambda pair: pair[0]
    )

    result = []
    last = 0
    for score, display in distances:
        if last > 1 and score > 2 * last:
            break
        if score > cutoff:
            continue
        result.append(display)
        if len(result) >= limit:
            break
        last = score
    return result


__all__ = (
    "levenshtein",
    "similar",
)
