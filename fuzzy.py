# fuzzy.py
# Resolve a free-text hook word to the closest dictionary entry.


def edit_distance(a, b):
    """Levenshtein distance with unit costs, using one row of min(len) + 1 cells."""
    if len(a) > len(b):
        a, b = b, a
    n, m = len(a), len(b)

    cost = list(range(n + 1))
    for i in range(1, m + 1):
        prevdiag = cost[0]
        cost[0] = i
        for j in range(1, n + 1):
            ins = cost[j] + 1
            dele = cost[j - 1] + 1
            sub = prevdiag + (a[j - 1] != b[i - 1])
            prevdiag = cost[j]
            cost[j] = min(ins, dele, sub)
    return cost[n]


def find_nearest(graph, query):
    """Return the id of the word closest to ``query``; lowest id wins ties."""
    best_word, best_dist = 0, None
    for i, word in graph.iter_words():
        dist = edit_distance(query, word)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_word = i
            if dist == 0:
                break
    return best_word
