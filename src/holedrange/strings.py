"""String helpers backing the built-in ``str`` capabilities."""

import random

LETTERS = (
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    "!?.:;/=-+*@#%&"
)
MIN_RANDOM_LENGTH = 8
MAX_RANDOM_LENGTH = 100
MAX_CONSECUTIVE_REJECTIONS = 100


def levenshtein(source: str, target: str) -> int:
    """Edit distance counting insertions, deletions and substitutions."""
    if not source:
        return len(target)
    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            if source_char == target_char:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(previous[j], current[j - 1], previous[j - 1]) + 1
                )
        previous = current
    return previous[-1]


def _unused_letters(value: str) -> str:
    return "".join(char for char in LETTERS if char not in value)


def _substitute(value: str, steps: int, rng: random.Random) -> str:
    chars = list(value)
    pool = _unused_letters(value)
    if not pool:
        for _ in range(steps):
            chars.insert(rng.randint(0, len(chars)), rng.choice(LETTERS))
        return "".join(chars)
    for idx in rng.sample(range(len(chars)), steps):
        chars[idx] = rng.choice(pool)
    return "".join(chars)


def advance_string(value: str, distance: float, rng: random.Random) -> str:
    """Produce a string roughly ``distance`` edits away from ``value``.

    Substitutions are preferred; the length only changes when the distance
    is negative (random deletions) or larger than the string (random
    insertions). The result is not an exact inverse of ``levenshtein``.
    """
    steps = int(distance)

    if steps < 0:
        chars = list(value)
        remaining = -steps
        while remaining > 0 and chars:
            del chars[rng.randrange(len(chars))]
            remaining -= 1
        return "".join(chars)

    if steps > len(value):
        remaining = steps - len(value)
        pool = _unused_letters(value) or LETTERS
        chars = list(_substitute(value, len(value), rng))
        for _ in range(remaining):
            chars.insert(rng.randint(0, len(chars)), rng.choice(pool))
        return "".join(chars)

    return _substitute(value, steps, rng)


def random_string(rng: random.Random) -> str:
    length = rng.randint(MIN_RANDOM_LENGTH, MAX_RANDOM_LENGTH)
    return "".join(rng.choice(LETTERS) for _ in range(length))


def _common_prefix(lower: str, upper: str) -> str:
    size = 0
    for lower_char, upper_char in zip(lower, upper):
        if lower_char != upper_char:
            break
        size += 1
    return lower[:size]


def random_string_in(lower: str, upper: str, rng: random.Random) -> str:
    """Grow a random string one character at a time inside ``[lower, upper]``.

    Growth starts from the prefix both bounds share, and a character is only
    kept when the grown string still lies inside the interval. Growth stops
    at the target length or after too many consecutive rejected characters.
    When nothing inside the interval was reached, one of the bounds is
    returned.
    """
    if lower == upper:
        return lower
    length = rng.randint(MIN_RANDOM_LENGTH, MAX_RANDOM_LENGTH)
    result = _common_prefix(lower, upper)
    rejections = 0
    while len(result) < length and rejections <= MAX_CONSECUTIVE_REJECTIONS:
        candidate = result + rng.choice(LETTERS)
        if lower <= candidate <= upper:
            result = candidate
            rejections = 0
        else:
            rejections += 1
    if not lower <= result <= upper:
        return rng.choice((lower, upper))
    return result
