ALPHABET_SIZE = 26
LETTER_A = ord("a")


def is_letter(ch: str) -> bool:
    return len(ch) == 1 and "a" <= ch.lower() <= "z"


def index(letter: str) -> int:
    """Map an ASCII letter (either case) to 0..25."""
    if not is_letter(letter):
        raise ValueError(f"Not an ASCII letter: {letter!r}")
    return ord(letter.lower()) - LETTER_A


def letter(idx: int) -> str:
    if not 0 <= idx < ALPHABET_SIZE:
        raise ValueError(f"Alphabet index out of range: {idx}")
    return chr(LETTER_A + idx)
