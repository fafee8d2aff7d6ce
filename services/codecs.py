import re


def letter_to_row(letter: str) -> int:
    """Converte letra (A..Z) para índice de linha (1..26)."""
    if not letter:
        return 1
    ch = letter.strip().upper()[0]
    if 'A' <= ch <= 'Z':
        return ord(ch) - ord('A') + 1
    return 1


def ordinal(value) -> int:
    """
    Posição ordinal (1-based) de uma coordenada de rua/baia:
    "07" -> 7, "R2" -> 2, "C" -> 3
    """
    if isinstance(value, int):
        return max(value, 1)
    text = str(value or "").strip()
    digits = re.search(r"\d+", text)
    if digits:
        return max(int(digits.group()), 1)
    return letter_to_row(text)


def format_bay(bay) -> str:
    """Baia com dois dígitos: 7 -> "07" """
    return str(int(str(bay).strip())).zfill(2)


def location_code(row: str, bay, level, position) -> str:
    """Código humano da posição: A + 07 + nível 2 + posição 1 -> "A07-2-1" """
    return f"{row.strip().upper()}{format_bay(bay)}-{level}-{position}"
