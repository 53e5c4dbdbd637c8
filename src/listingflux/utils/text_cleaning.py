"""
Whitespace helpers shared by the page parser and the fallback generator.
"""


def normalize_whitespace(text: str) -> str:
    """
    Collapse runs of whitespace (including newlines) to single spaces.

    Examples:
        >>> normalize_whitespace("  Blue \\n Widget   Pro ")
        'Blue Widget Pro'
    """
    if not text:
        return ""

    return " ".join(text.split())


def first_tokens(text: str, count: int) -> list[str]:
    """
    Split text on whitespace and keep the first ``count`` tokens.

    Examples:
        >>> first_tokens("Blue Widget Pro", 5)
        ['Blue', 'Widget', 'Pro']
    """
    if not text:
        return []

    return text.split()[:count]
