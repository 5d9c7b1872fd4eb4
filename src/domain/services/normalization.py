"""Domain normalization helpers."""


def normalize_currency_code(code: str | None) -> str | None:
    """Normalize a raw currency code value.

    Args:
        code: Raw code entered by the user or read from storage.

    Returns:
        str | None: Upper-cased, stripped code, or None when blank.
    """
    if not code:
        return None
    cleaned = code.strip()
    return cleaned.upper() if cleaned else None


def normalize_name(name: str | None) -> str:
    """Strip surrounding whitespace from a user-entered name.

    Args:
        name: Raw name value.

    Returns:
        str: Trimmed name, empty when missing.
    """
    if not name:
        return ""
    return name.strip()


__all__ = ["normalize_currency_code", "normalize_name"]
