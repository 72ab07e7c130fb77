# apps/core/utils.py

TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES


def split_csv(value):
    """
    Normalise a comma separated string, or a list of strings, to a list of
    stripped non-empty items.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [str(item).strip() for item in value if str(item).strip()]


def parse_float(value, default):
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if result != result:  # NaN
        return default
    return result


def contains_ci(haystack, needle):
    return needle.lower() in (haystack or '').lower()


def any_overlap_ci(values, wanted):
    """True when any wanted item is a case-insensitive substring of any value."""
    values = [str(v).lower() for v in values or []]
    return any(w.lower() in v for w in wanted for v in values)


def as_amount(value, default):
    """Decimal amounts are exposed as strings; unset amounts fall back to `default`."""
    if value is None or value == '':
        return default
    return str(value)


def parse_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
