def validate_time_format(v: str | None) -> str | None:
    """Validate a wall-clock time in HH:MM (or HH:MM:SS) 24-hour format."""
    if v is None:
        return v
    try:
        parts = v.split(":")
        if len(parts) not in (2, 3):
            raise ValueError("Time must be in HH:MM format")
        hour = int(parts[0])
        minute = int(parts[1])
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError("Invalid time values")
    except (ValueError, AttributeError) as e:
        raise ValueError(f"Invalid time format: {v}. Must be HH:MM") from e
    return f"{hour:02d}:{minute:02d}"


def validate_priority(v):
    if isinstance(v, int) and not isinstance(v, bool) and not (1 <= v <= 10):
        raise ValueError("Priority must be between 1 and 10")
    return v


# YYYY-MM with a real month number
MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
