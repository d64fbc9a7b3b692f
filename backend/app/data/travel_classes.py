"""Indian Railways travel classes — flat cancellation rates and display names."""

# Minimum cancellation charge per passenger (INR) when cancelled 48h+ before departure
FLAT_RATES: dict[str, float] = {
    "EC": 240, "1A": 240,
    "2A": 200, "FC": 200,
    "3A": 180, "CC": 180, "3E": 180,
    "SL": 120,
    "2S": 60,
}

# Unknown classes get the cheapest tier instead of failing
DEFAULT_FLAT_RATE: float = 60

CLASS_NAMES: dict[str, str] = {
    "EC": "Air-Conditioned Executive Chair Class",
    "1A": "Air-Conditioned First Class",
    "2A": "Air-Conditioned Two-Tier Class",
    "FC": "First Class",
    "3A": "Air-Conditioned Three-Tier Class",
    "3E": "Air-Conditioned Three-Tier Economy",
    "CC": "AC Chair Class",
    "SL": "Sleeper Class",
    "2S": "Second Class",
}


def flat_rate(class_code: str) -> float:
    """Flat per-passenger cancellation charge for a class code."""
    return FLAT_RATES.get(class_code.strip().upper(), DEFAULT_FLAT_RATE)


def class_full_name(class_code: str) -> str:
    return CLASS_NAMES.get(class_code.strip().upper(), class_code)
