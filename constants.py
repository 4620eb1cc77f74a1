
# constants.py

MONTHS_PER_YEAR: int = 12
DEFAULT_MAX_YEARS: int = 100

# Withdrawal-rate rule bounds, in percent
MIN_WITHDRAWAL_PCT: float = 0.1
MAX_WITHDRAWAL_PCT: float = 10.0
WITHDRAWAL_RATE_FLOOR: float = 0.0001

DEFAULT_CURRENCY: str = "AUD"
CURRENCY_SYMBOLS = {"AUD": "A$", "USD": "$", "EUR": "€", "GBP": "£"}

CONTRIBUTION_FREQUENCIES = {"weekly": 52, "fortnightly": 26, "monthly": 12}
COMPOUNDING_FREQUENCIES = {
    "annually": 1,
    "semiannually": 2,
    "quarterly": 4,
    "monthly": 12,
    "weekly": 52,
    "daily": 365,
}

DISPLAY_NAME_FILENAME: str = ".wcir_profile.json"

# Plotting constants
TEXT_INPUT_COLOR = '#1f77b4'
TEXT_OUTPUT_COLOR = '#ff7f0e'
