"""
Pricing engine module.

Derives product prices and display ratings from the gold price.

Formula: P_usd = (popularity_score + 1) × weight_g × gold_usd_per_gram
Rating:  R = popularity_score × 5

All arithmetic is done in Decimal on the decimal string of each input and
rounded half-up, so 0.85 × 5 = 4.25 rounds to 4.3.
"""

from decimal import ROUND_HALF_UP, Decimal

PRICE_DECIMAL_PLACES = 2
RATING_DECIMAL_PLACES = 1
GOLD_PRICE_DECIMAL_PLACES = 4
RATING_SCALE = 5


def to_decimal(value: float) -> Decimal:
    """Convert a number to Decimal through its shortest string form."""
    return Decimal(str(value))


def round_half_up(value: Decimal, decimal_places: int) -> Decimal:
    """
    Round a Decimal half-up to a number of decimal places.

    Args:
        value: Value to round.
        decimal_places: Number of decimal places.

    Returns:
        Decimal: Rounded value.
    """
    quantize_str = "0." + "0" * decimal_places if decimal_places > 0 else "1"
    return value.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)


def calculate_price_usd(popularity_score: float, weight_grams: float, gold_price_per_gram: float) -> float:
    """
    Calculate a product price in USD, rounded to cents.

    Args:
        popularity_score: Popularity in [0, 1].
        weight_grams: Gold weight in grams.
        gold_price_per_gram: Gold price in USD per gram.

    Returns:
        float: Price rounded to 2 decimal places.
    """
    raw = (to_decimal(popularity_score) + 1) * to_decimal(weight_grams) * to_decimal(gold_price_per_gram)
    return float(round_half_up(raw, PRICE_DECIMAL_PLACES))


def popularity_out_of_5(popularity_score: float) -> float:
    """Scale a [0, 1] popularity score to a 0-5 rating with one decimal."""
    raw = to_decimal(popularity_score) * RATING_SCALE
    return float(round_half_up(raw, RATING_DECIMAL_PLACES))


def round_gold_price(gold_price_per_gram: float) -> float:
    """Round the gold price for the response envelope (4 decimal places)."""
    return float(round_half_up(to_decimal(gold_price_per_gram), GOLD_PRICE_DECIMAL_PLACES))
