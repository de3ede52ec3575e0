"""
Unit conversions and the Indian landed-cost formula shared by the price services.

Indian price (INR/gram) =
    COMEX (USD/oz) × USD/INR ÷ 31.1035
    × (1 + import duty 6%)       5% basic customs + 1% AIDC, Budget July 2024
    × (1 + IGST 3%)
    × (1 + local premium 3%)     MCX/local market premium over COMEX
"""

OZ_TO_GRAM = 31.1035
KG_TO_OZ = 32.1507
GRAM_PER_KG = 1000
TOLA_TO_GRAM = 11.6638
SOVEREIGN_TO_GRAM = 8

IMPORT_DUTY = 0.06
IGST = 0.03
MCX_PREMIUM = 0.03

GOLD_PURITY = {
    "24K": 0.999,
    "22K": 0.916,
    "18K": 0.750,
    "14K": 0.585,
}


def indian_price_per_gram(usd_per_oz: float, usd_inr: float) -> float:
    """Convert a COMEX USD/oz price into the INR/gram retail-landed price."""
    base = usd_per_oz * usd_inr / OZ_TO_GRAM
    return base * (1 + IMPORT_DUTY) * (1 + IGST) * (1 + MCX_PREMIUM)


def round2(value: float) -> float:
    return round(value, 2)
