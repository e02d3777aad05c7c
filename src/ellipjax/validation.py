import os

DEFAULT_PARITY_DPS = 30


def parity_enabled() -> bool:
    return os.getenv("ELLIPJAX_RUN_PARITY", "0") == "1"


def parity_dps() -> int:
    """Decimal digits used by the mpmath reference in parity runs."""
    dps = int(os.getenv("ELLIPJAX_PARITY_DPS", str(DEFAULT_PARITY_DPS)))
    if dps < 20:
        raise ValueError(f"ELLIPJAX_PARITY_DPS: expected at least 20 digits, got {dps}")
    return dps


__all__ = ["DEFAULT_PARITY_DPS", "parity_enabled", "parity_dps"]
