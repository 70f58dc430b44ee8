"""Runtime settings read from the environment (or a ``.env`` file).

Every knob has a default so the CLI works out of the box.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path

from decouple import config

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.policy import AttentionRule, LedgerPolicy

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_UNBOUNDED = {"", "0", "none", "unbounded"}


def data_dir() -> Path:
    return Path(config("STOCKLEDGER_DATA_DIR", default=str(_DEFAULT_DATA_DIR)))


def log_level() -> str:
    return config("STOCKLEDGER_LOG_LEVEL", default="WARNING").upper()


def log_json() -> bool:
    return config("STOCKLEDGER_LOG_JSON", default=False, cast=bool)


def load_policy() -> LedgerPolicy:
    """Build the ledger policy from ``STOCKLEDGER_*`` variables."""
    raw_retention = config("STOCKLEDGER_COST_HISTORY_RETENTION", default="5")
    raw_rule = config("STOCKLEDGER_ATTENTION_RULE", default="safety_stock")
    raw_ratio = config("STOCKLEDGER_ATTENTION_RATIO", default="1.5")

    return LedgerPolicy(
        history_retention=_parse_retention(raw_retention),
        attention_rule=_parse_rule(raw_rule),
        attention_ratio=_parse_ratio(raw_ratio),
    )


def _parse_retention(raw: str) -> int | None:
    if raw.strip().lower() in _UNBOUNDED:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(
            f"STOCKLEDGER_COST_HISTORY_RETENTION must be an integer, got {raw!r}"
        ) from exc


def _parse_rule(raw: str) -> AttentionRule:
    try:
        return AttentionRule(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(rule.value for rule in AttentionRule)
        raise ValidationError(
            f"STOCKLEDGER_ATTENTION_RULE must be one of {choices}, got {raw!r}"
        ) from exc


def _parse_ratio(raw: str) -> Decimal:
    try:
        ratio = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValidationError(
            f"STOCKLEDGER_ATTENTION_RATIO must be a number, got {raw!r}"
        ) from exc
    if not ratio.is_finite():
        raise ValidationError(
            f"STOCKLEDGER_ATTENTION_RATIO must be a finite number, got {raw!r}"
        )
    return ratio
