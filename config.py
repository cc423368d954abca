"""
Keyword tables driving the SMS extractor.

Everything locale- or institution-specific lives here so new banks, wallets
and noise words can be added without touching the extraction logic.
"""
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class ParserConfig(BaseModel):
    """Replaceable keyword table for :class:`sms_parser.SmsParser`."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    currency_markers: List[str] = Field(
        default=["Rs.", "Rs", "INR", "₹"],
        description="Tokens that mark a monetary amount, tried in order",
    )
    credit_keywords: List[str] = Field(
        default=["credited", "received", "added", "deposited", "refund"],
        description="Any of these anywhere in the text means CREDIT",
    )
    terminator_words: List[str] = Field(
        default=["on", "via", "Ref", "Bal", "Avl", "from", "Ending"],
        description="Words that end a 'to X' / 'from X' merchant run",
    )
    debit_prepositions: List[str] = Field(default=["to", "at", "paid"])
    credit_prepositions: List[str] = Field(default=["from", "by"])
    field_labels: List[str] = Field(
        default=["Info", "Narr", "Rem", "Remarks", "VPA"],
        description="Labels of narration fields such as 'Info: UPI/STARBUCKS'",
    )
    withdrawal_keyword: str = Field("withdrawn", min_length=1)
    noise_tokens: List[str] = Field(
        default=["a/c", "account", "bank", "txn", "ref", "no.", "imps",
                 "neft", "rtgs", "funds trf", "transfer"],
        description="Banking boilerplate removed from descriptions (substring match)",
    )
    # Priority order: the first listed code present in the text wins.
    institution_codes: List[str] = Field(
        default=["HDFC", "SBI", "ICICI", "AXIS", "KOTAK", "BOB", "PNB", "IDFC",
                 "PAYTM", "GPAY", "PHONEPE", "AMEX", "CITI", "HSBC", "RBL", "INDUSIND"],
    )
    wallet_codes: List[str] = Field(default=["PAYTM", "GPAY", "PHONEPE"])
    bank_suffix: str = " Bank"
    unknown_institution: str = "Unknown Bank"
    upi_marker: str = Field("UPI", min_length=1)

    amount_placeholder: str = Field("AMOUNT", min_length=1)
    withdrawal_label: str = Field("Cash Withdrawal", min_length=1, max_length=28)
    credit_fallback_label: str = Field("Deposit", min_length=1, max_length=28)
    debit_fallback_label: str = Field("Purchase", min_length=1, max_length=28)

    @field_validator("institution_codes")
    @classmethod
    def normalize_institutions(cls, v):
        """Codes are matched against upper-cased text."""
        codes = [code.strip().upper() for code in v if code.strip()]
        if not codes:
            raise ValueError("institution_codes must contain at least one code")
        return codes

    @field_validator("wallet_codes")
    @classmethod
    def normalize_wallets(cls, v):
        return [code.strip().upper() for code in v if code.strip()]

    @field_validator("credit_keywords")
    @classmethod
    def lowercase_keywords(cls, v):
        return [kw.lower() for kw in v if kw]

    @field_validator("currency_markers", "terminator_words", "debit_prepositions",
                     "credit_prepositions", "field_labels", "noise_tokens")
    @classmethod
    def require_non_empty(cls, v):
        if not v or any(not token for token in v):
            raise ValueError("keyword lists must be non-empty and contain no blank entries")
        return v

    @classmethod
    def from_json_file(cls, file_path: Union[str, Path]) -> "ParserConfig":
        """
        Load a configuration table from JSON, falling back to defaults for missing keys.

        Args:
            file_path: Path to a JSON object with ParserConfig field names

        Returns:
            Validated ParserConfig
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {file_path}")

        config = cls(**data)
        logger.info(f"Loaded parser config from {file_path} ({len(config.institution_codes)} institutions)")
        return config


DEFAULT_CONFIG = ParserConfig()
