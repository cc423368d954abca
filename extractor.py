import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, List, NamedTuple, Optional, Tuple

from config import DEFAULT_CONFIG, ParserConfig
from schema import TransactionType

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 25
ELLIPSIS = "..."


class SmsParseError(Exception):
    """Base class for failures that stop a message from being parsed."""


class NoAmountFound(SmsParseError):
    """No currency-marked amount in the message."""


class MalformedAmount(SmsParseError):
    """A currency marker matched but its number could not be read."""


class UnexpectedFault(SmsParseError):
    """Any other error raised while running an extraction stage."""


class AmountMatch(NamedTuple):
    amount: Decimal
    start: int
    end: int


class DescriptionStrategy(NamedTuple):
    """One step of the description precedence list."""
    name: str
    direction: TransactionType
    extract: Callable[[str], str]
    fixed_label: bool = False


def _alternation(words: List[str]) -> str:
    return "|".join(re.escape(word) for word in words)


class AmountExtractor:
    """Finds the first currency-marked amount in a message."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.pattern = re.compile(
            rf'(?:{_alternation(config.currency_markers)})\s*([\d,]+(?:\.\d{{1,2}})?)',
            re.IGNORECASE,
        )

    def extract(self, text: str) -> AmountMatch:
        """
        Extract the amount and the span of the matched substring.

        Args:
            text: Raw notification text

        Returns:
            AmountMatch with the Decimal value and the span to mask

        Raises:
            NoAmountFound: no currency marker followed by a number
            MalformedAmount: the number does not coerce to a Decimal
        """
        match = self.pattern.search(text)
        if not match:
            raise NoAmountFound(f"No currency amount in: {text!r}")

        raw_amount = match.group(1)
        try:
            amount = Decimal(raw_amount.replace(',', ''))
        except InvalidOperation:
            raise MalformedAmount(f"Could not parse amount: {raw_amount!r}")

        return AmountMatch(amount, match.start(), match.end())


class DirectionClassifier:
    """CREDIT when any credit keyword occurs in the text, DEBIT otherwise."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self.credit_keywords = config.credit_keywords

    def classify(self, text: str) -> TransactionType:
        text_lower = text.lower()
        if any(keyword in text_lower for keyword in self.credit_keywords):
            return TransactionType.CREDIT
        return TransactionType.DEBIT


class DescriptionExtractor:
    """
    Derives a short merchant/purpose string from amount-masked text.

    Strategies are tried in list order for the message direction and the first
    non-empty candidate wins. A UPI path segment is used when the winner is too
    short, and a per-direction label when nothing usable is left.
    """

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config

        terminator = rf'(?=\s+(?:{_alternation(config.terminator_words)})\b|$)'
        self.debit_pattern = re.compile(
            rf'(?:{_alternation(config.debit_prepositions)})\s+([A-Za-z0-9\s&.-]+?){terminator}',
            re.IGNORECASE,
        )
        self.credit_pattern = re.compile(
            rf'(?:{_alternation(config.credit_prepositions)})\s+([A-Za-z0-9\s&.-]+?){terminator}',
            re.IGNORECASE,
        )
        self.field_pattern = re.compile(
            rf'(?:{_alternation(config.field_labels)})[:/-]\s*([A-Za-z0-9\s@.-]+)',
            re.IGNORECASE,
        )
        self.noise_pattern = re.compile(_alternation(config.noise_tokens), re.IGNORECASE)

        self.strategies: List[DescriptionStrategy] = [
            DescriptionStrategy('debit_counterparty', TransactionType.DEBIT, self._debit_counterparty),
            DescriptionStrategy('cash_withdrawal', TransactionType.DEBIT, self._cash_withdrawal, fixed_label=True),
            DescriptionStrategy('debit_narration', TransactionType.DEBIT, self._narration_field),
            DescriptionStrategy('credit_counterparty', TransactionType.CREDIT, self._credit_counterparty),
            DescriptionStrategy('credit_narration', TransactionType.CREDIT, self._narration_field),
        ]

    def extract(self, text: str, direction: TransactionType) -> str:
        """
        Extract a presentable description.

        Args:
            text: Notification text with the amount replaced by a placeholder
            direction: Already classified transaction direction

        Returns:
            Description of 1 to 28 characters
        """
        candidate, strategy = self.select_candidate(text, direction)
        if strategy is not None and strategy.fixed_label:
            return candidate

        if len(candidate) < 3:
            upi_segment = self.upi_segment(text)
            if upi_segment:
                self.logger.debug(f"Using UPI path segment: {upi_segment!r}")
                candidate = upi_segment

        fallback = self.fallback_label(direction)
        if len(candidate.strip()) < 2:
            return fallback

        cleaned = self.clean(candidate)
        return cleaned or fallback

    def select_candidate(self, text: str, direction: TransactionType) -> Tuple[str, Optional[DescriptionStrategy]]:
        """Run the strategies for this direction lazily; first non-empty result wins."""
        for strategy in self.strategies:
            if strategy.direction != direction:
                continue
            candidate = strategy.extract(text).strip()
            if candidate:
                self.logger.debug(f"Description from {strategy.name}: {candidate!r}")
                return candidate, strategy
        return "", None

    def upi_segment(self, text: str) -> str:
        """Segment following the first '/'-separated part that mentions UPI."""
        marker = self.config.upi_marker
        if marker not in text or '/' not in text:
            return ""

        parts = text.split('/')
        for idx, part in enumerate(parts[:-1]):
            if marker in part:
                return parts[idx + 1]
        return ""

    def fallback_label(self, direction: TransactionType) -> str:
        if direction == TransactionType.CREDIT:
            return self.config.credit_fallback_label
        return self.config.debit_fallback_label

    def clean(self, description: str) -> str:
        """Strip banking noise and punctuation, normalise case, truncate."""
        description = self.noise_pattern.sub('', description)
        description = re.sub(r'[:.]', '', description).strip()

        if description:
            description = description[0].upper() + description[1:].lower()

        if len(description) > MAX_DESCRIPTION_LENGTH:
            description = description[:MAX_DESCRIPTION_LENGTH] + ELLIPSIS
        return description

    def _debit_counterparty(self, text: str) -> str:
        match = self.debit_pattern.search(text)
        return match.group(1) if match else ""

    def _credit_counterparty(self, text: str) -> str:
        match = self.credit_pattern.search(text)
        return match.group(1) if match else ""

    def _cash_withdrawal(self, text: str) -> str:
        if self.config.withdrawal_keyword.lower() in text.lower():
            return self.config.withdrawal_label
        return ""

    def _narration_field(self, text: str) -> str:
        match = self.field_pattern.search(text)
        return match.group(1) if match else ""


class InstitutionIdentifier:
    """Maps bank/wallet codes in the text to an institution label."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self.config = config

    def identify(self, text: str) -> str:
        """
        Identify the originating institution.

        The first code in configured priority order that appears anywhere in
        the text is selected, regardless of where it appears.

        Args:
            text: Raw notification text

        Returns:
            'HDFC Bank', 'PAYTM', 'UPI', 'UPI / HDFC Bank' or the unknown label
        """
        text_upper = text.upper()
        found = next((code for code in self.config.institution_codes if code in text_upper), None)

        if found is None:
            institution = self.config.unknown_institution
        elif found in self.config.wallet_codes:
            institution = found
        else:
            institution = found + self.config.bank_suffix

        marker = self.config.upi_marker
        if marker in text:
            institution = marker if found is None else f"{marker} / {institution}"

        return institution
