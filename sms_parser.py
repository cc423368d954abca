import logging
from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from config import DEFAULT_CONFIG, ParserConfig
from extractor import (
    AmountExtractor,
    DescriptionExtractor,
    DirectionClassifier,
    InstitutionIdentifier,
    MalformedAmount,
    NoAmountFound,
    SmsParseError,
    UnexpectedFault,
)
from schema import ParsedBatch, ParsedMessage, ParseResult, TransactionType

logger = logging.getLogger(__name__)


class SmsParser:
    """Turns bank/wallet notification texts into ParsedMessage records."""

    def __init__(self, config: Optional[ParserConfig] = None, clock: Callable[[], date] = date.today):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config or DEFAULT_CONFIG
        self.clock = clock

        self.amount_extractor = AmountExtractor(self.config)
        self.direction_classifier = DirectionClassifier(self.config)
        self.description_extractor = DescriptionExtractor(self.config)
        self.institution_identifier = InstitutionIdentifier(self.config)

    def parse_or_raise(self, text: str) -> ParsedMessage:
        """
        Run the full pipeline on one message.

        Args:
            text: Raw notification body

        Returns:
            ParsedMessage built from all four stages

        Raises:
            NoAmountFound, MalformedAmount: amount stage failed
            UnexpectedFault: any other error inside a stage
        """
        try:
            amount_match = self.amount_extractor.extract(text)
            direction = self.direction_classifier.classify(text)

            masked_text = text[:amount_match.start] + self.config.amount_placeholder + text[amount_match.end:]
            description = self.description_extractor.extract(masked_text, direction)
            institution = self.institution_identifier.identify(text)

            return ParsedMessage(
                original_text=text,
                amount=amount_match.amount,
                direction=direction,
                description=description,
                institution=institution,
                date=self.clock(),
            )
        except SmsParseError:
            raise
        except Exception as e:
            raise UnexpectedFault(f"{type(e).__name__}: {e}") from e

    def try_parse(self, text: str) -> ParseResult:
        """Parse one message, reporting the failure kind instead of raising."""
        try:
            message = self.parse_or_raise(text)
        except NoAmountFound:
            self.logger.debug(f"Skipping message without amount: {text!r}")
            return ParseResult(text=text, error=NoAmountFound.__name__)
        except MalformedAmount as e:
            self.logger.warning(f"Malformed amount: {e}")
            return ParseResult(text=text, error=MalformedAmount.__name__)
        except UnexpectedFault as e:
            self.logger.error(f"Failed to parse SMS {text!r}: {e}", exc_info=True)
            return ParseResult(text=text, error=UnexpectedFault.__name__)

        return ParseResult(text=text, message=message)

    def parse(self, text: str) -> Optional[ParsedMessage]:
        """
        Parse one message.

        Returns:
            ParsedMessage, or None when the message is not a usable transaction
        """
        return self.try_parse(text).message

    def parse_many(self, messages: Iterable[str]) -> ParsedBatch:
        """
        Parse a batch of messages, skipping the ones that fail.

        Args:
            messages: Raw notification bodies

        Returns:
            ParsedBatch with the parsed records and processing metadata
        """
        parsed = []
        failures = Counter()
        received = 0

        for text in messages:
            received += 1
            result = self.try_parse(text)
            if result.ok:
                parsed.append(result.message)
            else:
                failures[result.error] += 1

        totals = {direction.value: Decimal("0") for direction in TransactionType}
        for message in parsed:
            totals[message.direction.value] += message.amount

        metadata = {
            'messages_received': received,
            'messages_parsed': len(parsed),
            'messages_skipped': received - len(parsed),
            'skip_reasons': dict(failures),
            'totals_by_direction': {k: str(v) for k, v in totals.items()},
            'processing_date': self.clock().isoformat(),
        }

        self.logger.info(f"Parsed {len(parsed)} of {received} messages")
        return ParsedBatch(messages=parsed, total_count=len(parsed), processing_metadata=metadata)
