from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
import datetime
from decimal import Decimal
from enum import Enum
import uuid


class TransactionType(str, Enum):
    """Direction of money movement relative to the account holder."""
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class ParsedMessage(BaseModel):
    """Structured record extracted from a single bank/wallet notification."""
    model_config = ConfigDict(frozen=True)

    original_text: str = Field(..., description="Verbatim notification body")
    amount: Decimal = Field(..., ge=0, description="Amount in major currency units")
    direction: TransactionType = Field(..., description="CREDIT or DEBIT")
    description: str = Field(..., min_length=1, max_length=28, description="Merchant or purpose")
    institution: str = Field(..., min_length=1, description="Bank/wallet label, UPI marker or 'Unknown Bank'")
    date: datetime.date = Field(..., description="Date the message was processed")

    def to_transaction(self, account_id: str, category: str = "Other") -> "Transaction":
        """
        Build the transaction the surrounding app records for this message.

        Args:
            account_id: Account the transaction is booked against
            category: Spending category, 'Other' until the user picks one

        Returns:
            Transaction with a fresh identity
        """
        return Transaction(
            id=str(uuid.uuid4()),
            account_id=account_id,
            amount=self.amount,
            type=self.direction,
            description=self.description,
            category=category,
            date=self.date,
        )


class Transaction(BaseModel):
    """Persistable transaction created from a parsed message."""
    id: str
    account_id: str
    amount: Decimal = Field(..., ge=0)
    type: TransactionType
    description: str
    category: str = "Other"
    date: datetime.date
    is_favorite: bool = False


class ParseResult(BaseModel):
    """Outcome of one parse attempt: a message on success, a failure kind otherwise."""
    text: str
    message: Optional[ParsedMessage] = None
    error: Optional[str] = Field(None, description="NoAmountFound, MalformedAmount or UnexpectedFault")

    @property
    def ok(self) -> bool:
        return self.message is not None


class ParsedBatch(BaseModel):
    """Parsed messages from a batch of notifications."""
    messages: List[ParsedMessage]
    total_count: int = Field(..., description="Number of successfully parsed messages")
    processing_metadata: Optional[dict] = Field(None, description="Processing information")
