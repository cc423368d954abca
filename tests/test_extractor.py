from decimal import Decimal

import pytest

from config import ParserConfig
from extractor import (
    AmountExtractor,
    DescriptionExtractor,
    DirectionClassifier,
    InstitutionIdentifier,
    MalformedAmount,
    NoAmountFound,
)
from schema import TransactionType


class TestAmountExtractor:
    @pytest.mark.parametrize("text, expected", [
        ("Rs 1,250.00 debited", Decimal("1250.00")),
        ("Sent Rs. 850.00 to UBER", Decimal("850.00")),
        ("debited for Rs.340.00 on", Decimal("340.00")),
        ("credited with INR 5,000.00 by", Decimal("5000.00")),
        ("Paid ₹99 at store", Decimal("99")),
        ("rs 12.5 spent", Decimal("12.5")),
    ])
    def test_extracts_amount(self, text, expected):
        assert AmountExtractor().extract(text).amount == expected

    def test_first_match_wins(self):
        text = "Avl Bal Rs 9,999.00. Rs 100.00 debited"
        assert AmountExtractor().extract(text).amount == Decimal("9999.00")

    def test_span_covers_matched_substring(self):
        text = "HDFC Bank: Rs 1,250.00 debited"
        match = AmountExtractor().extract(text)
        assert text[match.start:match.end] == "Rs 1,250.00"

    def test_no_amount(self):
        with pytest.raises(NoAmountFound):
            AmountExtractor().extract("Your OTP is 482913")

    def test_separators_only_is_malformed(self):
        with pytest.raises(MalformedAmount):
            AmountExtractor().extract("Balance INR ,, only")


class TestDirectionClassifier:
    @pytest.mark.parametrize("text", [
        "Acct credited with Rs 5",
        "You have RECEIVED Rs 10",
        "Rs 20 added to wallet",
        "Cash deposited Rs 30",
        "Refund of Rs 40 processed",
    ])
    def test_credit_keywords(self, text):
        assert DirectionClassifier().classify(text) == TransactionType.CREDIT

    def test_default_is_debit(self):
        assert DirectionClassifier().classify("Rs 50 spent at ZARA") == TransactionType.DEBIT
        assert DirectionClassifier().classify("") == TransactionType.DEBIT


class TestDescriptionExtractor:
    def test_debit_counterparty(self):
        extractor = DescriptionExtractor()
        text = "HDFC Bank: AMOUNT debited from a/c **4321 on 24-02-25 to SWIGGY. Avl Bal: INR 45,000."
        assert extractor.extract(text, TransactionType.DEBIT) == "Swiggy"

    def test_debit_counterparty_stops_at_from(self):
        text = "Sent AMOUNT to UBER RIDES from HDFC Bank A/c via UPI. Ref 23948293."
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Uber rides"

    def test_counterparty_runs_to_end_of_text(self):
        assert DescriptionExtractor().extract("Spent AMOUNT at Blue Tokai", TransactionType.DEBIT) == "Blue tokai"

    def test_preposition_may_end_a_word(self):
        text = "AMOUNT debited for Great Foods on 01-03-25"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Foods"

    def test_field_label_may_end_a_word(self):
        text = "AMOUNT debited. UPIInfo: GROCER on 01-03-25"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Grocer on 01-03-25"

    def test_withdrawal_label(self):
        text = "AMOUNT withdrawn from ATM ID 12345 on 23-02-25. Avl Bal: 10000."
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Cash Withdrawal"

    def test_counterparty_takes_precedence_over_withdrawal(self):
        text = "AMOUNT withdrawn and sent to LANDLORD on 01-03-25"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Landlord"

    def test_narration_field(self):
        text = "Acct XX8899 credited with AMOUNT on 24-Feb-25. Info: SALARY CREDITED. Avl Bal Rs 1,50,000."
        assert DescriptionExtractor().extract(text, TransactionType.CREDIT) == "Salary credited avl bal r..."

    def test_vpa_field_on_debit(self):
        text = "AMOUNT debited. VPA: merchant@okaxis"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Merchant@okaxis"

    def test_credit_counterparty(self):
        text = "A/C X9900 credited with AMOUNT from RAJESH KUMAR on 01-03-25"
        assert DescriptionExtractor().extract(text, TransactionType.CREDIT) == "Rajesh kumar"

    def test_upi_segment_when_candidate_too_short(self):
        text = "AMOUNT debited UPI/ZOMATO/12345"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Zomato"

    def test_upi_segment_replaces_two_char_candidate(self):
        text = "AMOUNT sent to AB on 01-03-25 UPI/ZOMATO/123"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Zomato"

    def test_two_char_candidate_is_kept(self):
        text = "AMOUNT sent to AB on 01-03-25"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Ab"

    def test_one_char_candidate_falls_back(self):
        text = "AMOUNT sent to X on 01-03-25"
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Purchase"

    def test_upi_segment_requires_slash(self):
        assert DescriptionExtractor().upi_segment("AMOUNT debited via UPI") == ""

    def test_short_narration_not_replaced_by_upi(self):
        text = "Your A/c X1234 is debited for AMOUNT on 24-02-25. Info: UPI/STARBUCKS. Avl Bal: Rs 5000."
        assert DescriptionExtractor().extract(text, TransactionType.DEBIT) == "Upi"

    @pytest.mark.parametrize("direction, expected", [
        (TransactionType.CREDIT, "Deposit"),
        (TransactionType.DEBIT, "Purchase"),
    ])
    def test_terminal_fallback(self, direction, expected):
        text = "ICICI Bank: Acct XX777 debited for AMOUNT; NETFLIX.COM via Card on 20-02-25."
        assert DescriptionExtractor().extract(text, direction) == expected

    def test_fallback_when_cleanup_empties_candidate(self):
        text = "Alert: A/C X9900 credited with AMOUNT by transfer from RAJESH KUMAR. Ref: IMPS123."
        assert DescriptionExtractor().extract(text, TransactionType.CREDIT) == "Deposit"

    def test_strategy_order_is_explicit(self):
        names = [s.name for s in DescriptionExtractor().strategies]
        assert names == [
            'debit_counterparty', 'cash_withdrawal', 'debit_narration',
            'credit_counterparty', 'credit_narration',
        ]


class TestDescriptionCleanup:
    def test_removes_noise_and_punctuation(self):
        assert DescriptionExtractor().clean("NEFT Txn: ACME CORP.") == "Acme corp"

    def test_bank_removed_inside_merchant_name(self):
        # Known limitation: noise tokens are plain substrings
        assert DescriptionExtractor().clean("FOOD BANK TRUST") == "Food  trust"

    def test_truncates_to_25_plus_ellipsis(self):
        cleaned = DescriptionExtractor().clean("A" * 40)
        assert cleaned == "A" + "a" * 24 + "..."
        assert len(cleaned) == 28


class TestInstitutionIdentifier:
    def test_bank_gets_suffix(self):
        assert InstitutionIdentifier().identify("HDFC Bank: Rs 10 debited") == "HDFC Bank"

    def test_wallet_used_as_is(self):
        assert InstitutionIdentifier().identify("Paid via Paytm wallet") == "PAYTM"

    def test_unknown(self):
        assert InstitutionIdentifier().identify("Acct XX8899 credited") == "Unknown Bank"

    def test_priority_is_list_order_not_text_order(self):
        assert InstitutionIdentifier().identify("ICICI card bill paid from HDFC account") == "HDFC Bank"

    def test_upi_alone(self):
        assert InstitutionIdentifier().identify("Rs 10 sent via UPI") == "UPI"

    def test_upi_combined(self):
        assert InstitutionIdentifier().identify("Rs 10 from SBI via UPI") == "UPI / SBI Bank"

    def test_upi_marker_is_case_sensitive(self):
        assert InstitutionIdentifier().identify("Rs 10 via upi") == "Unknown Bank"

    def test_custom_codes(self):
        config = ParserConfig(institution_codes=["yes", "hdfc"], wallet_codes=["mobikwik"])
        identifier = InstitutionIdentifier(config)
        assert identifier.identify("HDFC and YES mentioned") == "YES Bank"
