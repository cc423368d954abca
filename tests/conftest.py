from datetime import date

import pytest

from sms_parser import SmsParser

FIXED_DATE = date(2025, 2, 24)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_DATE


@pytest.fixture
def parser(fixed_clock):
    return SmsParser(clock=fixed_clock)
