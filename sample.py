import random
from typing import Optional

# Notification texts used to simulate incoming SMS
SAMPLE_MESSAGES = [
    "HDFC Bank: Rs 1,250.00 debited from a/c **4321 on 24-02-25 to SWIGGY. Avl Bal: INR 45,000. Not you? Call 1800...",
    "Acct XX8899 credited with Rs 45,000.00 on 24-Feb-25. Info: SALARY CREDITED. Avl Bal Rs 1,50,000.",
    "Dear User, Your A/c X1234 is debited for Rs.340.00 on 24-02-25. Info: UPI/STARBUCKS. Avl Bal: Rs 5000.",
    "Sent Rs. 850.00 to UBER RIDES from HDFC Bank A/c via UPI. Ref 23948293.",
    "ICICI Bank: Acct XX777 debited for Rs 199.00; NETFLIX.COM via Card on 20-02-25.",
    "Spent Rs 4,500.00 at ZARA on 22-02-25. Avl Bal Rs 12,000. - SBI Card",
    "Rs 2000.00 withdrawn from ATM ID 12345 on 23-02-25. Avl Bal: 10000.",
    "Alert: A/C X9900 credited with INR 5,000.00 by transfer from RAJESH KUMAR. Ref: IMPS123.",
]


def random_message(rng: Optional[random.Random] = None) -> str:
    """Pick a sample notification, as if one had just arrived."""
    return (rng or random).choice(SAMPLE_MESSAGES)
