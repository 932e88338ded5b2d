"""
Discount code generation

Codes look like ``WS-ABEXAMPL-1500-1730000000000K3ZQ``: prefix, sanitized
customer identity, amount without the decimal point, epoch milliseconds and a
per-process base-36 sequence.
"""

import re
import secrets
import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional
from utils.money import format_money

Clock = Callable[[], datetime]

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")
_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_identity(identity: str, length: int) -> str:
    """Strip everything outside [A-Za-z0-9], uppercase, then truncate"""
    return _NON_ALPHANUMERIC.sub("", identity).upper()[:length]


class CodeSequence:
    """Thread-safe wrapping counter rendered as fixed-width base 36"""

    def __init__(self, start: Optional[int] = None, width: int = 4):
        self.width = width
        self.modulus = len(_BASE36) ** width
        # Random start so separate worker processes don't walk the same values
        self._value = secrets.randbelow(self.modulus) if start is None else start % self.modulus
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            value = self._value
            self._value = (self._value + 1) % self.modulus

        digits = []
        for _ in range(self.width):
            value, remainder = divmod(value, len(_BASE36))
            digits.append(_BASE36[remainder])
        return "".join(reversed(digits))


class DiscountCodeGenerator:
    """Builds unique, human-traceable discount codes"""

    def __init__(
        self,
        prefix: str = "WS",
        identity_length: int = 8,
        clock: Clock = utc_now,
        sequence: Optional[CodeSequence] = None
    ):
        self.prefix = prefix
        self.identity_length = identity_length
        self.clock = clock
        self.sequence = sequence or CodeSequence()

    def generate(self, identity: str, amount: Decimal) -> str:
        """
        Generate a discount code

        Args:
            identity: Customer identity (email)
            amount: Discount amount, rendered with 2 decimals and no point

        Returns:
            Code string, unique within the process
        """
        ident = sanitize_identity(identity, self.identity_length)
        amount_digits = format_money(amount).replace(".", "").lstrip("-")
        millis = int(self.clock().timestamp() * 1000)
        return f"{self.prefix}-{ident}-{amount_digits}-{millis}{self.sequence.next()}"
