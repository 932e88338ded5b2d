import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from services.discount_codes import CodeSequence, DiscountCodeGenerator, sanitize_identity

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
FIXED_MILLIS = 1704110400000


def test_code_shape_with_fixed_clock_and_sequence(generator):
    code = generator.generate("a.b+c@Example.com", Decimal("15"))

    assert code == f"WS-ABCEXAMP-1500-{FIXED_MILLIS}0000"


def test_sequence_advances_between_calls(generator):
    first = generator.generate("a@b.com", Decimal("15.00"))
    second = generator.generate("a@b.com", Decimal("15.00"))

    assert first.endswith("0000")
    assert second.endswith("0001")
    assert first != second


def test_sanitize_identity_strips_then_truncates():
    assert sanitize_identity("jo-ann.o'neil@shop.com", 8) == "JOANNONE"
    assert sanitize_identity("a@b.com", 8) == "ABCOM"
    assert sanitize_identity("!!!", 8) == ""


def test_amount_rendered_without_decimal_point():
    generator = DiscountCodeGenerator(prefix="WHOLESALE", clock=lambda: FIXED_NOW, sequence=CodeSequence(start=35))

    code = generator.generate("a@b.com", Decimal("1234.5"))

    assert code == f"WHOLESALE-ABCOM-123450-{FIXED_MILLIS}000Z"


def test_sequence_wraps_after_last_value():
    sequence = CodeSequence(start=36 ** 4 - 1)

    assert sequence.next() == "ZZZZ"
    assert sequence.next() == "0000"


def test_codes_unique_for_identical_inputs_at_same_instant():
    generator = DiscountCodeGenerator(clock=lambda: FIXED_NOW)

    codes = {generator.generate("a@b.com", Decimal("15.00")) for _ in range(10000)}

    assert len(codes) == 10000


def test_codes_unique_under_varied_inputs():
    generator = DiscountCodeGenerator()
    base = datetime(2024, 6, 1, tzinfo=timezone.utc)

    codes = set()
    for i in range(12000):
        generator.clock = lambda i=i: base + timedelta(microseconds=i * 250)
        identity = f"customer{i % 37}@example.com"
        amount = Decimal(i % 500) / 4
        codes.add(generator.generate(identity, amount))

    assert len(codes) == 12000


def test_codes_unique_across_threads():
    generator = DiscountCodeGenerator(clock=lambda: FIXED_NOW)
    codes = []
    lock = threading.Lock()

    def worker():
        local = [generator.generate("a@b.com", Decimal("5")) for _ in range(2500)]
        with lock:
            codes.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(codes) == 10000
    assert len(set(codes)) == 10000
