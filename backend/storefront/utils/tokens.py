import secrets
import string
import time

ALPHABET = string.ascii_uppercase + string.digits


def random_token(length: int) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_order_id() -> str:
    return f"ORD-{now_ms()}-{random_token(9)}"


def generate_discount_code() -> str:
    return random_token(8)


def generate_transaction_id() -> str:
    return f"txn-{now_ms()}-{random_token(9).lower()}"
