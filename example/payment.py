"""Payment services for mock examples."""

from dataclasses import dataclass


class PaymentDeclined(Exception):
    """Payment was declined."""


class PaymentGateway:
    """External payment gateway (to be mocked in tests)."""

    def __init__(self, api_key: str = "test-key"):
        self.api_key = api_key

    def charge(self, amount: float, card_token: str) -> dict:
        """Charge a card. In real code, this calls an external API."""
        raise NotImplementedError("Real PaymentGateway should be mocked in tests")

    def currency(self) -> str:
        return "USD"


@dataclass
class Order:
    """Order result."""

    id: int
    status: str
    total: float


class OrderService:
    """Order processing service that depends on PaymentGateway."""

    def __init__(self, payment_gateway: PaymentGateway):
        self.payment_gateway = payment_gateway
        self._next_id = 1000

    def place_order(self, amount: float, card_token: str) -> Order:
        """Place an order, charging the card through the gateway."""
        try:
            self.payment_gateway.charge(amount, card_token)
        except PaymentDeclined:
            return Order(id=0, status="declined", total=amount)

        order_id = self._next_id
        self._next_id += 1
        return Order(id=order_id, status="placed", total=amount)
