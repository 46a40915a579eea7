"""Mocks - stubbed methods return canned values and record their calls."""

from tptest import TestCase, create_mock

from example.calculator import Calculator
from example.payment import OrderService, PaymentDeclined, PaymentGateway


class WhenMockingCollaborators(TestCase):
    def before_each(self):
        self.calculator = create_mock(Calculator, {"mock_me": 10}, [5])

    def it_should_return_the_stub_value(self):
        self.expect(self.calculator.compute()).to_equal(15)

    def it_should_track_calls(self):
        self.calculator.compute()
        self.expect(self.calculator).to_have_called("mock_me", 1)
        self.expect(self.calculator).to_have_called_with("mock_me", [8, 20])

        self.calculator.compute()
        self.expect(self.calculator).not_.to_have_called("mock_me", 1)
        self.expect(self.calculator).to_have_called("mock_me", 2)

    def it_should_act_as_the_mocked_class(self):
        self.expect(self.calculator).to_be_instance_of(Calculator)
        self.expect(self.calculator).to_have_method("compute")

    def it_should_keep_mocks_apart(self):
        other = create_mock(Calculator, {"mock_me": 10})
        self.calculator.compute()
        self.expect(other).to_have_called("mock_me", 0)

    def it_should_stand_in_for_a_dependency(self):
        gateway = create_mock(PaymentGateway, {"charge": {"id": "ch_1"}})
        order = OrderService(gateway).place_order(25.0, "tok_visa")

        self.expect(order.status).to_equal("placed")
        self.expect(gateway).to_have_called_with("charge", [25, "tok_visa"])

    def it_should_raise_configured_errors(self):
        gateway = create_mock(PaymentGateway, raises={"charge": PaymentDeclined("no funds")})
        order = OrderService(gateway).place_order(25.0, "tok_visa")

        self.expect(order.status).to_equal("declined")
        self.expect(gateway).to_have_called("charge", 1)
