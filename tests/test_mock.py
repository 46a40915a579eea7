"""Tests for call-tracking mocks."""

import pytest
from pydantic import ValidationError

from tptest import Call, CallLog, Mock, MockSpec, call_log, create_mock, mock_target

from example.calculator import Calculator
from example.payment import OrderService, PaymentDeclined, PaymentGateway


class TestInterception:
    """Tests for stubbed methods."""

    def test_stub_returns_configured_value(self) -> None:
        mock = create_mock(Calculator, {"mock_me": 10})

        assert mock.mock_me(8, 20) == 10

    def test_internal_calls_are_intercepted(self) -> None:
        mock = create_mock(Calculator, {"mock_me": 10}, [5])

        assert mock.compute() == 15
        assert call_log(mock).count("mock_me") == 1
        assert call_log(mock).get("mock_me") == Call(args=(8, 20))

    def test_calls_recorded_in_order(self) -> None:
        mock = create_mock(Calculator, {"mock_me": None})
        mock.mock_me(1, 2)
        mock.mock_me(3, b=4)

        log = call_log(mock)
        assert log.count("mock_me") == 2
        assert log.get("mock_me", 0) == Call(args=(1, 2))
        assert log.get("mock_me", 1) == Call(args=(3,), kwargs={"b": 4})
        assert log.get("mock_me", 2) is None

    def test_configured_exception_is_raised_and_recorded(self) -> None:
        gateway = create_mock(PaymentGateway, raises={"charge": PaymentDeclined("no funds")})

        with pytest.raises(PaymentDeclined):
            gateway.charge(10, "tok")
        assert call_log(gateway).count("charge") == 1

    def test_dependency_injection(self) -> None:
        gateway = create_mock(PaymentGateway, {"charge": {"id": "ch_1"}})
        order = OrderService(gateway).place_order(25.0, "tok_visa")

        assert order.status == "placed"
        assert call_log(gateway).get("charge") == Call(args=(25.0, "tok_visa"))


class TestPassThrough:
    """Tests for everything that is not stubbed."""

    def test_unstubbed_methods_run_for_real(self) -> None:
        mock = create_mock(Calculator, {"compute": 0})

        assert mock.mock_me(2, 3) == 6
        assert call_log(mock).count("mock_me") == 0
        assert "mock_me" not in call_log(mock)

    def test_constructor_arguments(self) -> None:
        mock = create_mock(PaymentGateway, {"charge": None}, kwargs={"api_key": "live"})

        assert mock.api_key == "live"
        assert mock.currency() == "USD"

    def test_attribute_writes_reach_the_instance(self) -> None:
        mock = create_mock(Calculator, {"mock_me": 1})
        mock.offset = 100

        assert mock.compute() == 101
        assert mock.history == [101]

    def test_static_methods(self) -> None:
        mock = create_mock(Calculator, {"mock_me": 1})

        assert mock.describe() == "calculator"

    def test_missing_attribute(self) -> None:
        mock = create_mock(Calculator, {"mock_me": 1})

        with pytest.raises(AttributeError):
            mock.nope

    def test_stubbing_unknown_name(self) -> None:
        mock = create_mock(Calculator, {"not_a_method": 7})

        assert mock.not_a_method() == 7
        assert mock.compute() == 160


class TestIdentity:
    """Tests for the mock standing in for its target."""

    def test_isinstance_of_target(self) -> None:
        mock = create_mock(Calculator, {"mock_me": 1})

        assert isinstance(mock, Calculator)
        assert type(mock) is Mock

    def test_mock_target(self) -> None:
        assert mock_target(create_mock(Calculator)) is Calculator
        assert mock_target(Calculator()) is None
        assert call_log(Calculator()) is None

    def test_repr(self) -> None:
        assert repr(create_mock(Calculator)).startswith("<Mock of Calculator at ")


class TestIsolation:
    """Two mocks never share state."""

    def test_independent_call_logs(self) -> None:
        a = create_mock(Calculator, {"mock_me": 10})
        b = create_mock(Calculator, {"mock_me": 10})

        a.compute()
        a.compute()

        assert call_log(a).count("mock_me") == 2
        assert call_log(b).count("mock_me") == 0

    def test_independent_stubs(self) -> None:
        a = create_mock(Calculator, {"mock_me": 1})
        b = create_mock(Calculator, {"mock_me": 2})

        assert a.mock_me() == 1
        assert b.mock_me() == 2


class TestMockSpec:
    def test_defaults(self) -> None:
        spec = MockSpec(target=Calculator)

        assert spec.stubs == {}
        assert spec.args == []
        assert spec.intercepted == []

    def test_intercepted_lists_stubs_and_raises(self) -> None:
        spec = MockSpec(
            target=PaymentGateway,
            stubs={"charge": 1},
            raises={"currency": ValueError(), "charge": ValueError()},
        )

        assert spec.intercepted == ["charge", "currency"]

    def test_target_must_be_a_class(self) -> None:
        with pytest.raises(ValidationError):
            MockSpec(target="Calculator")

    def test_reserved_names_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MockSpec(target=Calculator, stubs={"_mock_calls": 1})

    def test_mock_from_spec(self) -> None:
        mock = Mock(MockSpec(target=Calculator, stubs={"mock_me": 3}, args=[1]))

        assert mock.compute() == 4


class TestCallLog:
    def test_for_methods_creates_empty_entries(self) -> None:
        log = CallLog.for_methods(["a", "b"])

        assert log.calls == {"a": [], "b": []}
        assert "a" in log
        assert log.count("c") == 0

    def test_record(self) -> None:
        log = CallLog()
        call = log.record("a", [1], {"x": 2})

        assert call == Call(args=(1,), kwargs={"x": 2})
        assert log.get("a") is call
