"""The built-in matchers, exercised against plain values."""

from tptest import TestCase, UnknownMatcherError


class DummyClass:
    def foo(self):
        pass


class WhenMakingAssertions(TestCase):
    def before_each(self):
        self.obj = DummyClass()
        self.arr = {"foo": "bar", "baz": "barf"}

    def it_should_test_truth(self):
        self.expect(45).to_be_truthy()
        self.expect(True).to_be_truthy()
        self.expect("bar").to_be_truthy()
        self.expect(["foo"]).to_be_truthy()

    def it_should_test_falseness(self):
        self.expect(0).to_be_falsy()
        self.expect(False).to_be_falsy()
        self.expect(None).to_be_falsy()
        self.expect("").to_be_falsy()
        self.expect([]).to_be_falsy()

    def it_should_invert_assertions(self):
        self.expect(False).not_.to_be_truthy()

    def it_should_test_equality(self):
        self.expect(123).to_equal(123)
        self.expect(123).to_equal("123")

    def it_should_test_identical(self):
        self.expect(123).to_be(123)
        self.expect(123).not_.to_be("123")

    def it_should_test_having_index(self):
        self.expect(self.arr).to_have("foo")
        self.expect(self.arr).not_.to_have("bazz")

    def it_should_test_count(self):
        self.expect(self.arr).to_have_count(2)
        self.expect(self.arr).not_.to_have_count(20)

    def it_should_test_for_methods(self):
        self.expect(self.obj).to_have_method("foo")
        self.expect(self.obj).to_be_instance_of(DummyClass)

    def it_should_throw(self):
        error = None
        try:
            self.expect("foo").to_die()
        except UnknownMatcherError as e:
            error = e
        self.expect(error).to_be_instance_of("UnknownMatcherError")
