"""Lifecycle callbacks - before_all runs once, before_each before every test."""

from tptest import TestCase


class WhenUsingCallbacks(TestCase):
    value = 0

    def before_all(self):
        self.value += 1

    def before_each(self):
        self.items = []

    def it_should_call_before_each_once(self):
        self.expect(self.items).to_have_count(0)
        self.items.append("dirty")

    def it_should_call_before_all_once(self):
        self.expect(self.value).to_be(1)
        self.expect(self.items).to_have_count(0)
