"""Pytest configuration and fixtures for tptest tests."""

import pytest

from tptest import TestCase


class Sample(TestCase):
    """Case used to make expectations outside of a run."""

    def it_exists(self):
        pass


@pytest.fixture
def case() -> Sample:
    """A case positioned inside a test method, ready for expect()."""
    sample = Sample()
    sample.current_test = "it_samples"
    return sample
