import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from address_parser.native import NativeStrategy  # noqa: E402
from address_parser.strict import StrictLiteralStrategy  # noqa: E402


@pytest.fixture
def native():
    return NativeStrategy()


@pytest.fixture
def strict():
    return StrictLiteralStrategy()
