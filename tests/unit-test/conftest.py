from unittest.mock import MagicMock

import pytest

from spinn3r.config import FetchPolicy
from tests.utils import load_fixture


@pytest.fixture
def transport():
    """Transport stub; set ``side_effect`` or ``return_value`` on ``get``."""
    return MagicMock()


@pytest.fixture
def policy():
    return FetchPolicy(retries=5, retry_sleep=30, timeout=30)


@pytest.fixture
def page1_xml():
    return load_fixture("permalink_page1.xml")


@pytest.fixture
def page2_xml():
    return load_fixture("permalink_page2.xml")


@pytest.fixture
def empty_xml():
    return load_fixture("permalink_empty.xml")
