import sys

import pytest
from loguru import logger

from mirrorrank.config import Candidate


@pytest.fixture(autouse=True)
def _reset_loguru():
    yield
    # cli.configure_logging binds the (captured) stderr of the running test
    logger.remove()
    logger.add(sys.__stderr__)


def make_candidate(url="https://m.example/", score=1.0, protocol="https", ipv4=True, active=True):
    return Candidate.model_validate(
        {
            "url": url,
            "protocol": protocol,
            "score": score,
            "ipv4": ipv4,
            "active": active,
        }
    )


@pytest.fixture
def candidate_factory():
    return make_candidate
