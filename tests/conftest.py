"""Test configuration and shared fixtures."""

import pytest

from fullsimple.config.settings import Settings
from fullsimple.core.checker import TypeChecker
from fullsimple.core.context import Context
from fullsimple.eval.machine import Evaluator


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the process environment."""
    return Settings(_env_file=None, max_steps=10_000)


@pytest.fixture
def checker(settings: Settings) -> TypeChecker:
    return TypeChecker(settings)


@pytest.fixture
def evaluator(settings: Settings) -> Evaluator:
    return Evaluator(settings)


@pytest.fixture
def ctx() -> Context:
    return Context.empty()
