"""Unit tests for the assembled test environment."""

from __future__ import annotations

import pytest

from capharness.core.models import Success
from capharness.lang.bindings import repl_bindings
from capharness.testing.bindings import TEST_ENV_FLAG, test_bindings
from capharness.testing.chains import receive, send
from capharness.testing.runner import run_test

pytestmark = pytest.mark.unit


class TestTestBindings:
    def test_flag_is_true(self) -> None:
        assert test_bindings().env[TEST_ENV_FLAG] is True

    def test_programs_can_branch_on_the_flag(self) -> None:
        program = '(if test-env__ "test" "prod")'
        assert run_test(test_bindings(), program) == Success("test")

    def test_chain_primitives_are_replaced(self) -> None:
        env = test_bindings().env
        assert env["send!"].fn is send
        assert env["receive!"].fn is receive
        assert repl_bindings().env["send!"].fn is not send

    def test_other_repl_primitives_are_kept(self) -> None:
        env = test_bindings().env
        production = repl_bindings().env
        for name in production:
            if name in ("send!", "receive!"):
                continue
            assert name in env
            assert env[name].name == production[name].name

    def test_flag_absent_from_production(self) -> None:
        assert TEST_ENV_FLAG not in repl_bindings().env
