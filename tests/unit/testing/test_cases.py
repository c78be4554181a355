"""Unit tests for YAML case files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from capharness.testing.cases import (
    CaseFileError,
    HarnessCase,
    check_case,
    load_cases,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "cases.yaml"
    path.write_text(content)
    return path


class TestLoadCases:
    def test_loads_all_fields(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            """
cases:
  - name: echo
    stdin: ["hello"]
    files: {"a.txt": "content"}
    program: "(put-str! (get-line!))"
    output: ["hello"]
    value: "()"
  - name: arithmetic
    pure: true
    program: "(+ 1 2)"
    value: "3"
""",
        )
        echo, arithmetic = load_cases(path)
        assert echo == HarnessCase(
            name="echo",
            program="(put-str! (get-line!))",
            stdin=("hello",),
            files={"a.txt": "content"},
            output=("hello",),
            value="()",
        )
        assert arithmetic.pure is True
        assert arithmetic.output is None

    def test_empty_file_has_no_cases(self, tmp_path: Path) -> None:
        assert load_cases(write(tmp_path, "")) == []

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("cases: [", "Invalid YAML"),
            ("- 1", "must be a YAML mapping"),
            ("tests: []", "unknown top-level"),
            ("cases: {}", "must be a list"),
            ("cases: [1]", "must be a mapping"),
            ("cases: [{program: '1'}]", "'name'"),
            ("cases: [{name: a}]", "'program'"),
            ("cases: [{name: a, program: '1', expect: 1}]", "unknown field"),
            ("cases: [{name: a, program: '1', stdin: [1]}]", "list of strings"),
            ("cases: [{name: a, program: '1', pure: 'yes'}]", "boolean"),
            ("cases: [{name: a, program: '1', files: [x]}]", "'files'"),
            ("cases: [{name: a, program: '1', value: 3}]", "'value'"),
            (
                "cases: [{name: a, program: '1'}, {name: a, program: '2'}]",
                "duplicate",
            ),
        ],
    )
    def test_malformed_files(self, tmp_path: Path, content: str, message: str) -> None:
        with pytest.raises(CaseFileError, match=message):
            load_cases(write(tmp_path, content))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CaseFileError, match="Failed to read"):
            load_cases(tmp_path / "absent.yaml")


class TestCheckCase:
    def test_passing_case(self) -> None:
        case = HarnessCase(
            name="echo",
            program="(def x (get-line!)) (put-str! x) x",
            stdin=("hello",),
            output=("hello",),
            value='"hello"',
        )
        result = check_case(case)
        assert result.passed
        assert result.problems == ()

    def test_value_mismatch(self) -> None:
        result = check_case(HarnessCase(name="v", program="(+ 1 1)", value="3"))
        assert not result.passed
        assert "does not match" in result.problems[0]

    def test_output_mismatch(self) -> None:
        result = check_case(
            HarnessCase(name="o", program='(put-str! "a")', output=("b",))
        )
        assert not result.passed

    def test_expected_error(self) -> None:
        case = HarnessCase(
            name="e", program='(receive! "c" 1.5)', error="expecting int argument"
        )
        assert check_case(case).passed

    def test_unexpected_error(self) -> None:
        result = check_case(HarnessCase(name="e", program="(send! 1 2)"))
        assert not result.passed
        assert result.problems[0].startswith("unexpected error")

    def test_missing_expected_error(self) -> None:
        result = check_case(HarnessCase(name="e", program="1", error="boom"))
        assert not result.passed

    def test_pure_case_has_no_effects(self) -> None:
        case = HarnessCase(
            name="p", program='(put-str! "x")', pure=True, error="put-str!"
        )
        assert check_case(case).passed

    def test_files_are_virtual(self) -> None:
        case = HarnessCase(
            name="f",
            program='(read-file! "a.txt")',
            files={"a.txt": "hi"},
            value='"hi"',
        )
        assert check_case(case).passed
