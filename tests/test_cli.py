"""CLI tests for gitboard -- tests every command via Click's CliRunner.

Plan and gesture files are written as JSON into runner.isolated_filesystem().
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from gitboard.cli import cli


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


def _write_plan(path: str = "plan.json", actions: list[str] | None = None) -> str:
    actions = actions or ["pick", "squash", "fixup", "pick"]
    entries = [
        {
            "commit": {"commit_id": f"{i + 1:02d}c0ffee{i + 1:02d}", "message": f"Commit {chr(65 + i)}"},
            "action": action,
        }
        for i, action in enumerate(actions)
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"onto": "main", "branch": "feature", "entries": entries}, f)
    return path


def _write_gesture(source: dict, target: dict, current_branch: str | None = "main", path: str = "gesture.json") -> str:
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"source": source, "target": target, "current_branch": current_branch}, f)
    return path


# ===========================================================================
# todo
# ===========================================================================


class TestTodo:
    def test_todo(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["todo", "plan.json"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "pick 01c0ffe Commit A",
            "squash 02c0ffe Commit B",
            "fixup 03c0ffe Commit C",
            "pick 04c0ffe Commit D",
            "",
            "# Rebase 4 commit(s) onto main",
        ]

    def test_first_entry_coerced(self, runner):
        with runner.isolated_filesystem():
            _write_plan(actions=["fixup", "pick"])
            result = runner.invoke(cli, ["todo", "plan.json"])
        assert result.output.splitlines()[0] == "pick 01c0ffe Commit A"

    def test_comment_char_option(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["--comment-char", ";", "todo", "plan.json"])
        assert result.output.splitlines()[-1] == "; Rebase 4 commit(s) onto main"

    def test_comment_char_envvar(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["todo", "plan.json"], env={"GITBOARD_COMMENT_CHAR": "%"})
        assert result.output.splitlines()[-1].startswith("% Rebase")

    def test_bad_comment_char(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["--comment-char", "##", "todo", "plan.json"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_file(self, runner):
        result = runner.invoke(cli, ["todo", "nope.json"])
        assert result.exit_code == 2

    def test_malformed_plan(self, runner):
        with runner.isolated_filesystem():
            with open("plan.json", "w") as f:
                f.write('{"entries": []}')
            result = runner.invoke(cli, ["todo", "plan.json"])
        assert result.exit_code == 1
        assert "at least one commit" in result.output


# ===========================================================================
# preview
# ===========================================================================


class TestPreview:
    def test_preview(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["preview", "plan.json"])
        assert result.exit_code == 0, result.output
        assert "Rebase plan" in result.output
        assert "After rebase (2 commits)" in result.output
        assert "(squashed into above, message discarded)" in result.output
        assert "2 pick, 1 squash, 1 fixup" in result.output

    def test_simplified_labels(self, runner):
        with runner.isolated_filesystem():
            _write_plan(actions=["pick", "drop"])
            result = runner.invoke(cli, ["--simplified", "preview", "plan.json"])
        assert "Delete" in result.output
        assert "Keep" in result.output

    def test_validation_warning(self, runner):
        with runner.isolated_filesystem():
            _write_plan(actions=["drop", "drop"])
            result = runner.invoke(cli, ["preview", "plan.json"])
        assert result.exit_code == 0
        assert "Cannot drop all commits" in result.output
        assert "cannot be executed" in result.output


# ===========================================================================
# squash-message
# ===========================================================================


class TestSquashMessage:
    def test_composed_message(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["squash-message", "plan.json", "01c0ffe"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("Commit A\n\n# This is the combination of 3 commits.")
        assert "# This is the 3rd commit message:" in result.output

    def test_final_strips_comments(self, runner):
        with runner.isolated_filesystem():
            _write_plan(actions=["pick", "squash"])
            result = runner.invoke(cli, ["squash-message", "plan.json", "01c0ffee01", "--final"])
        assert result.exit_code == 0, result.output
        assert "#" not in result.output
        assert result.output.rstrip().endswith("Commit B")

    def test_no_group(self, runner):
        with runner.isolated_filesystem():
            _write_plan()
            result = runner.invoke(cli, ["squash-message", "plan.json", "04c0ffe"])
        assert result.exit_code == 1
        assert "No squash or fixup run folds into 04c0ffe" in result.output


# ===========================================================================
# classify
# ===========================================================================


class TestClassify:
    def test_cherry_pick_json(self, runner):
        with runner.isolated_filesystem():
            _write_gesture(
                {"kind": "commit", "commit": {"commit_id": "c1"}},
                {"kind": "branch", "branch": {"name": "feature"}},
            )
            result = runner.invoke(cli, ["classify", "gesture.json", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["operation"] == "cherry-pick"
        assert data["command"] == "checkout feature && cherry-pick c1"
        assert data["warning"] == "Will checkout to target branch first"
        assert data["dangerous"] is False

    def test_rich_output(self, runner):
        with runner.isolated_filesystem():
            _write_gesture(
                {"kind": "branch-pointer", "branch": {"name": "feature"}, "commit_id": "c1"},
                {"kind": "commit", "commit": {"commit_id": "c2"}},
            )
            result = runner.invoke(cli, ["classify", "gesture.json"])
        assert result.exit_code == 0, result.output
        assert "move-branch" in result.output
        assert "git branch -f feature c2" in result.output
        assert "(confirm)" in result.output

    def test_invalid_exit_code(self, runner):
        with runner.isolated_filesystem():
            _write_gesture(
                {"kind": "branch", "branch": {"name": "main"}},
                {"kind": "branch", "branch": {"name": "main"}},
            )
            result = runner.invoke(cli, ["classify", "gesture.json"])
        assert result.exit_code == 2
        assert "Cannot merge branch into itself" in result.output

    def test_unknown_kind(self, runner):
        with runner.isolated_filesystem():
            _write_gesture({"kind": "stash"}, {"kind": "empty-space"})
            result = runner.invoke(cli, ["classify", "gesture.json"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestGroup:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("preview", "todo", "squash-message", "classify"):
            assert name in result.output
