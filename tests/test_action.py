"""Tests for the rebase action vocabulary."""

from __future__ import annotations

import pytest

from gitboard import ACTION_INFO, RebaseAction


class TestVocabulary:
    def test_exactly_six_actions(self):
        assert [a.value for a in RebaseAction] == [
            "pick", "reword", "edit", "squash", "fixup", "drop",
        ]

    def test_every_action_has_info(self):
        assert set(ACTION_INFO) == set(RebaseAction)

    def test_standard_label_is_git_keyword(self):
        for action in RebaseAction:
            assert action.label() == action.value

    @pytest.mark.parametrize(
        "action,label",
        [
            (RebaseAction.PICK, "Keep"),
            (RebaseAction.REWORD, "Edit Message"),
            (RebaseAction.EDIT, "Edit Code"),
            (RebaseAction.SQUASH, "Merge (keep messages)"),
            (RebaseAction.FIXUP, "Merge (discard message)"),
            (RebaseAction.DROP, "Delete"),
        ],
    )
    def test_simplified_labels(self, action, label):
        assert action.label(simplified=True) == label

    def test_action_is_str(self):
        assert RebaseAction("squash") is RebaseAction.SQUASH
        assert str(RebaseAction.FIXUP) == "fixup"


class TestShortcuts:
    @pytest.mark.parametrize("key", ["p", "r", "e", "s", "f", "d"])
    def test_shortcut_round_trip(self, key):
        action = RebaseAction.from_shortcut(key)
        assert action is not None
        assert action.info.shortcut == key

    def test_shortcut_case_insensitive(self):
        assert RebaseAction.from_shortcut("S") is RebaseAction.SQUASH

    def test_unknown_shortcut(self):
        assert RebaseAction.from_shortcut("x") is None

    def test_shortcuts_unique(self):
        keys = [info.shortcut for info in ACTION_INFO.values()]
        assert len(keys) == len(set(keys))


class TestClassification:
    def test_fold_actions(self):
        assert {a for a in RebaseAction if a.is_fold} == {RebaseAction.SQUASH, RebaseAction.FIXUP}

    def test_surviving_actions(self):
        assert {a for a in RebaseAction if a.survives} == {
            RebaseAction.PICK, RebaseAction.REWORD, RebaseAction.EDIT,
        }

    def test_message_kept(self):
        assert not RebaseAction.FIXUP.keeps_message
        assert not RebaseAction.DROP.keeps_message
        assert RebaseAction.SQUASH.keeps_message
