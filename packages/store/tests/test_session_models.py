"""Tests for SessionState and Comment."""

from __future__ import annotations

import pytest

from ghr_store.models import LOCAL, PUSHED, Comment, SessionState


def _state_with_comments() -> SessionState:
    state = SessionState()
    state.select_pr(5)
    state.add_global_comment("Looks good overall")
    state.add_file_comment("a.py", "nit", line=3)
    state.add_file_comment("a.py", "block", line=10, start_line=8)
    state.add_file_comment("b.py", "why?", line=1)
    return state


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------


class TestComment:
    def test_defaults(self):
        c = Comment(body="x")
        assert c.is_local
        assert c.status == LOCAL
        assert c.created_at

    @pytest.mark.parametrize(
        "line,start,expected",
        [(None, None, ""), (4, None, "4"), (9, 4, "4-9"), (4, 4, "4")],
    )
    def test_span(self, line, start, expected):
        assert Comment(body="x", line=line, start_line=start).span == expected

    def test_from_dict_tolerates_missing_fields(self):
        c = Comment.from_dict({"body": "hi"})
        assert c.body == "hi"
        assert c.path is None
        assert c.status == LOCAL
        assert c.created_at


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:
    def test_switching_pr_clears_comments_and_search(self):
        state = _state_with_comments()
        state.set_search([1, 2])
        state.select_pr(6)
        assert state.pr_number == 6
        assert state.global_comments == []
        assert state.file_comments == {}
        assert state.grep_set is None

    def test_reselecting_same_pr_keeps_comments(self):
        state = _state_with_comments()
        state.select_file(2, "b.py")
        state.select_pr(5)
        assert state.unpushed_count() == 4
        assert state.current_file_name is None

    def test_reset(self):
        state = _state_with_comments()
        state.reset()
        assert state == SessionState()


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class TestComments:
    def test_add_file_comment_collapses_single_line_range(self):
        state = SessionState()
        c = state.add_file_comment("a.py", "x", line=4, start_line=4)
        assert c.start_line is None

    def test_add_file_comment_rejects_inverted_range(self):
        with pytest.raises(ValueError):
            SessionState().add_file_comment("a.py", "x", line=2, start_line=5)

    def test_delete_global_comment_pops_most_recent(self):
        state = SessionState()
        state.add_global_comment("first")
        state.add_global_comment("second")
        assert state.delete_global_comment().body == "second"
        assert [c.body for c in state.global_comments] == ["first"]

    def test_delete_global_comment_when_empty(self):
        assert SessionState().delete_global_comment() is None

    def test_delete_file_comment_is_one_based(self):
        state = _state_with_comments()
        assert state.delete_file_comment("a.py", 2).body == "block"
        assert [c.body for c in state.file_comments["a.py"]] == ["nit"]

    def test_deleting_last_comment_removes_the_file_key(self):
        state = _state_with_comments()
        state.delete_file_comment("b.py", 1)
        assert "b.py" not in state.file_comments

    @pytest.mark.parametrize("number", [0, 3])
    def test_delete_file_comment_out_of_range(self, number):
        with pytest.raises(IndexError):
            _state_with_comments().delete_file_comment("a.py", number)

    def test_prune_file_comments(self):
        state = _state_with_comments()
        assert state.prune_file_comments(["a.py", "c.py"]) == ["b.py"]
        assert list(state.file_comments) == ["a.py"]

    def test_unpushed_count_and_mark_all_pushed(self):
        state = _state_with_comments()
        assert state.unpushed_count() == 4
        state.mark_all_pushed()
        assert state.unpushed_count() == 0
        assert all(c.status == PUSHED for c in state.global_comments)
        state.add_global_comment("late")
        assert state.unpushed_count() == 1

    def test_mark_pushed_touches_only_given_comments(self):
        state = _state_with_comments()
        sent = state.local_global_comments()
        state.mark_pushed(sent)
        assert all(c.status == PUSHED for c in state.global_comments)
        assert state.unpushed_count() == len(state.local_file_comments()) > 0


# ---------------------------------------------------------------------------
# Search cursor
# ---------------------------------------------------------------------------


class TestSearch:
    def test_set_search_starts_at_first_match(self):
        state = SessionState()
        state.set_search([2, 5, 7])
        assert state.grep_index == 0

    def test_next_wraps(self):
        state = SessionState()
        state.set_search([2, 5, 7])
        assert [state.next_search() for _ in range(3)] == [5, 7, 2]

    def test_prev_wraps(self):
        state = SessionState()
        state.set_search([2, 5, 7])
        assert [state.prev_search() for _ in range(3)] == [7, 5, 2]

    def test_empty_search(self):
        state = SessionState()
        state.set_search([])
        assert state.grep_index is None
        assert state.next_search() is None
        assert state.prev_search() is None


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


class TestSerialisation:
    def test_dict_layout(self):
        state = _state_with_comments()
        state.select_file(1, "a.py")
        d = state.to_dict()
        assert d["pr_number"] == 5
        assert d["current_file_index"] == 1
        assert d["current_file_name"] == "a.py"
        assert [c["body"] for c in d["comments"]["global"]] == ["Looks good overall"]
        assert d["comments"]["files"]["a.py"][1]["start_line"] == 8

    def test_restores_equal_state(self):
        state = _state_with_comments()
        state.set_search([1, 2])
        state.next_search()
        assert SessionState.from_dict(state.to_dict()) == state

    def test_from_empty_dict(self):
        assert SessionState.from_dict({}) == SessionState()
