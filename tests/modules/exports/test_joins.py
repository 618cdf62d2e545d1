"""Tests for in-memory join indexes."""

from types import SimpleNamespace

from src.modules.exports.joins import UNKNOWN, Index, count_by


def _rec(**kwargs):
    return SimpleNamespace(**kwargs)


class TestIndex:
    def test_lookup_and_miss(self):
        idx = Index([_rec(id=1, name="Ana"), _rec(id=2, name="Jose")], key=lambda r: r.id)
        assert len(idx) == 2
        assert 1 in idx
        assert idx.get(2).name == "Jose"
        assert idx.get(3) is None
        assert idx.get(None) is None

    def test_blank_keys_are_skipped(self):
        idx = Index(
            [_rec(code=None), _rec(code=""), _rec(code="ANA03")],
            key=lambda r: r.code,
        )
        assert len(idx) == 1
        assert "" not in idx

    def test_later_record_wins_on_duplicate_key(self):
        idx = Index([_rec(code="X", name="first"), _rec(code="X", name="second")], key=lambda r: r.code)
        assert idx.get("X").name == "second"

    def test_label_falls_back_to_unknown(self):
        idx = Index([_rec(id=1, name="Ana"), _rec(id=2, name="")], key=lambda r: r.id)
        assert idx.label(1, lambda r: r.name) == "Ana"
        assert idx.label(2, lambda r: r.name) == UNKNOWN
        assert idx.label(99, lambda r: r.name) == UNKNOWN
        assert idx.label(None, lambda r: r.name) == UNKNOWN


def test_count_by_pairs():
    claims = [
        _rec(member_id=1, benefit_id=10),
        _rec(member_id=1, benefit_id=10),
        _rec(member_id=1, benefit_id=11),
        _rec(member_id=2, benefit_id=10),
    ]
    counts = count_by(claims, key=lambda c: (c.member_id, c.benefit_id))
    assert counts[(1, 10)] == 2
    assert counts[(1, 11)] == 1
    assert counts[(2, 10)] == 1
    assert counts[(2, 11)] == 0
