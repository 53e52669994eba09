from streamcatalog.utils import normalise_genre, rank_by


def test_normalise_genre_ignores_case_and_padding():
    assert normalise_genre("  Sci-Fi ") == normalise_genre("SCI-FI")


def test_normalise_genre_handles_missing_values():
    assert normalise_genre(None) == ""
    assert normalise_genre("") == ""


def test_rank_by_keeps_input_order_for_ties():
    items = [("a", 1), ("b", 3), ("c", 1), ("d", 3)]
    ranked = rank_by(items, key=lambda pair: pair[1], limit=10)
    assert [name for name, _ in ranked] == ["b", "d", "a", "c"]


def test_rank_by_caps_and_rejects_non_positive_limits():
    items = [1, 5, 3, 4]
    assert rank_by(items, key=float, limit=2) == [5, 4]
    assert rank_by(items, key=float, limit=0) == []
