from agrialert.dsa import intersect_sorted, merge_sort


def test_merge_sort_matches_sorted():
    data = [5, 3, 9, 1, 1, 7, 0]
    assert merge_sort(data) == sorted(data)
    assert merge_sort(data, reverse=True) == sorted(data, reverse=True)


def test_merge_sort_is_stable_in_both_directions():
    data = [("a", 1), ("b", 2), ("c", 1), ("d", 2), ("e", 3)]
    asc = merge_sort(data, key=lambda x: x[1])
    desc = merge_sort(data, key=lambda x: x[1], reverse=True)
    assert [k for k, _ in asc] == ["a", "c", "b", "d", "e"]
    assert [k for k, _ in desc] == ["e", "b", "d", "a", "c"]


def test_merge_sort_returns_new_list():
    data = [2, 1]
    out = merge_sort(data)
    assert out == [1, 2] and data == [2, 1]


def test_intersect_sorted():
    assert intersect_sorted([1, 3, 5, 7], [2, 3, 7, 9]) == [3, 7]
    assert intersect_sorted([], [1]) == []
