from bookgrid.flatten import get_bookmarks_in_folder
from bookgrid.model import FlatBookmark
from bookgrid.search import search_bookmarks
from bookgrid.sort import sort_bookmarks


def _fb(id, title="", date_added=0):
    return FlatBookmark(id=id, title=title, url=f"https://{id}.example/", date_added=date_added)


def test_scenario_sort_by_date(scenario_tree):
    result = get_bookmarks_in_folder(scenario_tree, None)
    assert [b.id for b in sort_bookmarks(result, "dateAdded", "asc")] == ["3", "2"]
    assert [b.id for b in sort_bookmarks(result, "dateAdded", "desc")] == ["2", "3"]


def test_sort_returns_new_list_and_keeps_input():
    items = [_fb("b", date_added=2), _fb("a", date_added=1)]
    before = list(items)
    out = sort_bookmarks(items, "dateAdded", "asc")
    assert out is not items
    assert items == before


def test_missing_dates_sort_first_ascending():
    items = [_fb("late", date_added=10), _fb("none"), _fb("early", date_added=5)]
    assert [b.id for b in sort_bookmarks(items, "dateAdded", "asc")] == ["none", "early", "late"]


def test_desc_mirrors_asc_without_ties():
    items = [_fb("c", "Cherry", 3), _fb("a", "apple", 1), _fb("b", "Banana", 2)]
    for field in ("title", "dateAdded"):
        asc = sort_bookmarks(items, field, "asc")
        desc = sort_bookmarks(items, field, "desc")
        assert desc == list(reversed(asc))


def test_sort_is_stable_for_ties_in_both_orders():
    items = [_fb("x1", date_added=5), _fb("y", date_added=1), _fb("x2", date_added=5), _fb("x3", date_added=5)]
    asc = [b.id for b in sort_bookmarks(items, "dateAdded", "asc")]
    desc = [b.id for b in sort_bookmarks(items, "dateAdded", "desc")]
    assert asc == ["y", "x1", "x2", "x3"]
    assert desc == ["x1", "x2", "x3", "y"]


def test_title_sort_is_not_codepoint_order():
    items = [_fb("1", "banana"), _fb("2", "Cherry"), _fb("3", "apple")]
    assert [b.title for b in sort_bookmarks(items, "title", "asc", locale="en_US")] == ["apple", "banana", "Cherry"]


def test_title_sort_orders_han_by_pinyin_in_chinese_locale():
    # Codepoint order would be 上海, 北京, 安徽.
    items = [_fb("sh", "上海"), _fb("bj", "北京"), _fb("ah", "安徽")]
    assert [b.id for b in sort_bookmarks(items, "title", "asc", locale="zh_CN")] == ["ah", "bj", "sh"]
    assert [b.id for b in sort_bookmarks(items, "title", "asc", locale="zh-CN")] == ["ah", "bj", "sh"]


def test_chinese_title_sort_puts_han_ahead_of_latin():
    titles = ["zebra", "中国", "apple", "啊", "Banana"]
    items = [_fb(str(i), t) for i, t in enumerate(titles)]
    out = [b.title for b in sort_bookmarks(items, "title", "asc", locale="zh_CN")]
    assert out == ["啊", "中国", "apple", "Banana", "zebra"]
    desc = [b.title for b in sort_bookmarks(items, "title", "desc", locale="zh_CN")]
    assert desc == list(reversed(out))


def test_chinese_title_sort_mixed_titles_compare_character_by_character():
    titles = ["Python 教程", "2048 游戏", "北京 news", "北京"]
    items = [_fb(str(i), t) for i, t in enumerate(titles)]
    out = [b.title for b in sort_bookmarks(items, "title", "asc", locale="zh_CN")]
    assert out == ["2048 游戏", "北京", "北京 news", "Python 教程"]


def test_unknown_field_keeps_input_order():
    items = [_fb("b", "B", 2), _fb("a", "A", 1)]
    assert sort_bookmarks(items, "url", "asc") == items  # type: ignore[arg-type]


def test_filter_and_sort_commute():
    items = [_fb("1", "beta docs", 3), _fb("2", "alpha", 2), _fb("3", "alpha docs", 1)]
    a = sort_bookmarks(search_bookmarks(items, "docs"), "title", "asc")
    b = search_bookmarks(sort_bookmarks(items, "title", "asc"), "docs")
    assert a == b
