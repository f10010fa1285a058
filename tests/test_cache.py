from tallymetrics.cache import MetricTag, StringInterner, TagCache, tag_map_key
from tallymetrics.identity import string_string_map


def _fresh(*parts):
    return "".join(parts)


def test_interner_returns_first_instance():
    interner = StringInterner()
    first = _fresh("met", "ric")
    second = _fresh("me", "tric")
    assert first is not second
    assert interner.intern(first) is first
    assert interner.intern(second) is first


def test_interner_keeps_distinct_strings_apart():
    interner = StringInterner()
    assert interner.intern("a") == "a"
    assert interner.intern("b") == "b"


def test_tag_cache_get_missing():
    cache = TagCache()
    assert cache.get(42) is None
    assert len(cache) == 0


def test_tag_cache_set_and_get():
    cache = TagCache()
    tags = [MetricTag("env", "test")]
    assert cache.set(1, tags) is tags
    assert cache.get(1) is tags
    assert len(cache) == 1


def test_tag_cache_set_keeps_existing():
    cache = TagCache()
    original = [MetricTag("a", "1")]
    replacement = [MetricTag("b", "2")]
    cache.set(7, original)
    assert cache.set(7, replacement) is original
    assert cache.get(7) is original
    assert len(cache) == 1


def test_tag_map_key_matches_identity():
    tags = {"service": "svc", "env": "test"}
    assert tag_map_key(tags) == string_string_map(tags)
    assert tag_map_key({}) == 0


def test_tag_map_key_order_independent():
    assert tag_map_key({"x": "1", "y": "2"}) == tag_map_key({"y": "2", "x": "1"})


def test_metric_tag_equality():
    assert MetricTag("a", "b") == MetricTag("a", "b")
    assert MetricTag("a", "b") != MetricTag("a", "c")