from esbundle.mapping.merge import deep_merge, merge_all


def test_later_value_wins_per_leaf():
    a = {"settings": {"shards": 1, "replicas": 1}}
    b = {"settings": {"replicas": 2}}

    assert deep_merge(a, b) == {"settings": {"shards": 1, "replicas": 2}}


def test_nested_levels_merge_recursively():
    a = {"properties": {"title": {"type": "text", "analyzer": "standard"}}}
    b = {"properties": {"title": {"analyzer": "english"}, "price": {"type": "float"}}}

    assert deep_merge(a, b) == {
        "properties": {
            "title": {"type": "text", "analyzer": "english"},
            "price": {"type": "float"},
        }
    }


def test_non_mapping_replaces_mapping_and_lists_are_replaced():
    a = {"dynamic": {"x": 1}, "fields": ["a", "b"]}
    b = {"dynamic": "strict", "fields": ["c"]}

    assert deep_merge(a, b) == {"dynamic": "strict", "fields": ["c"]}


def test_inputs_are_not_mutated():
    a = {"settings": {"shards": 1}}
    b = {"settings": {"replicas": 2}}

    merged = deep_merge(a, b)
    merged["settings"]["shards"] = 5

    assert a == {"settings": {"shards": 1}}
    assert b == {"settings": {"replicas": 2}}


def test_merge_all_applies_in_order():
    bodies = [{"a": 1, "b": {"c": 1}}, {"b": {"c": 2}}, {"b": {"d": 3}}]

    assert merge_all(bodies) == {"a": 1, "b": {"c": 2, "d": 3}}
    assert merge_all([]) == {}
