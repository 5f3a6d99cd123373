import suite
from dgen import from_schema
from linqy import P, KeyComparer, IGNORE_CASE, OrderedEnumerable, ASCENDING, DESCENDING
from linqy.enumerators import drain

test = suite.test
assert_that = suite.assert_that

person_schema = {
    'id': {'_qen_provider': 'sequence'},
    'name': 'first_name',
    'age': ('pyint', {'min_value': 20, 'max_value': 30}),
    'city': {'_qen_provider': 'choice', 'from': ['oslo', 'lima', 'pune']},
}

people = from_schema(person_schema, seed=11).take(40)
records = [
    {'name': 'b', 'rank': 2, 'seq': 0},
    {'name': 'a', 'rank': 1, 'seq': 1},
    {'name': 'c', 'rank': 2, 'seq': 2},
    {'name': 'a', 'rank': 3, 'seq': 3},
    {'name': 'b', 'rank': 1, 'seq': 4},
]


@test("order_by sorts ascending")
def test_order_by_basic():
    assert_that(P([3, 1, 2]).order_by(lambda x: x).to.list() == [1, 2, 3], "ascending integers")


@test("order_by_descending sorts descending")
def test_order_by_descending():
    assert_that(P([3, 1, 2]).order_by_descending(lambda x: x).to.list() == [3, 2, 1], "descending integers")


@test("order_by is stable for equal keys")
def test_order_by_stable():
    result = P(records).order_by(lambda r: r['rank']).select(lambda r: r['seq']).to.list()
    assert_that(result == [1, 4, 0, 2, 3], "ties keep their source order")


@test("order_by_descending is stable for equal keys")
def test_order_by_descending_stable():
    result = P(records).order_by_descending(lambda r: r['rank']).select(lambda r: r['seq']).to.list()
    assert_that(result == [3, 0, 2, 1, 4], "ties keep their source order, not reversed")


@test("then_by refines ties left by the primary key")
def test_then_by():
    result = P(records).order_by(lambda r: r['name']).then_by(lambda r: r['rank']) \
        .select(lambda r: r['seq']).to.list()
    assert_that(result == [1, 3, 4, 0, 2], "primary name, secondary rank")


@test("then_by_descending mixes directions")
def test_then_by_descending():
    result = P(records).order_by(lambda r: r['name']).then_by_descending(lambda r: r['rank']) \
        .select(lambda r: r['seq']).to.list()
    assert_that(result == [3, 1, 0, 4, 2], "primary name ascending, rank descending")


@test("multi-key ordering matches sorted() on generated data")
def test_multi_key_generated():
    result = people.order_by(lambda p: p['city']).then_by_descending(lambda p: p['age']) \
        .then_by(lambda p: p['id']).to.list()
    expected = sorted(people.to.list(), key=lambda p: (p['city'], -p['age'], p['id']))
    assert_that(result == expected, "three-level ordering")


@test("three levels of ties are resolved left to right")
def test_three_levels():
    data = [(1, 'b', 9), (1, 'a', 5), (0, 'z', 1), (1, 'a', 2)]
    result = P(data).order_by(lambda t: t[0]).then_by(lambda t: t[1]).then_by(lambda t: t[2]).to.list()
    assert_that(result == [(0, 'z', 1), (1, 'a', 2), (1, 'a', 5), (1, 'b', 9)], "lexicographic order")


@test("a comparer object controls the ordering")
def test_comparer_object():
    result = P(['b', 'A', 'c', 'B']).order_by(lambda s: s, IGNORE_CASE).to.list()
    assert_that(result == ['A', 'b', 'B', 'c'], "case-insensitive and stable")
    by_len = P(['ccc', 'a', 'bb']).order_by(lambda s: s, KeyComparer(len)).to.list()
    assert_that(by_len == ['a', 'bb', 'ccc'], "key comparer orders by length")


@test("a plain compare function is accepted")
def test_compare_function():
    reverse_cmp = lambda a, b: (b > a) - (b < a)
    result = P([1, 3, 2]).order_by(lambda x: x, reverse_cmp).to.list()
    assert_that(result == [3, 2, 1], "cmp-style function reverses")


@test("ordering never mutates the source list")
def test_no_mutation():
    source = [5, 3, 9, 1]
    P(source).order_by(lambda x: x).to.list()
    assert_that(source == [5, 3, 9, 1], "source untouched")


@test("sorting is deferred until the first move_next")
def test_deferred_sort():
    calls = []
    ordered = P([2, 1]).order_by(lambda x: calls.append(x) or x)
    enumerator = ordered.get_enumerator()
    assert_that(calls == [], "no key computed at construction")
    enumerator.move_next()
    assert_that(enumerator.current == 1, "smallest first")
    assert_that(len(calls) == 2, "each key computed once")


@test("each key selector runs once per element")
def test_key_call_counts():
    primary, secondary = [], []
    P(list(range(50))).order_by(lambda x: primary.append(x) or x % 5) \
        .then_by(lambda x: secondary.append(x) or -x).to.list()
    assert_that(len(primary) == 50, "primary selector called once per element")
    assert_that(len(secondary) == 50, "secondary selector called once per element")


@test("reset re-walks the sorted buffer without sorting again")
def test_reset_keeps_buffer():
    calls = []
    enumerator = P([3, 1, 2]).order_by(lambda x: calls.append(x) or x).get_enumerator()
    assert_that(drain(enumerator) == [1, 2, 3], "sorted")
    enumerator.reset()
    assert_that(drain(enumerator) == [1, 2, 3], "same order after reset")
    assert_that(len(calls) == 3, "keys not recomputed")


@test("then_by leaves the parent ordering unchanged")
def test_then_by_immutable():
    base = P(records).order_by(lambda r: r['rank'])
    refined = base.then_by_descending(lambda r: r['seq'])
    assert_that(isinstance(refined, OrderedEnumerable), "then_by returns an ordered sequence")
    assert_that(len(base.sort_keys) == 1 and len(refined.sort_keys) == 2, "key chains are separate")
    assert_that([k.direction for k in refined.sort_keys] == [ASCENDING, DESCENDING], "directions recorded")
    assert_that(base.select(lambda r: r['seq']).to.list() == [1, 4, 0, 2, 3], "base ordering unaffected")
    assert_that(refined.select(lambda r: r['seq']).to.list() == [4, 1, 2, 0, 3], "refined ordering")


@test("ordered sequences compose with other operators")
def test_ordered_composes():
    result = P(range(10)).order_by_descending(lambda x: x).where(lambda x: x % 3 == 0).take(2).to.list()
    assert_that(result == [9, 6], "sort, filter and take")


if __name__ == "__main__":
    suite.main("linqy ordering test")
