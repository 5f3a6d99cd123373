import suite
from dgen import from_schema
from linqy import P, Grouping, IGNORE_CASE
from linqy.enumerators import drain

test = suite.test
assert_that = suite.assert_that

sale_schema = {
    'id': {'_qen_provider': 'sequence'},
    'region': {'_qen_provider': 'choice', 'from': ['north', 'south', 'east']},
    'units': ('pyint', {'min_value': 1, 'max_value': 20}),
}

sales = from_schema(sale_schema, seed=21).take(30)


@test("group_by groups in order of first key occurrence")
def test_group_by_order():
    groups = P(['apple', 'bob', 'avocado', 'cat', 'banana']).group.group_by(lambda w: w[0]).to.list()
    assert_that([g.key for g in groups] == ['a', 'b', 'c'], "keys in first-occurrence order")
    assert_that(groups[0].to.list() == ['apple', 'avocado'], "elements keep source order")
    assert_that(len(groups[1]) == 2, "grouping reports its size")


@test("groups are sequences with a key")
def test_grouping_is_enumerable():
    group = P([1, 2, 3, 4]).group.group_by(lambda x: x % 2).to.first()
    assert_that(isinstance(group, Grouping), "a Grouping instance")
    assert_that(group.key == 1, "odd numbers first")
    assert_that(group.select(lambda x: x * 10).to.list() == [10, 30], "operators work on a group")


@test("group_by with an element selector")
def test_group_by_element_selector():
    groups = P([('a', 1), ('b', 2), ('a', 3)]).group.group_by(lambda t: t[0], lambda t: t[1]).to.list()
    assert_that([(g.key, g.to.list()) for g in groups] == [('a', [1, 3]), ('b', [2])], "projected elements")


@test("group_by with a comparer keeps the first key spelling")
def test_group_by_comparer():
    groups = P(['Ant', 'bee', 'ANT', 'Bee']).group.group_by(lambda w: w, comparer=IGNORE_CASE).to.list()
    assert_that([g.key for g in groups] == ['Ant', 'bee'], "first spelling is the key")
    assert_that(groups[0].to.list() == ['Ant', 'ANT'], "case variants grouped together")


@test("group_by handles unhashable keys")
def test_group_by_unhashable():
    groups = P([{'k': [1], 'v': 'a'}, {'k': [2], 'v': 'b'}, {'k': [1], 'v': 'c'}]) \
        .group.group_by(lambda r: r['k'], lambda r: r['v']).to.list()
    assert_that([(g.key, g.to.list()) for g in groups] == [([1], ['a', 'c']), ([2], ['b'])], "list keys")


@test("group_by_result projects each group")
def test_group_by_result():
    totals = sales.group.group_by_result(lambda s: s['region'],
                                         lambda region, items: (region, items.stats.sum(lambda s: s['units'])))
    expected = {}
    for s in sales.to.list():
        expected[s['region']] = expected.get(s['region'], 0) + s['units']
    assert_that(totals.to.list() == list(expected.items()), "per-region totals in first-occurrence order")


@test("group_by_result with element selector and comparer")
def test_group_by_result_full():
    result = P(['x1', 'X2', 'y3']).group.group_by_result(
        lambda s: s[0], lambda key, digits: key + ''.join(digits.to.list()),
        element_selector=lambda s: s[1], comparer=IGNORE_CASE).to.list()
    assert_that(result == ['x12', 'y3'], "digits joined per case-insensitive key")


@test("group_by is deferred and keeps its groups across reset")
def test_group_by_deferred():
    calls = []
    enumerator = P([1, 2, 3]).group.group_by(lambda x: calls.append(x) or x % 2).get_enumerator()
    assert_that(calls == [], "no key computed at construction")
    first = [g.key for g in drain(enumerator)]
    enumerator.reset()
    second = [g.key for g in drain(enumerator)]
    assert_that(first == second == [1, 0], "same groups after reset")
    assert_that(len(calls) == 3, "keys computed once")


@test("group_by on an empty sequence yields no groups")
def test_group_by_empty():
    assert_that(P([]).group.group_by(lambda x: x).to.list() == [], "no groups")


if __name__ == "__main__":
    suite.main("linqy grouping test")
