import suite
from linqy import P, IGNORE_CASE
from linqy.enumerators import drain

test = suite.test
assert_that = suite.assert_that

numbers = P([5, 3, 8, 1, 9, 2, 8])
letters = P(['b', 'A', 'c', 'a'])


def drain_reset_drain(seq):
    enumerator = seq.get_enumerator()
    first = drain(enumerator)
    enumerator.reset()
    return first, drain(enumerator)


# every operator, traversed, reset and traversed again
reset_cases = {
    'where': numbers.where(lambda x: x > 2),
    'take': numbers.take(3),
    'skip': numbers.skip(4),
    'take_while': numbers.take_while(lambda x: x > 2),
    'skip_while': numbers.skip_while(lambda x: x > 2),
    'concat': numbers.set.concat([0, 0]),
    'union': numbers.set.union([7, 5]),
    'intersect': numbers.set.intersect([8, 1, 4]),
    'except_': numbers.set.except_([8, 1]),
    'distinct with comparer': letters.set.distinct(IGNORE_CASE),
    'reverse': numbers.reverse(),
    'default_if_empty': P([]).default_if_empty(-1),
    'prepend/append': numbers.prepend(0).append(10),
    'order_by/then_by': letters.order_by(lambda s: s, IGNORE_CASE).then_by(lambda s: s),
    'group_by_result': numbers.group.group_by_result(lambda x: x % 2, lambda k, g: (k, g.to.list())),
    'group_join': P([1, 2]).join.group_join([1, 1, 3], lambda o: o, lambda i: i,
                                           lambda o, ms: (o, ms.to.list())),
    'left_join': P([1, 2]).join.left_join([1, 1], lambda o: o, lambda i: i, lambda o, i: (o, i)),
    'zip_with': numbers.join.zip_with('xyz', lambda n, c: f"{n}{c}"),
    'select_many': P(['ab', '', 'c']).select_many(lambda s: s),
}


@test("reset then re-traversal reproduces the first traversal for every operator")
def test_reset_table():
    mismatches = []
    for name, seq in reset_cases.items():
        first, second = drain_reset_drain(seq)
        if first != second or first != seq.to.list():
            mismatches.append(name)
    assert_that(mismatches == [], f"operators that changed after reset: {mismatches}")


@test("where, take and skip re-walk their parent after reset")
def test_filter_reset():
    first, second = drain_reset_drain(numbers.where(lambda x: x % 2 == 0))
    assert_that(first == second == [8, 2, 8], "where")
    first, second = drain_reset_drain(numbers.take(2))
    assert_that(first == second == [5, 3], "take counts from zero again")
    first, second = drain_reset_drain(numbers.skip(5))
    assert_that(first == second == [2, 8], "skip skips the prefix again")


@test("take_while reopens after reset")
def test_take_while_reopens():
    enumerator = P([1, 2, 7, 1]).take_while(lambda x: x < 5).get_enumerator()
    assert_that(drain(enumerator) == [1, 2], "closed at 7")
    assert_that(not enumerator.move_next(), "stays closed")
    enumerator.reset()
    assert_that(enumerator.move_next() and enumerator.current == 1, "open again after reset")
    assert_that(drain(enumerator) == [2], "closes at 7 again")


@test("skip_while scans its prefix again after reset")
def test_skip_while_rescans():
    calls = []
    enumerator = P([1, 2, 7, 1]).skip_while(lambda x: calls.append(x) or x < 5).get_enumerator()
    assert_that(drain(enumerator) == [7, 1], "prefix skipped")
    enumerator.reset()
    assert_that(drain(enumerator) == [7, 1], "prefix skipped again")
    assert_that(calls == [1, 2, 7, 1, 2, 7], "predicate runs over the prefix on each pass")


@test("concat, union, intersect and except_ start from the first side after reset")
def test_set_ops_reset():
    first, second = drain_reset_drain(P([1, 2]).set.concat([3]))
    assert_that(first == second == [1, 2, 3], "concat")
    first, second = drain_reset_drain(P([1, 2]).set.union([2, 3]))
    assert_that(first == second == [1, 2, 3], "union")
    first, second = drain_reset_drain(P([1, 2, 3, 2]).set.intersect([2, 3]))
    assert_that(first == second == [2, 3], "intersect")
    first, second = drain_reset_drain(P([1, 2, 3, 1]).set.except_([2]))
    assert_that(first == second == [1, 3, 1], "except_")


@test("group_join reuses its inner lookup across reset")
def test_group_join_reset():
    inner_calls = []
    seq = P([1, 2]).join.group_join([1, 2, 2], lambda o: o, lambda i: inner_calls.append(i) or i,
                                    lambda o, matches: (o, matches.to.count()))
    first, second = drain_reset_drain(seq)
    assert_that(first == second == [(1, 1), (2, 2)], "same groups on both passes")
    assert_that(len(inner_calls) == 3, "inner side hashed only once")


@test("left_join and zip_with re-walk both sides after reset")
def test_left_join_zip_reset():
    first, second = drain_reset_drain(
        P([1, 2, 3]).join.left_join([3, 1], lambda o: o, lambda i: i, lambda o, i: (o, i)))
    assert_that(first == second == [(1, 1), (2, None), (3, 3)], "left_join")
    first, second = drain_reset_drain(P([1, 2, 3]).join.zip_with(['a', 'b'], lambda n, s: f"{n}{s}"))
    assert_that(first == second == ['1a', '2b'], "zip_with")


if __name__ == "__main__":
    suite.main("linqy reset test")
