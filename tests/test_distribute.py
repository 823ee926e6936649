"""Tests for the space distribution algorithm."""

import itertools

import termwidgets as tw
from termwidgets import Bucket


def sizes(buckets):
    return [b.size for b in buckets]


class TestDistribute:
    """Test distribute()."""

    def test_spare_space_follows_expand(self) -> None:
        buckets = tw.distribute(20, [Bucket(3, 1), Bucket(fixed=2),
                                     Bucket(5, 1)])
        assert sizes(buckets) == [8, 2, 10]
        assert [b.start for b in buckets] == [0, 8, 10]

    def test_remainder_goes_to_last_expanding_bucket(self) -> None:
        buckets = tw.distribute(10, [Bucket(0, 1), Bucket(0, 1),
                                     Bucket(0, 1), Bucket(0, 0)])
        assert sizes(buckets) == [3, 3, 4, 0]

    def test_non_expanding_bucket_keeps_base(self) -> None:
        buckets = tw.distribute(10, [Bucket(3, 0), Bucket(2, 1)])
        assert sizes(buckets) == [3, 7]

    def test_shrink_proportionally_to_base(self) -> None:
        buckets = tw.distribute(5, [Bucket(6, 1), Bucket(4, 0)])
        assert sizes(buckets) == [3, 2]

    def test_fixed_buckets_overflow(self) -> None:
        buckets = tw.distribute(3, [Bucket(fixed=4), Bucket(5, 1)])
        assert sizes(buckets) == [4, 0]
        assert [b.start for b in buckets] == [0, 4]

    def test_no_expansion_leaves_space_unused(self) -> None:
        buckets = tw.distribute(10, [Bucket(2), Bucket(3)])
        assert sizes(buckets) == [2, 3]

    def test_multiple_snapping(self) -> None:
        buckets = tw.distribute(10, [Bucket(0, 1, multiple=3),
                                     Bucket(0, 1)])
        assert sizes(buckets) == [3, 7]

    def test_all_snapping_keeps_total(self) -> None:
        buckets = tw.distribute(11, [Bucket(0, 1, multiple=2),
                                     Bucket(fixed=1),
                                     Bucket(0, 1, multiple=2)])
        assert sizes(buckets) == [4, 1, 6]

    def test_invariants(self) -> None:
        """Sizes fill the extent exactly and buckets are contiguous."""
        for bases, expands in itertools.product(
                [(3, 0, 5), (1, 1, 1), (0, 7, 2)],
                [(1, 2, 0), (0, 0, 1), (4, 4, 4)]):
            for total in range(2, 40):
                buckets = [Bucket(bases[0], expands[0]), Bucket(fixed=1),
                           Bucket(bases[1], expands[1]), Bucket(fixed=1),
                           Bucket(bases[2], expands[2])]
                tw.distribute(total, buckets)
                assert sum(sizes(buckets)) == total
                assert all(b.size >= 0 for b in buckets)
                pos = 0
                for b in buckets:
                    assert b.start == pos
                    pos += b.size
                if total - 2 >= sum(bases):
                    for b in buckets:
                        if b.flexible and not b.expand:
                            assert b.size == b.base
