"""
제외 구간 유틸리티 테스트
"""

import os
import sys

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hostvar_scanner import ExcludedRegion, ExclusionSet, merge_regions
from hostvar_scanner.regions import is_ident_char, is_ident_start


class TestMergeRegions:
    """merge_regions 테스트"""

    def test_empty(self):
        assert merge_regions([]) == []

    def test_overlapping_and_unsorted(self):
        regions = [ExcludedRegion(10, 20), ExcludedRegion(0, 5), ExcludedRegion(3, 8)]
        assert merge_regions(regions) == [ExcludedRegion(0, 8), ExcludedRegion(10, 20)]

    def test_touching_regions_merge(self):
        """a.end == b.start 이면 병합"""
        regions = [ExcludedRegion(0, 5), ExcludedRegion(5, 9)]
        assert merge_regions(regions) == [ExcludedRegion(0, 9)]

    def test_contained_region(self):
        regions = [ExcludedRegion(0, 20), ExcludedRegion(5, 10)]
        assert merge_regions(regions) == [ExcludedRegion(0, 20)]

    def test_empty_regions_dropped(self):
        regions = [ExcludedRegion(4, 4), ExcludedRegion(7, 3), ExcludedRegion(1, 2)]
        assert merge_regions(regions) == [ExcludedRegion(1, 2)]


class TestExclusionSet:
    """ExclusionSet 포함 검사 테스트"""

    def setup_method(self):
        self.excluded = ExclusionSet([
            ExcludedRegion(10, 20),
            ExcludedRegion(0, 5),
            ExcludedRegion(3, 8),
        ])

    def test_merged_on_construction(self):
        assert len(self.excluded) == 2

    def test_half_open(self):
        assert 0 in self.excluded
        assert 7 in self.excluded
        assert 8 not in self.excluded
        assert 10 in self.excluded
        assert 19 in self.excluded
        assert 20 not in self.excluded

    def test_before_first_region(self):
        excluded = ExclusionSet([ExcludedRegion(5, 6)])
        assert 0 not in excluded
        assert 5 in excluded

    def test_no_regions(self):
        assert 0 not in ExclusionSet([])


class TestCharacterClasses:
    """C 식별자 문자 판별 테스트"""

    def test_ident_start(self):
        assert is_ident_start("_")
        assert is_ident_start("a")
        assert is_ident_start("Z")
        assert not is_ident_start("1")
        assert not is_ident_start("가")

    def test_ident_char(self):
        assert is_ident_char("9")
        assert not is_ident_char("-")
        assert not is_ident_char("$")
