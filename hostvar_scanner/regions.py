"""
문자 분류 및 제외 구간 유틸리티 모듈

스캐너와 추출기가 공통으로 쓰는 C 식별자 문자 판별 함수와
반열린 구간 병합/포함 검사 함수를 제공합니다.
"""
from bisect import bisect_right
from typing import Iterable, List

from .types import ExcludedRegion

HORIZONTAL_WHITESPACE = " \t\r\f\v"


def is_ident_start(ch: str) -> bool:
    """C 식별자 첫 글자 ([A-Za-z_])"""
    return ch == '_' or ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def is_ident_char(ch: str) -> bool:
    """C 식별자 문자 ([A-Za-z0-9_])"""
    return is_ident_start(ch) or ('0' <= ch <= '9')


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def is_whitespace(ch: str) -> bool:
    return ch in " \t\n\r\f\v"


def merge_regions(regions: Iterable[ExcludedRegion]) -> List[ExcludedRegion]:
    """
    구간을 시작 오프셋으로 정렬한 뒤 겹치거나 맞닿은 구간을 병합합니다.

    a.end >= b.start 이면 [a.start, max(a.end, b.end)) 로 합칩니다.
    빈 구간(start >= end)은 버립니다.

    Returns:
        서로소이며 오름차순인 구간 목록
    """
    ordered = sorted(
        (r for r in regions if r.start < r.end),
        key=lambda r: (r.start, r.end)
    )
    merged: List[ExcludedRegion] = []
    for region in ordered:
        if merged and merged[-1].end >= region.start:
            last = merged[-1]
            merged[-1] = ExcludedRegion(last.start, max(last.end, region.end))
        else:
            merged.append(region)
    return merged


class ExclusionSet:
    """
    병합된 제외 구간 집합에 대한 포함 검사

    사용 예:
        excluded = ExclusionSet([ExcludedRegion(0, 5), ExcludedRegion(3, 9)])
        4 in excluded   # True
        9 in excluded   # False
    """

    def __init__(self, regions: Iterable[ExcludedRegion]):
        self.regions = merge_regions(regions)
        self._starts = [r.start for r in self.regions]

    def __contains__(self, offset: int) -> bool:
        index = bisect_right(self._starts, offset) - 1
        return index >= 0 and self.regions[index].contains(offset)

    def __len__(self) -> int:
        return len(self.regions)
