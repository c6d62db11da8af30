"""
ページネーションの単体テスト
"""

import pytest

from keygate.domain.pagination import resolve_page


class TestResolvePage:
    """resolve_page関数のテスト"""

    def test_defaults(self) -> None:
        """未指定の場合はpage=1, pageSize=50になること"""
        page = resolve_page(None, None)
        assert (page.page, page.page_size, page.offset) == (1, 50, 0)

    @pytest.mark.parametrize(
        ("raw_size", "expected"),
        [("0", 1), ("-5", 1), ("51", 50), ("1000", 50), ("20", 20), ("7.9", 7)],
    )
    def test_page_size_clamped(self, raw_size: str, expected: int) -> None:
        """pageSizeが1〜50に丸められること"""
        assert resolve_page("1", raw_size).page_size == expected

    @pytest.mark.parametrize(("raw_page", "expected"), [("0", 1), ("-3", 1), ("2.5", 2)])
    def test_page_at_least_one(self, raw_page: str, expected: int) -> None:
        assert resolve_page(raw_page, None).page == expected

    def test_non_numeric_falls_back(self) -> None:
        """数値でない値は既定値になること"""
        page = resolve_page("abc", "xyz")
        assert (page.page, page.page_size) == (1, 50)

    def test_offset(self) -> None:
        page = resolve_page("3", "10")
        assert page.offset == 20
