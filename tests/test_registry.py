"""Tests for registry."""

from omniapi_mcp_server.registry import DEFAULT_HEADERS, ApiEntry, ApiRegistry


class TestAdd:
    def test_trailing_slashes_stripped(self):
        reg = ApiRegistry()
        entry = reg.add("x", "https://h.test///")
        assert entry.base_url == "https://h.test"
        assert reg.get("x").base_url == "https://h.test"

    def test_only_trailing_slashes_stripped(self):
        reg = ApiRegistry()
        reg.add("x", "https://h.test/api/v1/")
        assert reg.get("x").base_url == "https://h.test/api/v1"

    def test_no_scheme_validation(self):
        reg = ApiRegistry()
        reg.add("x", "h.test/")
        assert reg.get("x").base_url == "h.test"

    def test_default_content_type_without_headers(self):
        reg = ApiRegistry()
        entry = reg.add("x", "https://h.test")
        assert entry.headers == {"Content-Type": "application/json"}

    def test_caller_headers_merged_over_default(self):
        reg = ApiRegistry()
        entry = reg.add("x", "https://h.test", {"Authorization": "Bearer abc"})
        assert entry.headers == {
            "Content-Type": "application/json",
            "Authorization": "Bearer abc",
        }

    def test_caller_content_type_wins(self):
        reg = ApiRegistry()
        entry = reg.add("x", "https://h.test", {"Content-Type": "text/plain"})
        assert entry.headers == {"Content-Type": "text/plain"}

    def test_default_headers_not_mutated(self):
        reg = ApiRegistry()
        reg.add("x", "https://h.test", {"Content-Type": "text/plain"})
        assert DEFAULT_HEADERS == {"Content-Type": "application/json"}

    def test_readd_overwrites_without_merge(self):
        reg = ApiRegistry()
        reg.add("x", "https://a.test", {"X-Old": "1"})
        reg.add("x", "https://b.test")
        entry = reg.get("x")
        assert entry.base_url == "https://b.test"
        assert "X-Old" not in entry.headers
        assert len(reg) == 1


class TestQueries:
    def test_get_missing_returns_none(self):
        assert ApiRegistry().get("nope") is None

    def test_list_empty(self):
        assert ApiRegistry().list() == []

    def test_list_pairs(self):
        reg = ApiRegistry()
        reg.add("a", "https://a.test/")
        reg.add("b", "https://b.test")
        assert reg.list() == [("a", "https://a.test"), ("b", "https://b.test")]

    def test_contains_and_names(self):
        reg = ApiRegistry()
        reg.add("a", "https://a.test")
        assert "a" in reg
        assert "b" not in reg
        assert reg.names == ["a"]

    def test_registries_are_independent(self):
        first, second = ApiRegistry(), ApiRegistry()
        first.add("a", "https://a.test")
        assert "a" not in second

    def test_entry_dataclass_default_headers(self):
        entry = ApiEntry(name="a", base_url="https://a.test")
        assert entry.headers == {"Content-Type": "application/json"}
