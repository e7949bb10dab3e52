"""Tests for certgate.http.query: QueryParams and merged()."""

from certgate.http.query import QueryParams


class TestQueryParams:
    def test_parse(self) -> None:
        q = QueryParams(b"holder=Ana&page=2")
        assert q["holder"] == "Ana"
        assert q.get("page") == "2"
        assert q.get("missing") is None

    def test_blank_values_kept(self) -> None:
        q = QueryParams(b"flag=&x=1")
        assert q["flag"] == ""

    def test_multi_values(self) -> None:
        q = QueryParams(b"tag=a&tag=b")
        assert q["tag"] == "a"
        assert q.get_list("tag") == ["a", "b"]

    def test_percent_decoding(self) -> None:
        q = QueryParams(b"name=Jo%C3%A3o+Silva")
        assert q["name"] == "João Silva"


class TestMerged:
    def test_adds_key_without_touching_original(self) -> None:
        original = QueryParams(b"lang=pt")
        merged = original.merged(number="ABC123")

        assert merged.to_dict() == {"lang": "pt", "number": "ABC123"}
        assert "number" not in original

    def test_replaces_existing_values(self) -> None:
        merged = QueryParams(b"number=old&number=older").merged(number="new")
        assert merged.get_list("number") == ["new"]

    def test_keeps_other_multi_values(self) -> None:
        merged = QueryParams(b"tag=a&tag=b").merged(number="7")
        assert merged.get_list("tag") == ["a", "b"]

    def test_round_trips_non_ascii(self) -> None:
        merged = QueryParams(b"").merged(number="ç/1 2")
        assert merged["number"] == "ç/1 2"
