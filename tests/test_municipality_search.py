import pandas as pd
import pytest

from data_loader import load_municipalities, read_municipalities
from utils.municipality_search import (
    search_municipalities,
    find_municipality_by_name,
    find_municipality_by_code,
    list_provinces,
)


def test_gazetteer_is_loaded_once():
    assert load_municipalities() is load_municipalities()


def test_gazetteer_codes_keep_leading_zeros():
    gazetteer = load_municipalities()
    assert "04003" in set(gazetteer["ine_code"])
    assert gazetteer["ine_code"].str.len().eq(5).all()
    assert not gazetteer["ine_code"].duplicated().any()


def test_exact_match_ranks_first_without_accent():
    results = search_municipalities("malaga")
    assert results[0].name == "Málaga"
    assert results[0].ine_code == "29067"
    # Vélez-Málaga only contains the query
    assert "Vélez-Málaga" in [m.name for m in results[1:]]


def test_starts_with_ranks_ahead_of_contains():
    names = [m.name for m in search_municipalities("torre")]
    assert "Torremolinos" in names
    assert "Torre del Mar" in names
    starts = [i for i, n in enumerate(names) if n.lower().startswith("torre")]
    others = [i for i, n in enumerate(names) if not n.lower().startswith("torre")]
    if others:
        assert max(starts) < min(others)


def test_buckets_keep_gazetteer_order():
    names = [m.name for m in search_municipalities("torre")]
    assert names.index("Torremolinos") < names.index("Torre del Mar")


def test_contains_bucket():
    names = [m.name for m in search_municipalities("de henares")]
    assert names == ["Alcalá de Henares"]


@pytest.mark.parametrize("query", [None, "", "m", "á"])
def test_short_queries_return_nothing(query):
    assert search_municipalities(query) == []


def test_whitespace_query_returns_nothing():
    assert search_municipalities("   ") == []


def test_max_results():
    assert len(search_municipalities("a", max_results=3)) == 0
    assert len(search_municipalities("an", max_results=3)) <= 3


def test_find_by_name():
    cordoba = find_municipality_by_name("CORDOBA")
    assert cordoba.name == "Córdoba"
    assert cordoba.ine_code == "14021"
    assert find_municipality_by_name("Atlantis") is None


def test_find_by_code():
    assert find_municipality_by_code("52001").name == "Melilla"
    assert find_municipality_by_code("99999") is None


def test_list_provinces():
    provinces = list_provinces()
    assert ("29", "Málaga") in provinces
    assert len(provinces) == len(set(provinces))


def test_search_on_custom_gazetteer():
    gazetteer = pd.DataFrame({
        "ine_code": ["01001", "01002"],
        "name": ["Villa", "Villanueva"],
        "province": ["Test", "Test"],
        "province_code": ["01", "01"],
        "region": ["", ""],
        "normalized_name": ["villa", "villanueva"],
    })
    assert [m.name for m in search_municipalities("villa", gazetteer=gazetteer)] == ["Villa", "Villanueva"]


class TestReadMunicipalities:

    def _write(self, tmp_path, rows):
        path = tmp_path / "gazetteer.csv"
        path.write_text("ine_code,name,province,province_code,region\n" + "\n".join(rows) + "\n", encoding="utf-8")
        return path

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_municipalities(tmp_path / "missing.csv")

    def test_malformed_code(self, tmp_path):
        path = self._write(tmp_path, ["2906,Málaga,Málaga,29,ANDALUCÍA"])
        with pytest.raises(ValueError):
            read_municipalities(path)

    def test_code_outside_province(self, tmp_path):
        path = self._write(tmp_path, ["28067,Málaga,Málaga,29,ANDALUCÍA"])
        with pytest.raises(ValueError):
            read_municipalities(path)

    def test_duplicate_code(self, tmp_path):
        path = self._write(tmp_path, [
            "29067,Málaga,Málaga,29,ANDALUCÍA",
            "29067,Malaga,Málaga,29,ANDALUCÍA",
        ])
        with pytest.raises(ValueError):
            read_municipalities(path)

    def test_valid_file(self, tmp_path):
        path = self._write(tmp_path, ["29067,Málaga,Málaga,29,ANDALUCÍA"])
        df = read_municipalities(path)
        assert list(df["normalized_name"]) == ["malaga"]
