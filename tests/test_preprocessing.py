import json

import pytest

from src.preprocessing import author_initials, extract_id, load_articles, normalize_id


def test_extract_id():
    """Test numeric id extraction from work URLs."""
    assert extract_id("https://openalex.org/W2741809807") == "W2741809807"
    assert extract_id("W123") == "W123"
    assert extract_id("https://openalex.org/") == "https://openalex.org/"
    assert extract_id("") == ""


def test_author_initials():
    """Test first-author initials generation."""
    assert author_initials(["Albert Einstein", "Niels Bohr"]) == "A.E."
    assert author_initials(["jean-paul sartre"]) == "J.P.S."
    assert author_initials(["Gerard 't Hooft"]) == "G.H."
    assert author_initials([]) == "?"
    assert author_initials(["   "]) == "?"
    assert author_initials(["123 456"]) == "?"


def test_normalize_id():
    """Test caller-side seed normalization."""
    assert normalize_id(" w2741809807 ") == "W2741809807"
    assert normalize_id("2741809807") == "W2741809807"
    assert normalize_id("W42") == "W42"
    assert normalize_id("") == ""


@pytest.fixture
def dataset_file(tmp_path):
    """
    Writes a small dataset with one record missing its id.
    """
    records = [
        {
            "id": "https://openalex.org/W1",
            "title": "First",
            "year": 2019,
            "authors": ["Ada Lovelace"],
            "referenced_works": ["https://openalex.org/W2"],
            "doi": "10.1000/first",
        },
        {
            "id": "https://openalex.org/W2",
            "title": "Second",
            "year": None,
            "authors": [],
            "referenced_works": [],
        },
        {"title": "No id", "year": 2020, "authors": [], "referenced_works": []},
    ]
    path = tmp_path / "articles.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return str(path)


def test_load_articles(dataset_file):
    articles = load_articles(dataset_file)

    assert [a.id for a in articles] == [
        "https://openalex.org/W1",
        "https://openalex.org/W2",
    ]
    first, second = articles
    assert first.title == "First"
    assert first.year == 2019
    assert first.authors == ("Ada Lovelace",)
    assert first.referenced_works == ("https://openalex.org/W2",)
    assert first.doi == "10.1000/first"
    assert first.keywords == ()
    assert second.year == 0
    assert second.doi is None


def test_load_articles_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_articles(str(tmp_path / "missing.json"))
