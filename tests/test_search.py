"""Tests for text normalization and attendee search."""

import math
from types import SimpleNamespace

from checkin_service.directory.search import (
    clamp_page_params,
    filter_attendees,
    name_sort_key,
    paginate,
    search_attendees,
    search_key,
    sort_by_name,
)
from checkin_service.directory.text import normalize


def person(name: str, email: str = "", document: str = "") -> SimpleNamespace:
    return SimpleNamespace(name=name, email=email, document=document)


PEOPLE = [
    person("Marcos Pereira", "marcos@exemplo.com", "111.222.333-44"),
    person("José da Silva", "jose@exemplo.com", "987.654.321-00"),
    person("Ana Souza", "ana@exemplo.com", "123.456.789-00"),
    person("Élodie Durand", "elodie@exemplo.com", "555.666.777-88"),
    person("bruno Lima", "bruno@exemplo.com", "999.888.777-66"),
    person("Ângela Costa", "angela@exemplo.com", "444.333.222-11"),
    person("Caio Araújo", "caio@exemplo.com", "222.111.000-99"),
]


class TestNormalize:
    def test_strips_accents_and_lowercases(self):
        assert normalize("José") == "jose"
        assert normalize("ÂNGELA") == "angela"
        assert normalize("Conferência") == "conferencia"

    def test_precomposed_and_decomposed_forms_match(self):
        assert normalize("Jos\u00e9") == normalize("Jose\u0301") == "jose"

    def test_none_and_empty(self):
        assert normalize(None) == ""
        assert normalize("") == ""
        assert normalize() == ""

    def test_non_string_values(self):
        assert normalize(123) == "123"

    def test_leaves_other_characters(self):
        assert normalize("ana@exemplo.com") == "ana@exemplo.com"
        assert normalize("123.456.789-00") == "123.456.789-00"


class TestFilterAttendees:
    def test_search_key_joins_fields(self):
        key = search_key(person("José", "JOSE@x.com", "1-2"))
        assert key == "jose jose@x.com 1-2"

    def test_empty_search_keeps_everyone(self):
        assert filter_attendees(PEOPLE, None) == PEOPLE
        assert filter_attendees(PEOPLE, "") == PEOPLE

    def test_matches_name(self):
        names = [p.name for p in filter_attendees(PEOPLE, "souza")]
        assert names == ["Ana Souza"]

    def test_matches_email(self):
        names = [p.name for p in filter_attendees(PEOPLE, "bruno@")]
        assert names == ["bruno Lima"]

    def test_matches_document(self):
        names = [p.name for p in filter_attendees(PEOPLE, "987.654")]
        assert names == ["José da Silva"]

    def test_accent_and_case_insensitive(self):
        accented = filter_attendees(PEOPLE, "José")
        plain = filter_attendees(PEOPLE, "jose")
        upper = filter_attendees(PEOPLE, "JOSÉ")
        assert accented == plain == upper
        assert [p.name for p in plain] == ["José da Silva"]

    def test_accented_query_matches_unaccented_data(self):
        names = [p.name for p in filter_attendees(PEOPLE, "araújo")]
        assert names == ["Caio Araújo"]

    def test_no_match(self):
        assert filter_attendees(PEOPLE, "zzz") == []


class TestSortByName:
    def test_sorted_by_normalized_name(self):
        names = [p.name for p in sort_by_name(PEOPLE)]
        assert names == [
            "Ana Souza",
            "Ângela Costa",
            "bruno Lima",
            "Caio Araújo",
            "Élodie Durand",
            "José da Silva",
            "Marcos Pereira",
        ]

    def test_letters_without_decomposition_sort_with_base_letter(self):
        people = [person(n) for n in ["Zoe Lima", "Łukasz Nowak", "Lara Souza", "Øyvind Berg", "Otto"]]
        names = [p.name for p in sort_by_name(people)]
        assert names == ["Lara Souza", "Łukasz Nowak", "Otto", "Øyvind Berg", "Zoe Lima"]

    def test_sort_key_ignores_case_and_accents(self):
        assert name_sort_key("Élodie") == name_sort_key("elodie")
        assert name_sort_key("Ana") < name_sort_key("Ângela") < name_sort_key("bruno")

    def test_ties_keep_original_order(self):
        first = person("Ana", "first@x.com")
        second = person("ANA", "second@x.com")
        assert sort_by_name([first, second]) == [first, second]
        assert sort_by_name([second, first]) == [second, first]


class TestPaginate:
    def test_first_page(self):
        assert paginate([1, 2, 3, 4, 5], page=1, limit=2) == [1, 2]

    def test_last_partial_page(self):
        assert paginate([1, 2, 3, 4, 5], page=3, limit=2) == [5]

    def test_past_the_end(self):
        assert paginate([1, 2, 3], page=5, limit=2) == []


class TestClampPageParams:
    def test_defaults(self):
        assert clamp_page_params(None, None) == (1, 20)
        assert clamp_page_params(None, None, default_limit=5) == (1, 5)

    def test_floors_at_one(self):
        assert clamp_page_params(0, 0) == (1, 1)
        assert clamp_page_params(-3, -10) == (1, 1)

    def test_no_cap_by_default(self):
        assert clamp_page_params(2, 10_000) == (2, 10_000)

    def test_optional_cap(self):
        assert clamp_page_params(1, 500, max_limit=100) == (1, 100)
        assert clamp_page_params(1, 50, max_limit=100) == (1, 50)


class TestSearchAttendees:
    def test_total_counts_matches_before_pagination(self):
        data, total = search_attendees(PEOPLE, "exemplo", page=1, limit=3)
        assert total == len(PEOPLE)
        assert len(data) == 3

    def test_pages_concatenate_to_full_sorted_list(self):
        expected = sort_by_name(filter_attendees(PEOPLE, "o"))
        for limit in range(1, len(PEOPLE) + 2):
            _, total = search_attendees(PEOPLE, "o", page=1, limit=limit)
            pages = math.ceil(total / limit)
            collected = []
            for page in range(1, pages + 1):
                data, page_total = search_attendees(PEOPLE, "o", page=page, limit=limit)
                assert page_total == total
                assert len(data) <= limit
                collected.extend(data)
            assert collected == expected
            assert len({id(p) for p in collected}) == len(collected)

    def test_every_page_is_sorted(self):
        for limit in (1, 2, 3):
            for page in (1, 2, 3):
                data, _ = search_attendees(PEOPLE, None, page=page, limit=limit)
                keys = [name_sort_key(p.name) for p in data]
                assert keys == sorted(keys)
