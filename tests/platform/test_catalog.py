"""Tests for the static kana catalog."""

import pytest

from kana_platform.catalog import (
    COMBINED_HIRAGANA,
    DAKUTEN_HIRAGANA,
    MAIN_HIRAGANA,
    KanaCatalog,
    normalize_romaji,
)
from kana_platform.models import (
    PARTITIONS,
    Category,
    EmptyCategory,
    KanaEntry,
    Script,
    UnknownGlyph,
)


class TestEntriesFor:
    """Tests for KanaCatalog.entries_for."""

    @pytest.mark.parametrize("script", list(Script))
    @pytest.mark.parametrize("category", list(Category))
    def test_every_category_is_non_empty_and_consistent(self, catalog, category, script):
        entries = catalog.entries_for(category, script)

        assert len(entries) > 0
        for entry in entries:
            assert entry.script is script
            if category is Category.ALL:
                assert entry.category in PARTITIONS
            else:
                assert entry.category is category

    def test_all_is_union_of_partitions_in_order(self, catalog):
        union = tuple(
            e for part in PARTITIONS for e in catalog.entries_for(part)
        )
        assert catalog.entries_for(Category.ALL) == union

    def test_deterministic_order(self, catalog):
        first = catalog.entries_for(Category.MAIN)
        second = catalog.entries_for(Category.MAIN)
        assert [e.glyph for e in first] == [e.glyph for e in second]
        assert first[0].glyph == "あ"
        assert first[-1].glyph == "ん"

    def test_hiragana_partition_sizes_match_tables(self, catalog):
        assert len(catalog.entries_for(Category.MAIN)) == len(MAIN_HIRAGANA) == 46
        assert len(catalog.entries_for(Category.DAKUTEN)) == len(DAKUTEN_HIRAGANA) == 25
        assert len(catalog.entries_for(Category.COMBINED)) == len(COMBINED_HIRAGANA) == 33
        assert len(catalog.entries_for(Category.ALL)) == 104

    def test_glyphs_unique_within_each_category(self, catalog):
        for script in Script:
            for category in PARTITIONS:
                glyphs = [e.glyph for e in catalog.entries_for(category, script)]
                assert len(glyphs) == len(set(glyphs))

    def test_every_entry_has_lowercase_romaji(self, catalog):
        for entry in catalog.entries_for(Category.ALL):
            assert entry.accepted_romaji
            assert all(r == r.lower().strip() for r in entry.accepted_romaji)

    def test_empty_selection_raises(self, entry_factory):
        catalog = KanaCatalog([entry_factory("あ", ("a",))])

        with pytest.raises(EmptyCategory) as exc_info:
            catalog.entries_for(Category.DAKUTEN)

        assert exc_info.value.category is Category.DAKUTEN

    def test_empty_script_raises(self, entry_factory):
        catalog = KanaCatalog([entry_factory("あ", ("a",))])
        with pytest.raises(EmptyCategory):
            catalog.entries_for(Category.MAIN, Script.KATAKANA)

    def test_duplicate_glyph_rejected(self, entry_factory):
        with pytest.raises(ValueError):
            KanaCatalog([entry_factory("あ", ("a",)), entry_factory("あ", ("a",))])


class TestIsCorrect:
    """Tests for KanaCatalog.is_correct."""

    def test_every_accepted_spelling_matches_with_case_and_whitespace(self, catalog):
        for entry in catalog.entries_for(Category.ALL):
            for romaji in entry.accepted_romaji:
                assert catalog.is_correct(entry.glyph, romaji)
                assert catalog.is_correct(entry.glyph, f"  {romaji.upper()}\t")

    def test_unaccepted_string_is_wrong(self, catalog):
        for entry in catalog.entries_for(Category.ALL, Script.KATAKANA):
            assert not catalog.is_correct(entry.glyph, "xq")
            assert not catalog.is_correct(entry.glyph, "")

    def test_simple_match(self, catalog):
        assert catalog.is_correct("あ", "a") is True

    def test_trailing_space_and_upper_case(self, catalog):
        assert catalog.is_correct("あ", "A ") is True

    def test_empty_line_is_wrong(self, catalog):
        assert catalog.is_correct("あ", "") is False
        assert catalog.is_correct("あ", "   ") is False
        assert catalog.is_correct("あ", None) is False

    def test_alternative_spellings(self, catalog):
        assert catalog.is_correct("し", "shi")
        assert catalog.is_correct("し", "si")
        assert catalog.is_correct("つ", "tu")
        assert catalog.is_correct("じゃ", "zya")
        assert catalog.is_correct("ん", "nn")

    def test_partial_answer_is_wrong(self, catalog):
        assert not catalog.is_correct("し", "sh")
        assert not catalog.is_correct("きゃ", "ky")

    def test_internal_whitespace_is_not_trimmed(self, catalog):
        assert not catalog.is_correct("きゃ", "k ya")

    def test_mixed_case_entries_match_any_case(self):
        catalog = KanaCatalog([
            KanaEntry(glyph="あ", accepted_romaji=frozenset({"A"}), category=Category.MAIN),
            KanaEntry(glyph="し", accepted_romaji=frozenset({" Shi ", "SI"}), category=Category.MAIN),
        ])

        assert catalog.is_correct("あ", "A")
        assert catalog.is_correct("あ", "a")
        assert catalog.is_correct("し", "shi")
        assert catalog.is_correct("し", " Si")

    def test_unknown_glyph_raises(self, catalog):
        with pytest.raises(UnknownGlyph) as exc_info:
            catalog.is_correct("A", "a")
        assert exc_info.value.glyph == "A"


class TestKanaEntry:
    def test_requires_accepted_romaji(self):
        with pytest.raises(ValueError):
            KanaEntry(glyph="あ", accepted_romaji=frozenset(), category=Category.MAIN)

    def test_cannot_be_stored_under_all(self):
        with pytest.raises(ValueError):
            KanaEntry(glyph="あ", accepted_romaji=frozenset({"a"}), category=Category.ALL)

    def test_table_spellings_keep_hepburn_first(self, catalog):
        assert catalog.lookup("し").spellings == ("shi", "si")
        assert catalog.lookup("ツ").spellings == ("tsu", "tu")

    def test_spellings_are_trimmed_and_lower_cased(self):
        entry = KanaEntry(glyph="し", accepted_romaji=(" SHI", "si ", "Shi"), category=Category.MAIN)

        assert entry.accepted_romaji == frozenset({"shi", "si"})
        assert entry.spellings == ("shi", "si")

    def test_unordered_spellings_are_shortest_first(self):
        entry = KanaEntry(glyph="ち", accepted_romaji=frozenset({"chi", "ti"}), category=Category.MAIN)
        assert entry.spellings == ("ti", "chi")

    def test_blank_spellings_do_not_count(self):
        with pytest.raises(ValueError):
            KanaEntry(glyph="あ", accepted_romaji=("  ", ""), category=Category.MAIN)


def test_normalize_romaji():
    assert normalize_romaji("  KyA \n") == "kya"
    assert normalize_romaji(None) == ""
