"""
Static kana → romaji catalog.

Each table row is ``(glyph, "spelling[/alternative...]")``. The first
spelling is Hepburn; alternatives cover Kunrei/Nihon-shiki and common IME
input so that typing ``si`` for し is not scored as a miss.
"""

import logging
from typing import Iterable, Optional

from .models import (
    PARTITIONS,
    Category,
    EmptyCategory,
    KanaEntry,
    Script,
    UnknownGlyph,
    normalize_romaji,
)

logger = logging.getLogger(__name__)


MAIN_HIRAGANA = (
    ("あ", "a"), ("い", "i"), ("う", "u"), ("え", "e"), ("お", "o"),
    ("か", "ka"), ("き", "ki"), ("く", "ku"), ("け", "ke"), ("こ", "ko"),
    ("さ", "sa"), ("し", "shi/si"), ("す", "su"), ("せ", "se"), ("そ", "so"),
    ("た", "ta"), ("ち", "chi/ti"), ("つ", "tsu/tu"), ("て", "te"), ("と", "to"),
    ("な", "na"), ("に", "ni"), ("ぬ", "nu"), ("ね", "ne"), ("の", "no"),
    ("は", "ha"), ("ひ", "hi"), ("ふ", "fu/hu"), ("へ", "he"), ("ほ", "ho"),
    ("ま", "ma"), ("み", "mi"), ("む", "mu"), ("め", "me"), ("も", "mo"),
    ("や", "ya"), ("ゆ", "yu"), ("よ", "yo"),
    ("ら", "ra"), ("り", "ri"), ("る", "ru"), ("れ", "re"), ("ろ", "ro"),
    ("わ", "wa"), ("を", "wo/o"), ("ん", "n/nn"),
)

DAKUTEN_HIRAGANA = (
    ("が", "ga"), ("ぎ", "gi"), ("ぐ", "gu"), ("げ", "ge"), ("ご", "go"),
    ("ざ", "za"), ("じ", "ji/zi"), ("ず", "zu"), ("ぜ", "ze"), ("ぞ", "zo"),
    ("だ", "da"), ("ぢ", "di/ji"), ("づ", "du/zu"), ("で", "de"), ("ど", "do"),
    ("ば", "ba"), ("び", "bi"), ("ぶ", "bu"), ("べ", "be"), ("ぼ", "bo"),
    ("ぱ", "pa"), ("ぴ", "pi"), ("ぷ", "pu"), ("ぺ", "pe"), ("ぽ", "po"),
)

COMBINED_HIRAGANA = (
    ("きゃ", "kya"), ("きゅ", "kyu"), ("きょ", "kyo"),
    ("しゃ", "sha/sya"), ("しゅ", "shu/syu"), ("しょ", "sho/syo"),
    ("ちゃ", "cha/tya/cya"), ("ちゅ", "chu/tyu/cyu"), ("ちょ", "cho/tyo/cyo"),
    ("にゃ", "nya"), ("にゅ", "nyu"), ("にょ", "nyo"),
    ("ひゃ", "hya"), ("ひゅ", "hyu"), ("ひょ", "hyo"),
    ("みゃ", "mya"), ("みゅ", "myu"), ("みょ", "myo"),
    ("りゃ", "rya"), ("りゅ", "ryu"), ("りょ", "ryo"),
    ("ぎゃ", "gya"), ("ぎゅ", "gyu"), ("ぎょ", "gyo"),
    ("じゃ", "ja/jya/zya"), ("じゅ", "ju/jyu/zyu"), ("じょ", "jo/jyo/zyo"),
    ("びゃ", "bya"), ("びゅ", "byu"), ("びょ", "byo"),
    ("ぴゃ", "pya"), ("ぴゅ", "pyu"), ("ぴょ", "pyo"),
)

MAIN_KATAKANA = (
    ("ア", "a"), ("イ", "i"), ("ウ", "u"), ("エ", "e"), ("オ", "o"),
    ("カ", "ka"), ("キ", "ki"), ("ク", "ku"), ("ケ", "ke"), ("コ", "ko"),
    ("サ", "sa"), ("シ", "shi/si"), ("ス", "su"), ("セ", "se"), ("ソ", "so"),
    ("タ", "ta"), ("チ", "chi/ti"), ("ツ", "tsu/tu"), ("テ", "te"), ("ト", "to"),
    ("ナ", "na"), ("ニ", "ni"), ("ヌ", "nu"), ("ネ", "ne"), ("ノ", "no"),
    ("ハ", "ha"), ("ヒ", "hi"), ("フ", "fu/hu"), ("ヘ", "he"), ("ホ", "ho"),
    ("マ", "ma"), ("ミ", "mi"), ("ム", "mu"), ("メ", "me"), ("モ", "mo"),
    ("ヤ", "ya"), ("ユ", "yu"), ("ヨ", "yo"),
    ("ラ", "ra"), ("リ", "ri"), ("ル", "ru"), ("レ", "re"), ("ロ", "ro"),
    ("ワ", "wa"), ("ヲ", "wo/o"), ("ン", "n/nn"),
)

DAKUTEN_KATAKANA = (
    ("ガ", "ga"), ("ギ", "gi"), ("グ", "gu"), ("ゲ", "ge"), ("ゴ", "go"),
    ("ザ", "za"), ("ジ", "ji/zi"), ("ズ", "zu"), ("ゼ", "ze"), ("ゾ", "zo"),
    ("ダ", "da"), ("ヂ", "ji/di"), ("ヅ", "zu/du"), ("デ", "de"), ("ド", "do"),
    ("バ", "ba"), ("ビ", "bi"), ("ブ", "bu"), ("ベ", "be"), ("ボ", "bo"),
    ("パ", "pa"), ("ピ", "pi"), ("プ", "pu"), ("ペ", "pe"), ("ポ", "po"),
    ("ヴ", "vu"),
)

COMBINED_KATAKANA = (
    ("キャ", "kya"), ("キュ", "kyu"), ("キョ", "kyo"),
    ("シャ", "sha/sya"), ("シュ", "shu/syu"), ("ショ", "sho/syo"),
    ("チャ", "cha/tya/cya"), ("チュ", "chu/tyu/cyu"), ("チョ", "cho/tyo/cyo"),
    ("ニャ", "nya"), ("ニュ", "nyu"), ("ニョ", "nyo"),
    ("ヒャ", "hya"), ("ヒュ", "hyu"), ("ヒョ", "hyo"),
    ("ミャ", "mya"), ("ミュ", "myu"), ("ミョ", "myo"),
    ("リャ", "rya"), ("リュ", "ryu"), ("リョ", "ryo"),
    ("ギャ", "gya"), ("ギュ", "gyu"), ("ギョ", "gyo"),
    ("ジャ", "ja/jya/zya"), ("ジュ", "ju/jyu/zyu"), ("ジョ", "jo/jyo/zyo"),
    ("ヂャ", "dya"), ("ヂュ", "dyu"), ("ヂョ", "dyo"),
    ("ビャ", "bya"), ("ビュ", "byu"), ("ビョ", "byo"),
    ("ピャ", "pya"), ("ピュ", "pyu"), ("ピョ", "pyo"),
    # Foreign-sound combinations
    ("ヴァ", "va"), ("ヴィ", "vi"), ("ヴェ", "ve"), ("ヴォ", "vo"),
    ("ウィ", "wi"), ("ウェ", "we"), ("ウォ", "wo"),
    ("ファ", "fa"), ("フィ", "fi"), ("フェ", "fe"), ("フォ", "fo"),
    ("ツァ", "tsa"), ("ツィ", "tsi"), ("ツェ", "tse"), ("ツォ", "tso"),
    ("シェ", "she"), ("ジェ", "je"), ("チェ", "che"), ("イェ", "ye"),
)

TABLES = {
    Script.HIRAGANA: {
        Category.MAIN: MAIN_HIRAGANA,
        Category.DAKUTEN: DAKUTEN_HIRAGANA,
        Category.COMBINED: COMBINED_HIRAGANA,
    },
    Script.KATAKANA: {
        Category.MAIN: MAIN_KATAKANA,
        Category.DAKUTEN: DAKUTEN_KATAKANA,
        Category.COMBINED: COMBINED_KATAKANA,
    },
}


def _entry(glyph: str, spellings: str, category: Category, script: Script) -> KanaEntry:
    accepted = tuple(spellings.split("/"))
    return KanaEntry(glyph=glyph, accepted_romaji=accepted, category=category, script=script)


class KanaCatalog:
    """Lookup over a fixed set of kana entries, partitioned by script and category."""

    def __init__(self, entries: Iterable[KanaEntry]):
        self._entries = tuple(entries)
        self._by_glyph: dict[str, KanaEntry] = {}
        for entry in self._entries:
            if entry.glyph in self._by_glyph:
                raise ValueError(f"Duplicate glyph in catalog: {entry.glyph!r}")
            self._by_glyph[entry.glyph] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def entries_for(self, category: Category,
                    script: Script = Script.HIRAGANA) -> tuple[KanaEntry, ...]:
        """Return entries for *category* in catalog order.

        ``Category.ALL`` concatenates MAIN, DAKUTEN and COMBINED. Raises
        ``EmptyCategory`` when nothing matches.
        """
        wanted = PARTITIONS if category is Category.ALL else (category,)
        selected = tuple(
            entry
            for part in wanted
            for entry in self._entries
            if entry.category is part and entry.script is script
        )
        if not selected:
            raise EmptyCategory(category, script)
        return selected

    def lookup(self, glyph: str) -> KanaEntry:
        try:
            return self._by_glyph[glyph]
        except KeyError:
            raise UnknownGlyph(glyph) from None

    def is_correct(self, glyph: str, text: Optional[str]) -> bool:
        """Case-insensitive exact match of trimmed *text* against accepted romaji."""
        entry = self.lookup(glyph)
        answer = normalize_romaji(text)
        if not answer:
            return False
        return answer in entry.accepted_romaji


def build_entries(tables: dict = TABLES) -> list[KanaEntry]:
    entries = []
    for script, partitions in tables.items():
        for category, rows in partitions.items():
            entries.extend(_entry(glyph, spellings, category, script) for glyph, spellings in rows)
    return entries


_DEFAULT_CATALOG: Optional[KanaCatalog] = None


def default_catalog() -> KanaCatalog:
    """Return the shared catalog built from the static tables (built once)."""
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = KanaCatalog(build_entries())
        logger.debug("Loaded kana catalog with %d entries", len(_DEFAULT_CATALOG))
    return _DEFAULT_CATALOG
