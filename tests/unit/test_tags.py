"""Unit tests for block tag normalization and ordering."""

import pytest

from doctidy.models.tag import UNKNOWN_RANK, Tag
from doctidy.normalizer.tags import (
    canonical_kind,
    normalize_tag,
    parse_tag,
    prune_blank_tags,
    should_lowercase,
    sort_tags,
)


def _no_names(word: str) -> bool:
    return False


class TestTagModel:
    """Tests for the Tag entity."""

    def test_takes_argument(self) -> None:
        """Test which tag kinds take an argument."""
        assert Tag("param", "x").takes_argument
        assert Tag("throws", "IOException").takes_argument
        assert Tag("custom.foo").takes_argument
        assert not Tag("return").takes_argument
        assert not Tag("see").takes_argument

    def test_rank(self) -> None:
        """Test canonical ranks and the rank of unknown kinds."""
        assert Tag("author").rank < Tag("param").rank < Tag("deprecated").rank
        assert Tag("serialField").rank == Tag("serial").rank
        assert Tag("custom").rank == UNKNOWN_RANK

    @pytest.mark.parametrize(
        "tag",
        [
            Tag("param"),
            Tag("throws", text="  "),
            Tag("return"),
            Tag("return", text=" "),
        ],
    )
    def test_blank(self, tag: Tag) -> None:
        """Test tags that carry nothing are blank."""
        assert tag.is_blank

    @pytest.mark.parametrize(
        "tag",
        [
            Tag("param", "x"),
            Tag("throws", text="on error"),
            Tag("return", text="the value"),
            Tag("author"),
            Tag("xerces.internal"),
        ],
    )
    def test_not_blank(self, tag: Tag) -> None:
        """Test tags with an argument, text or bare kind are kept."""
        assert not tag.is_blank


class TestNormalizeTag:
    """Tests for tag normalization rules."""

    def test_exception_becomes_throws(self) -> None:
        """Test that @exception is renamed to @throws."""
        tag = normalize_tag("exception", "IOException", "if an I/O error occurs")

        assert tag.kind == "throws"
        assert tag.argument == "IOException"
        assert tag.text == "if an I/O error occurs"
        assert canonical_kind("exception") == "throws"

    def test_lowercases_and_removes_period(self) -> None:
        """Test lowercasing the first word and dropping a lone trailing period."""
        tag = normalize_tag("param", "real", "The real part.", name_check=_no_names)

        assert tag.text == "the real part"

    def test_removes_bullet(self) -> None:
        """Test that a leading hyphen bullet is removed."""
        tag = normalize_tag("param", "element", "- The name of the element")

        assert tag.text == "the name of the element"

    def test_return_bullet(self) -> None:
        """Test that a hyphen bullet is removed from @return text."""
        tag = normalize_tag("return", text="- true if the element was resolved")

        assert tag.text == "true if the element was resolved"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Returns the value", "the value"),
            ("returns the value", "the value"),
            ("Return the value", "the value"),
            ("the value", "the value"),
        ],
    )
    def test_redundant_return_prefix(self, text: str, expected: str) -> None:
        """Test that a leading "returns" is dropped from @return text."""
        assert normalize_tag("return", text=text).text == expected

    @pytest.mark.parametrize(
        ("kind", "argument", "text"),
        [
            ("throws", "IOException", "IO exception"),
            ("return", None, "Java representation of the number"),
            ("throws", "IOException", "if URL cannot be accessed"),
            ("return", None, "API response as JSON"),
            ("param", "config", "XML configuration for the API"),
            ("return", None, "HTML response or JSON data"),
            ("param", "in", "IOStream to read from"),
            ("return", None, "John Smith if found"),
        ],
    )
    def test_keeps_meaningful_capitals(self, kind: str, argument: str | None, text: str) -> None:
        """Test that acronyms, proper nouns and names keep their capitals."""
        assert normalize_tag(kind, argument, text).text == text

    @pytest.mark.parametrize("kind", ["author", "see", "deprecated"])
    def test_case_exempt_kinds(self, kind: str) -> None:
        """Test that @author, @see and @deprecated text is never lowercased."""
        assert normalize_tag(kind, text="Something else").text == "Something else"

    def test_custom_name_check(self) -> None:
        """Test that an injected name check is honored."""
        tag = normalize_tag("return", text="Zed if found", name_check=lambda w: w == "Zed")

        assert tag.text == "Zed if found"

    def test_keeps_period_with_several_sentences(self) -> None:
        """Test that text with more than one sentence keeps its period."""
        text = "the value. Never null."

        assert normalize_tag("param", "x", text).text == text

    def test_keeps_period_across_continuation_lines(self) -> None:
        """Test that a sentence break on a continuation line keeps the period."""
        text = (
            "if the value contains characters\n"
            "    which are not legal in XML such as vertical tab or a null.\n"
            "    Characters such as \" and &amp; are legal, but will be\n"
            "    automatically escaped when the attribute is serialized."
        )

        assert normalize_tag("throws", "IllegalDataException", text).text == text

    def test_keeps_period_after_abbreviation(self) -> None:
        """Test that text ending in an abbreviation keeps its period."""
        tag = normalize_tag("param", "company", "the company name, e.g. Acme Inc.")

        assert tag.text == "the company name, e.g. Acme Inc."

    def test_keeps_period_after_attached_abbreviation(self) -> None:
        """Test that an abbreviation joined to the previous word keeps its period."""
        tag = normalize_tag("author", None, "Acme,Inc.", name_check=lambda w: False)

        assert tag.text == "Acme,Inc."

    def test_deprecated_keeps_period(self) -> None:
        """Test that @deprecated text keeps its period."""
        assert normalize_tag("deprecated", text="Use other.").text == "Use other."

    def test_empty_argument_becomes_none(self) -> None:
        """Test that an empty argument is stored as None."""
        tag = normalize_tag("param", "", "")

        assert tag.argument is None
        assert tag.is_blank

    def test_default_spacing(self) -> None:
        """Test that missing spacing defaults to one space."""
        assert normalize_tag("param", "x", "y", spacing="").spacing == " "


class TestShouldLowercase:
    """Tests for the lowercasing decision."""

    def test_plain_word(self) -> None:
        """Test that a plain capitalized word is lowercased."""
        assert should_lowercase("param", "The value", _no_names)

    def test_already_lowercase(self) -> None:
        """Test that lowercase text needs no change."""
        assert not should_lowercase("param", "the value", _no_names)

    def test_camel_case(self) -> None:
        """Test that camel-case words keep their capital."""
        assert not should_lowercase("param", "ByteBuffer to fill", _no_names)

    def test_name(self) -> None:
        """Test that recognized names keep their capital."""
        assert not should_lowercase("param", "Michael's id", lambda w: w.startswith("Michael"))


class TestParseTag:
    """Tests for parsing raw tag lines."""

    def test_param(self) -> None:
        """Test parsing a @param line."""
        tag = parse_tag("@param real The real part.")

        assert tag == Tag("param", "real", "the real part", " ")

    def test_aligned_spacing_is_kept(self) -> None:
        """Test that spacing after the argument is kept."""
        tag = parse_tag("@param real      The real part.")

        assert tag.argument == "real"
        assert tag.spacing == "      "
        assert tag.text == "the real part"

    def test_argument_only(self) -> None:
        """Test a @param with no description."""
        tag = parse_tag("@param real")

        assert tag.argument == "real"
        assert tag.text == ""
        assert tag.spacing == " "

    def test_argument_free_kind(self) -> None:
        """Test that @return text is not split into an argument."""
        tag = parse_tag("@return  a hash code value")

        assert tag.argument is None
        assert tag.text == "a hash code value"

    def test_see_keeps_reference(self) -> None:
        """Test that @see references are left as written."""
        tag = parse_tag("@see #parseBuildOutputTimestamp(String)")

        assert tag.text == "#parseBuildOutputTimestamp(String)"

    def test_custom_tag_without_text(self) -> None:
        """Test a dotted custom tag with nothing after it."""
        tag = parse_tag("@xerces.internal")

        assert tag.kind == "xerces.internal"
        assert tag.argument is None
        assert tag.text == ""

    def test_continuation(self) -> None:
        """Test joining continuation lines and dropping trailing blanks."""
        tag = parse_tag(
            "@throws IllegalArgumentException some exception",
            ["     if something goes wrong", "", "  "],
        )

        assert tag.kind == "throws"
        assert tag.argument == "IllegalArgumentException"
        assert tag.text == "some exception\n     if something goes wrong"

    def test_continuation_without_head_text(self) -> None:
        """Test text that starts on the line after the tag."""
        tag = parse_tag("@return", ["  The value  "])

        assert tag.text == "the value"

    def test_exception_alias(self) -> None:
        """Test that parsing applies the @exception alias."""
        assert parse_tag("@exception IOException on failure").kind == "throws"

    def test_not_a_tag(self) -> None:
        """Test that a line without @ raises ValueError."""
        with pytest.raises(ValueError, match="Not a block tag"):
            parse_tag("param x")


class TestSortTags:
    """Tests for canonical tag ordering."""

    def test_canonical_order(self) -> None:
        """Test sorting tags into canonical order."""
        tags = [
            Tag("deprecated", text="Use other."),
            Tag("custom", "x"),
            Tag("throws", "IOException", "on error"),
            Tag("return", text="the value"),
            Tag("param", "b", "second"),
            Tag("author", text="Jane"),
            Tag("param", "a", "first"),
            Tag("since", text="1.0"),
        ]

        kinds = [tag.kind for tag in sort_tags(tags)]

        assert kinds == ["author", "param", "param", "return", "throws", "since", "deprecated", "custom"]

    def test_params_keep_source_order(self) -> None:
        """Test that @param tags keep their written order."""
        tags = [Tag("param", "b", "second"), Tag("param", "a", "first")]

        assert [tag.argument for tag in sort_tags(tags)] == ["b", "a"]

    def test_serial_variants_keep_source_order(self) -> None:
        """Test that serial tags share a rank and keep their order."""
        tags = [
            Tag("serialData", text="some data"),
            Tag("serialField", "some", "field"),
            Tag("serial", text="some serial"),
        ]

        assert [tag.kind for tag in sort_tags(tags)] == ["serialData", "serialField", "serial"]

    def test_throws_sorted_case_insensitively(self) -> None:
        """Test that @throws tags sort by argument ignoring case."""
        tags = [
            Tag("throws", "ioException", "lowercase io"),
            Tag("throws", "IOException", "uppercase IO"),
            Tag("throws", "IllegalArgumentException", "mixed case"),
            Tag("throws", "aException", "lowercase a"),
        ]

        arguments = [tag.argument for tag in sort_tags(tags)]

        assert arguments == ["aException", "IllegalArgumentException", "ioException", "IOException"]

    def test_custom_tags_keep_source_order(self) -> None:
        """Test that unknown tags go last in their written order."""
        tags = [
            Tag("custom.foo", "first", "custom"),
            Tag("bar", "something", "else"),
            Tag("custom.foo", "second", "custom"),
            Tag("param", "x", "value"),
        ]

        result = sort_tags(tags)

        assert result[0].kind == "param"
        assert [tag.argument for tag in result[1:]] == ["first", "something", "second"]

    def test_returns_tuple(self) -> None:
        """Test that sorting returns a tuple."""
        assert sort_tags([]) == ()


class TestPruneBlankTags:
    """Tests for dropping empty tags."""

    def test_prunes(self) -> None:
        """Test dropping blank tags while keeping the rest in order."""
        tags = [Tag("param"), Tag("param", "x"), Tag("return"), Tag("author")]

        assert prune_blank_tags(tags) == [Tag("param", "x"), Tag("author")]
