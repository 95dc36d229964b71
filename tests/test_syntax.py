import pytest

from drawskrit.model import (
    Background, Blank, Border, CompositionGroup, Label, Shape, ShapeDefaults, StyleOverrides,
)
from drawskrit.syntax import MAX_CARDINALITY, parse_row, split_line, translate_symbol


def shape(kind: str, **style) -> Shape:
    return Shape(kind=kind, style=StyleOverrides(**style))


class TestSplitLine:
    def test_whitespace_runs(self) -> None:
        assert split_line("a\tb   c ") == ["a", "b", "c"]

    def test_empty_lines(self) -> None:
        assert split_line("") == []
        assert split_line("    ") == []

    def test_quoted_run_is_one_token(self) -> None:
        assert split_line('red "Hello world" square') == ["red", '"Hello world"', "square"]
        assert split_line("'single  quotes'") == ["'single  quotes'"]

    def test_closing_quote_ends_token(self) -> None:
        assert split_line('"Hi"there') == ['"Hi"', "there"]

    def test_other_quote_inside_run_is_text(self) -> None:
        assert split_line('"it\'s here" o') == ['"it\'s here"', "o"]

    def test_unterminated_quote_runs_to_end_of_line(self) -> None:
        assert split_line("circle 'never closed square") == ["circle", "'never closed square"]


class TestTranslateSymbol:
    @pytest.mark.parametrize("symbol, keyword", [
        ("_", "blank"), ("#", "square"), ("o", "circle"), ("[]", "rectangle"),
        ("()", "ellipse"), ("/\\", "triangle"), ("-", "line"),
    ])
    def test_symbols(self, symbol: str, keyword: str) -> None:
        assert translate_symbol(symbol) == keyword

    def test_other_tokens_unchanged(self) -> None:
        assert translate_symbol("O") == "O"
        assert translate_symbol("Circle") == "Circle"
        assert translate_symbol("##") == "##"


class TestShapes:
    def test_cardinality_and_color(self) -> None:
        result = parse_row("2 red squares")
        assert result.cells == (shape("square", color="red"), shape("square", color="red"))
        assert result.meta == {}

    def test_properties_reset_after_shape(self) -> None:
        result = parse_row("big filled circle square")
        assert result.cells == (shape("circle", size="big", fill_mode="filled"), shape("square"))

    def test_all_style_words(self) -> None:
        result = parse_row("huge dotted fat empty vertical teal smile")
        assert result.cells == (shape("smile", color="teal", size="huge", line_style="dotted",
                                      line_width="fat", fill_mode="empty", orientation="vertical"),)

    def test_keywords_are_case_insensitive(self) -> None:
        assert parse_row("HUGE Red CIRCLE").cells == (shape("circle", color="red", size="huge"),)

    def test_symbols_are_shapes(self) -> None:
        kinds = [cell.kind for cell in parse_row("# o [] () /\\ -").cells]
        assert kinds == ["square", "circle", "rectangle", "ellipse", "triangle", "line"]

    def test_plural_keywords(self) -> None:
        kinds = [cell.kind for cell in parse_row("ellipses smiles lines").cells]
        assert kinds == ["ellipse", "smile", "line"]

    def test_zero_cardinality_draws_nothing(self) -> None:
        assert parse_row("0 squares").cells == ()

    def test_unknown_words_are_ignored(self) -> None:
        assert parse_row("please draw a red circle now").cells == (shape("circle", color="red"),)

    @pytest.mark.parametrize("row", ["+3 squares", "2.5 squares", "-1 squares"])
    def test_malformed_numbers_are_ignored(self, row: str) -> None:
        assert parse_row(row).cells == (shape("square"),)

    def test_huge_cardinality_is_clamped(self) -> None:
        assert len(parse_row("99999999999999999999 squares").cells) == MAX_CARDINALITY
        assert len(parse_row("7" * 5000 + " blanks").cells) == MAX_CARDINALITY
        assert len(parse_row("0003 circles").cells) == 3


class TestBlanks:
    def test_blank_cells(self) -> None:
        assert parse_row("3 blanks").cells == (Blank(), Blank(), Blank())
        assert parse_row("_ o _").cells == (Blank(), shape("circle"), Blank())

    def test_blank_does_not_open_composition(self) -> None:
        assert parse_row("_ on circle").cells == (Blank(), shape("circle"))

    def test_blank_drops_pending_composition(self) -> None:
        assert parse_row("circle on _ square").cells == (shape("circle"), Blank(), shape("square"))

    def test_blank_resets_properties(self) -> None:
        assert parse_row("red _ circle").cells == (Blank(), shape("circle"))


class TestLabels:
    def test_color_moves_to_text_color(self) -> None:
        result = parse_row('red "Hi" square')
        assert result.cells == (Label(text="Hi", text_color="red"), shape("square"))

    def test_label_keeps_case(self) -> None:
        assert parse_row("'Hello World'").cells == (Label(text="Hello World"),)

    def test_label_styling(self) -> None:
        result = parse_row("small vertical green 'A'")
        assert result.cells == (Label(text="A", text_color="green", size="small", text_orientation="vertical"),)

    def test_label_cardinality(self) -> None:
        assert parse_row("3 'x'").cells == (Label(text="x"),) * 3

    def test_empty_label(self) -> None:
        assert parse_row('""').cells == (Label(text=""),)

    def test_unterminated_label_is_dropped(self) -> None:
        assert parse_row("circle 'oops").cells == (shape("circle"),)


class TestComposition:
    def test_circle_on_square(self) -> None:
        result = parse_row("circle on square")
        group = CompositionGroup((shape("circle"), shape("square")))
        assert result.cells == (group,)
        assert group.render_order() == (shape("square"), shape("circle"))

    def test_group_extends(self) -> None:
        result = parse_row("circle on square on triangle")
        assert result.cells == (CompositionGroup((shape("circle"), shape("square"), shape("triangle"))),)

    def test_properties_between_on_and_shape(self) -> None:
        result = parse_row("circle on red square")
        assert result.cells == (CompositionGroup((shape("circle"), shape("square", color="red"))),)

    def test_on_must_follow_shape_directly(self) -> None:
        assert parse_row("circle red on square").cells == (shape("circle"), shape("square", color="red"))
        assert parse_row("on circle").cells == (shape("circle"),)

    def test_only_first_repeat_composes(self) -> None:
        result = parse_row("2 circles on 2 squares")
        assert result.cells == (
            shape("circle"),
            CompositionGroup((shape("circle"), shape("square"))),
            shape("square"),
        )

    def test_label_composes_with_shape(self) -> None:
        assert parse_row("'Hi' on circle").cells == (CompositionGroup((Label(text="Hi"), shape("circle"))),)
        assert parse_row("circle on 'Hi'").cells == (CompositionGroup((shape("circle"), Label(text="Hi"))),)

    def test_colored_label_merged_with_shape(self) -> None:
        result = parse_row('red "Hi" on square')
        assert result.cells == (CompositionGroup((Label(text="Hi", text_color="red"), shape("square"))),)

    def test_composition_without_previous_cell(self) -> None:
        assert parse_row("0 circles on square").cells == (shape("square"),)

    def test_meta_word_cancels_composition(self) -> None:
        result = parse_row("circle on blue background square")
        assert result.cells == (shape("circle"), shape("square"))
        assert result.meta == {"background": Background(color="blue")}


class TestMetaInstructions:
    def test_background(self) -> None:
        assert parse_row("red background").meta == {"background": Background(color="red")}

    def test_background_default_color(self) -> None:
        assert parse_row("background").meta == {"background": Background(color="white")}

    def test_shape_defaults_fill_unset_fields(self) -> None:
        result = parse_row("big dashed shapes")
        assert result.meta == {"shapes": ShapeDefaults(color="black", size="big", line_style="dashed",
                                                       line_width="thin", fill_mode="empty",
                                                       orientation="horizontal")}

    def test_meta_ignores_cardinality(self) -> None:
        assert parse_row("3 green background").meta == {"background": Background(color="green")}

    def test_properties_reset_after_meta(self) -> None:
        result = parse_row("red background circle")
        assert result.cells == (shape("circle"),)

    def test_last_instruction_of_a_category_wins(self) -> None:
        assert parse_row("red background blue background").meta == {"background": Background(color="blue")}

    def test_border_words_before_keyword(self) -> None:
        result = parse_row("left top 1/5 border")
        assert result.meta == {"border": Border(positions=frozenset({"left", "top"}), ratio=0.2)}

    def test_border_words_after_keyword(self) -> None:
        result = parse_row("border left right 1/4")
        assert result.meta == {"border": Border(positions=frozenset({"left", "right"}), ratio=0.25)}

    def test_border_defaults(self) -> None:
        assert parse_row("border").meta == {"border": Border(positions=frozenset(), ratio=0.0)}

    def test_border_words_stop_after_shape(self) -> None:
        result = parse_row("border 1/4 circle left")
        assert result.meta == {"border": Border(ratio=0.25)}
        assert result.cells == (shape("circle"),)

    def test_zero_denominator_is_ignored(self) -> None:
        assert parse_row("border 1/0").meta == {"border": Border(ratio=0.0)}

    def test_ratio_is_capped(self) -> None:
        assert parse_row("border 3/2").meta == {"border": Border(ratio=1.0)}

    def test_ratio_inside_a_token(self) -> None:
        assert parse_row("border 1/4,").meta == {"border": Border(ratio=0.25)}
        assert parse_row("(1/2) border").meta == {"border": Border(ratio=0.5)}

    def test_oversized_ratio_is_ignored(self) -> None:
        assert parse_row("border 99999999999999999999/3").meta == {"border": Border(ratio=0.0)}

    def test_meta_and_shapes_in_one_row(self) -> None:
        result = parse_row("yellow background 2 circles")
        assert result.meta == {"background": Background(color="yellow")}
        assert len(result.cells) == 2
