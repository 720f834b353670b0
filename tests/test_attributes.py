import pytest

from svgscene.attributes import iter_attributes, parse_transform


def test_pairs_in_order():
    assert list(iter_attributes('cx "10" cy "20" r "5"')) == [
        ("cx", "10"),
        ("cy", "20"),
        ("r", "5"),
    ]


def test_equals_sign_form():
    assert list(iter_attributes('x1="0%" y1="3"')) == [("x1", "0%"), ("y1", "3")]


def test_text_before_quote_is_skipped():
    assert list(iter_attributes('a b "1" c "2"')) == [("a", "1"), ("c", "2")]


def test_empty_text():
    assert list(iter_attributes("   ")) == []


def test_trailing_name_without_value_ignored():
    assert list(iter_attributes('a "1" b')) == [("a", "1")]


def test_unterminated_quote_reads_to_end():
    assert list(iter_attributes('a "xyz')) == [("a", "xyz")]


def test_value_keeps_inner_spaces():
    assert list(iter_attributes('viewBox "0 0 10 20"')) == [("viewBox", "0 0 10 20")]


def test_translate():
    assert parse_transform("translate(10,20)") == [("translate", (10.0, 20.0))]


def test_rotate():
    assert parse_transform("rotate(45)") == [("rotate", (45.0,))]


def test_scale_one_and_two_values():
    assert parse_transform("scale(2)") == [("scale", (2.0,))]
    assert parse_transform("scale(2, 3)") == [("scale", (2.0, 3.0))]


def test_matrix_with_commas():
    assert parse_transform("matrix(1,0,0,1,5,6)") == [
        ("matrix", (1.0, 0.0, 0.0, 1.0, 5.0, 6.0))
    ]


def test_chain_keeps_order():
    assert parse_transform(" translate(10 20) , rotate(30) scale(4)") == [
        ("translate", (10.0, 20.0)),
        ("rotate", (30.0,)),
        ("scale", (4.0,)),
    ]


def test_unknown_transform_skipped():
    assert parse_transform("skewX(30) rotate(5)") == [("rotate", (5.0,))]


def test_empty_transform():
    assert parse_transform("") == []


def test_extra_values_ignored():
    assert parse_transform("rotate(45 10 10)") == [("rotate", (45.0,))]


def test_units_after_number_ignored():
    assert parse_transform("translate(10px, 5)") == [("translate", (10.0, 5.0))]


def test_negative_and_exponent():
    assert parse_transform("translate(-1.5e1 .5)") == [("translate", (-15.0, 0.5))]


@pytest.mark.parametrize("text", ["translate(10)", "matrix(1 2 3)", "scale()"])
def test_too_few_values(text):
    with pytest.raises(ValueError):
        parse_transform(text)


def test_bad_number():
    with pytest.raises(ValueError):
        parse_transform("rotate(abc)")