from mask_engine.formatting import Pattern, format_value, join_buffer


def make_pattern(source: str, **options: object) -> Pattern:
    return Pattern.compile(source, **options)  # type: ignore[arg-type]


def test_empty_raw_fills_placeholders() -> None:
    pattern = make_pattern("1111-1111-1111-1111")

    buffer = format_value(pattern, "")

    assert len(buffer) == pattern.length
    assert join_buffer(buffer) == "____-____-____-____"


def test_raw_characters_fill_editable_slots() -> None:
    pattern = make_pattern("(111) 111-1111")

    assert join_buffer(format_value(pattern, "5551234")) == "(555) 123-4___"


def test_raw_may_contain_pattern_literals() -> None:
    pattern = make_pattern("11/11/1111")

    assert join_buffer(format_value(pattern, "01/02/2024")) == "01/02/2024"
    assert join_buffer(format_value(pattern, "01022024")) == "01/02/2024"


def test_transform_is_applied() -> None:
    pattern = make_pattern("AAA-111")

    assert join_buffer(format_value(pattern, "abc123")) == "ABC-123"


def test_invalid_character_becomes_placeholder_without_advancing() -> None:
    pattern = make_pattern("111")

    assert join_buffer(format_value(pattern, "1x")) == "1__"


def test_custom_placeholder() -> None:
    pattern = make_pattern("11-11", placeholder_char=" ")

    assert join_buffer(format_value(pattern, "1")) == "1 -  "


def test_revealing_mask_stops_at_first_missing_character() -> None:
    pattern = make_pattern("(111) 111-1111", revealing_mask=True)

    buffer = format_value(pattern, "555")

    assert len(buffer) == pattern.length
    assert buffer[5] == " "
    assert buffer[6] is None
    assert join_buffer(buffer) == "(555) "
    assert join_buffer(format_value(pattern, "")) == "("


def test_revealing_mask_stops_at_invalid_character() -> None:
    pattern = make_pattern("11-11", revealing_mask=True)

    assert join_buffer(format_value(pattern, "1a34")) == "1"


def test_round_trip_through_raw_value() -> None:
    pattern = make_pattern("11-11-11")
    first = format_value(pattern, "12-_4-5")
    raw = "".join(
        char for index, char in enumerate(first) if pattern.is_editable(index)
    )

    assert join_buffer(first) == "12-_4-5_"
    assert format_value(pattern, raw) == first
