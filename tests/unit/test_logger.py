from kycdoc.logging.logger import Log


class TestMask:
    def test_keeps_first_four_characters(self) -> None:
        assert Log.mask("123456789012") == "1234********"

    def test_none_is_rendered_as_placeholder(self) -> None:
        assert Log.mask(None) == "<none>"
        assert Log.mask("") == "<none>"

    def test_short_value_fully_masked(self) -> None:
        assert Log.mask("abc") == "***"

    def test_custom_visible_length(self) -> None:
        assert Log.mask("ABCDE1234F", visible=2) == "AB********"
