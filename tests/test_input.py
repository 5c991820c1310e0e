"""Tests for warble.fields.input — Input, FieldError, and the Field protocol."""

import pytest

from warble.errors import ConfigurationError, RuleError
from warble.fields import Field, FieldError, Input, IntegerInput, TextInput
from warble.validation import INT32_MAX, INT32_MIN, required


def _fail(message: str):
    def check(field: Input) -> RuleError:
        return RuleError(message)

    return check


class TestFieldError:
    def test_message_and_str(self) -> None:
        err = FieldError("age", RuleError("too old"))
        assert err.message == "too old"
        assert str(err) == "age: too old"

    def test_frozen(self) -> None:
        err = FieldError("age", RuleError("x"))
        with pytest.raises(AttributeError):
            err.name = "other"  # type: ignore[misc]


class TestAccessors:
    def test_defaults(self) -> None:
        field = Input()
        assert field.kind == "text"
        assert field.name == ""
        assert field.value == ""
        assert field.classes == ()
        assert field.attrs == {}
        assert field.validators == ()
        assert field.required is False
        assert field.min == INT32_MIN
        assert field.max == INT32_MAX

    def test_set_name_and_value(self) -> None:
        field = Input()
        field.name = "title"
        field.value = "<b>raw</b>"
        assert field.name == "title"
        assert field.value == "<b>raw</b>"

    def test_satisfies_field_protocol(self) -> None:
        assert isinstance(TextInput("a"), Field)
        assert isinstance(IntegerInput("b"), Field)

    def test_repr(self) -> None:
        assert repr(TextInput("a", "1")) == "TextInput(name='a', value='1')"


class TestFluentSetup:
    def test_methods_return_self(self) -> None:
        field = Input("x")
        assert field.add_class("wide") is field
        assert field.add_attr("placeholder", "x") is field
        assert field.add_validator(required) is field
        assert field.set_bounds(1, 2) is field
        assert field.set_required() is field

    def test_classes_are_an_ordered_set(self) -> None:
        field = Input("x").add_class("b").add_class("a").add_class("b")
        assert field.classes == ("b", "a")

    def test_attr_overwrites(self) -> None:
        field = Input("x").add_attr("placeholder", "one").add_attr("placeholder", "two")
        assert field.attrs == {"placeholder": "two"}

    @pytest.mark.parametrize("key", ["", "on click", "a'b", 'a"b', "a>b", "a=b", "a/b"])
    def test_invalid_attr_name(self, key: str) -> None:
        with pytest.raises(ConfigurationError, match="Invalid attribute name"):
            Input("x").add_attr(key, "v")

    @pytest.mark.parametrize("key", ["type", "name", "value", "class", "Required"])
    def test_reserved_attr_name(self, key: str) -> None:
        with pytest.raises(ConfigurationError, match="managed by the field"):
            Input("x").add_attr(key, "v")

    def test_inverted_bounds(self) -> None:
        with pytest.raises(ConfigurationError):
            Input("x").set_bounds(10, 1)

    def test_bounds_via_constructor(self) -> None:
        field = Input("x", min_value=-5, max_value=5)
        assert (field.min, field.max) == (-5, 5)


class TestValidate:
    def test_empty_pipeline_passes(self) -> None:
        assert Input("x").validate() is None

    def test_all_pass(self) -> None:
        field = Input("x", "hello").add_validator(required)
        assert field.validate() is None

    def test_first_failure_wins(self) -> None:
        field = Input("x").add_validator(_fail("first")).add_validator(_fail("second"))
        error = field.validate()
        assert error is not None
        assert error.name == "x"
        assert error.message == "first"

    def test_short_circuit_skips_later_validators(self) -> None:
        calls: list[str] = []

        def record(field: Input) -> None:
            calls.append(field.value)

        field = Input("x").add_validator(_fail("stop")).add_validator(record)
        field.validate()
        assert calls == []

    def test_validator_receives_the_field(self) -> None:
        seen: list[Input] = []

        def capture(field: Input) -> None:
            seen.append(field)

        field = Input("x", "v").add_validator(capture)
        field.validate()
        assert seen == [field]

    def test_error_uses_current_name(self) -> None:
        field = Input("old").add_validator(_fail("bad"))
        field.name = "new"
        error = field.validate()
        assert error is not None
        assert error.name == "new"


class TestRender:
    def test_minimal(self) -> None:
        assert str(Input("q", "hi")) == "<input type='text' name='q' value='hi'>"

    def test_classes_and_attrs(self) -> None:
        field = (
            Input("q", "hi")
            .add_class("wide")
            .add_class("primary")
            .add_attr("placeholder", "Search")
            .add_attr("autocomplete", "off")
        )
        assert str(field) == (
            "<input type='text' name='q' value='hi' class='wide primary' "
            "autocomplete='off' placeholder='Search'>"
        )

    def test_attrs_order_independent_of_insertion(self) -> None:
        a = Input("q").add_attr("b", "2").add_attr("a", "1")
        b = Input("q").add_attr("a", "1").add_attr("b", "2")
        assert str(a) == str(b)

    def test_required_flag(self) -> None:
        assert str(Input("q").set_required()).endswith(" required>")

    def test_escapes_every_value(self) -> None:
        field = (
            Input("n'<x>", "\"&'<script>")
            .add_class("a'b")
            .add_attr("title", "<i>&")
        )
        out = str(field)
        assert "<script>" not in out
        assert "name='n&#x27;&lt;x&gt;'" in out
        assert "value='&quot;&amp;&#x27;&lt;script&gt;'" in out
        assert "class='a&#x27;b'" in out
        assert "title='&lt;i&gt;&amp;'" in out

    def test_value_stored_raw(self) -> None:
        field = Input("q", "<b>")
        str(field)
        assert field.value == "<b>"

    def test_render_is_markup(self) -> None:
        rendered = Input("q").render()
        assert hasattr(rendered, "__html__")
        assert Input("q").__html__() == str(rendered)
