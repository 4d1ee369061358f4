import re

from reactive_typeahead.forms import FormControl, ValidationMessage, Validators


def errors_for(value, *validators):
    return FormControl(value, validators=validators).errors


def test_required():
    assert errors_for(None, Validators.required) == {ValidationMessage.required: True}
    assert errors_for("  ", Validators.required) == {ValidationMessage.required: True}
    assert errors_for([], Validators.required) == {ValidationMessage.required: True}
    assert errors_for(0, Validators.required) == {}
    assert errors_for("x", Validators.required) == {}


def test_email():
    assert errors_for("ada@example.com", Validators.email) == {}
    assert errors_for("not-an-email", Validators.email) == {ValidationMessage.email: True}
    assert errors_for(None, Validators.email) == {}


def test_length_limits():
    assert errors_for("ab", Validators.min_length(3)) == {
        ValidationMessage.min_length: {"required_length": 3, "actual_length": 2}
    }
    assert errors_for("abcd", Validators.max_length(3)) == {
        ValidationMessage.max_length: {"required_length": 3, "actual_length": 4}
    }
    assert errors_for(None, Validators.min_length(3)) == {}


def test_pattern_accepts_string_or_compiled():
    assert errors_for("1000-001", Validators.pattern(r"\d{4}-\d{3}")) == {}
    errors = errors_for("1000", Validators.pattern(re.compile(r"\d{4}-\d{3}")))
    assert errors[ValidationMessage.pattern]["actual_value"] == "1000"


def test_min_max():
    assert errors_for(3, Validators.min(5)) == {ValidationMessage.min: {"min": 5, "actual": 3}}
    assert errors_for(9, Validators.max(5)) == {ValidationMessage.max: {"max": 5, "actual": 9}}
    assert errors_for(None, Validators.min(5), Validators.max(1)) == {}


def test_compose_merges_errors():
    combined = Validators.compose([Validators.min_length(5), Validators.pattern(r"[a-z]+")])

    errors = errors_for("AB", combined)

    assert set(errors) == {ValidationMessage.min_length, ValidationMessage.pattern}
    assert errors_for("abcdef", combined) == {}
