import pytest

from poolpal.forms import PoolAdviceForm


def _form(app, data):
    with app.test_request_context("/", method="POST", data=data):
        form = PoolAdviceForm()
        form.validate()
        return form


def test_valid_form_builds_dosage_request(app, valid_form_data):
    form = _form(app, valid_form_data)
    assert form.field_errors() == {}

    request = form.dosage_request()
    assert request.pool_length == 10.0
    assert request.current_ph == 7.8
    assert request.target_chlorine == 1.25
    assert request.target_ph == 7.3


def test_decimal_comma_is_accepted(app, valid_form_data):
    valid_form_data.update(pool_average_depth="1,5", current_ph="7,8")
    form = _form(app, valid_form_data)
    assert form.field_errors() == {}
    assert form.pool_average_depth.data == 1.5
    assert form.current_ph.data == 7.8


def test_required_fields_report_missing(app):
    form = _form(app, {})
    errors = form.field_errors()
    for name in ("pool_length", "pool_width", "pool_average_depth", "current_chlorine", "current_ph"):
        assert errors[name] == ["This field is required."]
    for name in ("water_temperature", "current_redox", "current_salt"):
        assert name not in errors


@pytest.mark.parametrize(
    "field, value, expected",
    [
        ("pool_length", "0", "Length must be positive."),
        ("pool_width", "-3", "Width must be positive."),
        ("pool_average_depth", "0", "Average depth must be positive."),
        ("current_chlorine", "-0.1", "Chlorine cannot be negative."),
        ("current_ph", "14.5", "pH must be between 0 and 14."),
        ("current_ph", "-1", "pH cannot be negative."),
        ("current_salt", "-10", "Salt cannot be negative."),
        ("pool_length", "ten", "Enter a valid number."),
        ("current_chlorine", "nan", "Enter a valid number."),
    ],
)
def test_field_level_messages(app, valid_form_data, field, value, expected):
    valid_form_data[field] = value
    errors = _form(app, valid_form_data).field_errors()
    assert errors == {field: [expected]}


def test_zero_chlorine_and_ph_are_valid_readings(app, valid_form_data):
    valid_form_data.update(current_chlorine="0", current_ph="0")
    assert _form(app, valid_form_data).field_errors() == {}


def test_optional_fields_are_carried_on_the_reading(app, valid_form_data):
    valid_form_data.update(water_temperature="26,5", current_redox="720", current_salt="50")
    reading = _form(app, valid_form_data).reading()
    assert reading.water_temperature == 26.5
    assert reading.redox == 720.0
    assert reading.salt == 50.0


def test_messages_follow_configured_locale(app):
    app.config["POOLPAL_LOCALE"] = "it"
    errors = _form(app, {}).field_errors()
    assert errors["pool_length"] == ["Campo obbligatorio."]
