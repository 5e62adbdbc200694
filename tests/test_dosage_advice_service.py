import json

import pytest

from poolpal.services.ai import GoogleAIClientError
from poolpal.services.dosage_advice import (
    PH_MINUS_LIQUID,
    AdvisoryFailure,
    DosageAdviceService,
    DosageRequest,
    DosageResponse,
    build_prompt,
    has_disclaimer,
)
from poolpal.services.tools.pool_calculator import PoolGeometry, WaterReading
from poolpal.utils.messages import message

from .conftest import FakeGoogleAIClient, advice_reply


def _request(**overrides):
    values = {
        "pool_length": 10.0,
        "pool_width": 5.0,
        "pool_average_depth": 1.5,
        "current_chlorine": 0.5,
        "current_ph": 7.8,
    }
    values.update(overrides)
    return DosageRequest(**values)


def _service(client, **kwargs):
    kwargs.setdefault("locale", "en")
    return DosageAdviceService(client, model_name="fake-gemini", **kwargs)


def test_request_carries_fixed_targets():
    request = DosageRequest.build(
        PoolGeometry(length=10, width=5, average_depth=1.5),
        WaterReading(chlorine=0.5, ph=7.8),
    )
    assert request.to_payload() == {
        "poolLength": 10.0,
        "poolWidth": 5.0,
        "poolAverageDepth": 1.5,
        "currentChlorine": 0.5,
        "currentPH": 7.8,
        "targetChlorine": 1.25,
        "targetPH": 7.3,
    }


def test_successful_round_trip_returns_both_suggestions():
    client = FakeGoogleAIClient(replies=[advice_reply()])
    response = _service(client).request_dosage_advice(_request())

    assert "dichlor" in response.chlorine_dosage_suggestion
    assert "pH-minus" in response.ph_minus_dosage_suggestion
    assert has_disclaimer(response.chlorine_dosage_suggestion)
    assert has_disclaimer(response.ph_minus_dosage_suggestion)

    call = client.calls[0]
    assert call["model"] == "fake-gemini"
    assert call["generation_config"]["response_mime_type"] == "application/json"
    assert call["system_instruction"]


def test_prompt_contains_inputs_targets_and_knowledge():
    client = FakeGoogleAIClient(replies=[advice_reply()])
    _service(client).request_dosage_advice(_request())
    prompt = client.last_prompt

    assert "Length: 10 meters" in prompt
    assert "Average Depth: 1.5 meters" in prompt
    assert "Chlorine: 0.5 mg/l" in prompt
    assert "pH: 7.8" in prompt
    assert "Target Chlorine: 1.25 mg/l" in prompt
    assert "Target pH: 7.3" in prompt
    assert "150g of granular dichlor or 100ml of liquid chlorine" in prompt
    assert "200g of granular pH-reducer" in prompt
    assert "calibrated" in prompt
    assert "English" in prompt


def test_liquid_ph_minus_product_switches_knowledge():
    prompt = build_prompt(_request(), locale="it", ph_minus_product=PH_MINUS_LIQUID)
    assert "250ml of liquid pH-reducer" in prompt
    assert "200g of granular pH-reducer" not in prompt
    assert "Italian" in prompt


def test_unknown_ph_minus_product_is_rejected():
    with pytest.raises(ValueError):
        build_prompt(_request(), locale="en", ph_minus_product="tablets")


def test_missing_disclaimer_gets_fallback_appended():
    client = FakeGoogleAIClient(replies=[advice_reply(chlorine="Add 375 g of dichlor.")])
    response = _service(client).request_dosage_advice(_request())

    assert response.chlorine_dosage_suggestion.startswith("Add 375 g of dichlor.")
    assert response.chlorine_dosage_suggestion.endswith(message("fallback_disclaimer", "en"))
    assert not response.ph_minus_dosage_suggestion.endswith(message("fallback_disclaimer", "en"))


def test_code_fenced_json_is_accepted():
    client = FakeGoogleAIClient(replies=["```json\n" + advice_reply() + "\n```"])
    response = _service(client).request_dosage_advice(_request())
    assert isinstance(response, DosageResponse)


@pytest.mark.parametrize(
    "reply",
    [
        "",
        "not json at all",
        json.dumps(["chlorine", "ph"]),
        json.dumps({"chlorineDosageSuggestion": "Add 375 g of dichlor."}),
        json.dumps({"chlorineDosageSuggestion": "Add 375 g.", "phMinusDosageSuggestion": "   "}),
        json.dumps({"chlorineDosageSuggestion": 12, "phMinusDosageSuggestion": "Add 1 kg."}),
    ],
)
def test_malformed_replies_fail_whole(reply):
    client = FakeGoogleAIClient(replies=[reply])
    with pytest.raises(AdvisoryFailure) as excinfo:
        _service(client).request_dosage_advice(_request())
    assert str(excinfo.value) == message("advice_failed", "en")


def test_transport_error_becomes_advisory_failure():
    client = FakeGoogleAIClient(error=GoogleAIClientError("Gemini request failed: timeout"))
    with pytest.raises(AdvisoryFailure) as excinfo:
        _service(client, locale="it").request_dosage_advice(_request())
    assert str(excinfo.value) == message("advice_failed", "it")
    assert isinstance(excinfo.value.__cause__, GoogleAIClientError)


def test_missing_api_key_fails_as_advisory_failure(app):
    app.config["GOOGLE_AI_API_KEY"] = None
    with app.app_context():
        with pytest.raises(AdvisoryFailure):
            DosageAdviceService.from_app().request_dosage_advice(_request())


def test_from_app_reads_configuration(app):
    app.config.update(POOLPAL_LOCALE="it", POOLPAL_PH_MINUS_PRODUCT="liquid", POOLPAL_ADVICE_TEMPERATURE=0.5)
    with app.app_context():
        service = DosageAdviceService.from_app()
    assert service.locale == "it"
    assert service.ph_minus_product == "liquid"
    assert service.temperature == 0.5


def test_unsupported_locale_falls_back_to_italian():
    assert DosageAdviceService(FakeGoogleAIClient(), locale="fr").locale == "it"


def test_deeply_nested_reply_fails_as_advisory_failure():
    client = FakeGoogleAIClient(replies=["[" * 100000 + "]" * 100000])
    with pytest.raises(AdvisoryFailure) as excinfo:
        _service(client).request_dosage_advice(_request())
    assert str(excinfo.value) == message("advice_failed", "en")
    assert isinstance(excinfo.value.__cause__, RecursionError)


def test_unexpected_client_error_fails_as_advisory_failure():
    client = FakeGoogleAIClient(error=AttributeError("'NoneType' object has no attribute 'text'"))
    with pytest.raises(AdvisoryFailure) as excinfo:
        _service(client).request_dosage_advice(_request())
    assert isinstance(excinfo.value.__cause__, AttributeError)


@pytest.mark.parametrize(
    "text",
    [
        "Add 375 g. Dosages must be calibrated to the specific product you use.",
        "Aggiungi 375 g. I dosaggi vanno calibrati in base al prodotto utilizzato.",
        message("fallback_disclaimer", "en"),
        message("fallback_disclaimer", "it"),
    ],
)
def test_calibration_tied_to_product_counts_as_disclaimer(text):
    assert has_disclaimer(text)


@pytest.mark.parametrize(
    "text",
    [
        "Add 375 g of dichlor; no calibration needed.",
        "Nessuna calibrazione richiesta.",
        "Add 375 g of dichlor.",
    ],
)
def test_passing_mention_of_calibration_is_not_a_disclaimer(text):
    assert not has_disclaimer(text)


def test_reply_dismissing_calibration_gets_fallback():
    client = FakeGoogleAIClient(replies=[advice_reply(chlorine="Add 375 g of dichlor; no calibration needed.")])
    response = _service(client).request_dosage_advice(_request())
    assert response.chlorine_dosage_suggestion.endswith(message("fallback_disclaimer", "en"))
