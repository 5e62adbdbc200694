from flask import Blueprint

from poolpal.extensions import advice_rate_limit, limiter
from poolpal.forms import PoolAdviceForm
from poolpal.services.dosage_advice import AdvisoryBusy, AdvisoryFailure
from poolpal.services.tools.pool_calculator import IDEAL_RANGES, PoolCalculatorService, compute
from poolpal.utils.advisory_sessions import submit_dosage_request
from poolpal.utils.api_responses import APIResponse
from poolpal.utils.messages import message

public_api_bp = Blueprint("public_api", __name__)


@public_api_bp.route("/pool/derived", methods=["POST"])
@limiter.exempt
def pool_derived_values():
    """Recompute derived values for the current field contents. Never validates."""
    payload = APIResponse.handle_request_content()
    derived = PoolCalculatorService.calculate(payload)
    return APIResponse.success(derived.to_dict())


@public_api_bp.route("/pool/ideal-ranges", methods=["GET"])
@limiter.exempt
def pool_ideal_ranges():
    return APIResponse.success([item.to_dict() for item in IDEAL_RANGES])


@public_api_bp.route("/pool/advice", methods=["POST"])
@limiter.limit(advice_rate_limit)
def pool_dosage_advice():
    form = PoolAdviceForm()
    if not form.validate():
        return APIResponse.validation_error(form.field_errors(), message=message("validation_failed"))

    derived = compute(form.geometry(), form.current_salt.data)
    try:
        advice = submit_dosage_request(form.dosage_request())
    except AdvisoryBusy:
        return APIResponse.error(message("advice_busy"), errors={"code": "advice_in_flight"}, status_code=409)
    except AdvisoryFailure:
        return APIResponse.error(message("advice_failed"), errors={"code": "advice_failed"}, status_code=502)

    return APIResponse.success({"advice": advice.to_dict(), "derived": derived.to_dict()})
