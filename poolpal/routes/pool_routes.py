from flask import Blueprint, flash, render_template

from poolpal.extensions import advice_rate_limit, limiter
from poolpal.forms import PoolAdviceForm
from poolpal.services.dosage_advice import AdvisoryBusy, AdvisoryFailure
from poolpal.services.tools.pool_calculator import compute
from poolpal.utils.advisory_sessions import submit_dosage_request
from poolpal.utils.messages import message

# Pool page blueprint
# Mounted at / via blueprints_registry

pool_bp = Blueprint('pool_bp', __name__)


def _render_pool_page(form, advice=None, status_code=200):
    derived = compute(form.geometry(), form.current_salt.data)
    return (
        render_template('pool/index.html', form=form, derived=derived, advice=advice),
        status_code,
    )


@pool_bp.route('/', methods=['GET'])
def pool_index():
    """Single pool page. Derived values refresh through the public API as fields change."""
    return _render_pool_page(PoolAdviceForm())


@pool_bp.route('/', methods=['POST'])
@limiter.limit(advice_rate_limit)
def pool_submit():
    """Plain form submission for browsers without JavaScript."""
    form = PoolAdviceForm()
    if not form.validate_on_submit():
        return _render_pool_page(form, status_code=422)

    try:
        advice = submit_dosage_request(form.dosage_request())
    except AdvisoryBusy:
        flash(message('advice_busy'), 'warning')
        return _render_pool_page(form, status_code=409)
    except AdvisoryFailure:
        flash(message('advice_failed'), 'error')
        return _render_pool_page(form, status_code=502)

    return _render_pool_page(form, advice=advice)
