"""Pool page form and its localized validators.

Validation lives here and only here: the derived-values engine and the
dosage-advice client receive values this form has already accepted.
"""

from __future__ import annotations

import math
from typing import Any

from flask_wtf import FlaskForm
from wtforms import FloatField, SubmitField
from wtforms.validators import StopValidation, ValidationError

from poolpal.services.dosage_advice import DosageRequest
from poolpal.services.tools.pool_calculator import PoolGeometry, WaterReading
from poolpal.utils.messages import message


class LocalizedFloatField(FloatField):
    """Float input accepting a decimal comma; blank input becomes None."""

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        raw: Any = valuelist[0]
        if raw is None:
            self.data = None
            return
        if isinstance(raw, str):
            raw = raw.replace(",", ".").strip()
            if raw == "":
                self.data = None
                return
        try:
            value = float(raw)
        except (TypeError, ValueError):
            self.data = None
            raise ValueError(message("invalid_number"))
        if isinstance(raw, bool) or not math.isfinite(value):
            self.data = None
            raise ValueError(message("invalid_number"))
        self.data = value


class Required:
    def __call__(self, form, field):
        if field.data is None and not field.errors:
            raise StopValidation(message("field_required"))


class Minimum:
    """Reject values below (or, when exclusive, equal to) a bound."""

    def __init__(self, minimum: float, message_key: str, *, exclusive: bool = False):
        self.minimum = minimum
        self.message_key = message_key
        self.exclusive = exclusive

    def __call__(self, form, field):
        if field.data is None:
            return
        too_small = field.data <= self.minimum if self.exclusive else field.data < self.minimum
        if too_small:
            raise ValidationError(message(self.message_key))


class Maximum:
    def __init__(self, maximum: float, message_key: str):
        self.maximum = maximum
        self.message_key = message_key

    def __call__(self, form, field):
        if field.data is not None and field.data > self.maximum:
            raise ValidationError(message(self.message_key))


class PoolAdviceForm(FlaskForm):
    pool_length = LocalizedFloatField(validators=[Required(), Minimum(0, "length_positive", exclusive=True)])
    pool_width = LocalizedFloatField(validators=[Required(), Minimum(0, "width_positive", exclusive=True)])
    pool_average_depth = LocalizedFloatField(
        validators=[Required(), Minimum(0, "depth_positive", exclusive=True)]
    )
    water_temperature = LocalizedFloatField()
    current_chlorine = LocalizedFloatField(validators=[Required(), Minimum(0, "chlorine_negative")])
    current_ph = LocalizedFloatField(
        validators=[Required(), Minimum(0, "ph_negative"), Maximum(14, "ph_range")]
    )
    current_redox = LocalizedFloatField()
    current_salt = LocalizedFloatField(validators=[Minimum(0, "salt_negative")])
    submit = SubmitField()

    def geometry(self) -> PoolGeometry:
        return PoolGeometry(
            length=self.pool_length.data,
            width=self.pool_width.data,
            average_depth=self.pool_average_depth.data,
        )

    def reading(self) -> WaterReading:
        return WaterReading(
            chlorine=self.current_chlorine.data,
            ph=self.current_ph.data,
            redox=self.current_redox.data,
            salt=self.current_salt.data,
            water_temperature=self.water_temperature.data,
        )

    def dosage_request(self) -> DosageRequest:
        """Only valid after validate() succeeded."""
        return DosageRequest.build(self.geometry(), self.reading())

    def field_errors(self) -> dict[str, list[str]]:
        return {name: list(errors) for name, errors in self.errors.items() if name != "csrf_token"}
