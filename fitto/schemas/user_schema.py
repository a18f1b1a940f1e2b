from marshmallow import Schema, fields, validate, validates_schema, ValidationError
from fitto.schemas.fields import StrictFloat, StrictInteger
from fitto.utils.enums import Gender, ActivityLevel, Goal

POSITIVE = validate.Range(min=0, min_inclusive=False)


class RegisterSchema(Schema):
    username = fields.Str(required=True, validate=validate.Length(min=3, max=80))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6))


class LoginSchema(Schema):
    username = fields.Str(load_default=None)
    email = fields.Str(load_default=None)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=1))

    @validates_schema
    def validate_identity(self, data, **kwargs):
        if not data.get("username") and not data.get("email"):
            raise ValidationError("username or email is required", field_name="username")


class SetupSchema(Schema):
    age = StrictInteger(required=True, validate=validate.Range(min=1, max=120))
    height = StrictFloat(required=True, validate=POSITIVE)
    weight = StrictFloat(required=True, validate=POSITIVE)
    gender = fields.Str(required=True, validate=validate.OneOf([e.value for e in Gender]))
    activity_level = fields.Str(
        required=True, data_key="activityLevel",
        validate=validate.OneOf([e.value for e in ActivityLevel])
    )
    goal = fields.Str(required=True, validate=validate.OneOf([e.value for e in Goal]))
    rate = StrictFloat(allow_none=True, load_default=None, validate=validate.Range(min=0, max=100, min_inclusive=False))

    @validates_schema
    def validate_rate_for_goal(self, data, **kwargs):
        if data.get("goal") != Goal.MAINTAIN.value and data.get("rate") is None:
            raise ValidationError("rate is required unless goal is maintain", field_name="rate")


class WeightEntrySchema(Schema):
    weight = StrictFloat(required=True, validate=POSITIVE)
    date = fields.DateTime(load_default=None, allow_none=True)


class TargetWeightSchema(Schema):
    target_weight = StrictFloat(required=True, data_key="targetWeight", validate=POSITIVE)
