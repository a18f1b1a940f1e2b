from marshmallow import Schema, fields, validate
from fitto.schemas.fields import StrictFloat
from fitto.utils.enums import MealType

NON_NEGATIVE = validate.Range(min=0)


class CreateFoodLogSchema(Schema):
    meal = fields.Str(required=True, validate=validate.OneOf([e.value for e in MealType]))
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    calories = StrictFloat(required=True, validate=NON_NEGATIVE)
    carbs = StrictFloat(load_default=0, validate=NON_NEGATIVE)
    protein = StrictFloat(load_default=0, validate=NON_NEGATIVE)
    fat = StrictFloat(load_default=0, validate=NON_NEGATIVE)
