from marshmallow import Schema, fields, validate
from fitto.schemas.fields import StrictFloat

POSITIVE = validate.Range(min=0, min_inclusive=False)


class CreateExerciseSchema(Schema):
    exercise_name = fields.Str(required=True, data_key="exerciseName", validate=validate.Length(min=1, max=150))
    duration = StrictFloat(required=True, validate=POSITIVE)
    calories_burned = StrictFloat(data_key="caloriesBurned", allow_none=True, load_default=None, validate=validate.Range(min=0))
    met = StrictFloat(data_key="MET", allow_none=True, load_default=None, validate=POSITIVE)
    date = fields.DateTime(load_default=None, allow_none=True)


class UpdateExerciseSchema(Schema):
    exercise_name = fields.Str(data_key="exerciseName", validate=validate.Length(min=1, max=150))
    duration = StrictFloat(validate=POSITIVE)
    calories_burned = StrictFloat(data_key="caloriesBurned", allow_none=True, validate=validate.Range(min=0))
    met = StrictFloat(data_key="MET", allow_none=True, validate=POSITIVE)
