from marshmallow import RAISE, Schema, fields, post_load, pre_load, validate

from store_admin.schemas.category_schemas import CategoryDto

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CategorySchema(Schema):
    """Body of category create and full update requests."""

    class Meta:
        unknown = RAISE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    slug = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, max=100),
            validate.Regexp(SLUG_PATTERN, error="Slug may only contain lowercase letters, digits and single hyphens."),
        ],
    )
    description = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=1000))

    @pre_load
    def strip_strings(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        return {
            key: value.strip() if isinstance(value, str) else value
            for key, value in data.items()
        }

    @post_load
    def make_dto(self, data, **kwargs) -> CategoryDto:
        return CategoryDto(**data)
