from flask import Blueprint

from store_admin.core.dependencies import get_service
from store_admin.routes.schemas import CategorySchema
from store_admin.routes.utils import load_json_body, success_response
from store_admin.schemas.category_schemas import CategoryResponse
from store_admin.services.category_service import CategoryService

categories_bp = Blueprint("categories", __name__)

_category_schema = CategorySchema()


def _serialize(category) -> CategoryResponse:
    return CategoryResponse.model_validate(category)


@categories_bp.route("/<int:store_id>/categories", methods=["GET"])
def list_categories(store_id: int):
    """All categories of a store."""
    categories = get_service(CategoryService).list_by_store(store_id)
    return success_response([_serialize(c) for c in categories])


@categories_bp.route("/<int:store_id>/categories/<int:category_id>", methods=["GET"])
def get_category(store_id: int, category_id: int):
    category = get_service(CategoryService).get_by_id(category_id, store_id)
    return success_response(_serialize(category))


@categories_bp.route("/<int:store_id>/categories", methods=["POST"])
def create_category(store_id: int):
    """Create a category in the store from a validated JSON body."""
    dto = load_json_body(_category_schema)
    category = get_service(CategoryService).create(store_id, dto)
    return success_response(_serialize(category), "Category created.", 201)


@categories_bp.route("/<int:store_id>/categories/<int:category_id>", methods=["PUT"])
def update_category(store_id: int, category_id: int):
    """Full overwrite: fields missing from the body fall back to their defaults."""
    dto = load_json_body(_category_schema)
    category = get_service(CategoryService).update(category_id, dto, store_id)
    return success_response(_serialize(category), "Category updated.")


@categories_bp.route("/<int:store_id>/categories/<int:category_id>", methods=["DELETE"])
def delete_category(store_id: int, category_id: int):
    category = get_service(CategoryService).delete(category_id, store_id)
    return success_response(_serialize(category), "Category deleted.")
