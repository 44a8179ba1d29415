# Utility modules for NutriPlan
from .image_handler import prepare_food_photo, ImageValidationError
from .sanitizer import (
    sanitize_text, sanitize_name, sanitize_string_list,
    sanitize_unit, sanitize_url
)
