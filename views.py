"""
JSON API

Thin HTTP layer over the service actions. Each view reads the request,
calls one action with the logged-in user's id and maps the ActionResult
onto a JSON response.
"""

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required, login_user, logout_user

import services
from services import ActionResult
from services.auth import current_user_id

api = Blueprint('api', __name__)

STATUS_BY_CODE = {
    'unauthenticated': 401,
    'invalid_input': 400,
    'not_found': 404,
    'profile_not_found': 409,
    'generation_error': 502,
}


def respond(result, status=200):
    """Serialize an ActionResult, choosing the HTTP status from its code."""
    if not result.success:
        status = STATUS_BY_CODE.get(result.code, 500)
    return jsonify(result.to_dict()), status


def allowed_file(filename):
    return '.' in filename and \
        filename.rsplit('.', 1)[1].lower() in current_app.config['ALLOWED_PHOTO_EXTENSIONS']


def _json_body():
    return request.get_json(silent=True) or {}


# ============================================
# AUTH
# ============================================

@api.route('/auth/register', methods=['POST'])
def register():
    data = _json_body()
    result = services.register_user(data.get('email'), data.get('password'), data.get('full_name'))
    if result.success:
        user = services.authenticate(data.get('email'), data.get('password'))
        login_user(user)
    return respond(result, 201)


@api.route('/auth/login', methods=['POST'])
def login():
    data = _json_body()
    user = services.authenticate(data.get('email'), data.get('password'))
    if user is None:
        return respond(ActionResult.fail('Invalid email or password', 'unauthenticated'))
    login_user(user, remember=bool(data.get('remember')))
    return respond(ActionResult.ok({'id': user.id, 'email': user.email}))


@api.route('/auth/logout', methods=['POST'])
def logout():
    logout_user()
    return respond(ActionResult.ok())


# ============================================
# PROFILE AND ONBOARDING
# ============================================

@api.route('/profile', methods=['GET'])
@login_required
def profile_detail():
    return respond(services.get_profile(current_user_id()))


@api.route('/profile', methods=['PATCH', 'PUT'])
@login_required
def profile_update():
    return respond(services.update_profile(current_user_id(), _json_body()))


@api.route('/profile/options', methods=['GET'])
def profile_options():
    return respond(ActionResult.ok(services.get_profile_options()))


@api.route('/onboarding', methods=['GET'])
@login_required
def onboarding_detail():
    return respond(services.get_onboarding_draft(current_user_id()))


@api.route('/onboarding/complete', methods=['POST'])
@login_required
def onboarding_complete():
    return respond(services.complete_onboarding(current_user_id(), _json_body()))


@api.route('/onboarding/steps/<step>', methods=['POST', 'PUT'])
@login_required
def onboarding_step(step):
    return respond(services.save_onboarding_step(current_user_id(), step, _json_body()))


# ============================================
# MEAL PLANS
# ============================================

@api.route('/meal-plans/generate', methods=['POST'])
@login_required
def meal_plan_generate():
    return respond(services.generate_and_save_meal_plan(current_user_id(), _json_body()), 201)


@api.route('/meal-plans', methods=['GET'])
@login_required
def meal_plan_list():
    return respond(services.get_meal_plans(current_user_id()))


@api.route('/meal-plans/active', methods=['GET'])
@login_required
def meal_plan_active():
    return respond(services.get_active_meal_plan(current_user_id()))


@api.route('/meal-plans/<int:plan_id>', methods=['GET'])
@login_required
def meal_plan_detail(plan_id):
    return respond(services.get_meal_plan_with_items(current_user_id(), plan_id))


@api.route('/meal-plan-items/<int:item_id>/toggle', methods=['POST'])
@login_required
def meal_item_toggle(item_id):
    return respond(services.toggle_meal_item_complete(current_user_id(), item_id))


# ============================================
# RECIPES
# ============================================

@api.route('/recipes', methods=['GET'])
@login_required
def recipe_list():
    return respond(services.get_recipes(current_user_id()))


@api.route('/recipes/<int:recipe_id>', methods=['GET'])
def recipe_detail(recipe_id):
    return respond(services.get_recipe(recipe_id))


# ============================================
# SHOPPING LISTS
# ============================================

@api.route('/shopping-lists/latest', methods=['GET'])
@login_required
def shopping_list_latest():
    return respond(services.get_latest_shopping_list(current_user_id()))


@api.route('/shopping-lists/<int:list_id>', methods=['GET'])
@login_required
def shopping_list_detail(list_id):
    return respond(services.get_shopping_list(current_user_id(), list_id))


@api.route('/shopping-list-items/<int:item_id>/toggle', methods=['POST'])
@login_required
def shopping_item_toggle(item_id):
    return respond(services.toggle_shopping_item_purchased(current_user_id(), item_id))


# ============================================
# WEIGHT AND PROGRESS
# ============================================

@api.route('/weight-logs', methods=['GET'])
@login_required
def weight_log_list():
    days = request.args.get('days', 30, type=int)
    return respond(services.get_weight_logs(current_user_id(), days=days))


@api.route('/weight-logs', methods=['POST'])
@login_required
def weight_log_create():
    data = _json_body()
    result = services.log_weight(current_user_id(), data.get('weight_kg'),
                                 notes=data.get('notes'), on_date=data.get('date'))
    return respond(result, 201)


@api.route('/weight-logs/<int:log_id>', methods=['DELETE'])
@login_required
def weight_log_delete(log_id):
    return respond(services.delete_weight_log(current_user_id(), log_id))


@api.route('/progress', methods=['GET'])
@login_required
def progress():
    days = request.args.get('days', 90, type=int)
    return respond(services.get_progress_stats(current_user_id(), days=days))


# ============================================
# FOOD LOGS
# ============================================

@api.route('/food-logs', methods=['GET'])
@login_required
def food_log_list():
    return respond(services.get_food_logs(current_user_id(), on_date=request.args.get('date')))


@api.route('/food-logs', methods=['POST'])
@login_required
def food_log_create():
    return respond(services.create_food_log(current_user_id(), _json_body()), 201)


@api.route('/food-logs/<int:log_id>', methods=['DELETE'])
@login_required
def food_log_delete(log_id):
    return respond(services.delete_food_log(current_user_id(), log_id))


@api.route('/food-logs/today', methods=['GET'])
@login_required
def food_log_today():
    return respond(services.get_today_stats(current_user_id()))


@api.route('/food-logs/analyze-photo', methods=['POST'])
@login_required
def food_log_analyze_photo():
    photo = request.files.get('photo')
    if photo is None or not photo.filename:
        return respond(ActionResult.fail('No photo uploaded', 'invalid_input'))
    if not allowed_file(photo.filename):
        return respond(ActionResult.fail('Unsupported file type', 'invalid_input'))
    return respond(services.analyze_food_photo(current_user_id(), photo))
