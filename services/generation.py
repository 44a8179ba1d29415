"""
Generation Client

Talks to an OpenAI-compatible chat completions endpoint to generate meal
plans and to estimate nutrition from food photos. Responses are parsed
into dicts but not validated here; see services.sanitize.

Every failure is raised as GenerationError. Nothing is retried.
"""

import base64
import json
import logging
import re

import requests

from constants import GROCERY_CATEGORIES
from .errors import GenerationError

logger = logging.getLogger(__name__)

MEAL_PLAN_SYSTEM_PROMPT = """You are a professional nutritionist and chef. Generate detailed, practical meal plans with accurate nutritional information.

Always respond with valid JSON matching the exact schema provided. Be precise with measurements and nutritional values.
Consider the user's dietary restrictions, allergies, and preferences carefully.
Make recipes realistic and achievable for home cooks."""

FOOD_PHOTO_SYSTEM_PROMPT = """You are a nutrition expert. Analyze food photos and estimate nutritional content.
Always respond with valid JSON. Be conservative with estimates and indicate confidence level."""

FOOD_PHOTO_PROMPT = """Analyze this food photo and provide nutritional estimates. Return JSON:
{
  "foodName": "Name of the dish/food",
  "description": "Brief description of what you see",
  "estimatedCalories": 500,
  "estimatedProtein": 30,
  "estimatedCarbs": 50,
  "estimatedFat": 20,
  "confidence": "low|medium|high",
  "suggestions": ["Any health tips or observations"]
}"""


def build_meal_plan_prompt(request):
    """User prompt for a MealPlanRequest."""
    if request.allergies:
        allergies_text = f"ALLERGIES (MUST AVOID): {', '.join(request.allergies)}"
    else:
        allergies_text = 'No allergies'

    dietary_lines = [f"- Diet type: {request.diet_type}", f"- {allergies_text}"]
    if request.disliked_foods:
        dietary_lines.append(f"- Foods to avoid: {', '.join(request.disliked_foods)}")
    if request.favorite_cuisines:
        dietary_lines.append(f"- Preferred cuisines: {', '.join(request.favorite_cuisines)}")
    else:
        dietary_lines.append('- Any cuisine')

    if request.meals_per_day == 4:
        slots = 'breakfast, lunch, dinner, snack'
    else:
        slots = 'breakfast, lunch, dinner'
    dietary = '\n'.join(dietary_lines)
    categories = ', '.join(GROCERY_CATEGORIES)

    return f"""Generate a {request.number_of_days}-day meal plan with the following requirements:

## NUTRITION TARGETS (per day)
- Calories: {request.daily_calories} kcal
- Protein: {request.daily_protein}g
- Carbs: {request.daily_carbs}g
- Fat: {request.daily_fat}g

## DIETARY REQUIREMENTS
{dietary}

## PREFERENCES
- Cooking skill: {request.cooking_skill}
- Max prep + cook time: {request.max_prep_time} minutes
- Budget: {request.budget_level}
- Servings per meal: {request.servings_per_meal}
- Meals per day: {request.meals_per_day} ({slots})

## OUTPUT FORMAT
Return a JSON object with this exact structure:
{{
  "name": "Meal Plan Name",
  "description": "Brief description of the meal plan",
  "days": [
    {{
      "day": 1,
      "date": "Day 1",
      "meals": [
        {{
          "name": "Meal name",
          "description": "Brief description",
          "mealType": "breakfast|lunch|dinner|snack",
          "prepTime": 10,
          "cookTime": 15,
          "servings": {request.servings_per_meal},
          "difficulty": "easy|medium|hard",
          "calories": 400,
          "protein": 25,
          "carbs": 40,
          "fat": 15,
          "fiber": 5,
          "ingredients": [
            {{"name": "ingredient", "amount": 100, "unit": "g"}}
          ],
          "instructions": ["Step 1", "Step 2"],
          "cuisine": "Italian",
          "tags": ["high-protein", "quick"],
          "estimatedCost": 5.50
        }}
      ],
      "totalCalories": 2000,
      "totalProtein": 150,
      "totalCarbs": 200,
      "totalFat": 70
    }}
  ],
  "shoppingList": [
    {{
      "category": "Produce",
      "items": [
        {{"name": "Spinach", "amount": 200, "unit": "g", "estimatedCost": 3.00}}
      ]
    }}
  ],
  "totalEstimatedCost": 75.00
}}

IMPORTANT:
- Ensure daily totals are close to the nutrition targets (within 10%)
- Combine shopping list items across all days (aggregate quantities)
- Shopping list categories: {categories}
- Use practical measurements (cups, tbsp, pieces, grams)
- Prices should be in USD
- Make recipes varied and interesting
- Consider meal prep efficiency (ingredients used across multiple meals)"""


def _image_bytes_to_data_url(img_bytes, mime='image/jpeg'):
    b64 = base64.b64encode(img_bytes).decode('utf-8')
    return f"data:{mime};base64,{b64}"


def _extract_output_text(resp_json):
    # Chat Completions structure: choices[0].message.content
    choices = resp_json.get('choices') if isinstance(resp_json, dict) else None
    if choices and isinstance(choices, list) and isinstance(choices[0], dict):
        content = (choices[0].get('message') or {}).get('content')
        if isinstance(content, str):
            return content.strip()
    return ''


def _json_from_text(text):
    """
    Parse a JSON object from model output, tolerating code fences and
    surrounding prose.
    """
    text = text.strip()

    # Remove markdown code blocks if present
    if text.startswith('```'):
        text = re.sub(r'^```(?:json)?\s*|```\s*$', '', text, flags=re.MULTILINE).strip()

    try:
        return json.loads(text)
    except ValueError:
        pass

    # Extract first {...} block
    m = re.search(r'\{.*\}', text, flags=re.DOTALL)
    if not m:
        raise ValueError('No JSON object found in model output')
    return json.loads(m.group(0))


class GenerationClient:
    """Client for the external meal plan and food photo generator."""

    def __init__(self, api_key, base_url='https://api.openai.com/v1', model='gpt-4o',
                 timeout=120, max_tokens=16000, temperature=0.7, vision_max_tokens=1000):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.vision_max_tokens = vision_max_tokens

    @classmethod
    def from_config(cls, config):
        """Build a client from a Flask config mapping."""
        return cls(
            api_key=config.get('OPENAI_API_KEY', ''),
            base_url=config.get('OPENAI_BASE_URL', 'https://api.openai.com/v1'),
            model=config.get('OPENAI_MODEL', 'gpt-4o'),
            timeout=config.get('GENERATION_TIMEOUT', 120),
            max_tokens=config.get('GENERATION_MAX_TOKENS', 16000),
            temperature=config.get('GENERATION_TEMPERATURE', 0.7),
            vision_max_tokens=config.get('VISION_MAX_TOKENS', 1000),
        )

    def _headers(self):
        return {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }

    def _chat(self, messages, max_tokens, temperature=None):
        """POST a chat completion and return the parsed JSON object from its content."""
        if not self.api_key:
            raise GenerationError('Generation service is not configured')

        payload = {
            'model': self.model,
            'messages': messages,
            'response_format': {'type': 'json_object'},
            'max_tokens': max_tokens,
        }
        if temperature is not None:
            payload['temperature'] = temperature

        try:
            r = requests.post(f"{self.base_url}/chat/completions", headers=self._headers(),
                              json=payload, timeout=self.timeout)
        except requests.Timeout:
            logger.error("Generation request timed out after %ss", self.timeout)
            raise GenerationError('Generation service timed out') from None
        except requests.RequestException as e:
            logger.error("Generation request failed: %s", e)
            raise GenerationError('Could not reach generation service') from None

        if not r.ok:
            logger.error("Generation service returned %s: %s", r.status_code, r.text[:500])
            raise GenerationError(f"Generation service returned status {r.status_code}")

        try:
            resp_json = r.json()
        except ValueError:
            logger.error("Generation service returned a non-JSON body")
            raise GenerationError('Generation service returned an invalid response') from None

        text = _extract_output_text(resp_json)
        if not text:
            logger.error("Generation service returned an empty response")
            raise GenerationError('No response from generation service')

        try:
            result = _json_from_text(text)
        except ValueError:
            logger.error("Could not parse generation output: %.200s", text)
            raise GenerationError('Generation service returned unparseable content') from None

        if not isinstance(result, dict):
            logger.error("Generation output is a %s, expected an object", type(result).__name__)
            raise GenerationError('Generation service returned unparseable content')
        return result

    def generate_meal_plan(self, request):
        """Generate a candidate meal plan (unvalidated dict) for a MealPlanRequest."""
        messages = [
            {'role': 'system', 'content': MEAL_PLAN_SYSTEM_PROMPT},
            {'role': 'user', 'content': build_meal_plan_prompt(request)},
        ]
        logger.debug("Requesting %s-day meal plan from %s", request.number_of_days, self.model)
        return self._chat(messages, self.max_tokens, temperature=self.temperature)

    def analyze_food_photo(self, image_bytes, mime='image/jpeg'):
        """Estimate nutrition for a food photo; returns the raw estimate dict."""
        messages = [
            {'role': 'system', 'content': FOOD_PHOTO_SYSTEM_PROMPT},
            {
                'role': 'user',
                'content': [
                    {'type': 'text', 'text': FOOD_PHOTO_PROMPT},
                    {'type': 'image_url', 'image_url': {'url': _image_bytes_to_data_url(image_bytes, mime)}},
                ],
            },
        ]
        return self._chat(messages, self.vision_max_tokens)


def get_generation_client():
    """Client configured from the current Flask app."""
    from flask import current_app
    return GenerationClient.from_config(current_app.config)
