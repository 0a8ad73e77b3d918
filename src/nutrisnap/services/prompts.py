"""Prompt templates for meal, digestion and correlation analysis."""

import json

FOOD_CATEGORIES: dict[str, object] = {
    "fruits": [],
    "vegetables": [],
    "grains": [],
    "proteins": {
        "meats": [],
        "poultry": [],
        "fish and seafood": [],
        "eggs": [],
        "legumes": [],
        "nuts and seeds": [],
    },
    "dairy and non-dairy alternatives": {
        "milk": [],
        "cheese": [],
        "yogurt": [],
        "plant-based milks": [],
    },
    "fats and oils": [],
    "herbs and spices": [],
    "sweeteners": [],
    "beverages": [],
    "condiments and sauces": [],
    "baking and cooking ingredients": [],
    "snacks and sweets": [],
    "prepared and processed foods": [],
    "whole meals": [],
}

MEAL_OUTPUT_TEMPLATE: dict[str, object] = {
    "image_recognition": {"name": ""},
    "ingredient_extraction": [],
    "ingredient_categorization": {},
    "nutritional_information": {
        "calories": 0,
        "macronutrients": {"carbohydrates": 0, "proteins": 0, "fats": 0},
        "micronutrients": {
            "vitamins": {"vitaminC": 0, "vitaminA": 0},
            "minerals": {"potassium": 0, "magnesium": 0},
        },
    },
    "caloric_breakdown": {"carbohydrates": 0, "proteins": 0, "fats": 0},
    "description": "",
}

DIGESTION_OUTPUT_TEMPLATE: dict[str, object] = {
    "analysis": {
        "color": "",
        "consistency": "",
        "shape": "",
        "size": "",
        "presence_of_blood": False,
        "presence_of_mucus": False,
        "bristol_stool_scale": 0,
    },
    "concerns": [],
    "recommendations": [],
    "summary": "",
}

CORRELATION_OUTPUT_TEMPLATE: dict[str, object] = {
    "waterAndDigestion": ["Correlation between water intake and digestion patterns"],
    "dietAndDigestion": ["Correlation between dietary patterns and digestion"],
}

_JSON_ONLY = (
    "Respond ONLY with a JSON object inside a single ```json fenced code block "
    "that matches exactly the following template, without any additional text "
    "or explanations:\n"
)


def _template(value: dict[str, object]) -> str:
    return json.dumps(value, indent=2)


def meal_image_prompt() -> str:
    """Instructions for recognising a dish and estimating its nutrition."""
    return (
        "You are the food analysis engine of a nutrition tracking app. "
        "For the attached photo:\n"
        "1. Image recognition: identify the dish shown.\n"
        "2. Ingredient extraction: list the individual ingredients that make up "
        "the dish.\n"
        "3. Ingredient categorization: sort the ingredients into standard food "
        "categories such as:\n"
        f"{_template(FOOD_CATEGORIES)}\n"
        "4. Nutritional information: give numbers only. Grams for "
        "macronutrients, milligrams for micronutrients and an absolute number "
        "for calories. Never use ranges, text or approximations; estimate a "
        "single value instead.\n"
        "5. Caloric breakdown: give the calories contributed by carbohydrates, "
        "proteins and fats as single numbers.\n"
        "6. Description: a short description of the dish based on its "
        "ingredients.\n"
        f"{_JSON_ONLY}{_template(MEAL_OUTPUT_TEMPLATE)}\n"
        "All nutritional values must be JSON numbers, not strings."
    )


def digestion_image_prompt() -> str:
    """Instructions for classifying a stool photo."""
    return (
        "You are a medical assistant specialising in gastroenterology. "
        "Analyse the attached photo of a bowel movement:\n"
        "1. Visual assessment: color, consistency, shape and size.\n"
        "2. Clinical indicators: presence of blood, mucus or abnormal "
        "coloration.\n"
        "3. Bristol Stool Form Scale: classify the stool as type 1 to 7.\n"
        "4. Concerns: list potential health concerns visible in the photo.\n"
        "5. Recommendations: give relevant recommendations if concerns were "
        "found.\n"
        f"{_JSON_ONLY}{_template(DIGESTION_OUTPUT_TEMPLATE)}"
    )


def digestion_data_prompt(
    *,
    bristol_scale: str | None,
    color: str | None,
    consistency: str | None,
    shape: str | None,
    size: str | None,
    has_blood: bool,
    has_mucus: bool,
) -> str:
    """Instructions for assessing manually entered stool characteristics."""
    return (
        "You are a medical assistant specialising in gastroenterology. "
        "Assess the following stool characteristics reported by a user:\n"
        f"Bristol Scale: Type {bristol_scale}\n"
        f"Color: {color}\n"
        f"Consistency: {consistency}\n"
        f"Shape: {shape}\n"
        f"Size: {size}\n"
        f"Presence of Blood: {str(has_blood).lower()}\n"
        f"Presence of Mucus: {str(has_mucus).lower()}\n\n"
        "1. Clinical assessment: evaluate the characteristics for possible "
        "health implications.\n"
        "2. Concerns: list potential health concerns.\n"
        "3. Recommendations: give actionable recommendations.\n"
        f"{_JSON_ONLY}{_template(DIGESTION_OUTPUT_TEMPLATE)}\n"
        "Keep the tone clinical and professional."
    )


def correlation_prompt(analysis_data: dict[str, object]) -> str:
    """Instructions for relating a week of water, meal and digestion data."""
    return (
        "You are a medical expert in gastroenterology and nutrition. Analyse "
        "the following week of health data and identify meaningful "
        "correlations:\n\n"
        f"{json.dumps(analysis_data, indent=2)}\n\n"
        "1. Water intake and digestion: how hydration patterns relate to the "
        "timing and quality of digestion.\n"
        "2. Diet and digestion: how meal timing and composition relate to "
        "digestion, including foods associated with better or worse outcomes "
        "and consistent delays between meals and bowel movements.\n\n"
        f"{_JSON_ONLY}{_template(CORRELATION_OUTPUT_TEMPLATE)}\n"
        "Each array must contain 3-5 specific observations. When the data is "
        "insufficient or correlations are weak, say so instead."
    )
