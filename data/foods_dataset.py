"""Seed catalog of Indian foods and recipes with Ayurvedic attributes.

Nutrition is per 100 g (one serving); sugar in grams, sodium in mg.
Recipe ingredients reference foods by name.
"""


def _impact(vata, pitta, kapha):
    return {"vata": vata, "pitta": pitta, "kapha": kapha}


D, I, N = "decreases", "increases", "neutral"

FOODS_DATA = [
    # Grains
    {"name": "Basmati Rice", "category": "grains", "calories": 130, "protein": 2.7, "carbs": 28, "fat": 0.3, "fiber": 0.4, "sugar": 0.1, "sodium": 1,
     "rasa": "sweet", "virya": "cooling", "guna": ["light", "soft"], "dosha_impact": _impact(D, D, I), "season": ["all"], "region": ["north", "south"]},
    {"name": "Whole Wheat Chapati", "category": "grains", "calories": 264, "protein": 9.6, "carbs": 52, "fat": 3.7, "fiber": 9.7, "sugar": 1.6, "sodium": 409,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, D, I), "season": ["all"], "allergens": ["gluten"], "region": ["north"]},
    {"name": "Rolled Oats", "category": "grains", "calories": 389, "protein": 16.9, "carbs": 66, "fat": 6.9, "fiber": 10.6, "sugar": 1, "sodium": 2,
     "rasa": "sweet", "virya": "heating", "guna": ["heavy", "soft"], "dosha_impact": _impact(D, D, I), "season": ["winter", "autumn"]},
    {"name": "Barley", "category": "grains", "calories": 123, "protein": 2.3, "carbs": 28, "fat": 0.4, "fiber": 3.8, "sugar": 0.3, "sodium": 3,
     "rasa": "sweet", "virya": "cooling", "guna": ["light", "dry"], "dosha_impact": _impact(I, D, D), "season": ["spring", "summer"], "allergens": ["gluten"]},
    {"name": "Millet (Bajra)", "category": "grains", "calories": 119, "protein": 3.5, "carbs": 23.7, "fat": 1, "fiber": 1.3, "sugar": 0.1, "sodium": 2,
     "rasa": "sweet", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(I, I, D), "season": ["winter"], "region": ["west"]},
    # Pulses
    {"name": "Moong Dal", "category": "pulses", "calories": 105, "protein": 7, "carbs": 19, "fat": 0.4, "fiber": 7.6, "sugar": 2, "sodium": 2,
     "rasa": "sweet", "virya": "cooling", "guna": ["light", "dry"], "dosha_impact": _impact(N, D, D), "season": ["all"]},
    {"name": "Toor Dal", "category": "pulses", "calories": 118, "protein": 6.8, "carbs": 21, "fat": 0.4, "fiber": 5, "sugar": 1.3, "sodium": 5,
     "rasa": "astringent", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(I, N, D), "season": ["all"], "region": ["south", "west"]},
    {"name": "Chickpeas", "category": "pulses", "calories": 164, "protein": 8.9, "carbs": 27, "fat": 2.6, "fiber": 7.6, "sugar": 4.8, "sodium": 7,
     "rasa": "astringent", "virya": "cooling", "guna": ["heavy", "dry"], "dosha_impact": _impact(I, D, D), "season": ["summer", "autumn"]},
    {"name": "Masoor Dal", "category": "pulses", "calories": 116, "protein": 9, "carbs": 20, "fat": 0.4, "fiber": 7.9, "sugar": 1.8, "sodium": 2,
     "rasa": "astringent", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(I, N, D), "season": ["winter", "spring"]},
    # Vegetables
    {"name": "Bottle Gourd", "category": "vegetables", "calories": 15, "protein": 0.6, "carbs": 3.4, "fat": 0, "fiber": 0.5, "sugar": 2, "sodium": 2,
     "rasa": "sweet", "virya": "cooling", "guna": ["light", "liquid"], "dosha_impact": _impact(N, D, D), "season": ["summer"]},
    {"name": "Spinach", "category": "vegetables", "calories": 23, "protein": 2.9, "carbs": 3.6, "fat": 0.4, "fiber": 2.2, "sugar": 0.4, "sodium": 79,
     "rasa": "astringent", "virya": "cooling", "guna": ["light", "dry"], "dosha_impact": _impact(I, N, D), "season": ["winter", "spring"]},
    {"name": "Carrot", "category": "vegetables", "calories": 41, "protein": 0.9, "carbs": 9.6, "fat": 0.2, "fiber": 2.8, "sugar": 4.7, "sodium": 69,
     "rasa": "sweet", "virya": "heating", "guna": ["heavy", "smooth"], "dosha_impact": _impact(D, N, D), "season": ["winter"]},
    {"name": "Sweet Potato", "category": "vegetables", "calories": 86, "protein": 1.6, "carbs": 20, "fat": 0.1, "fiber": 3, "sugar": 4.2, "sodium": 55,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "soft"], "dosha_impact": _impact(D, D, I), "season": ["autumn", "winter"]},
    {"name": "Okra", "category": "vegetables", "calories": 33, "protein": 1.9, "carbs": 7.5, "fat": 0.2, "fiber": 3.2, "sugar": 1.5, "sodium": 7,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "smooth"], "dosha_impact": _impact(D, D, I), "season": ["summer", "monsoon"]},
    {"name": "Bitter Gourd", "category": "vegetables", "calories": 17, "protein": 1, "carbs": 3.7, "fat": 0.2, "fiber": 2.8, "sugar": 0, "sodium": 5,
     "rasa": "bitter", "virya": "cooling", "guna": ["light", "dry"], "dosha_impact": _impact(I, D, D), "season": ["summer", "monsoon"]},
    # Fruits
    {"name": "Banana", "category": "fruits", "calories": 89, "protein": 1.1, "carbs": 23, "fat": 0.3, "fiber": 2.6, "sugar": 12.2, "sodium": 1,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "smooth"], "dosha_impact": _impact(D, N, I), "season": ["all"]},
    {"name": "Apple", "category": "fruits", "calories": 52, "protein": 0.3, "carbs": 14, "fat": 0.2, "fiber": 2.4, "sugar": 10.4, "sodium": 1,
     "rasa": "astringent", "virya": "cooling", "guna": ["light", "dry"], "dosha_impact": _impact(I, D, D), "season": ["autumn", "winter"]},
    {"name": "Pomegranate", "category": "fruits", "calories": 83, "protein": 1.7, "carbs": 19, "fat": 1.2, "fiber": 4, "sugar": 13.7, "sodium": 3,
     "rasa": "astringent", "virya": "cooling", "guna": ["light", "smooth"], "dosha_impact": _impact(N, D, D), "season": ["all"]},
    {"name": "Papaya", "category": "fruits", "calories": 43, "protein": 0.5, "carbs": 11, "fat": 0.3, "fiber": 1.7, "sugar": 7.8, "sodium": 8,
     "rasa": "sweet", "virya": "heating", "guna": ["heavy", "smooth"], "dosha_impact": _impact(D, I, D), "season": ["all"]},
    # Dairy
    {"name": "Cow Ghee", "category": "dairy", "calories": 900, "protein": 0, "carbs": 0, "fat": 100, "fiber": 0, "sugar": 0, "sodium": 2,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "oily", "smooth"], "dosha_impact": _impact(D, D, I), "season": ["all"], "allergens": ["dairy"]},
    {"name": "Buttermilk (Takra)", "category": "beverages", "calories": 40, "protein": 3.3, "carbs": 4.8, "fat": 0.9, "fiber": 0, "sugar": 4.8, "sodium": 105,
     "rasa": "sour", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(D, N, D), "season": ["summer"], "allergens": ["dairy"]},
    {"name": "Paneer", "category": "dairy", "calories": 265, "protein": 18, "carbs": 1.2, "fat": 20.8, "fiber": 0, "sugar": 1.2, "sodium": 18,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, D, I), "season": ["all"], "allergens": ["dairy"]},
    # Nuts and seeds
    {"name": "Soaked Almonds", "category": "nuts_seeds", "calories": 579, "protein": 21, "carbs": 22, "fat": 50, "fiber": 12.5, "sugar": 4.4, "sodium": 1,
     "rasa": "sweet", "virya": "heating", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, N, I), "season": ["all"], "allergens": ["tree_nuts"]},
    {"name": "Peanut Chutney", "category": "snacks", "calories": 180, "protein": 25, "carbs": 12, "fat": 14, "fiber": 6, "sugar": 2, "sodium": 210,
     "rasa": "sweet", "virya": "heating", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, I, I), "season": ["all"], "allergens": ["peanuts"], "region": ["south"]},
    {"name": "Roasted Pumpkin Seeds", "category": "nuts_seeds", "calories": 446, "protein": 19, "carbs": 54, "fat": 19, "fiber": 18, "sugar": 1, "sodium": 18,
     "rasa": "sweet", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(N, N, D), "season": ["all"]},
    # Spices and beverages
    {"name": "Ginger Tea", "category": "beverages", "calories": 8, "protein": 0.2, "carbs": 1.8, "fat": 0, "fiber": 0.2, "sugar": 0, "sodium": 1,
     "rasa": "pungent", "virya": "heating", "guna": ["light", "sharp"], "dosha_impact": _impact(D, I, D), "season": ["winter", "monsoon"]},
    {"name": "Coconut Water", "category": "beverages", "calories": 19, "protein": 0.7, "carbs": 3.7, "fat": 0.2, "fiber": 1.1, "sugar": 2.6, "sodium": 105,
     "rasa": "sweet", "virya": "cooling", "guna": ["light", "liquid"], "dosha_impact": _impact(N, D, N), "season": ["summer"]},
    {"name": "Turmeric", "category": "spices", "calories": 312, "protein": 9.7, "carbs": 67, "fat": 3.3, "fiber": 22.7, "sugar": 3.2, "sodium": 27,
     "rasa": "bitter", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(N, N, D), "season": ["all"]},
    # Prepared dishes
    {"name": "Poha", "category": "breakfast", "calories": 180, "protein": 3.5, "carbs": 35, "fat": 3, "fiber": 1.5, "sugar": 1, "sodium": 240,
     "rasa": "sweet", "virya": "neutral", "guna": ["light", "dry"], "dosha_impact": _impact(N, D, D), "season": ["all"], "region": ["west"]},
    {"name": "Vegetable Upma", "category": "breakfast", "calories": 190, "protein": 4.8, "carbs": 30, "fat": 6, "fiber": 2.5, "sugar": 2, "sodium": 320,
     "rasa": "sweet", "virya": "heating", "guna": ["light", "soft"], "dosha_impact": _impact(D, N, N), "season": ["all"], "allergens": ["gluten"], "region": ["south"]},
    {"name": "Moong Dal Khichdi", "category": "main_course", "calories": 150, "protein": 6, "carbs": 26, "fat": 2.5, "fiber": 3, "sugar": 1, "sodium": 180,
     "rasa": "sweet", "virya": "neutral", "guna": ["light", "soft"], "dosha_impact": _impact(D, D, D), "season": ["all"]},
    {"name": "Vegetable Soup", "category": "light", "calories": 45, "protein": 2, "carbs": 8, "fat": 0.8, "fiber": 2, "sugar": 2.5, "sodium": 350,
     "rasa": "salty", "virya": "heating", "guna": ["light", "liquid"], "dosha_impact": _impact(D, N, D), "season": ["winter", "monsoon"]},
    {"name": "Gulab Jamun", "category": "sweets", "calories": 375, "protein": 5, "carbs": 50, "fat": 18, "fiber": 0.5, "sugar": 38, "sodium": 90,
     "rasa": "sweet", "virya": "cooling", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, D, I), "season": ["all"], "allergens": ["dairy", "gluten"]},
    {"name": "Masala Papad", "category": "snacks", "calories": 371, "protein": 25, "carbs": 60, "fat": 3, "fiber": 19, "sugar": 1, "sodium": 1740,
     "rasa": "salty", "virya": "heating", "guna": ["light", "dry"], "dosha_impact": _impact(I, I, D), "season": ["all"]},
    # Non-vegetarian
    {"name": "Chicken Curry", "category": "meat", "calories": 190, "protein": 20, "carbs": 5, "fat": 10, "fiber": 1, "sugar": 2, "sodium": 420,
     "rasa": "pungent", "virya": "heating", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, I, I), "season": ["winter"]},
    {"name": "Fish Curry", "category": "fish", "calories": 160, "protein": 22, "carbs": 4, "fat": 6, "fiber": 0.5, "sugar": 1, "sodium": 380,
     "rasa": "salty", "virya": "heating", "guna": ["heavy", "oily"], "dosha_impact": _impact(D, I, I), "season": ["all"], "allergens": ["fish"], "region": ["east", "south"]},
    {"name": "Boiled Egg", "category": "eggs", "calories": 155, "protein": 13, "carbs": 1.1, "fat": 11, "fiber": 0, "sugar": 1.1, "sodium": 124,
     "rasa": "sweet", "virya": "heating", "guna": ["heavy", "smooth"], "dosha_impact": _impact(D, I, I), "season": ["all"], "allergens": ["eggs"]},
]

RECIPES_DATA = [
    {"name": "Moong Dal Khichdi", "meal_type": "lunch", "dosha_suitability": {"vata": True, "pitta": True, "kapha": True},
     "season": ["all"], "cook_time_minutes": 30, "ingredients": ["Basmati Rice", "Moong Dal", "Cow Ghee", "Turmeric"],
     "instructions": "Wash rice and dal, cook with turmeric and water until soft, finish with ghee.",
     "ayurveda_benefit": "Tridoshic, easy to digest and nourishing."},
    {"name": "Vegetable Poha", "meal_type": "breakfast", "dosha_suitability": {"vata": True, "pitta": True, "kapha": True},
     "season": ["all"], "cook_time_minutes": 15, "ingredients": ["Poha", "Carrot", "Turmeric"],
     "instructions": "Rinse poha, temper spices, add vegetables and poha, steam briefly.",
     "ayurveda_benefit": "Light breakfast that does not burden digestion."},
    {"name": "Oats Porridge", "meal_type": "breakfast", "dosha_suitability": {"vata": True, "pitta": True, "kapha": False},
     "season": ["winter", "autumn"], "cook_time_minutes": 10, "ingredients": ["Rolled Oats", "Banana", "Soaked Almonds"],
     "instructions": "Simmer oats in water, top with sliced banana and almonds.",
     "ayurveda_benefit": "Warm and grounding for vata.", "allergens": ["tree_nuts"]},
    {"name": "Lauki Sabzi with Chapati", "meal_type": "dinner", "dosha_suitability": {"vata": True, "pitta": True, "kapha": True},
     "season": ["summer"], "cook_time_minutes": 25, "ingredients": ["Bottle Gourd", "Whole Wheat Chapati", "Cow Ghee"],
     "instructions": "Cook diced bottle gourd with cumin and ghee, serve with chapati.",
     "ayurveda_benefit": "Cooling and light; calms pitta.", "allergens": ["gluten"]},
    {"name": "Palak Dal", "meal_type": "lunch", "dosha_suitability": {"vata": False, "pitta": True, "kapha": True},
     "season": ["winter", "spring"], "cook_time_minutes": 30, "ingredients": ["Toor Dal", "Spinach", "Turmeric"],
     "instructions": "Pressure cook dal, add chopped spinach and temper with spices.",
     "ayurveda_benefit": "Iron-rich, light and kapha-reducing."},
    {"name": "Clear Vegetable Soup", "meal_type": "dinner", "dosha_suitability": {"vata": True, "pitta": True, "kapha": True},
     "season": ["winter", "monsoon"], "cook_time_minutes": 20, "ingredients": ["Vegetable Soup", "Carrot", "Spinach"],
     "instructions": "Simmer vegetables with ginger and pepper, season lightly.",
     "ayurveda_benefit": "Warm and light evening meal."},
    {"name": "Fruit Bowl", "meal_type": "snack", "dosha_suitability": {"vata": True, "pitta": True, "kapha": True},
     "season": ["all"], "cook_time_minutes": 5, "ingredients": ["Apple", "Pomegranate", "Papaya"],
     "instructions": "Dice fruits and serve fresh.", "ayurveda_benefit": "Hydrating snack between meals."},
    {"name": "Peanut Chutney with Upma", "meal_type": "breakfast", "dosha_suitability": {"vata": True, "pitta": False, "kapha": False},
     "season": ["all"], "cook_time_minutes": 20, "ingredients": ["Vegetable Upma", "Peanut Chutney"],
     "instructions": "Serve hot upma with freshly ground peanut chutney.",
     "ayurveda_benefit": "Grounding breakfast for vata.", "allergens": ["peanuts", "gluten"]},
]
