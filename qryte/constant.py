"""Editable static menu, coupon, table and inventory seed data."""

from __future__ import annotations

COUPON_RATES: dict[str, str] = {
    "WELCOME10": "0.10",
    "SAVE10": "0.10",
    "SAVE15": "0.15",
}

ACTIVITY_KINDS: tuple[str, ...] = ("bill", "cleaning", "checkin", "checkout", "order", "system")

KITCHEN_NOTE_PRESETS: dict[str, str] = {
    "less_spicy": "Less Spicy",
    "more_spicy": "More Spicy",
    "no_onions": "No Onions",
    "no_garlic": "No Garlic",
    "extra_gravy": "Extra Gravy",
    "less_oil": "Less Oil",
    "jain": "Jain",
    "no_ice": "No Ice",
    "less_sugar": "Less Sugar",
    "well_done": "Well Done",
}

CATEGORY_NOTE_DEFAULTS: dict[str, list[str]] = {
    "Mains": ["less_spicy", "more_spicy", "no_onions", "no_garlic", "extra_gravy", "less_oil", "jain"],
    "Appetizers": ["less_spicy", "more_spicy", "no_onions", "less_oil", "well_done"],
    "Breads": ["no_garlic", "less_oil"],
    "Desserts": ["less_sugar"],
    "Beverages": ["no_ice", "less_sugar"],
}

# Canonical menu rows consumed by qryte.data (which wraps these into MenuItem instances).
MENU_ITEMS: list[dict[str, object]] = [
    {"id": 1, "name": "Biryani", "category": "Mains", "price": "250", "description": "Fragrant rice dish", "veg": False, "prep_time": 20},
    {"id": 2, "name": "Butter Chicken", "category": "Mains", "price": "320", "description": "Creamy chicken curry", "veg": False, "prep_time": 15},
    {"id": 3, "name": "Dal Makhani", "category": "Mains", "price": "180", "description": "Creamy lentil curry", "veg": True, "prep_time": 20},
    {"id": 4, "name": "Garlic Naan", "category": "Breads", "price": "60", "description": "Soft naan with garlic", "veg": True, "prep_time": 5},
    {"id": 5, "name": "Paneer Tikka", "category": "Appetizers", "price": "200", "description": "Grilled cottage cheese", "veg": True, "prep_time": 10},
    {"id": 6, "name": "Samosa", "category": "Appetizers", "price": "80", "description": "Crispy pastry with potato", "veg": True, "prep_time": 8},
    {"id": 7, "name": "Gulab Jamun", "category": "Desserts", "price": "100", "description": "Sweet milk solids", "veg": True, "prep_time": 12},
    {"id": 8, "name": "Mango Lassi", "category": "Beverages", "price": "120", "description": "Sweet yogurt drink", "veg": True, "prep_time": 3},
    {"id": 9, "name": "Chole Bhature", "category": "Mains", "price": "180", "description": "Chickpea curry with fried bread", "veg": True, "prep_time": 18},
    {"id": 10, "name": "Tandoori Chicken", "category": "Appetizers", "price": "280", "description": "Spiced grilled chicken", "veg": False, "prep_time": 25},
]

SEARCH_ALIASES_BY_ITEM: dict[int, list[str]] = {
    1: ["bir", "briyani"],
    2: ["bc", "murgh makhani"],
    3: ["dal", "dm"],
    4: ["naan", "gn"],
    5: ["pt", "tikka"],
    8: ["lassi"],
    9: ["chole", "cb"],
    10: ["tc", "tandoori"],
}

TABLES: list[dict[str, object]] = [
    {"id": 1, "number": 1, "capacity": 2, "status": "available"},
    {"id": 2, "number": 2, "capacity": 4, "status": "occupied"},
    {"id": 3, "number": 3, "capacity": 6, "status": "available"},
    {"id": 4, "number": 4, "capacity": 2, "status": "needs_cleaning"},
    {"id": 5, "number": 5, "capacity": 4, "status": "available"},
    {"id": 6, "number": 6, "capacity": 8, "status": "occupied"},
]

INVENTORY_ITEMS: list[dict[str, object]] = [
    {"id": "1", "name": "Basmati Rice", "category": "Grains", "quantity": "50", "unit": "kg", "min_threshold": "10", "unit_price": "80", "supplier": "Farm Fresh"},
    {"id": "2", "name": "Chicken (Fresh)", "category": "Proteins", "quantity": "25", "unit": "kg", "min_threshold": "5", "unit_price": "250", "supplier": "Local Supplier"},
    {"id": "3", "name": "Dal (Moong)", "category": "Grains", "quantity": "20", "unit": "kg", "min_threshold": "5", "unit_price": "120", "supplier": "Farm Fresh"},
    {"id": "4", "name": "Vegetable Oil", "category": "Oils", "quantity": "50", "unit": "liters", "min_threshold": "10", "unit_price": "150", "supplier": "Oil Co"},
    {"id": "5", "name": "Paneer", "category": "Dairy", "quantity": "10", "unit": "kg", "min_threshold": "2", "unit_price": "400", "supplier": "Dairy Fresh"},
    {"id": "6", "name": "Flour (Maida)", "category": "Grains", "quantity": "30", "unit": "kg", "min_threshold": "5", "unit_price": "50", "supplier": "Farm Fresh"},
    {"id": "7", "name": "Ghee", "category": "Oils", "quantity": "15", "unit": "liters", "min_threshold": "3", "unit_price": "500", "supplier": "Dairy Fresh"},
    {"id": "8", "name": "Ginger Garlic Paste", "category": "Condiments", "quantity": "5", "unit": "kg", "min_threshold": "1", "unit_price": "200", "supplier": "Local Supplier"},
]

# menu item id -> list of (inventory item id, quantity needed per portion)
RECIPES: dict[int, list[tuple[str, str]]] = {
    1: [("1", "0.15"), ("2", "0.1"), ("4", "0.05")],
    2: [("2", "0.2"), ("4", "0.04")],
    3: [("3", "0.15"), ("4", "0.03")],
}
