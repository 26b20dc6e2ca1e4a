"""Store sections and keyword-based ingredient classification."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class StoreSection(str, Enum):
    """Store aisle an ingredient is shopped from.

    Declaration order matters twice: it is the display order of the grocery
    list, and it is the tie-break order of :func:`classify` (an ingredient
    matching keywords of several sections lands in the earliest one).
    """

    PRODUCE = "Produce"
    MEAT_SEAFOOD = "Meat & Seafood"
    DAIRY_EGGS = "Dairy & Eggs"
    GRAINS_PASTA = "Grains & Pasta"
    CONDIMENTS_SAUCES = "Condiments & Sauces"
    PANTRY = "Pantry"
    SPICES_SEASONINGS = "Spices & Seasonings"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> StoreSection | None:
        """Look up a section by its display name, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


SECTION_ORDER: tuple[StoreSection, ...] = tuple(StoreSection)

# Keyword → section table. Read-only: classification must be reproducible.
SECTION_KEYWORDS: MappingProxyType[StoreSection, tuple[str, ...]] = MappingProxyType({
    StoreSection.PRODUCE: (
        "onion", "garlic", "ginger", "carrot", "celery", "lettuce", "tomato",
        "potato", "herb", "scallion", "green onion", "pepper", "chili",
        "mushroom", "vegetable", "cabbage", "spinach", "kale", "fruit", "lemon",
        "lime", "orange", "apple", "berry", "berries", "cucumber", "zucchini",
        "squash", "pumpkin", "eggplant", "cilantro", "parsley", "basil", "mint",
        "thyme", "rosemary", "sage", "banana", "avocado", "corn", "sprouts",
        "bean sprouts", "kimchi",
    ),
    StoreSection.MEAT_SEAFOOD: (
        "chicken", "beef", "pork", "lamb", "fish", "salmon", "shrimp",
        "seafood", "turkey", "meat", "steak", "ground", "bacon", "sausage",
        "ham", "tuna", "cod", "tilapia", "crab", "lobster", "duck", "veal",
        "guanciale", "pancetta", "prosciutto", "anchovy",
    ),
    StoreSection.DAIRY_EGGS: (
        "milk", "cream", "cheese", "butter", "yogurt", "sour cream", "egg",
        "mozzarella", "cheddar", "parmesan", "ricotta", "cream cheese",
        "half and half", "heavy cream", "whipping cream", "pecorino", "romano",
        "mascarpone", "buttermilk",
    ),
    StoreSection.GRAINS_PASTA: (
        "rice", "pasta", "noodle", "spaghetti", "penne", "fettuccine",
        "linguine", "ramen", "udon", "soba", "quinoa", "couscous", "bread",
        "flour", "tortilla", "wrap", "pita", "bagel", "roll", "crumb", "panko",
    ),
    StoreSection.CONDIMENTS_SAUCES: (
        "sauce", "oil", "vinegar", "soy sauce", "gochujang", "miso", "mustard",
        "ketchup", "mayonnaise", "hot sauce", "sriracha", "hoisin",
        "oyster sauce", "fish sauce", "worcestershire", "tahini", "pesto",
        "dressing", "marinade", "sesame oil", "olive oil", "vegetable oil",
        "coconut milk", "paste",
    ),
    StoreSection.PANTRY: (
        "sugar", "honey", "syrup", "chocolate", "cocoa", "vanilla", "bean",
        "lentil", "chickpea", "can", "broth", "stock", "tomato paste",
        "cereal", "oat", "nut", "seed", "dried", "raisin", "cranberry",
        "baking powder", "baking soda", "yeast", "cornstarch", "gelatin",
        "seaweed", "nori",
    ),
    StoreSection.SPICES_SEASONINGS: (
        "salt", "pepper", "spice", "seasoning", "cumin", "coriander",
        "paprika", "oregano", "bay leaf", "cinnamon", "nutmeg", "cardamom",
        "turmeric", "curry", "powder", "flake", "chili powder",
        "garlic powder", "onion powder", "red pepper flake", "cayenne",
        "allspice", "herb", "dried herb",
    ),
    StoreSection.OTHER: (),
})


def classify(ingredient_name: str) -> StoreSection:
    """Return the store section for an ingredient name.

    Exact keyword matches win over partial ones; within each pass sections
    are tried in declaration order. Never raises.
    """
    name = ingredient_name.lower().strip()
    if not name:
        return StoreSection.OTHER

    for section, keywords in SECTION_KEYWORDS.items():
        if name in keywords:
            return section

    for section, keywords in SECTION_KEYWORDS.items():
        # Keyword inside the name ("red onion"), or name inside a keyword ("scall")
        if any(keyword in name for keyword in keywords):
            return section
        if any(name in keyword for keyword in keywords):
            return section

    return StoreSection.OTHER
