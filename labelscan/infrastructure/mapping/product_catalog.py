from typing import Dict, List, NamedTuple, Tuple


class CatalogEntry(NamedTuple):
    canonical_name: str
    product_type: str
    category: str


class ProductCatalog:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize_entries()
        return cls._instance

    def _initialize_entries(self):
        # Keys are lowercase substrings; iteration order is beverages, snacks, foods.
        self._beverages: Dict[str, CatalogEntry] = {
            "coca-cola": CatalogEntry("Coca-Cola", "Soft Drink", "Beverage"),
            "coke": CatalogEntry("Coca-Cola", "Soft Drink", "Beverage"),
            "pepsi": CatalogEntry("Pepsi", "Soft Drink", "Beverage"),
            "sprite": CatalogEntry("Sprite", "Soft Drink", "Beverage"),
            "fanta": CatalogEntry("Fanta", "Soft Drink", "Beverage"),
            "mountain dew": CatalogEntry("Mountain Dew", "Soft Drink", "Beverage"),
            "red bull": CatalogEntry("Red Bull", "Energy Drink", "Beverage"),
            "monster": CatalogEntry("Monster Energy", "Energy Drink", "Beverage"),
            "gatorade": CatalogEntry("Gatorade", "Sports Drink", "Beverage"),
        }
        self._snacks: Dict[str, CatalogEntry] = {
            "kit-kat": CatalogEntry("Kit-Kat", "Chocolate Bar", "Candy"),
            "kitkat": CatalogEntry("Kit-Kat", "Chocolate Bar", "Candy"),
            "snickers": CatalogEntry("Snickers", "Chocolate Bar", "Candy"),
            "mars": CatalogEntry("Mars Bar", "Chocolate Bar", "Candy"),
            "twix": CatalogEntry("Twix", "Chocolate Bar", "Candy"),
            "oreo": CatalogEntry("Oreo", "Cookie", "Snack"),
            "doritos": CatalogEntry("Doritos", "Chips", "Snack"),
            "lays": CatalogEntry("Lay's", "Chips", "Snack"),
            "pringles": CatalogEntry("Pringles", "Chips", "Snack"),
            "cheetos": CatalogEntry("Cheetos", "Chips", "Snack"),
        }
        self._foods: Dict[str, CatalogEntry] = {
            "nutella": CatalogEntry("Nutella", "Spread", "Food"),
            "kellogg": CatalogEntry("Kellogg's", "Cereal", "Food"),
            "nestle": CatalogEntry("Nestlé", "Various", "Food"),
            "kraft": CatalogEntry("Kraft", "Various", "Food"),
            "heinz": CatalogEntry("Heinz", "Condiment", "Food"),
            "campbell": CatalogEntry("Campbell's", "Soup", "Food"),
            "maggi": CatalogEntry("Maggi", "Instant Noodles", "Food"),
            "knorr": CatalogEntry("Knorr", "Soup/Seasoning", "Food"),
            "lipton": CatalogEntry("Lipton", "Tea", "Beverage"),
            "nescafe": CatalogEntry("Nescafé", "Coffee", "Beverage"),
            "cadbury": CatalogEntry("Cadbury", "Chocolate", "Candy"),
            "ferrero": CatalogEntry("Ferrero", "Chocolate", "Candy"),
            "hershey": CatalogEntry("Hershey's", "Chocolate", "Candy"),
            "milka": CatalogEntry("Milka", "Chocolate", "Candy"),
            "toblerone": CatalogEntry("Toblerone", "Chocolate", "Candy"),
            "parle": CatalogEntry("Parle", "Biscuit", "Snack"),
            "britannia": CatalogEntry("Britannia", "Biscuit", "Snack"),
            "haldiram": CatalogEntry("Haldiram's", "Snacks", "Snack"),
            "mtn dew": CatalogEntry("Mountain Dew", "Soft Drink", "Beverage"),
            "dr pepper": CatalogEntry("Dr Pepper", "Soft Drink", "Beverage"),
            "7up": CatalogEntry("7UP", "Soft Drink", "Beverage"),
            "mirinda": CatalogEntry("Mirinda", "Soft Drink", "Beverage"),
        }
        self._entries: List[Tuple[str, CatalogEntry]] = [
            *self._beverages.items(),
            *self._snacks.items(),
            *self._foods.items(),
        ]

    def entries(self) -> List[Tuple[str, CatalogEntry]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
